"""
High-level use cases for the showcase API.

Services orchestrate repositories to implement workflows that span more than
one entity (today: sample-data seeding). Routers call these services instead
of combining repositories themselves.
"""

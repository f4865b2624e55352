"""
Persistence adapters.

``sql_repository`` wraps the SQLAlchemy session with insert/find/count/delete
helpers; ``entity_repository`` adds validation and timestamps per entity.
Services and routers depend on these instead of opening sessions directly.
"""

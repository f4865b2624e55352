"""
Core utilities shared across the showcase API.

This package hosts configuration, logging setup, error-response shaping and
the request rate limiter. Routers and services depend on these primitives
instead of reading the environment or building error payloads themselves.
"""

"""
Core utilities shared across the user record service.

This package hosts configuration helpers (env vars, paths, CORS values) and
logging setup. Routers and services depend on these primitives instead of
reading the environment themselves.
"""

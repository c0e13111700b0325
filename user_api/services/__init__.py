"""
High-level use cases for the user record service.

Each service module orchestrates repositories and domain helpers to implement
business rules. Routers (FastAPI endpoints) call these services instead of
manipulating the JSON file directly.
"""

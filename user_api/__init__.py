"""User record service: a JSON-file backed CRUD API for user records."""

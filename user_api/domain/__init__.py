"""Pure domain rules (id parsing, id assignment, email uniqueness)."""

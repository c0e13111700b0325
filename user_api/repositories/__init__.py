"""
Persistence adapters.

These modules encapsulate how user records are stored and retrieved (today a
JSON file). Services depend on the store object rather than touching the file.
"""

"""
Pydantic schema definitions for API payloads.

Schemas are separated from the database rows so that the API
representation does not leak persistence details (e.g. password
hashes or raw foreign keys).
"""

"""
Pydantic schema definitions for API payloads.

Each domain (mentors, tasks) defines its own Pydantic models for
response bodies.  Schemas are separated from database rows to
decouple API representation from persistence.  Field names are
snake_case in Python and camelCase on the wire.
"""

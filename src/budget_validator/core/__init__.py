"""Core enumerations, schemas and record types."""

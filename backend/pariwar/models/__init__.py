"""Data model package: ORM tables and API schemas."""

"""Service layer: data access behind the HTTP routes."""

"""Service layer for external system operations."""

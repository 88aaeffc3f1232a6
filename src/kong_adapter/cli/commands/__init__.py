"""CLI commands for kong_adapter."""

"""Command line interface for kong_adapter."""

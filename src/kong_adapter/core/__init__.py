"""Process-wide runtime state and portal catalog caching."""

"""Movie catalog persistence and query service."""

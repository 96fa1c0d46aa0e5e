"""Read-only introspection of live cache backends."""

"""Tool store, script runtime and approval queue."""

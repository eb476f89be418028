"""Services Layer — fetch-then-transform orchestration over the registry."""

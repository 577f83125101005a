"""Version-gated schema migration steps for database clusters."""

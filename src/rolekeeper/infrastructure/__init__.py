"""Infrastructure layer for RoleKeeper."""

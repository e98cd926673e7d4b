"""Domain layer for RoleKeeper.

Entities, exceptions and services that resolve and assign roles.
"""

"""Persistence layer: engine, tables, repositories and query scopes."""

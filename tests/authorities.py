"""Authority types used across the test suite."""

from dataclasses import dataclass

from sqlalchemy import Column, Integer, MetaData, String, Table


@dataclass
class User:
    id: int | None
    email: str = ""


@dataclass
class ApiClient:
    __morph_type__ = "api_client"

    id: int | None
    label: str = ""


@dataclass
class Account:
    account_id: int


def build_users_table(metadata: MetaData) -> Table:
    """Users table for authority-side query tests."""
    return Table(
        "users",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("email", String(255), nullable=False),
    )

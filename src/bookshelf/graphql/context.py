"""
Accessors for the per-request GraphQL context
"""

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ..auth.service import AuthService
    from ..database.connection import Database


def get_database(info: strawberry.Info) -> "Database":
    return info.context["database"]


def get_auth_service(info: strawberry.Info) -> "AuthService":
    return info.context["auth_service"]

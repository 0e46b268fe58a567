from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...dbmodels import Users
from ..context import get_auth_service

if TYPE_CHECKING:
    from ..types.user import AuthPayload, User


def _to_user(user: Users) -> User:
    from ..types.user import User as UserType

    return UserType(id=strawberry.ID(str(user.id)), username=user.username)


async def register(info: strawberry.Info, username: str, password: str) -> User:
    user = await get_auth_service(info).register(username, password)
    return _to_user(user)


async def login(info: strawberry.Info, username: str, password: str) -> AuthPayload:
    from ..types.user import AuthPayload as AuthPayloadType

    result = await get_auth_service(info).login(username, password)
    return AuthPayloadType(token=result.token, user=_to_user(result.user))

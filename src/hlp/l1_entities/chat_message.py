"""Chat message entity — typed replacement for dict[str, Any]."""

from __future__ import annotations

from typing import Literal, cast, get_args

from pydantic import BaseModel

from hlp.l1_entities.errors import InvalidRoleError

Role = Literal['system', 'user', 'assistant']

ROLES: tuple[str, ...] = get_args(Role)


def validate_role(role: str) -> Role:
    """Return *role* as a Role, or raise InvalidRoleError."""
    if role not in ROLES:
        raise InvalidRoleError(role)
    return cast(Role, role)


class ChatMessage(BaseModel):
    """A single message in an LLM conversation."""

    role: Role
    content: str

"""
IdentityService

Request-scoped identity used by the translation permission checks:

- the current actor (set by the host's authentication layer)
- an "unattended" flag for CLI and administrative scripts
- permission lookup on an actor

Actors are duck-typed: anything with ``has_permission(code)`` or a
``permissions`` collection works (``"*"`` grants everything).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

logger = logging.getLogger(__name__)

current_actor_var: ContextVar[Any] = ContextVar("current_actor", default=None)
unattended_var: ContextVar[bool] = ContextVar("unattended", default=False)


class IdentityService:
    def current_actor(self) -> Any:
        return current_actor_var.get()

    @contextmanager
    def acting_as(self, actor: Any) -> Iterator[Any]:
        """Run the block with *actor* as the authenticated identity."""
        token = current_actor_var.set(actor)
        try:
            yield actor
        finally:
            current_actor_var.reset(token)

    def is_unattended(self) -> bool:
        return unattended_var.get()

    @contextmanager
    def unattended(self) -> Iterator[None]:
        """Mark the block as CLI/administrative execution."""
        token = unattended_var.set(True)
        try:
            yield
        finally:
            unattended_var.reset(token)

    def has_permission(self, actor: Any, code: str) -> bool:
        if actor is None:
            return False
        checker = getattr(actor, "has_permission", None)
        if callable(checker):
            return bool(checker(code))
        granted = getattr(actor, "permissions", None) or ()
        return "*" in granted or code in granted


# ── Global singleton ──────────────────────────────────────────────────────────
identity_service = IdentityService()

"""Realtime presence for brainstorm sessions."""

from brainforge.core.realtime.presence import (
    ConnectionManager,
    PresenceMember,
    PresenceRegistry,
    manager,
)

__all__ = ["ConnectionManager", "PresenceMember", "PresenceRegistry", "manager"]

"""BaseService — shared foundation for daynote services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from daynote.infrastructure.vault import VaultResolver


class BaseService:
    """Base for service-layer classes.

    Every service receives the :class:`VaultResolver` at construction time
    and does all vault and cache access through it.
    """

    def __init__(self, resolver: VaultResolver) -> None:
        self._resolver = resolver

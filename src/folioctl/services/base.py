"""BaseService — abstract foundation for all folioctl services.

Every service receives a :class:`ContentStore` at construction time and
does all of its reading and writing through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from folioctl.infrastructure.store import ContentStore, ScanResult


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class QueryService(BaseService):
            def get(self, slug: str) -> ServiceResult:
                entry = self._store.get(slug)
                ...
    """

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    def _failure_warnings(self, scan: ScanResult) -> list[str]:
        """One warning per file that could not be loaded."""
        return [
            f"Skipped {self._store.relative(f.path)}: {'; '.join(f.problems)}"
            for f in scan.failures
        ]

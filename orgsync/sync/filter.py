from __future__ import annotations

from collections.abc import Iterable

__all__ = ["ExclusionFilter"]


class ExclusionFilter:
    """Decides which repositories are left out of a run.

    Matching is exact and case-sensitive: excluding ``ops-seeder`` does not
    exclude ``Ops-Seeder``.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = frozenset(names)

    def should_exclude(self, name: str) -> bool:
        return name in self._names

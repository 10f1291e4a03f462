from __future__ import annotations

from typing import Iterable, List, Sequence


class PairSelection:
    """Set of selected pair ids, iterated in catalog order."""

    def __init__(self, catalog: Sequence[str], initial: Iterable[str] = ()) -> None:
        self._catalog = tuple(catalog)
        # dict keeps insertion order for pairs outside the catalog
        self._selected: dict[str, None] = dict.fromkeys(initial)

    @property
    def catalog(self) -> tuple[str, ...]:
        return self._catalog

    def __contains__(self, pair: object) -> bool:
        return pair in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def is_empty(self) -> bool:
        return not self._selected

    def toggle(self, pair: str) -> bool:
        """Flip membership of ``pair``; returns True when it is now selected."""
        if pair in self._selected:
            del self._selected[pair]
            return False
        self._selected[pair] = None
        return True

    def members(self) -> frozenset[str]:
        return frozenset(self._selected)

    def ordered(self) -> List[str]:
        in_catalog = [pair for pair in self._catalog if pair in self._selected]
        extras = [pair for pair in self._selected if pair not in self._catalog]
        return in_catalog + extras

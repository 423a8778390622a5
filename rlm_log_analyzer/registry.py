"""
Ordered name registries for products, users and hosts.
"""

from typing import Dict, Iterator, List

from .exceptions import InvalidIndexError


class IdentityRegistry:
    """Distinct names in first-seen order with a stable name -> index map.

    Attributes:
        category: What the names are (product, user or host).
    """

    __slots__ = ("category", "_names", "_index")

    def __init__(self, category: str) -> None:
        self.category = category
        self._names: List[str] = []
        self._index: Dict[str, int] = {}

    def add(self, name: str) -> int:
        """Register a name if unseen and return its index."""
        index = self._index.get(name)
        if index is None:
            index = len(self._names)
            self._names.append(name)
            self._index[name] = index
        return index

    def index(self, name: str) -> int:
        """Index of a registered name.

        Raises:
            InvalidIndexError: If the name was never registered.
        """
        try:
            return self._index[name]
        except KeyError:
            raise InvalidIndexError(name, self.category) from None

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"IdentityRegistry({self.category!r}, {self._names!r})"

"""Sets of IP networks and IP addresses keyed by their string form."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List

from kubeutil.netparse import _normalize_ip, parse_cidr_sloppy, parse_ip_sloppy


class _StringKeyedSet:
    """A set whose members are identified by a canonical string."""

    def __init__(self, *items: Any) -> None:
        self._items: Dict[str, Any] = {}
        self.insert(*items)

    @staticmethod
    def _key(item: Any) -> str:
        return str(item)

    def insert(self, *items: Any) -> None:
        """Add items to the set."""
        for item in items:
            self._items[self._key(item)] = item

    def delete(self, *items: Any) -> None:
        """Remove items from the set; absent items are ignored."""
        for item in items:
            self._items.pop(self._key(item), None)

    def has(self, item: Any) -> bool:
        """Return True if ``item`` is in the set."""
        return self._key(item) in self._items

    def has_all(self, *items: Any) -> bool:
        """Return True if every item is in the set."""
        return all(self.has(item) for item in items)

    def difference(self, other: "_StringKeyedSet"):
        """Return a new set of the members not in ``other``."""
        result = type(self)()
        result._items = {k: v for k, v in self._items.items() if k not in other._items}
        return result

    def string_slice(self) -> List[str]:
        """Return the string form of each member, in no defined order."""
        return list(self._items)

    def is_superset(self, other: "_StringKeyedSet") -> bool:
        """Return True if every member of ``other`` is in this set."""
        return all(key in self._items for key in other._items)

    def __contains__(self, item: Any) -> bool:
        return self.has(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return len(self) == len(other) and self.is_superset(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(sorted(self._items))})"


class IPNetSet(_StringKeyedSet):
    """A set of IP networks."""

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)

    def insert(self, *args: Any) -> None:
        """Add networks to the set."""
        super().insert(*args)

    def delete(self, *args: Any) -> None:
        """Remove networks from the set."""
        super().delete(*args)

    def has(self, item: Any) -> bool:
        """Return True if the network is in the set."""
        return super().has(item)

    def has_all(self, *args: Any) -> bool:
        """Return True if all networks are in the set."""
        return super().has_all(*args)

    def difference(self, other: "IPNetSet") -> "IPNetSet":
        """Return the networks not in ``other``."""
        return super().difference(other)

    def string_slice(self) -> List[str]:
        """Return the CIDR string of each network."""
        return super().string_slice()

    def is_superset(self, other: "IPNetSet") -> bool:
        """Return True if this set holds every network of ``other``."""
        return super().is_superset(other)

    def __contains__(self, item: Any) -> bool:
        return super().__contains__(item)

    def __len__(self) -> int:
        return super().__len__()

    def __iter__(self) -> Iterator[Any]:
        return super().__iter__()

    def __eq__(self, other: object) -> bool:
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]


class IPSet(_StringKeyedSet):
    """A set of IP addresses; IPv4-mapped IPv6 addresses equal their IPv4 form."""

    @staticmethod
    def _key(item: Any) -> str:
        return str(_normalize_ip(item))

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)

    def insert(self, *args: Any) -> None:
        """Add addresses to the set."""
        super().insert(*args)

    def delete(self, *args: Any) -> None:
        """Remove addresses from the set."""
        super().delete(*args)

    def has(self, item: Any) -> bool:
        """Return True if the address is in the set."""
        return super().has(item)

    def has_all(self, *args: Any) -> bool:
        """Return True if all addresses are in the set."""
        return super().has_all(*args)

    def difference(self, other: "IPSet") -> "IPSet":
        """Return the addresses not in ``other``."""
        return super().difference(other)

    def string_slice(self) -> List[str]:
        """Return the string form of each address."""
        return super().string_slice()

    def is_superset(self, other: "IPSet") -> bool:
        """Return True if this set holds every address of ``other``."""
        return super().is_superset(other)

    def __contains__(self, item: Any) -> bool:
        return super().__contains__(item)

    def __len__(self) -> int:
        return super().__len__()

    def __iter__(self) -> Iterator[Any]:
        return super().__iter__()

    def __eq__(self, other: object) -> bool:
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]


def parse_ip_nets(*args: str) -> IPNetSet:
    """Parse CIDR strings into an IPNetSet. Raises ValueError on bad input."""
    result = IPNetSet()
    for spec in args:
        _, network = parse_cidr_sloppy(spec.strip())
        result.insert(network)
    return result


def parse_ip_set(*args: str) -> IPSet:
    """Parse address strings into an IPSet. Raises ValueError on bad input."""
    result = IPSet()
    for item in args:
        ip = parse_ip_sloppy(item.strip())
        if ip is None:
            raise ValueError(f'error parsing IP "{item}"')
        result.insert(ip)
    return result
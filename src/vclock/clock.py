"""Vector clocks for tracking the causal order of events across processes.

A clock maps process ids to unsigned 64-bit counters. Each process ticks its
own entry on every local event, ships the clock along with its messages and
merges the clocks it receives. Comparing two clocks tells whether one history
contains the other or whether they diverged.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import IntFlag
from typing import IO

from vclock.errors import InvalidEntryError

__all__ = [
    "UINT64_MAX",
    "Condition",
    "VectorClock",
]

UINT64_MAX = (1 << 64) - 1


class Condition(IntFlag):
    """Causal relation between two clocks.

    ``VectorClock.order`` returns exactly one member. Members can be ORed
    into a mask for ``VectorClock.compare``.
    """

    EQUAL = 1
    ANCESTOR = 2
    DESCENDANT = 4
    CONCURRENT = 8


def _check_id(node_id: object) -> str:
    if not isinstance(node_id, str) or not node_id:
        msg = f"Process id must be a non-empty str, got {node_id!r}"
        raise InvalidEntryError(msg)
    return node_id


def _check_ticks(ticks: object) -> int:
    if isinstance(ticks, bool) or not isinstance(ticks, int):
        msg = f"Counter must be an int, got {type(ticks).__name__}"
        raise InvalidEntryError(msg)
    if not 0 <= ticks <= UINT64_MAX:
        msg = f"Counter out of uint64 range: {ticks}"
        raise InvalidEntryError(msg)
    return ticks


class VectorClock:
    """Mutable mapping of process id to event counter.

    The clock owns its entries: every constructor copies its input and no
    method hands out the internal dict.

    Examples
    --------
    >>> vc = VectorClock()
    >>> vc.tick("A")
    >>> other = VectorClock({"B": 2})
    >>> vc.merge(other)
    >>> str(vc)
    '{"A":1, "B":2}'
    >>> vc.order(other)
    <Condition.ANCESTOR: 2>
    """

    __slots__ = ("_versions",)

    def __init__(self, versions: Mapping[str, int] | None = None) -> None:
        self._versions: dict[str, int] = {}
        if versions is not None:
            for node_id, ticks in versions.items():
                self.set(node_id, ticks)

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> VectorClock:
        return cls(data)

    def to_dict(self) -> dict[str, int]:
        return dict(self._versions)

    def copy(self) -> VectorClock:
        clone = VectorClock()
        clone._versions = dict(self._versions)
        return clone

    def get(self, node_id: str) -> int:
        """Counter for *node_id*, 0 when the id was never recorded."""
        return self._versions.get(node_id, 0)

    def find_ticks(self, node_id: str) -> tuple[int, bool]:
        """Look up *node_id*.

        Returns ``(ticks, True)`` when the id is present and ``(0, False)``
        otherwise, so a miss is never confused with a recorded zero.
        """
        ticks = self._versions.get(node_id)
        if ticks is None:
            return 0, False
        return ticks, True

    def set(self, node_id: str, ticks: int) -> None:
        """Assign *ticks* to *node_id*.

        Monotonicity is the caller's contract: a smaller value overwrites a
        larger one without complaint.
        """
        self._versions[_check_id(node_id)] = _check_ticks(ticks)

    def tick(self, node_id: str) -> None:
        """Record one local event for *node_id*.

        A counter at ``UINT64_MAX`` wraps to 0.
        """
        node_id = _check_id(node_id)
        self._versions[node_id] = (self._versions.get(node_id, 0) + 1) & UINT64_MAX

    def last_update(self) -> int:
        """Largest counter in the clock, 0 for an empty clock."""
        return max(self._versions.values(), default=0)

    def merge(self, other: VectorClock) -> None:
        """Fold *other* into this clock, keeping the per-id maximum.

        Ids only present here are left alone and *other* is not modified.
        Every id of *other* ends up present here, zero counters included.
        """
        versions = self._versions
        for node_id, ticks in other._versions.items():
            if node_id not in versions or versions[node_id] < ticks:
                versions[node_id] = ticks

    def order(self, other: VectorClock) -> Condition:
        """Classify this clock against *other*.

        Returns ``ANCESTOR`` when this clock dominates *other*, ``DESCENDANT``
        when *other* dominates it, ``EQUAL`` or ``CONCURRENT`` otherwise.

        An id held by only one side counts as that side being ahead whatever
        its value, so ``{"a": 0}`` is an ancestor of ``{}``. Only the ids the
        clocks share are compared numerically.
        """
        mine = self._versions
        theirs = other._versions
        common = mine.keys() & theirs.keys()

        self_bigger = len(mine) > len(common)
        other_bigger = len(theirs) > len(common)

        for node_id in common:
            if self_bigger and other_bigger:
                break
            if mine[node_id] > theirs[node_id]:
                self_bigger = True
            elif mine[node_id] < theirs[node_id]:
                other_bigger = True

        if self_bigger and other_bigger:
            return Condition.CONCURRENT
        if self_bigger:
            return Condition.ANCESTOR
        if other_bigger:
            return Condition.DESCENDANT
        return Condition.EQUAL

    def compare(self, other: VectorClock, cond: Condition | int) -> bool:
        """Whether ``self.order(other)`` is one of the flags in *cond*.

        >>> a, b = VectorClock({"a": 1}), VectorClock({"b": 1})
        >>> a.compare(b, Condition.DESCENDANT | Condition.CONCURRENT)
        True
        """
        return bool(self.order(other) & cond)

    def to_bytes(self) -> bytes:
        from vclock.codec import encode

        return encode(self)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> VectorClock:
        from vclock.codec import decode

        return decode(data)

    def to_deterministic_string(self) -> str:
        """Render as ``{"a":1, "b":2}`` with ids in ascending order."""
        body = ", ".join(
            f'"{node_id}":{self._versions[node_id]}' for node_id in sorted(self._versions)
        )
        return f"{{{body}}}"

    def print_vc(self, file: IO[str] | None = None) -> None:
        print(self.to_deterministic_string(), file=file)

    def __len__(self) -> int:
        return len(self._versions)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._versions

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._versions))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorClock):
            return NotImplemented
        all_nodes = self._versions.keys() | other._versions.keys()
        return all(self.get(node) == other.get(node) for node in all_nodes)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_deterministic_string()

    def __repr__(self) -> str:
        return f"VectorClock({self.to_deterministic_string()})"

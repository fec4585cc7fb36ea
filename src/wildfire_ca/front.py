"""Set of cells that are currently on fire."""

from typing import Iterator

Position = tuple[int, int]


class FireFront:
    """Coordinates of the cells that are burning but not yet burnt out.

    Coordinates are compared by value and kept in insertion order, so the
    order in which a step visits the front is reproducible for a given
    seed.
    """

    def __init__(self):
        self._cells: dict[Position, None] = {}

    def ignite(self, position: Position) -> None:
        """Add a position to the front. No-op if it is already there."""
        self._cells.setdefault((int(position[0]), int(position[1])), None)

    def extinguish(self, position: Position) -> None:
        """Remove a position from the front. No-op if it is absent."""
        self._cells.pop((int(position[0]), int(position[1])), None)

    def snapshot(self) -> list[Position]:
        """
        Current members as a new list.

        The list is not affected by later ignite/extinguish calls, which is
        what lets a step visit only the cells that were burning when it
        started.
        """
        return list(self._cells)

    def size(self) -> int:
        return len(self._cells)

    def clear(self) -> None:
        self._cells.clear()

    def __len__(self) -> int:
        return len(self._cells)

    def __bool__(self) -> bool:
        return bool(self._cells)

    def __contains__(self, position) -> bool:
        return tuple(position) in self._cells

    def __iter__(self) -> Iterator[Position]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"FireFront(size={len(self._cells)})"

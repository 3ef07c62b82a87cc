"""Stack slot allocation for pseudoregisters."""

from __future__ import annotations

from dataclasses import dataclass, field

SLOT_SIZE = 4


@dataclass
class StackAllocTable:
    """Maps pseudoregister ids to stack offsets, allocating 4-byte slots downwards."""

    _next_offset: int = 0
    _addresses: dict[int, int] = field(default_factory=dict)

    def get_or_insert(self, pseudoregister: int) -> int:
        """Return the stack offset of a pseudoregister, allocating one if it is new."""
        try:
            return self._addresses[pseudoregister]
        except KeyError:
            offset = self._next_offset
            self._addresses[pseudoregister] = offset
            self._next_offset -= SLOT_SIZE
            return offset

    def __len__(self) -> int:
        return len(self._addresses)

    def __contains__(self, pseudoregister: object) -> bool:
        return pseudoregister in self._addresses
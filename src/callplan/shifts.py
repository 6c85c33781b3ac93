# src/callplan/shifts.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple


# -----------------------------
# Data models
# -----------------------------
@dataclass(frozen=True)
class ShiftDefinition:
    shift_id: str
    start_hour: float
    end_hour: float
    paid_hours: float
    break_hours: float
    headcount: int = 0

    @property
    def working_hours(self) -> float:
        return float(self.paid_hours) - float(self.break_hours)


class ShiftRegistry:
    """
    Ordered set of shift definitions.

    Iteration order is the enumeration order (A, B, C, ...) and drives roster
    generation. Only headcounts change after construction; use
    with_headcounts() to get an updated registry.
    """

    def __init__(self, shifts: Sequence[ShiftDefinition]):
        ids = [s.shift_id for s in shifts]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate shift ids: {ids}")
        for s in shifts:
            if not s.start_hour < s.end_hour:
                raise ValueError(f"Shift {s.shift_id}: start_hour must be < end_hour")
            if s.headcount < 0:
                raise ValueError(f"Shift {s.shift_id}: headcount must be >= 0")
        self._shifts: Tuple[ShiftDefinition, ...] = tuple(shifts)

    def __iter__(self) -> Iterator[ShiftDefinition]:
        return iter(self._shifts)

    def __len__(self) -> int:
        return len(self._shifts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShiftRegistry):
            return NotImplemented
        return self._shifts == other._shifts

    def __repr__(self) -> str:
        return f"ShiftRegistry({list(self._shifts)!r})"

    @property
    def shift_ids(self) -> List[str]:
        return [s.shift_id for s in self._shifts]

    def get(self, shift_id: str) -> ShiftDefinition:
        for s in self._shifts:
            if s.shift_id == shift_id:
                return s
        raise KeyError(f"Unknown shift id: {shift_id!r}")

    def headcounts(self) -> Dict[str, int]:
        return {s.shift_id: int(s.headcount) for s in self._shifts}

    def total_headcount(self) -> int:
        return sum(int(s.headcount) for s in self._shifts)

    def with_headcounts(self, counts: Mapping[str, int]) -> "ShiftRegistry":
        unknown = set(counts) - set(self.shift_ids)
        if unknown:
            raise KeyError(f"Unknown shift ids: {sorted(unknown)}")

        updated = []
        for s in self._shifts:
            if s.shift_id in counts:
                n = int(counts[s.shift_id])
                if n < 0:
                    raise ValueError(f"Shift {s.shift_id}: headcount must be >= 0")
                s = replace(s, headcount=n)
            updated.append(s)
        return ShiftRegistry(updated)


# -----------------------------
# Defaults
# -----------------------------
DEFAULT_SHIFTS: Tuple[ShiftDefinition, ...] = (
    ShiftDefinition("A", start_hour=8.5, end_hour=17.5, paid_hours=9.0, break_hours=1.5, headcount=25),
    ShiftDefinition("B", start_hour=11.0, end_hour=19.0, paid_hours=8.0, break_hours=1.5, headcount=25),
    ShiftDefinition("C", start_hour=9.0, end_hour=19.0, paid_hours=10.0, break_hours=1.5, headcount=30),
)


def default_registry() -> ShiftRegistry:
    return ShiftRegistry(DEFAULT_SHIFTS)


__all__ = [
    "ShiftDefinition",
    "ShiftRegistry",
    "DEFAULT_SHIFTS",
    "default_registry",
]

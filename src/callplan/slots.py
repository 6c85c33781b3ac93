# src/callplan/slots.py
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List, Sequence


SLOT_MINUTES: int = 30

_LABEL_RE = re.compile(r"^\s*(\d{1,2})h(\d{2})\s*-\s*(\d{1,2})h(\d{2})\s*$")


@dataclass(frozen=True)
class TimeSlot:
    """
    One fixed interval of the operating day.
    start_hour / end_hour are decimal hours (12h30 => 12.5), end-exclusive.
    """
    label: str
    start_hour: float
    end_hour: float

    def __post_init__(self) -> None:
        if not self.start_hour < self.end_hour:
            raise ValueError(f"TimeSlot {self.label!r}: start_hour must be < end_hour")

    @property
    def duration_minutes(self) -> float:
        return (self.end_hour - self.start_hour) * 60.0


# -----------------------------
# Helpers
# -----------------------------
def _hhmm_to_hours(hh: str, mm: str) -> float:
    ih, im = int(hh), int(mm)
    if not (0 <= ih <= 24 and 0 <= im <= 59):
        raise ValueError(f"Invalid time value: {hh}h{mm}")
    return ih + im / 60.0


def _hours_to_hhmm(hours: float) -> str:
    total = int(round(hours * 60))
    return f"{total // 60}h{total % 60:02d}"


def slot_label(start_hour: float, end_hour: float) -> str:
    """Formats "8h30-9h00" style labels."""
    return f"{_hours_to_hhmm(start_hour)}-{_hours_to_hhmm(end_hour)}"


def parse_slot_label(label: str) -> TimeSlot:
    """
    Parses a slot label like "12h30-13h00".
    Minutes are real minutes, so "12h30" is 12.5, not 12.3.
    """
    m = _LABEL_RE.match(str(label))
    if m is None:
        raise ValueError(f"Slot label must look like '12h30-13h00', got {label!r}")
    start = _hhmm_to_hours(m.group(1), m.group(2))
    end = _hhmm_to_hours(m.group(3), m.group(4))
    return TimeSlot(label=slot_label(start, end), start_hour=start, end_hour=end)


# -----------------------------
# Day grid
# -----------------------------
def build_time_slots(start_hour: float, end_hour: float, slot_minutes: int = SLOT_MINUTES) -> List[TimeSlot]:
    """
    Returns the ordered, contiguous slot sequence covering [start_hour, end_hour).
    The window must be a whole number of slots.
    """
    if slot_minutes <= 0 or (1440 % slot_minutes) != 0:
        raise ValueError("slot_minutes must be > 0 and divide 1440 evenly (e.g., 15, 30, 60).")
    if not (0.0 <= start_hour < end_hour <= 24.0):
        raise ValueError("Require 0 <= start_hour < end_hour <= 24.")

    start_m = int(round(start_hour * 60))
    end_m = int(round(end_hour * 60))
    span = end_m - start_m
    if span % slot_minutes != 0:
        raise ValueError(
            f"Operating window {slot_label(start_hour, end_hour)} is not a whole number "
            f"of {slot_minutes}-minute slots."
        )

    slots: List[TimeSlot] = []
    for m in range(start_m, end_m, slot_minutes):
        s, e = m / 60.0, (m + slot_minutes) / 60.0
        slots.append(TimeSlot(label=slot_label(s, e), start_hour=s, end_hour=e))
    return slots


def validate_time_slots(slots: Sequence[TimeSlot]) -> None:
    """Slots must be non-empty, sorted and gap-free."""
    if len(slots) == 0:
        raise ValueError("Slot sequence is empty")

    labels = [s.label for s in slots]
    if len(set(labels)) != len(labels):
        raise ValueError("Slot sequence has duplicate labels")

    for prev, cur in zip(slots, slots[1:]):
        if not math.isclose(prev.end_hour, cur.start_hour):
            raise ValueError(f"Slots {prev.label} and {cur.label} are not contiguous")


DEFAULT_TIME_SLOTS: List[TimeSlot] = build_time_slots(8.5, 18.5)


__all__ = [
    "SLOT_MINUTES",
    "TimeSlot",
    "slot_label",
    "parse_slot_label",
    "build_time_slots",
    "validate_time_slots",
    "DEFAULT_TIME_SLOTS",
]

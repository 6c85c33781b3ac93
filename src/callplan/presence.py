# src/callplan/presence.py
from __future__ import annotations

from typing import List, Literal, Sequence, TypeAlias

import pandas as pd

from .shifts import ShiftDefinition, ShiftRegistry
from .slots import TimeSlot

OverlapPolicy: TypeAlias = Literal["half_open", "bidirectional"]

DEFAULT_POLICY: OverlapPolicy = "half_open"


def slot_in_shift(slot: TimeSlot, shift: ShiftDefinition, policy: OverlapPolicy = DEFAULT_POLICY) -> bool:
    """
    half_open:
      shift.start <= slot.start < shift.end

    bidirectional (half_open, or the slot end lands inside the shift, or the
    slot straddles the whole shift):
      shift.start < slot.end <= shift.end
      slot.start < shift.start and slot.end > shift.end
    """
    starts_inside = shift.start_hour <= slot.start_hour < shift.end_hour
    if policy == "half_open":
        return starts_inside
    if policy == "bidirectional":
        ends_inside = shift.start_hour < slot.end_hour <= shift.end_hour
        straddles = slot.start_hour < shift.start_hour and slot.end_hour > shift.end_hour
        return starts_inside or ends_inside or straddles
    raise ValueError(f"Unsupported overlap policy: {policy}")


def shifts_covering(slot: TimeSlot, registry: ShiftRegistry, policy: OverlapPolicy = DEFAULT_POLICY) -> List[str]:
    return [s.shift_id for s in registry if slot_in_shift(slot, s, policy)]


def agents_present(slot: TimeSlot, registry: ShiftRegistry, policy: OverlapPolicy = DEFAULT_POLICY) -> int:
    return sum(int(s.headcount) for s in registry if slot_in_shift(slot, s, policy))


def presence_table(
    slots: Sequence[TimeSlot],
    registry: ShiftRegistry,
    policy: OverlapPolicy = DEFAULT_POLICY,
) -> pd.DataFrame:
    """Slot x shift headcount grid with a `total` column."""
    rows = []
    for slot in slots:
        row = {"slot": slot.label}
        for s in registry:
            row[s.shift_id] = int(s.headcount) if slot_in_shift(slot, s, policy) else 0
        rows.append(row)

    out = pd.DataFrame(rows, columns=["slot", *registry.shift_ids])
    out["total"] = out[registry.shift_ids].sum(axis=1).astype(int) if len(registry) else 0
    return out


__all__ = [
    "OverlapPolicy",
    "DEFAULT_POLICY",
    "slot_in_shift",
    "shifts_covering",
    "agents_present",
    "presence_table",
]

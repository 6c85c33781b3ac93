# src/callplan/capacity.py
from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Literal, TypeAlias

from .presence import DEFAULT_POLICY, OverlapPolicy, agents_present
from .shifts import ShiftRegistry
from .slots import SLOT_MINUTES, TimeSlot

SlotStatus: TypeAlias = Literal["Pending", "Excellent", "Good", "Warning", "Critical"]

# Share of the command used as the Excellent / Warning band width.
STATUS_BAND: float = 0.3


@dataclass(frozen=True)
class CapacityConfig:
    average_handle_time_minutes: float = 10.0
    occupancy_rate: float = 0.85
    daily_call_target: int = 700


def raw_capacity(agents: int, config: CapacityConfig, slot_minutes: float = SLOT_MINUTES) -> float:
    """
    Unrounded capacity:
      agents * (slot_minutes / AHT) * occupancy
    """
    return float(agents) * (float(slot_minutes) / float(config.average_handle_time_minutes)) * float(
        config.occupancy_rate
    )


def _exact(x: float) -> Fraction:
    # Decimal text of the value, so 0.85 is 17/20 rather than its binary neighbour.
    return Fraction(repr(float(x)))


def capacity_for_agents(agents: int, config: CapacityConfig, slot_minutes: float = SLOT_MINUTES) -> int:
    """
    floor(raw_capacity), taken on exact fractions so whole-number products
    (22 agents at AHT 11 and 85% is exactly 51) are not floored one short.
    """
    exact = (
        Fraction(int(agents))
        * _exact(slot_minutes)
        / _exact(config.average_handle_time_minutes)
        * _exact(config.occupancy_rate)
    )
    return int(math.floor(exact))


def capacity(
    slot: TimeSlot,
    registry: ShiftRegistry,
    config: CapacityConfig,
    policy: OverlapPolicy = DEFAULT_POLICY,
) -> int:
    return capacity_for_agents(agents_present(slot, registry, policy), config, SLOT_MINUTES)


def classify(capacity: int, command: int) -> SlotStatus:
    """Bands are relative to the command volume, not to capacity."""
    if command == 0:
        return "Pending"
    difference = capacity - command
    if difference >= STATUS_BAND * command:
        return "Excellent"
    if difference >= 0:
        return "Good"
    if difference >= -STATUS_BAND * command:
        return "Warning"
    return "Critical"


_STATUS_COLORS: Dict[SlotStatus, str] = {
    "Pending": "secondary",
    "Excellent": "success",
    "Good": "info",
    "Warning": "warning",
    "Critical": "danger",
}


def status_color(status: SlotStatus) -> str:
    return _STATUS_COLORS[status]


__all__ = [
    "SlotStatus",
    "STATUS_BAND",
    "CapacityConfig",
    "raw_capacity",
    "capacity_for_agents",
    "capacity",
    "classify",
    "status_color",
]

# src/callplan/roster.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .presence import DEFAULT_POLICY, OverlapPolicy, slot_in_shift
from .shifts import ShiftRegistry
from .slots import TimeSlot

AGENT_ID_WIDTH: int = 3


@dataclass
class Agent:
    agent_id: str
    shift_id: str
    working_hours: float
    calls_treated: int = 0
    calls_by_slot: Dict[TimeSlot, int] = field(default_factory=dict)

    def reset(self) -> None:
        self.calls_treated = 0
        self.calls_by_slot = {}

    def add_calls(self, slot: TimeSlot, calls: int) -> None:
        self.calls_by_slot[slot] = self.calls_by_slot.get(slot, 0) + int(calls)
        self.calls_treated += int(calls)

    @property
    def productivity(self) -> float:
        """Calls per working hour, one decimal; 0 when hours is 0."""
        if self.working_hours <= 0:
            return 0.0
        return round(self.calls_treated / float(self.working_hours), 1)


def format_agent_id(shift_id: str, sequence: int) -> str:
    return f"{shift_id}{sequence:0{AGENT_ID_WIDTH}d}"


def generate_roster(registry: ShiftRegistry) -> List[Agent]:
    """
    Builds a fresh roster from shift headcounts.

    The sequence number is global across shifts (A001..A025, B026..), so the
    same headcounts always regenerate the same ids in the same order. Any
    previous roster and its call counts are discarded by the caller.
    """
    agents: List[Agent] = []
    seq = 1
    for shift in registry:
        for _ in range(int(shift.headcount)):
            agents.append(
                Agent(
                    agent_id=format_agent_id(shift.shift_id, seq),
                    shift_id=shift.shift_id,
                    working_hours=shift.working_hours,
                )
            )
            seq += 1
    return agents


def is_agent_present(
    agent: Agent,
    slot: TimeSlot,
    registry: ShiftRegistry,
    policy: OverlapPolicy = DEFAULT_POLICY,
) -> bool:
    return slot_in_shift(slot, registry.get(agent.shift_id), policy)


def agents_in_slot(
    roster: Sequence[Agent],
    slot: TimeSlot,
    registry: ShiftRegistry,
    policy: OverlapPolicy = DEFAULT_POLICY,
) -> List[Agent]:
    """Present agents, in roster (generation) order."""
    covering = {s.shift_id for s in registry if slot_in_shift(slot, s, policy)}
    return [a for a in roster if a.shift_id in covering]


__all__ = [
    "AGENT_ID_WIDTH",
    "Agent",
    "format_agent_id",
    "generate_roster",
    "is_agent_present",
    "agents_in_slot",
]

# src/callplan/allocation.py
from __future__ import annotations

import logging
import math
from typing import Dict, Mapping, Sequence

import numpy as np

from .presence import DEFAULT_POLICY, OverlapPolicy, agents_present
from .roster import Agent, agents_in_slot
from .shifts import ShiftRegistry
from .slots import TimeSlot

logger = logging.getLogger(__name__)


# -----------------------------
# Helpers
# -----------------------------
def round_half_up(x: float) -> int:
    """0.5 rounds away from zero for positives (2.5 -> 3), unlike round()."""
    return int(math.floor(float(x) + 0.5))


def empty_commands(slots: Sequence[TimeSlot]) -> Dict[TimeSlot, int]:
    return {slot: 0 for slot in slots}


def split_evenly(volume: int, n: int) -> np.ndarray:
    """
    Splits an integer volume over n positions.
    The first (volume mod n) positions get one extra unit.
    """
    if n <= 0 or volume <= 0:
        return np.zeros(max(n, 0), dtype=int)

    base, remainder = divmod(int(volume), int(n))
    out = np.full(n, base, dtype=int)
    out[:remainder] += 1
    return out


# -----------------------------
# Per-slot allocation
# -----------------------------
def distribute(
    slot: TimeSlot,
    slot_commands: Mapping[TimeSlot, int],
    present_agents: Sequence[Agent],
) -> Dict[str, int]:
    """
    Returns agent_id -> calls for one slot. Does not touch the agents.
    Empty when nobody is present or the command is 0.
    """
    volume = int(slot_commands.get(slot, 0))
    n = len(present_agents)
    if n == 0 or volume == 0:
        return {}

    shares = split_evenly(volume, n)
    return {agent.agent_id: int(calls) for agent, calls in zip(present_agents, shares)}


def recompute_all(
    slots: Sequence[TimeSlot],
    slot_commands: Mapping[TimeSlot, int],
    roster: Sequence[Agent],
    registry: ShiftRegistry,
    policy: OverlapPolicy = DEFAULT_POLICY,
) -> Dict[TimeSlot, int]:
    """
    Full allocation pass over the day.

    Agent call counts are reset first, so running it twice on unchanged
    inputs gives identical results. Returns the per-slot totals, which equal
    the sum of calls_by_slot over the roster.
    """
    for agent in roster:
        agent.reset()

    by_id = {agent.agent_id: agent for agent in roster}
    slot_totals: Dict[TimeSlot, int] = {}

    for slot in slots:
        present = agents_in_slot(roster, slot, registry, policy)
        allocation = distribute(slot, slot_commands, present)

        for agent_id, calls in allocation.items():
            by_id[agent_id].add_calls(slot, calls)

        slot_totals[slot] = int(sum(allocation.values()))
        if allocation:
            logger.debug(
                "slot %s: %d calls over %d agents", slot.label, slot_totals[slot], len(present)
            )

    logger.info(
        "allocation pass: %d calls over %d agents in %d slots",
        sum(slot_totals.values()),
        len(roster),
        len(slots),
    )
    return slot_totals


# -----------------------------
# Auto-distribution of commands
# -----------------------------
def auto_distribute(
    slots: Sequence[TimeSlot],
    registry: ShiftRegistry,
    daily_target: int,
    policy: OverlapPolicy = DEFAULT_POLICY,
) -> Dict[TimeSlot, int]:
    """
    Seeds per-slot commands proportionally to presence:
      command = round(daily_target * present / total_agents)

    Rounding drift against daily_target is kept as-is. With no agents at all
    every slot gets 0.
    """
    total_agents = registry.total_headcount()
    if total_agents <= 0:
        return empty_commands(slots)

    out: Dict[TimeSlot, int] = {}
    for slot in slots:
        share = agents_present(slot, registry, policy) / float(total_agents)
        out[slot] = round_half_up(float(daily_target) * share)
    return out


__all__ = [
    "round_half_up",
    "empty_commands",
    "split_evenly",
    "distribute",
    "recompute_all",
    "auto_distribute",
]

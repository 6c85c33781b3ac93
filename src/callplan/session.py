# src/callplan/session.py
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Any, Dict, List, MutableMapping, Optional, Sequence, Tuple

from .allocation import auto_distribute, empty_commands, recompute_all
from .capacity import CapacityConfig
from .config import PlannerSettings, load_settings_from_env
from .presence import DEFAULT_POLICY, OverlapPolicy
from .roster import Agent, generate_roster
from .shifts import ShiftRegistry, default_registry
from .slots import DEFAULT_TIME_SLOTS, TimeSlot, build_time_slots, validate_time_slots
from .validation import ConfigurationUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanningSnapshot:
    """Consistent read-only view of a session, taken under its lock."""
    slots: Tuple[TimeSlot, ...]
    registry: ShiftRegistry
    config: CapacityConfig
    policy: OverlapPolicy
    agents: Tuple[Agent, ...]
    commands: Dict[TimeSlot, int]
    slot_totals: Dict[TimeSlot, int]


class PlanningSession:
    """
    All mutable planning state for one user: configuration, shift registry,
    roster, per-slot commands and the last allocation totals.

    Mutations are serialized with a per-session lock; render from snapshot().
    """

    def __init__(
        self,
        *,
        slots: Optional[Sequence[TimeSlot]] = None,
        registry: Optional[ShiftRegistry] = None,
        config: Optional[CapacityConfig] = None,
        policy: OverlapPolicy = DEFAULT_POLICY,
    ):
        self.slots: List[TimeSlot] = list(slots) if slots is not None else list(DEFAULT_TIME_SLOTS)
        validate_time_slots(self.slots)

        self.registry: ShiftRegistry = registry if registry is not None else default_registry()
        self.config: CapacityConfig = config if config is not None else CapacityConfig()
        self.policy: OverlapPolicy = policy

        self._lock = threading.RLock()
        self.roster: List[Agent] = generate_roster(self.registry)
        self.commands: Dict[TimeSlot, int] = empty_commands(self.slots)
        self.slot_totals: Dict[TimeSlot, int] = empty_commands(self.slots)

    # -----------------------------
    # Queries
    # -----------------------------
    def total_agents(self) -> int:
        return self.registry.total_headcount()

    def slot_at(self, slot_index: int) -> TimeSlot:
        if not (0 <= int(slot_index) < len(self.slots)):
            raise IndexError(f"slot_index must be in [0, {len(self.slots)}), got {slot_index}")
        return self.slots[int(slot_index)]

    def snapshot(self) -> PlanningSnapshot:
        with self._lock:
            agents = tuple(replace(a, calls_by_slot=dict(a.calls_by_slot)) for a in self.roster)
            return PlanningSnapshot(
                slots=tuple(self.slots),
                registry=self.registry,
                config=self.config,
                policy=self.policy,
                agents=agents,
                commands=dict(self.commands),
                slot_totals=dict(self.slot_totals),
            )

    # -----------------------------
    # Mutations
    # -----------------------------
    def update_configuration(self, update: ConfigurationUpdate) -> None:
        """Applies headcounts / AHT / target and rebuilds the roster from scratch."""
        with self._lock:
            self.registry = self.registry.with_headcounts(update.headcounts)
            self.config = replace(
                self.config,
                average_handle_time_minutes=float(update.average_handle_time_minutes),
                daily_call_target=int(update.daily_call_target),
            )
            self.roster = generate_roster(self.registry)
            self.slot_totals = empty_commands(self.slots)
            logger.info(
                "configuration updated: headcounts=%s aht=%.1f target=%d (%d agents)",
                self.registry.headcounts(),
                self.config.average_handle_time_minutes,
                self.config.daily_call_target,
                len(self.roster),
            )

    def set_command(self, slot_index: int, value: int) -> None:
        if int(value) < 0:
            raise ValueError("command must be >= 0")
        with self._lock:
            slot = self.slot_at(slot_index)
            self.commands[slot] = int(value)
            logger.debug("command for %s set to %d", slot.label, int(value))

    def set_commands(self, commands: Dict[TimeSlot, int]) -> None:
        unknown = [s.label for s in commands if s not in self.commands]
        if unknown:
            raise ValueError(f"Unknown slots: {unknown[:10]}")
        if any(int(v) < 0 for v in commands.values()):
            raise ValueError("command must be >= 0")
        with self._lock:
            for slot, value in commands.items():
                self.commands[slot] = int(value)
            logger.info("imported commands for %d slots", len(commands))

    def auto_distribute(self) -> None:
        with self._lock:
            self.commands = auto_distribute(
                self.slots, self.registry, self.config.daily_call_target, self.policy
            )
            logger.info(
                "commands auto-distributed: target=%d seeded=%d",
                self.config.daily_call_target,
                sum(self.commands.values()),
            )

    def clear_commands(self, confirm: bool) -> bool:
        """Resets every command to 0. Returns False (no change) unless confirmed."""
        if not confirm:
            logger.info("clear commands declined")
            return False
        with self._lock:
            self.commands = empty_commands(self.slots)
            logger.info("all commands cleared")
            return True

    def recompute_all(self) -> Dict[TimeSlot, int]:
        with self._lock:
            self.slot_totals = recompute_all(
                self.slots, self.commands, self.roster, self.registry, self.policy
            )
            return dict(self.slot_totals)


def session_from_settings(settings: PlannerSettings) -> PlanningSession:
    registry = default_registry().with_headcounts(settings.headcounts)
    config = CapacityConfig(
        average_handle_time_minutes=settings.average_handle_time_minutes,
        occupancy_rate=settings.occupancy_rate,
        daily_call_target=settings.daily_call_target,
    )
    return PlanningSession(
        slots=build_time_slots(settings.day_start_hour, settings.day_end_hour),
        registry=registry,
        config=config,
        policy=settings.overlap_policy,
    )


SESSION_STATE_KEY = "planning_session"


def session_from_state(state: MutableMapping[str, Any], key: str = SESSION_STATE_KEY) -> PlanningSession:
    """
    Returns the session stored under key, creating it from the CALLPLAN_*
    environment the first time. `state` is typically st.session_state.
    """
    if key not in state:
        state[key] = session_from_settings(load_settings_from_env())
    return state[key]


__all__ = [
    "PlanningSnapshot",
    "PlanningSession",
    "session_from_settings",
    "SESSION_STATE_KEY",
    "session_from_state",
]

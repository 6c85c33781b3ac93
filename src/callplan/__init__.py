# src/callplan/__init__.py
from __future__ import annotations

# -----------------------------
# Data model
# -----------------------------
from .slots import (
    SLOT_MINUTES,
    DEFAULT_TIME_SLOTS,
    TimeSlot,
    build_time_slots,
    parse_slot_label,
)

from .shifts import (
    DEFAULT_SHIFTS,
    ShiftDefinition,
    ShiftRegistry,
    default_registry,
)

# -----------------------------
# Presence / capacity / allocation core
# -----------------------------
from .presence import OverlapPolicy, agents_present, slot_in_shift
from .capacity import CapacityConfig, SlotStatus, capacity, classify
from .roster import Agent, generate_roster
from .allocation import auto_distribute, distribute, recompute_all

# -----------------------------
# Session + boundary
# -----------------------------
from .validation import ConfigurationUpdate, parse_configuration_update
from .config import PlannerSettings, load_settings_from_env
from .session import PlanningSession, PlanningSnapshot, session_from_settings, session_from_state

__all__ = [
    # Data model
    "SLOT_MINUTES",
    "DEFAULT_TIME_SLOTS",
    "TimeSlot",
    "build_time_slots",
    "parse_slot_label",
    "DEFAULT_SHIFTS",
    "ShiftDefinition",
    "ShiftRegistry",
    "default_registry",
    # Core
    "OverlapPolicy",
    "agents_present",
    "slot_in_shift",
    "CapacityConfig",
    "SlotStatus",
    "capacity",
    "classify",
    "Agent",
    "generate_roster",
    "auto_distribute",
    "distribute",
    "recompute_all",
    # Session + boundary
    "ConfigurationUpdate",
    "parse_configuration_update",
    "PlannerSettings",
    "load_settings_from_env",
    "PlanningSession",
    "PlanningSnapshot",
    "session_from_settings",
    "session_from_state",
]

# config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, cast

from .presence import DEFAULT_POLICY, OverlapPolicy
from .shifts import DEFAULT_SHIFTS
from .slots import build_time_slots
from .validation import DEFAULTS, coerce_hour, coerce_non_negative_int, coerce_positive_float, coerce_rate

logger = logging.getLogger(__name__)

ENV_PREFIX = "CALLPLAN_"
OVERLAP_POLICIES = ("half_open", "bidirectional")


@dataclass(frozen=True)
class PlannerSettings:
    headcounts: Dict[str, int] = field(default_factory=lambda: {s.shift_id: s.headcount for s in DEFAULT_SHIFTS})
    average_handle_time_minutes: float = 10.0
    occupancy_rate: float = 0.85
    daily_call_target: int = 700
    overlap_policy: OverlapPolicy = DEFAULT_POLICY
    day_start_hour: float = 8.5
    day_end_hour: float = 18.5


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _policy(raw: Optional[str], default: OverlapPolicy) -> OverlapPolicy:
    if raw is None:
        return default
    if raw not in OVERLAP_POLICIES:
        logger.warning("ignoring %sOVERLAP_POLICY=%r, using %s", ENV_PREFIX, raw, default)
        return default
    return cast(OverlapPolicy, raw)


def _window(start: Optional[str], end: Optional[str], base: PlannerSettings) -> tuple[float, float]:
    s = coerce_hour(start, base.day_start_hour) if start is not None else base.day_start_hour
    e = coerce_hour(end, base.day_end_hour) if end is not None else base.day_end_hour
    try:
        build_time_slots(s, e)
    except ValueError as exc:
        logger.warning("ignoring operating window %s-%s (%s), using the default day", s, e, exc)
        return base.day_start_hour, base.day_end_hour
    return s, e


def load_settings_from_env() -> PlannerSettings:
    """
    Reads CALLPLAN_* overrides. Unset variables keep the built-in defaults;
    invalid ones fall back the same way form input does.

      CALLPLAN_SHIFT_A_COUNT, CALLPLAN_SHIFT_B_COUNT, ...
      CALLPLAN_AHT_MINUTES, CALLPLAN_OCCUPANCY, CALLPLAN_DAILY_TARGET
      CALLPLAN_OVERLAP_POLICY (half_open | bidirectional)
      CALLPLAN_DAY_START, CALLPLAN_DAY_END (decimal hours)

    An operating window that is not a whole number of half-hour slots is
    replaced by the default day as a whole.
    """
    base = PlannerSettings()

    headcounts = dict(base.headcounts)
    for sid in headcounts:
        raw = _env(f"SHIFT_{sid.upper()}_COUNT")
        if raw is not None:
            headcounts[sid] = coerce_non_negative_int(raw, int(DEFAULTS["shift_count"]))

    aht = _env("AHT_MINUTES")
    occupancy = _env("OCCUPANCY")
    target = _env("DAILY_TARGET")
    day_start, day_end = _window(_env("DAY_START"), _env("DAY_END"), base)

    return PlannerSettings(
        headcounts=headcounts,
        average_handle_time_minutes=(
            coerce_positive_float(aht, DEFAULTS["average_handle_time_minutes"])
            if aht is not None
            else base.average_handle_time_minutes
        ),
        occupancy_rate=coerce_rate(occupancy, DEFAULTS["occupancy_rate"]) if occupancy is not None else base.occupancy_rate,
        daily_call_target=(
            coerce_non_negative_int(target, int(DEFAULTS["daily_call_target"]))
            if target is not None
            else base.daily_call_target
        ),
        overlap_policy=_policy(_env("OVERLAP_POLICY"), base.overlap_policy),
        day_start_hour=day_start,
        day_end_hour=day_end,
    )


__all__ = [
    "ENV_PREFIX",
    "OVERLAP_POLICIES",
    "PlannerSettings",
    "load_settings_from_env",
]

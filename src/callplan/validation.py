from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

import pandas as pd

from .slots import TimeSlot


# Fallbacks used when an inbound field is missing or not a valid number.
DEFAULTS: Dict[str, float] = {
    "shift_count": 0,
    "average_handle_time_minutes": 10.0,
    "daily_call_target": 700,
    "occupancy_rate": 0.85,
    "command": 0,
}

REQUIRED_COMMAND_COLUMNS = {"slot", "command"}


@dataclass(frozen=True)
class ConfigurationUpdate:
    headcounts: Dict[str, int]
    average_handle_time_minutes: float
    daily_call_target: int


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        x = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(x) or math.isinf(x):
        return None
    return x


def coerce_non_negative_int(value: Any, default: int) -> int:
    """
    Integer part of value, or default when value is not numeric or is negative.
    "12.7" -> 12, "abc" -> default, -3 -> default.
    """
    x = _to_number(value)
    if x is None or x < 0:
        return int(default)
    return int(x)


def coerce_positive_float(value: Any, default: float) -> float:
    x = _to_number(value)
    if x is None or x <= 0:
        return float(default)
    return float(x)


def coerce_rate(value: Any, default: float) -> float:
    """A rate in (0, 1]; anything else falls back to default."""
    x = _to_number(value)
    if x is None or not (0.0 < x <= 1.0):
        return float(default)
    return float(x)


def coerce_hour(value: Any, default: float) -> float:
    """A decimal hour of the day in [0, 24]; anything else falls back to default."""
    x = _to_number(value)
    if x is None or not (0.0 <= x <= 24.0):
        return float(default)
    return float(x)


def _lookup(raw: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in raw:
            return raw[k]
    return None


def parse_configuration_update(raw: Mapping[str, Any], shift_ids: Sequence[str]) -> ConfigurationUpdate:
    """
    Normalizes a configuration form payload.

    Accepts both `shiftACount` and `shift_a_count` style keys, plus
    `averageHandleTime` / `aht` and `dailyTarget`. Invalid values become the
    documented defaults (headcount 0, AHT 10, daily target 700).
    """
    headcounts = {}
    for sid in shift_ids:
        value = _lookup(raw, f"shift{sid}Count", f"shift_{sid.lower()}_count", sid)
        headcounts[sid] = coerce_non_negative_int(value, int(DEFAULTS["shift_count"]))

    aht = coerce_positive_float(
        _lookup(raw, "averageHandleTime", "average_handle_time_minutes", "aht"),
        DEFAULTS["average_handle_time_minutes"],
    )
    target = coerce_non_negative_int(
        _lookup(raw, "dailyTarget", "daily_call_target", "daily_target"),
        int(DEFAULTS["daily_call_target"]),
    )
    return ConfigurationUpdate(headcounts=headcounts, average_handle_time_minutes=aht, daily_call_target=target)


def parse_command_value(value: Any) -> int:
    return coerce_non_negative_int(value, int(DEFAULTS["command"]))


def validate_commands_df(df: pd.DataFrame, slots: Sequence[TimeSlot]) -> None:
    missing = REQUIRED_COMMAND_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(
            f"Commands dataframe missing required columns: {sorted(missing)}. "
            f"Expected: {sorted(REQUIRED_COMMAND_COLUMNS)}"
        )

    if df.empty:
        raise ValueError("Commands dataframe is empty")

    known = {s.label for s in slots}
    labels = df["slot"].astype(str).str.strip()
    unknown = sorted(set(labels) - known)
    if unknown:
        raise ValueError(f"Unknown slot labels: {unknown[:10]}")

    if labels.duplicated().any():
        dupes = labels[labels.duplicated()].tolist()
        raise ValueError(f"Duplicate slot rows: {dupes}")

    values = pd.to_numeric(df["command"], errors="coerce")
    if values.isna().any():
        bad = df.index[values.isna()].tolist()[:10]
        raise ValueError(f"command must be numeric. Example bad rows: {bad}")

    if (values < 0).any():
        raise ValueError("command must be >= 0 for all rows")

    fractional = values != values.round()
    if fractional.any():
        bad = df.index[fractional].tolist()[:10]
        raise ValueError(f"command must be a whole number of calls. Example bad rows: {bad}")


__all__ = [
    "DEFAULTS",
    "ConfigurationUpdate",
    "coerce_non_negative_int",
    "coerce_positive_float",
    "coerce_rate",
    "coerce_hour",
    "parse_configuration_update",
    "parse_command_value",
    "validate_commands_df",
]

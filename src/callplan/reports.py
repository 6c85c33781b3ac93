# src/callplan/reports.py
from __future__ import annotations

from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd

from .allocation import round_half_up
from .capacity import capacity_for_agents, classify
from .presence import agents_present
from .roster import is_agent_present
from .session import PlanningSession, PlanningSnapshot

# Rendering / export marker for agent x slot cells where the agent is off shift.
NOT_PRESENT_MARKER = "-"
TOTAL_ROW_LABEL = "TOTAL"

Source = Union[PlanningSession, PlanningSnapshot]


def as_snapshot(source: Source) -> PlanningSnapshot:
    return source.snapshot() if isinstance(source, PlanningSession) else source


# -----------------------------
# Per-slot table
# -----------------------------
def slot_summary_table(source: Source) -> pd.DataFrame:
    """slot, agents_present, command, capacity, difference, status"""
    snap = as_snapshot(source)
    rows = []
    for slot in snap.slots:
        present = agents_present(slot, snap.registry, snap.policy)
        cap = capacity_for_agents(present, snap.config)
        command = int(snap.commands.get(slot, 0))
        rows.append(
            {
                "slot": slot.label,
                "agents_present": present,
                "command": command,
                "capacity": cap,
                "difference": cap - command,
                "status": classify(cap, command),
            }
        )
    return pd.DataFrame(
        rows, columns=["slot", "agents_present", "command", "capacity", "difference", "status"]
    )


def slot_summary_totals(source: Source) -> Dict[str, Any]:
    table = slot_summary_table(source)
    total_commands = int(table["command"].sum())
    total_capacity = int(table["capacity"].sum())
    coverage = round_half_up(total_commands / total_capacity * 100) if total_capacity > 0 else 0
    return {
        "agents_present": int(table["agents_present"].sum()),
        "command": total_commands,
        "capacity": total_capacity,
        "difference": total_capacity - total_commands,
        "coverage_pct": coverage,
        "coverage_status": "OK" if coverage <= 100 else "Overloaded",
    }


# -----------------------------
# Per-agent table
# -----------------------------
def _achievement_pct(calls: int, daily_target: int, n_agents: int) -> int:
    if daily_target <= 0 or n_agents <= 0:
        return 0
    return round_half_up(calls / (daily_target / n_agents) * 100)


def agent_performance_table(source: Source) -> pd.DataFrame:
    """agent_id, shift, working_hours, calls_treated, productivity, achievement_pct"""
    snap = as_snapshot(source)
    n = len(snap.agents)
    target = int(snap.config.daily_call_target)
    rows = [
        {
            "agent_id": a.agent_id,
            "shift": a.shift_id,
            "working_hours": float(a.working_hours),
            "calls_treated": int(a.calls_treated),
            "productivity": a.productivity,
            "achievement_pct": _achievement_pct(a.calls_treated, target, n),
        }
        for a in snap.agents
    ]
    return pd.DataFrame(
        rows,
        columns=["agent_id", "shift", "working_hours", "calls_treated", "productivity", "achievement_pct"],
    )


def agent_performance_averages(source: Source) -> Dict[str, float]:
    snap = as_snapshot(source)
    table = agent_performance_table(snap)
    if table.empty:
        return {"avg_calls": 0, "avg_hours": 0.0, "avg_productivity": 0.0, "achievement_pct": 0}

    avg_calls = round_half_up(float(table["calls_treated"].mean()))
    avg_hours = round(float(table["working_hours"].mean()), 1)
    avg_prod = round(avg_calls / avg_hours, 1) if avg_hours > 0 else 0.0
    target = int(snap.config.daily_call_target)
    overall = round_half_up(int(table["calls_treated"].sum()) / target * 100) if target > 0 else 0
    return {
        "avg_calls": avg_calls,
        "avg_hours": avg_hours,
        "avg_productivity": avg_prod,
        "achievement_pct": overall,
    }


# -----------------------------
# Agent x slot matrix
# -----------------------------
def agent_slot_matrix(source: Source, *, include_totals: bool = True) -> pd.DataFrame:
    """
    One row per agent (agent_id, shift, one column per slot label, total).
    Off-shift cells are <NA>; use NOT_PRESENT_MARKER when rendering.
    The TOTAL row carries the slot totals and the grand total.
    """
    snap = as_snapshot(source)
    labels = [s.label for s in snap.slots]

    present = np.array(
        [[is_agent_present(a, s, snap.registry, snap.policy) for s in snap.slots] for a in snap.agents],
        dtype=bool,
    ).reshape(len(snap.agents), len(snap.slots))
    calls = np.array(
        [[a.calls_by_slot.get(s, 0) for s in snap.slots] for a in snap.agents],
        dtype=int,
    ).reshape(len(snap.agents), len(snap.slots))

    grid = pd.DataFrame(calls, columns=labels).astype("Int64")
    grid = grid.mask(~present)

    out = pd.concat(
        [
            pd.DataFrame(
                {
                    "agent_id": [a.agent_id for a in snap.agents],
                    "shift": [a.shift_id for a in snap.agents],
                }
            ),
            grid,
        ],
        axis=1,
    )
    out["total"] = pd.array([int(a.calls_treated) for a in snap.agents], dtype="Int64")

    if include_totals:
        slot_totals = [int(snap.slot_totals.get(s, 0)) for s in snap.slots]
        totals_row = {"agent_id": TOTAL_ROW_LABEL, "shift": ""}
        totals_row.update(dict(zip(labels, slot_totals)))
        totals_row["total"] = int(sum(slot_totals))
        out = pd.concat([out, pd.DataFrame([totals_row])], ignore_index=True)
        for col in [*labels, "total"]:
            out[col] = out[col].astype("Int64")

    return out


def filter_matrix(
    matrix: pd.DataFrame,
    *,
    agent_id: Optional[str] = None,
    shift_id: Optional[str] = None,
) -> pd.DataFrame:
    """Keeps matching agent rows; the TOTAL row is dropped when filtering."""
    if agent_id is None and shift_id is None:
        return matrix.copy()

    mask = pd.Series(True, index=matrix.index)
    if agent_id is not None:
        mask &= matrix["agent_id"] == agent_id
    if shift_id is not None:
        mask &= matrix["shift"] == shift_id
    return matrix.loc[mask & (matrix["agent_id"] != TOTAL_ROW_LABEL)].reset_index(drop=True)


def render_matrix(matrix: pd.DataFrame) -> pd.DataFrame:
    """String view with NOT_PRESENT_MARKER in off-shift cells."""
    return matrix.astype(object).where(matrix.notna(), NOT_PRESENT_MARKER)


__all__ = [
    "NOT_PRESENT_MARKER",
    "TOTAL_ROW_LABEL",
    "Source",
    "as_snapshot",
    "slot_summary_table",
    "slot_summary_totals",
    "agent_performance_table",
    "agent_performance_averages",
    "agent_slot_matrix",
    "filter_matrix",
    "render_matrix",
]

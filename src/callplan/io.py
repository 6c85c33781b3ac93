from __future__ import annotations

import io
import logging
from datetime import date
from typing import Dict, Optional, Sequence, Union

import pandas as pd

from .reports import (
    Source,
    NOT_PRESENT_MARKER,
    TOTAL_ROW_LABEL,
    as_snapshot,
    agent_performance_table,
    agent_slot_matrix,
    slot_summary_table,
)
from .slots import TimeSlot
from .validation import validate_commands_df

logger = logging.getLogger(__name__)

SLOT_SUMMARY_HEADERS = ["Time Slot", "Agents Present", "Director Command", "Capacity", "Difference", "Status"]
AGENT_HEADERS = [
    "Agent ID",
    "Shift",
    "Productive Hours",
    "Calls Treated",
    "Productivity (calls/h)",
    "Achievement (%)",
]


def read_commands_csv(file, slots: Sequence[TimeSlot]) -> Dict[TimeSlot, int]:
    """
    Reads per-slot commands from a CSV with columns:
      slot    ("8h30-9h00" labels)
      command (non-negative integer)

    Slots not listed in the file are left out of the result.
    """
    df = pd.read_csv(file)
    validate_commands_df(df, slots)

    by_label = {s.label: s for s in slots}
    labels = df["slot"].astype(str).str.strip()
    values = pd.to_numeric(df["command"], errors="coerce").astype(int)
    out = {by_label[label]: int(v) for label, v in zip(labels, values)}
    logger.info("read %d slot commands from CSV", len(out))
    return out


def export_filename(prefix: str, today: Optional[date] = None, ext: str = "xlsx") -> str:
    d = today or date.today()
    return f"{prefix}_{d.isoformat()}.{ext}"


# -----------------------------
# CSV
# -----------------------------
def commands_csv(source: Source) -> str:
    table = slot_summary_table(source)[["slot", "command"]]
    return table.to_csv(index=False)


def slot_summary_csv(source: Source) -> str:
    return slot_summary_table(source).to_csv(index=False)


def agent_matrix_csv(source: Source) -> str:
    return agent_slot_matrix(source).to_csv(index=False, na_rep=NOT_PRESENT_MARKER)


# -----------------------------
# Excel
# -----------------------------
def _configuration_frame(source: Source, today: date) -> pd.DataFrame:
    snap = as_snapshot(source)
    rows: list[list[Union[str, int, float]]] = [
        ["Date", today.strftime("%d/%m/%Y")],
        ["Daily Target", int(snap.config.daily_call_target)],
    ]
    for shift in snap.registry:
        rows.append([f"Agents Shift {shift.shift_id}", int(shift.headcount)])
    rows += [
        ["Total Agents", snap.registry.total_headcount()],
        ["AHT", f"{snap.config.average_handle_time_minutes:g} minutes"],
        ["Occupancy Rate", f"{round(snap.config.occupancy_rate * 100)}%"],
        ["Overlap Policy", snap.policy],
    ]
    return pd.DataFrame(rows, columns=["Parameter", "Value"])


def planning_workbook_bytes(source: Source, today: Optional[date] = None) -> bytes:
    """Commands / Agents / Configuration sheets."""
    d = today or date.today()
    snap = as_snapshot(source)

    commands = slot_summary_table(snap)
    commands.columns = SLOT_SUMMARY_HEADERS

    agents = agent_performance_table(snap)
    agents["shift"] = "Shift " + agents["shift"].astype(str)
    agents.columns = AGENT_HEADERS

    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        commands.to_excel(writer, sheet_name="Commands", index=False)
        agents.to_excel(writer, sheet_name="Agents", index=False)
        _configuration_frame(snap, d).to_excel(writer, sheet_name="Configuration", index=False)

    logger.info("planning workbook exported (%d slots, %d agents)", len(commands), len(agents))
    return buf.getvalue()


def agent_details_workbook_bytes(source: Source) -> bytes:
    """Agent x slot matrix; off-shift cells are written as 0."""
    matrix = agent_slot_matrix(source).fillna(0)
    is_agent = matrix["agent_id"] != TOTAL_ROW_LABEL
    matrix.loc[is_agent, "shift"] = "Shift " + matrix.loc[is_agent, "shift"].astype(str)
    matrix = matrix.rename(columns={"agent_id": "Agent ID", "shift": "Shift", "total": "Total"})

    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        matrix.to_excel(writer, sheet_name="Agent Details", index=False)
        sheet = writer.sheets["Agent Details"]
        for idx, col in enumerate(matrix.columns):
            letter = sheet.cell(row=1, column=idx + 1).column_letter
            sheet.column_dimensions[letter].width = 8 if col in ("Shift", "Total") else 10

    logger.info("agent details workbook exported (%d rows)", len(matrix))
    return buf.getvalue()


__all__ = [
    "SLOT_SUMMARY_HEADERS",
    "AGENT_HEADERS",
    "read_commands_csv",
    "export_filename",
    "commands_csv",
    "slot_summary_csv",
    "agent_matrix_csv",
    "planning_workbook_bytes",
    "agent_details_workbook_bytes",
]

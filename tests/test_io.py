import io
from datetime import date

import pandas as pd
import pytest

from callplan.io import (
    agent_details_workbook_bytes,
    agent_matrix_csv,
    commands_csv,
    export_filename,
    planning_workbook_bytes,
    read_commands_csv,
)
from callplan.session import PlanningSession
from callplan.slots import DEFAULT_TIME_SLOTS, parse_slot_label


def _session() -> PlanningSession:
    session = PlanningSession()
    session.set_command(8, 204)
    session.recompute_all()
    return session


def test_read_commands_csv():
    data = io.StringIO("slot,command\n8h30-9h00,40\n12h30-13h00,204\n")
    commands = read_commands_csv(data, DEFAULT_TIME_SLOTS)
    assert commands == {parse_slot_label("8h30-9h00"): 40, parse_slot_label("12h30-13h00"): 204}


def test_read_commands_csv_rejects_unknown_slots():
    with pytest.raises(ValueError):
        read_commands_csv(io.StringIO("slot,command\n7h00-7h30,1\n"), DEFAULT_TIME_SLOTS)


def test_commands_csv_feeds_back_into_session():
    source = _session()
    target = PlanningSession()
    target.set_commands(read_commands_csv(io.StringIO(commands_csv(source)), target.slots))
    assert target.commands == source.commands


def test_export_filename():
    assert export_filename("call_center_planning", date(2024, 3, 5)) == "call_center_planning_2024-03-05.xlsx"
    assert export_filename("agent_details", date(2024, 3, 5), ext="csv") == "agent_details_2024-03-05.csv"


def test_agent_matrix_csv_uses_marker():
    text = agent_matrix_csv(_session())
    df = pd.read_csv(io.StringIO(text), dtype=str)
    a001 = df[df["agent_id"] == "A001"].iloc[0]
    assert a001["18h00-18h30"] == "-"
    assert df.iloc[-1]["agent_id"] == "TOTAL"


def test_planning_workbook_sheets():
    data = planning_workbook_bytes(_session(), today=date(2024, 3, 5))
    sheets = pd.read_excel(io.BytesIO(data), sheet_name=None)

    assert list(sheets) == ["Commands", "Agents", "Configuration"]
    assert len(sheets["Commands"]) == 20
    assert sheets["Agents"].loc[0, "Shift"] == "Shift A"

    config = dict(zip(sheets["Configuration"]["Parameter"], sheets["Configuration"]["Value"]))
    assert config["Date"] == "05/03/2024"
    assert str(config["Total Agents"]) == "80"
    assert config["Occupancy Rate"] == "85%"


def test_agent_details_workbook():
    data = agent_details_workbook_bytes(_session())
    df = pd.read_excel(io.BytesIO(data), sheet_name="Agent Details")
    assert df.columns[0] == "Agent ID"
    assert df.iloc[-1]["Total"] == 204
    a001 = df[df["Agent ID"] == "A001"].iloc[0]
    assert a001["18h00-18h30"] == 0
    assert a001["Shift"] == "Shift A"


def test_read_commands_csv_rejects_fractional_commands():
    with pytest.raises(ValueError, match="whole number"):
        read_commands_csv(io.StringIO("slot,command\n8h30-9h00,2.5\n"), DEFAULT_TIME_SLOTS)

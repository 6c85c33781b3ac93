import pytest

from callplan.session import SESSION_STATE_KEY, PlanningSession, session_from_state
from callplan.slots import parse_slot_label
from callplan.validation import ConfigurationUpdate

MIDDAY = parse_slot_label("12h30-13h00")


def test_new_session_has_default_roster_and_zero_commands():
    session = PlanningSession()
    assert session.total_agents() == 80
    assert len(session.roster) == 80
    assert set(session.commands.values()) == {0}


def test_set_command_bounds():
    session = PlanningSession()
    session.set_command(8, 204)
    assert session.commands[MIDDAY] == 204

    with pytest.raises(IndexError):
        session.set_command(20, 1)
    with pytest.raises(ValueError):
        session.set_command(0, -1)


def test_recompute_then_snapshot():
    session = PlanningSession()
    session.set_command(8, 204)
    totals = session.recompute_all()
    assert totals[MIDDAY] == 204

    snap = session.snapshot()
    assert snap.slot_totals[MIDDAY] == 204
    assert sum(a.calls_treated for a in snap.agents) == 204

    # snapshot is detached from later mutations
    session.set_command(8, 0)
    session.recompute_all()
    assert snap.commands[MIDDAY] == 204
    assert sum(a.calls_treated for a in snap.agents) == 204


def test_update_configuration_regenerates_roster_and_discards_history():
    session = PlanningSession()
    session.set_command(8, 204)
    session.recompute_all()

    session.update_configuration(
        ConfigurationUpdate(headcounts={"A": 10, "B": 0, "C": 5}, average_handle_time_minutes=6.0, daily_call_target=300)
    )

    assert [a.agent_id for a in session.roster][:2] == ["A001", "A002"]
    assert session.roster[-1].agent_id == "C015"
    assert all(a.calls_treated == 0 for a in session.roster)
    assert session.slot_totals[MIDDAY] == 0
    assert session.config.average_handle_time_minutes == 6.0
    assert session.config.daily_call_target == 300
    assert session.config.occupancy_rate == 0.85
    # commands are user input, not reset by configuration changes
    assert session.commands[MIDDAY] == 204


def test_clear_commands_requires_confirmation():
    session = PlanningSession()
    session.auto_distribute()
    assert session.commands[MIDDAY] == 700

    assert session.clear_commands(confirm=False) is False
    assert session.commands[MIDDAY] == 700

    assert session.clear_commands(confirm=True) is True
    assert set(session.commands.values()) == {0}


def test_bidirectional_session_keeps_matrix_and_totals_consistent():
    session = PlanningSession(policy="bidirectional")
    session.auto_distribute()
    totals = session.recompute_all()
    assert sum(totals.values()) == sum(a.calls_treated for a in session.roster)
    assert sum(totals.values()) == sum(session.commands.values())


def test_session_from_state_creates_once(monkeypatch):
    for sid in ("A", "B", "C"):
        monkeypatch.delenv(f"CALLPLAN_SHIFT_{sid}_COUNT", raising=False)
    monkeypatch.delenv("CALLPLAN_DAY_START", raising=False)
    monkeypatch.delenv("CALLPLAN_DAY_END", raising=False)
    state = {}
    session = session_from_state(state)
    assert state[SESSION_STATE_KEY] is session
    assert session_from_state(state) is session
    assert session.total_agents() == 80

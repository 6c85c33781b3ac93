from callplan.roster import agents_in_slot, format_agent_id, generate_roster
from callplan.shifts import default_registry
from callplan.slots import parse_slot_label


def test_ids_use_global_sequence_across_shifts():
    roster = generate_roster(default_registry())
    assert len(roster) == 80
    assert roster[0].agent_id == "A001"
    assert roster[24].agent_id == "A025"
    assert roster[25].agent_id == "B026"
    assert roster[50].agent_id == "C051"
    assert roster[-1].agent_id == "C080"


def test_working_hours_from_shift():
    roster = generate_roster(default_registry())
    assert {a.shift_id: a.working_hours for a in roster} == {"A": 7.5, "B": 6.5, "C": 8.5}


def test_regeneration_is_idempotent_and_resets_calls():
    reg = default_registry()
    first = generate_roster(reg)
    first[0].add_calls(parse_slot_label("8h30-9h00"), 5)

    second = generate_roster(reg)
    assert [a.agent_id for a in second] == [a.agent_id for a in first]
    assert second[0].calls_treated == 0
    assert second[0].calls_by_slot == {}


def test_format_agent_id_padding():
    assert format_agent_id("B", 7) == "B007"
    assert format_agent_id("C", 1234) == "C1234"


def test_productivity_rounds_and_handles_zero_hours():
    roster = generate_roster(default_registry().with_headcounts({"A": 1, "B": 0, "C": 0}))
    agent = roster[0]
    agent.add_calls(parse_slot_label("9h00-9h30"), 20)
    assert agent.productivity == round(20 / 7.5, 1)

    agent.working_hours = 0
    assert agent.productivity == 0.0


def test_agents_in_slot_keeps_roster_order():
    reg = default_registry()
    roster = generate_roster(reg)
    present = agents_in_slot(roster, parse_slot_label("11h00-11h30"), reg)
    ids = [a.agent_id for a in present]
    assert ids == sorted(ids, key=lambda x: int(x[1:]))
    assert len(present) == 80
    assert agents_in_slot(roster, parse_slot_label("8h30-9h00"), reg)[-1].agent_id == "A025"

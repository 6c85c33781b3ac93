import numpy as np

from callplan.allocation import (
    auto_distribute,
    distribute,
    empty_commands,
    recompute_all,
    round_half_up,
    split_evenly,
)
from callplan.roster import agents_in_slot, generate_roster
from callplan.shifts import default_registry
from callplan.slots import DEFAULT_TIME_SLOTS, parse_slot_label

MIDDAY = parse_slot_label("12h30-13h00")


def test_split_evenly_base_and_remainder():
    out = split_evenly(204, 80)
    assert out.sum() == 204
    assert (out[:44] == 3).all()
    assert (out[44:] == 2).all()


def test_distribute_example_in_roster_order():
    reg = default_registry()
    roster = generate_roster(reg)
    present = agents_in_slot(roster, MIDDAY, reg)

    alloc = distribute(MIDDAY, {MIDDAY: 204}, present)

    assert sum(alloc.values()) == 204
    assert alloc["A001"] == 3
    assert alloc["B044"] == 3
    assert alloc["B045"] == 2
    assert alloc["C080"] == 2
    assert sum(1 for v in alloc.values() if v == 3) == 44


def test_distribute_nothing_for_zero_command_or_no_agents():
    reg = default_registry()
    roster = generate_roster(reg)
    present = agents_in_slot(roster, MIDDAY, reg)
    assert distribute(MIDDAY, {MIDDAY: 0}, present) == {}
    assert distribute(MIDDAY, {MIDDAY: 50}, []) == {}
    assert distribute(MIDDAY, {}, present) == {}


def test_command_smaller_than_agents():
    reg = default_registry()
    roster = generate_roster(reg)
    present = agents_in_slot(roster, MIDDAY, reg)
    alloc = distribute(MIDDAY, {MIDDAY: 5}, present)
    assert sum(alloc.values()) == 5
    assert [alloc[a.agent_id] for a in present[:6]] == [1, 1, 1, 1, 1, 0]


def test_recompute_all_conserves_and_is_fair():
    reg = default_registry()
    roster = generate_roster(reg)
    rng = np.random.default_rng(7)
    commands = {slot: int(v) for slot, v in zip(DEFAULT_TIME_SLOTS, rng.integers(0, 400, len(DEFAULT_TIME_SLOTS)))}

    totals = recompute_all(DEFAULT_TIME_SLOTS, commands, roster, reg)

    for slot in DEFAULT_TIME_SLOTS:
        present = agents_in_slot(roster, slot, reg)
        per_agent = [a.calls_by_slot.get(slot, 0) for a in present]
        assert sum(per_agent) == commands[slot]
        assert totals[slot] == commands[slot]
        assert max(per_agent) - min(per_agent) <= 1
        assert totals[slot] == sum(a.calls_by_slot.get(slot, 0) for a in roster)

    assert sum(a.calls_treated for a in roster) == sum(totals.values())


def test_recompute_all_is_idempotent():
    reg = default_registry()
    roster = generate_roster(reg)
    commands = empty_commands(DEFAULT_TIME_SLOTS)
    commands[MIDDAY] = 204
    commands[DEFAULT_TIME_SLOTS[0]] = 63

    first_totals = recompute_all(DEFAULT_TIME_SLOTS, commands, roster, reg)
    first = [(a.agent_id, a.calls_treated, dict(a.calls_by_slot)) for a in roster]
    second_totals = recompute_all(DEFAULT_TIME_SLOTS, commands, roster, reg)
    second = [(a.agent_id, a.calls_treated, dict(a.calls_by_slot)) for a in roster]

    assert first_totals == second_totals
    assert first == second


def test_slot_with_no_agents_allocates_nothing():
    reg = default_registry().with_headcounts({"A": 0})
    roster = generate_roster(reg)
    first = DEFAULT_TIME_SLOTS[0]
    totals = recompute_all(DEFAULT_TIME_SLOTS, {first: 100}, roster, reg)
    assert totals[first] == 0


def test_auto_distribute_proportional_to_presence():
    reg = default_registry()
    commands = auto_distribute(DEFAULT_TIME_SLOTS, reg, 700)
    assert commands[MIDDAY] == 700
    assert commands[parse_slot_label("8h30-9h00")] == 219  # 218.75
    assert commands[parse_slot_label("18h00-18h30")] == 481  # 481.25


def test_auto_distribute_without_agents_is_all_zero():
    reg = default_registry().with_headcounts({"A": 0, "B": 0, "C": 0})
    commands = auto_distribute(DEFAULT_TIME_SLOTS, reg, 700)
    assert set(commands.values()) == {0}
    assert len(commands) == len(DEFAULT_TIME_SLOTS)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(0) == 0

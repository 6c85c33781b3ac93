import pandas as pd
import pytest

from callplan.slots import DEFAULT_TIME_SLOTS
from callplan.validation import (
    coerce_hour,
    coerce_non_negative_int,
    coerce_positive_float,
    parse_command_value,
    parse_configuration_update,
    validate_commands_df,
)


def test_configuration_update_defaults_invalid_values():
    update = parse_configuration_update(
        {"shiftACount": "abc", "shiftBCount": "12", "shiftCCount": -4, "averageHandleTime": "", "dailyTarget": None},
        ["A", "B", "C"],
    )
    assert update.headcounts == {"A": 0, "B": 12, "C": 0}
    assert update.average_handle_time_minutes == 10.0
    assert update.daily_call_target == 700


def test_configuration_update_accepts_snake_case_keys():
    update = parse_configuration_update(
        {"shift_a_count": 3, "shift_b_count": 4, "shift_c_count": 5, "aht": 6.5, "daily_target": 300},
        ["A", "B", "C"],
    )
    assert update.headcounts == {"A": 3, "B": 4, "C": 5}
    assert update.average_handle_time_minutes == 6.5
    assert update.daily_call_target == 300


def test_zero_aht_falls_back():
    assert coerce_positive_float(0, 10.0) == 10.0
    assert coerce_positive_float("nan", 10.0) == 10.0


def test_int_coercion_truncates():
    assert coerce_non_negative_int("12.7", 0) == 12
    assert coerce_non_negative_int(True, 0) == 0
    assert parse_command_value("x") == 0
    assert parse_command_value(" 42 ") == 42


def test_validate_commands_df_flags_problems():
    ok = pd.DataFrame({"slot": ["8h30-9h00", "9h00-9h30"], "command": [10, 0]})
    validate_commands_df(ok, DEFAULT_TIME_SLOTS)

    with pytest.raises(ValueError, match="missing required columns"):
        validate_commands_df(pd.DataFrame({"slot": ["8h30-9h00"]}), DEFAULT_TIME_SLOTS)

    with pytest.raises(ValueError, match="Unknown slot labels"):
        validate_commands_df(pd.DataFrame({"slot": ["7h00-7h30"], "command": [1]}), DEFAULT_TIME_SLOTS)

    with pytest.raises(ValueError, match=">= 0"):
        validate_commands_df(pd.DataFrame({"slot": ["8h30-9h00"], "command": [-1]}), DEFAULT_TIME_SLOTS)

    with pytest.raises(ValueError, match="Duplicate"):
        validate_commands_df(
            pd.DataFrame({"slot": ["8h30-9h00", "8h30-9h00"], "command": [1, 2]}), DEFAULT_TIME_SLOTS
        )


def test_validate_commands_df_rejects_fractional_commands():
    df = pd.DataFrame({"slot": ["8h30-9h00", "9h00-9h30"], "command": [2.5, 3.0]})
    with pytest.raises(ValueError, match="whole number"):
        validate_commands_df(df, DEFAULT_TIME_SLOTS)


def test_coerce_hour():
    assert coerce_hour("9.5", 8.5) == 9.5
    assert coerce_hour("abc", 8.5) == 8.5
    assert coerce_hour(25, 8.5) == 8.5

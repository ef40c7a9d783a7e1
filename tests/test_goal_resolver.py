import copy

import pytest

from goal_resolver import (
    build_month_labels,
    canonical_month_label,
    parse_month,
    resolve_goal,
    resolve_goals_for_chart,
)

STATIC = {"oki irawan": {"august 2025": 105000000}}


@pytest.mark.parametrize("month", [str(m) for m in range(1, 13)] + ["01", "09", "12"])
def test_empty_tables_resolve_to_zero(month):
    assert resolve_goal("oki irawan", month, "2025", {}, {}) == 0
    assert resolve_goal("oki irawan", month, "2025", None, {}) == 0


def test_static_only_agent_returns_static_value():
    assert resolve_goal("Oki Irawan", "08", "2025", None, STATIC) == 105000000
    assert resolve_goal("oki irawan", "8", "2025", {"someone else": {"August 2025": 1}}, STATIC) == 105000000


def test_settings_beat_static_for_same_agent():
    settings = {"Oki Irawan": {"August 2025": 120000000}}
    assert resolve_goal("Oki Irawan", "08", "2025", settings, STATIC) == 120000000


def test_settings_national_beats_static_agent():
    settings = {"NATIONAL": {"August 2025": 999}}
    assert resolve_goal("oki irawan", "08", "2025", settings, STATIC) == 999


def test_settings_lowercase_label_is_also_tried():
    settings = {"Oki Irawan": {"august 2025": 77}}
    assert resolve_goal("Oki Irawan", "8", "2025", settings, STATIC) == 77


def test_settings_national_lowercase_label():
    settings = {"NATIONAL": {"august 2025": 55}}
    assert resolve_goal("nobody", "8", "2025", settings, STATIC) == 55


def test_agent_match_is_case_insensitive():
    table = {"Oki irawan": {"august 2025": 42}}
    assert resolve_goal("OKI IRAWAN", "08", "2025", None, table) == 42
    assert resolve_goal("oki irawan", "08", "2025", None, table) == 42

    settings = {"Oki irawan": {"August 2025": 7}}
    assert resolve_goal("OKI IRAWAN", "08", "2025", settings, {}) == 7
    assert resolve_goal("oki irawan", "08", "2025", settings, {}) == 7


def test_exact_agent_wins_over_case_insensitive_match():
    settings = {"oki irawan": {"August 2025": 1}, "Oki Irawan": {"August 2025": 2}}
    assert resolve_goal("Oki Irawan", "08", "2025", settings, {}) == 2


def test_static_national_fallback():
    static = {"national": {"august 2025": 500}, "oki irawan": {"july 2025": 10}}
    assert resolve_goal("Oki Irawan", "08", "2025", None, static) == 500


def test_zero_entry_counts_as_unset():
    settings = {"Oki Irawan": {"August 2025": 0}}
    assert resolve_goal("Oki Irawan", "08", "2025", settings, STATIC) == 105000000


@pytest.mark.parametrize("month", ["13", "0", "abc", "", None, "-1", "008", "1.5"])
def test_invalid_month_returns_zero(month):
    settings = {"NATIONAL": {"August 2025": 999}}
    assert resolve_goal("oki irawan", month, "2025", settings, STATIC) == 0


def test_missing_year_returns_zero():
    assert resolve_goal("oki irawan", "08", "", None, STATIC) == 0


def test_unexpected_table_shapes_do_not_raise():
    assert resolve_goal("oki irawan", "08", "2025", ["not", "a", "dict"], STATIC) == 105000000
    assert resolve_goal("oki irawan", "08", "2025", {"oki irawan": "oops"}, {"oki irawan": None}) == 0
    assert resolve_goal(None, "08", "2025", None, STATIC) == 0


def test_tables_are_not_mutated():
    settings = {"NATIONAL": {"August 2025": 999}, "Oki Irawan": {"July 2025": 5}}
    static = copy.deepcopy(STATIC)
    before = (copy.deepcopy(settings), copy.deepcopy(static))
    resolve_goal("oki irawan", "08", "2025", settings, static)
    resolve_goals_for_chart("oki irawan", settings)
    assert (settings, static) == before


def test_chart_without_settings_is_empty():
    assert resolve_goals_for_chart("oki irawan", None) == {}
    assert resolve_goals_for_chart("oki irawan", {}) == {}


def test_chart_precedence():
    settings = {
        "Oki Irawan": {"August 2025": 1, "September 2025": 2},
        "NATIONAL": {"August 2025": 100},
    }
    assert resolve_goals_for_chart("Oki Irawan", settings) == {"August 2025": 1, "September 2025": 2}
    assert resolve_goals_for_chart("OKI IRAWAN", settings) == {"August 2025": 1, "September 2025": 2}
    assert resolve_goals_for_chart("Dedi", settings) == {"August 2025": 100}
    assert resolve_goals_for_chart("Dedi", {"Oki Irawan": {"August 2025": 1}}) == {}


def test_chart_result_is_a_copy():
    settings = {"NATIONAL": {"August 2025": 100}}
    goals = resolve_goals_for_chart("x", settings)
    goals["August 2025"] = 0
    assert settings["NATIONAL"]["August 2025"] == 100


def test_month_helpers():
    assert parse_month("08") == 8
    assert parse_month(" 12 ") == 12
    assert parse_month("13") is None
    assert build_month_labels("8", "2025") == ("August 2025", "august 2025")
    assert build_month_labels("8", None) is None
    assert canonical_month_label("august 2025") == "August 2025"
    assert canonical_month_label("DECEMBER 2026") == "December 2026"
    assert canonical_month_label("Agustus 2025") is None
    assert canonical_month_label("") is None

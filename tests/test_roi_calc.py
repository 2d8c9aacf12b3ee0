"""
Tests for the ROI calculation core.

Run: pytest tests/test_roi_calc.py -v
"""

from __future__ import annotations

import pytest

from roi_calc import (
    CONTRACT_FIELD,
    DATA_OBSERVABILITY,
    DEFAULT_VARIANT,
    STARTER_TIERS,
    STUDIO_TIERS,
    SUPERCELL,
    SUPERCELL_ROI,
    VARIANTS,
    InputStore,
    coerce_number,
    currency,
    derive,
    get_variant,
    percent,
    select_tier,
)

GENERIC_SCENARIO = {
    "team_size": 5,
    "time_on_data_quality": 30,
    "average_salary": 100_000,
    "failed_dashboards": 5,
    "downtime_hours": 2,
    "bad_decisions": 2,
    "cost_per_decision": 10_000,
}

GAMING_SCENARIO = {
    "team_size": 12,
    "time_on_data_quality": 35,
    "average_salary": 110_000,
    "failed_dashboards": 8,
    "downtime_hours": 3,
    "player_incidents": 3,
    "cost_per_incident": 25_000,
}


def test_generic_example_scenario() -> None:
    out = derive(DATA_OBSERVABILITY, GENERIC_SCENARIO, 0)
    assert out.monthly_team_cost == pytest.approx(12_500)
    assert out.incident_costs["monthly_dashboard_cost"] == pytest.approx(520.8333, rel=1e-6)
    assert out.incident_costs["monthly_bad_decision_cost"] == pytest.approx(20_000)
    assert out.total_monthly_cost == pytest.approx(33_020.8333, rel=1e-6)
    assert out.annual_cost == pytest.approx(396_250)
    assert out.monthly_savings == pytest.approx(16_510.4167, rel=1e-6)
    assert out.annual_savings == pytest.approx(198_125)
    assert out.productivity_gain == 0
    assert out.net_benefit == pytest.approx(198_125)


@pytest.mark.parametrize("variant", list(VARIANTS.values()), ids=list(VARIANTS))
def test_aggregate_identities(variant) -> None:
    inputs = GAMING_SCENARIO if variant is not DATA_OBSERVABILITY else GENERIC_SCENARIO
    out = derive(variant, inputs, 30_000)
    assert out.total_monthly_cost == pytest.approx(sum(out.cost_terms().values()))
    assert out.annual_cost == pytest.approx(out.total_monthly_cost * 12)
    assert out.monthly_savings == pytest.approx(out.total_monthly_cost * variant.reduction_rate)
    assert out.annual_savings == pytest.approx(out.monthly_savings * 12)
    assert out.net_benefit == pytest.approx(out.annual_savings + out.productivity_gain - 30_000)


def test_reduction_rates_per_variant() -> None:
    assert DATA_OBSERVABILITY.reduction_rate == 0.5
    assert SUPERCELL.reduction_rate == 0.65
    assert SUPERCELL_ROI.reduction_rate == 0.65


def test_gaming_roi_scenario() -> None:
    out = derive(SUPERCELL_ROI, GAMING_SCENARIO, 60_000)
    assert out.monthly_team_cost == pytest.approx(38_500)
    assert out.incident_costs["monthly_dashboard_cost"] == pytest.approx(1_375)
    assert out.incident_costs["monthly_player_incident_cost"] == pytest.approx(75_000)
    assert out.total_monthly_cost == pytest.approx(114_875)
    assert out.annual_savings == pytest.approx(896_025)
    assert out.productivity_gain == pytest.approx(75_075)
    assert out.net_benefit == pytest.approx(911_100)
    assert out.roi_percent == pytest.approx(1_518.5)


def test_roi_is_zero_without_contract() -> None:
    out = derive(SUPERCELL_ROI, GAMING_SCENARIO, 0)
    assert out.roi_percent == 0
    assert out.net_benefit == pytest.approx(out.annual_savings + out.productivity_gain)


def test_contract_change_only_moves_net_benefit_and_roi() -> None:
    low = derive(SUPERCELL_ROI, GAMING_SCENARIO, 15_000).as_dict()
    high = derive(SUPERCELL_ROI, GAMING_SCENARIO, 120_000).as_dict()
    changed = {name for name in low if low[name] != high[name]}
    assert changed == {"net_benefit", "roi_percent"}


def test_negative_inputs_propagate() -> None:
    out = derive(DATA_OBSERVABILITY, {**GENERIC_SCENARIO, "bad_decisions": -4}, 0)
    assert out.incident_costs["monthly_bad_decision_cost"] == pytest.approx(-40_000)
    assert out.total_monthly_cost < 0


def test_missing_fields_read_as_zero() -> None:
    out = derive(DATA_OBSERVABILITY, {}, 15_000)
    assert out.total_monthly_cost == 0
    assert out.net_benefit == -15_000
    assert out.roi_percent == pytest.approx(-100)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", 0.0),
        ("   ", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("12abc", 0.0),
        ("1,000", 0.0),
        ("1_000", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        (" 42 ", 42.0),
        ("2.5", 2.5),
        ("1e3", 1000.0),
        ("-3", -3.0),
        ("١٢", 0.0),
        ("１２", 0.0),
        (7, 7.0),
    ],
)
def test_coerce_number(raw, expected) -> None:
    assert coerce_number(raw) == expected


def test_empty_entry_equivalent_to_zero() -> None:
    store = InputStore(DATA_OBSERVABILITY)
    for name, value in GENERIC_SCENARIO.items():
        store.update(name, str(value))
    store.update("bad_decisions", "not a number")
    expected = derive(DATA_OBSERVABILITY, {**GENERIC_SCENARIO, "bad_decisions": 0}, 0)
    assert store.outputs().as_dict() == pytest.approx(expected.as_dict())


def test_store_seeds_defaults_into_backing() -> None:
    backing = {}
    store = InputStore(SUPERCELL, backing)
    assert backing["team_size"] == 12
    assert store.contract_cost == 30_000
    assert DATA_OBSERVABILITY.defaults()["average_salary"] == 100_000


def test_store_update_and_reset() -> None:
    store = InputStore(DATA_OBSERVABILITY)
    assert store.update("team_size", "8") == 8.0
    assert store["team_size"] == 8.0
    store.reset()
    assert store["team_size"] == 0.0
    assert store["average_salary"] == 100_000


def test_store_rejects_unknown_field() -> None:
    store = InputStore(DATA_OBSERVABILITY)
    with pytest.raises(KeyError):
        store.update("headcount", "3")


def test_tiered_contract_restricted_to_tiers() -> None:
    store = InputStore(SUPERCELL_ROI)
    assert store.update(CONTRACT_FIELD, 120_000) == 120_000
    assert store.update(CONTRACT_FIELD, 99_999) == STUDIO_TIERS[0]


def test_free_entry_contract_not_restricted() -> None:
    store = InputStore(DATA_OBSERVABILITY)
    assert store.update(CONTRACT_FIELD, "22500") == 22_500


def test_select_tier() -> None:
    assert select_tier(STARTER_TIERS, 60_000) == 60_000
    assert select_tier(STARTER_TIERS, "abc") == 0
    assert select_tier(STUDIO_TIERS, 0) == 15_000


def test_get_variant_falls_back_to_default() -> None:
    assert get_variant("supercell").key == "supercell"
    assert get_variant("nope").key == DEFAULT_VARIANT
    assert get_variant(None).key == DEFAULT_VARIANT


def test_formatting() -> None:
    assert currency(33_020.83) == "$33,021"
    assert currency(-1_234.4) == "-$1,234"
    assert currency(-0.2) == "$0"
    assert percent(150.2) == "150%"
    assert percent(0) == "0%"


def test_formatting_overflowed_figures() -> None:
    assert currency(float("inf")) == "n/a"
    assert currency(float("-inf")) == "n/a"
    assert currency(float("nan")) == "n/a"
    assert percent(float("inf")) == "n/a"
    assert percent(float("nan")) == "n/a"


def test_huge_entries_format_without_raising() -> None:
    store = InputStore(SUPERCELL_ROI)
    store.update("team_size", "1e200")
    store.update("average_salary", "1e200")
    out = store.outputs()
    for value in out.as_dict().values():
        currency(value)
        percent(value)
    assert currency(out.total_monthly_cost) == "n/a"


def test_placeholder_includes_units() -> None:
    assert DATA_OBSERVABILITY.field_spec("average_salary").placeholder == "e.g. $100000"
    assert DATA_OBSERVABILITY.field_spec("time_on_data_quality").placeholder == "e.g. 30%"


def test_contract_hint_used_verbatim() -> None:
    assert DATA_OBSERVABILITY.field_spec(CONTRACT_FIELD).placeholder == "15000, 30000, or 60000"


def test_label_carries_unit() -> None:
    assert DATA_OBSERVABILITY.field_spec("average_salary").display_label == "Average salary ($)"
    assert DATA_OBSERVABILITY.field_spec("cost_per_decision").display_label == "Cost per bad decision ($)"
    assert DATA_OBSERVABILITY.field_spec("team_size").display_label == "Team size"
    assert (
        DATA_OBSERVABILITY.field_spec("time_on_data_quality").display_label
        == "% time on data quality"
    )

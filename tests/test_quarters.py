import logging
from datetime import date, timedelta

from quarters import (
    DEFAULT_QUARTERS,
    QuarterBoundary,
    QuarterRange,
    fiscal_quarters,
    parse_quarter_config,
    quarter_config_to_dict,
    quarter_name,
    quarter_of,
)


def _range(sm: int, sd: int, em: int, ed: int) -> QuarterRange:
    return QuarterRange(QuarterBoundary(sm, sd), QuarterBoundary(em, ed))


def test_default_rule_without_config() -> None:
    assert quarter_of(date(2024, 4, 15)) == 2
    assert quarter_of(date(2024, 4, 15), {}) == 2
    assert quarter_of(date(2024, 1, 1)) == 1
    assert quarter_of(date(2024, 12, 31)) == 4


def test_default_quarters_config_matches_default_rule() -> None:
    d = date(2024, 1, 1)
    while d.year == 2024:
        assert quarter_of(d, DEFAULT_QUARTERS) == (d.month - 1) // 3 + 1
        d += timedelta(days=1)


def test_q4_only_config_falls_back_for_january() -> None:
    q4_only = {4: _range(10, 1, 12, 31)}
    assert quarter_of(date(2024, 11, 5), q4_only) == 4
    # Oct 1 - Dec 31 does not span the year end, so January uses the default rule
    assert quarter_of(date(2025, 1, 1), q4_only) == 1
    assert quarter_of(date(2025, 5, 1), q4_only) == 2


def test_year_spanning_quarter() -> None:
    config = fiscal_quarters(11)  # Q1 Nov-Jan, Q2 Feb-Apr, Q3 May-Jul, Q4 Aug-Oct
    assert config[1].spans_year_end
    assert quarter_of(date(2024, 11, 20), config) == 1
    assert quarter_of(date(2024, 12, 31), config) == 1
    assert quarter_of(date(2025, 1, 15), config) == 1
    assert quarter_of(date(2025, 1, 31), config) == 1
    assert quarter_of(date(2025, 2, 1), config) == 2
    assert quarter_of(date(2024, 10, 31), config) == 4


def test_fiscal_quarters_july_start() -> None:
    config = fiscal_quarters(7)
    assert config[1] == _range(7, 1, 9, 30)
    assert config[2] == _range(10, 1, 12, 31)
    assert config[3] == _range(1, 1, 3, 31)
    assert config[4] == _range(4, 1, 6, 30)
    assert quarter_of(date(2025, 2, 14), config) == 3


def test_feb_29_boundary_is_clamped_in_common_years() -> None:
    assert QuarterBoundary(2, 29).anchor(2023) == date(2023, 2, 28)
    assert QuarterBoundary(2, 29).anchor(2024) == date(2024, 2, 29)

    config = {2: _range(2, 29, 5, 31)}
    assert quarter_of(date(2023, 2, 28), config) == 2
    assert quarter_of(date(2024, 2, 28), config) == 1
    assert quarter_of(date(2024, 2, 29), config) == 2


def test_lowest_quarter_wins_on_overlap() -> None:
    config = {2: _range(1, 1, 6, 30), 1: _range(3, 1, 12, 31)}
    assert quarter_of(date(2024, 3, 15), config) == 1
    assert quarter_of(date(2024, 2, 15), config) == 2


def test_quarter_of_is_total_for_partial_and_malformed_configs() -> None:
    configs = [
        None,
        {},
        {3: _range(7, 1, 9, 30)},
        {5: _range(1, 1, 12, 31), "x": None},
        {1: "junk", 2: None},
        {1: _range(13, 1, 3, 31)},
        {2: _range(4, 0, 6, 30)},
        {3: QuarterRange(QuarterBoundary("Jul", 1), QuarterBoundary(9, 30))},
        fiscal_quarters(4),
    ]
    for config in configs:
        d = date(2024, 1, 1)
        while d.year == 2024:
            assert quarter_of(d, config) in (1, 2, 3, 4)
            d += timedelta(days=1)


def test_unplaceable_boundaries_never_match() -> None:
    assert quarter_of(date(2024, 2, 1), {1: _range(13, 1, 3, 31)}) == 1
    assert quarter_of(date(2024, 5, 1), {4: _range(4, 0, 6, 30)}) == 2
    # A broken quarter does not hide a valid one
    config = {1: _range(13, 1, 3, 31), 3: _range(1, 1, 3, 31)}
    assert quarter_of(date(2024, 2, 1), config) == 3


def test_parse_canonical_entries() -> None:
    raw = {
        "1": {"start_month": 1, "start_day": 1, "end_month": 3, "end_day": 31},
        "4": {"start_month": 10, "end_month": 12},
    }
    config = parse_quarter_config(raw)
    assert config == {1: _range(1, 1, 3, 31), 4: _range(10, 1, 12, 31)}


def test_parse_legacy_month_pairs_and_iso_strings() -> None:
    raw = {
        1: {"startMonth": 1, "endMonth": 2, "color": "bg-quarter-q1"},
        2: {"start": "2024-03-01", "end": "2024-06-15"},
    }
    config = parse_quarter_config(raw)
    assert config[1] == _range(1, 1, 2, 29)
    assert config[2] == _range(3, 1, 6, 15)
    assert quarter_of(date(2023, 2, 28), config) == 1


def test_parse_skips_malformed_entries(caplog) -> None:
    raw = {
        "1": {"start_month": 13, "start_day": 1, "end_month": 3, "end_day": 31},
        "2": {"start_month": 4, "start_day": 31, "end_month": 6, "end_day": 30},
        "3": "July to September",
        "5": {"start_month": 1, "start_day": 1, "end_month": 2, "end_day": 1},
        "q4": {"start_month": 10, "start_day": 1, "end_month": 12, "end_day": 31},
        "4": {"start": "not-a-date", "end": "2024-12-31"},
    }
    with caplog.at_level(logging.WARNING, logger="quarters"):
        config = parse_quarter_config(raw)
    assert config == {}
    assert len(caplog.records) == 6


def test_parse_none_and_non_mapping() -> None:
    assert parse_quarter_config(None) is None
    assert parse_quarter_config(["Q1"]) == {}


def test_config_dict_round_trip() -> None:
    config = fiscal_quarters(10)
    raw = quarter_config_to_dict(config)
    assert raw["1"] == {"start_month": 10, "start_day": 1, "end_month": 12, "end_day": 31}
    assert parse_quarter_config(raw) == config
    assert quarter_config_to_dict(None) is None


def test_quarter_name() -> None:
    assert quarter_name(3) == "Q3"

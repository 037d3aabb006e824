"""Tests for the swath matcher (per-cell, aggregate and today modes)."""

from __future__ import annotations

from typing import Any

import pytest

from landsat_revisit.calendar.parser import parse_cycle_calendar
from landsat_revisit.core.exceptions import NoMatchError
from landsat_revisit.matching.matcher import match_aggregate, match_cells, match_today
from landsat_revisit.models.swath import CycleFact, SwathCell


@pytest.fixture()
def facts(raw_calendar: dict[str, Any]) -> list[CycleFact]:
    return parse_cycle_calendar(raw_calendar)


class TestMatchCells:
    def test_one_result_per_cell_in_input_order(self, facts: list[CycleFact]) -> None:
        cells = [SwathCell(44, 35), SwathCell(43, 34), SwathCell(44, 34)]
        results = match_cells(cells, facts)
        assert [r.cell for r in results] == cells

    def test_dates_grouped_by_satellite_first_seen(self, facts: list[CycleFact]) -> None:
        (result,) = match_cells([SwathCell(44, 34)], facts)
        assert result.landsat_dates == {8: ["1/1/2024", "1/17/2024"], 9: ["1/9/2024"]}

    def test_unmatched_cell_has_empty_mapping(self, facts: list[CycleFact]) -> None:
        (result,) = match_cells([SwathCell(200, 1)], facts)
        assert result.landsat_dates == {}
        assert result.coordinates is None

    def test_duplicate_date_suppressed(self) -> None:
        facts = [
            CycleFact(8, "1/1/2024", frozenset({44})),
            CycleFact(8, "1/1/2024", frozenset({44, 45})),
            CycleFact(8, "1/17/2024", frozenset({44})),
        ]
        (result,) = match_cells([SwathCell(44, 34)], facts)
        assert result.landsat_dates == {8: ["1/1/2024", "1/17/2024"]}

    def test_same_date_on_two_satellites_kept_for_each(self) -> None:
        facts = [
            CycleFact(8, "1/1/2024", frozenset({44})),
            CycleFact(9, "1/1/2024", frozenset({44})),
        ]
        (result,) = match_cells([SwathCell(44, 34)], facts)
        assert result.landsat_dates == {8: ["1/1/2024"], 9: ["1/1/2024"]}

    def test_duplicate_cells_each_reported(self, facts: list[CycleFact]) -> None:
        results = match_cells([SwathCell(44, 34), SwathCell(44, 34)], facts)
        assert len(results) == 2
        assert results[0].landsat_dates == results[1].landsat_dates

    def test_facts_iterable_consumed_once(self, facts: list[CycleFact]) -> None:
        results = match_cells([SwathCell(44, 34), SwathCell(43, 34)], iter(facts))
        assert results[1].landsat_dates == {7: ["1/2/2024"], 8: ["1/10/2024"]}

    def test_idempotent(self, facts: list[CycleFact]) -> None:
        cells = [SwathCell(44, 34), SwathCell(43, 34)]
        first = match_cells(cells, facts)
        second = match_cells(cells, facts)
        assert [r.landsat_dates for r in first] == [r.landsat_dates for r in second]


class TestMatchAggregate:
    def test_union_across_cells(self, facts: list[CycleFact]) -> None:
        grouped = match_aggregate([SwathCell(44, 34), SwathCell(43, 34)], facts)
        assert grouped == {
            7: ["1/2/2024"],
            8: ["1/1/2024", "1/10/2024", "1/17/2024"],
            9: ["1/9/2024"],
        }

    def test_two_cells_on_same_path_do_not_duplicate(self, facts: list[CycleFact]) -> None:
        grouped = match_aggregate([SwathCell(44, 34), SwathCell(44, 35)], facts)
        assert grouped[8] == ["1/1/2024", "1/17/2024"]

    def test_no_intersection(self, facts: list[CycleFact]) -> None:
        assert match_aggregate([SwathCell(200, 1)], facts) == {}


class TestMatchToday:
    def test_two_satellites(self, facts: list[CycleFact]) -> None:
        grouped = match_today(facts, "1/10/2024")
        assert grouped == {8: [11, 27, 43], 9: [3, 19]}

    def test_single_satellite(self, facts: list[CycleFact]) -> None:
        assert match_today(facts, "1/9/2024") == {9: [44, 60, 76]}

    def test_exact_string_equality(self, facts: list[CycleFact]) -> None:
        with pytest.raises(NoMatchError):
            match_today(facts, "01/10/2024")

    def test_no_match_raises(self, facts: list[CycleFact]) -> None:
        with pytest.raises(NoMatchError, match="12/25/2030") as exc_info:
            match_today(facts, "12/25/2030")
        assert exc_info.value.category == "not_found"

    def test_duplicate_entries_for_satellite_unioned(self) -> None:
        facts = [
            CycleFact(8, "2/2/2024", frozenset({5, 1})),
            CycleFact(8, "2/2/2024", frozenset({1, 9})),
        ]
        assert match_today(facts, "2/2/2024") == {8: [1, 5, 9]}

"""Tenure calculator tests — calendar elapsed time and absence deduction."""

from __future__ import annotations

from datetime import date

import pytest

from leave_engine.absence.schemas import AbsenceInterval
from leave_engine.common.exceptions import DateParseError
from leave_engine.tenure.calculator import (
    absence_impact,
    effective_start_date,
    effective_tenure,
    elapsed,
    format_duration,
)
from leave_engine.tenure.schemas import TenureResult


def _absence(start: str, end: str) -> AbsenceInterval:
    return AbsenceInterval(start=start, end=end)


# ═════════════════════════════════════════════════════════════════════
# elapsed — calendar subtraction
# ═════════════════════════════════════════════════════════════════════


class TestElapsed:

    def test_simple(self):
        assert elapsed(date(2020, 1, 15), date(2024, 6, 20)).as_tuple() == (4, 5, 5)

    def test_day_borrow_uses_real_month_length(self):
        # Jan 31 + 1 month lands on Feb 29 in 2024
        assert elapsed(date(2024, 1, 31), date(2024, 3, 1)).as_tuple() == (0, 1, 1)

    def test_month_borrow(self):
        assert elapsed(date(2020, 11, 20), date(2024, 2, 10)).as_tuple() == (3, 2, 21)

    def test_leap_day_hire_reaches_year_on_feb_28(self):
        assert elapsed(date(2020, 2, 29), date(2021, 2, 28)).as_tuple() == (1, 0, 0)

    def test_end_before_start_is_zero(self):
        assert elapsed(date(2024, 6, 1), date(2024, 5, 1)).is_zero

    def test_same_day_is_zero(self):
        assert elapsed(date(2024, 6, 1), date(2024, 6, 1)).is_zero


# ═════════════════════════════════════════════════════════════════════
# effective_tenure
# ═════════════════════════════════════════════════════════════════════


class TestEffectiveTenure:

    HIRE = date(2020, 1, 1)

    @pytest.mark.parametrize(
        "hire, as_of",
        [
            (date(2020, 1, 1), date(2022, 2, 1)),
            (date(2019, 8, 31), date(2024, 2, 29)),
            (date(2023, 12, 31), date(2024, 1, 1)),
        ],
    )
    def test_no_absences_matches_elapsed(self, hire, as_of):
        assert effective_tenure(hire, [], as_of) == elapsed(hire, as_of)

    def test_short_absences_do_not_change_tenure(self):
        absences = [
            _absence("2020-06-01", "2020-06-30"),
            _absence("2021-03-01", "2021-03-10"),
        ]
        as_of = date(2022, 2, 1)
        assert effective_tenure(self.HIRE, absences, as_of) == elapsed(self.HIRE, as_of)

    def test_extended_absence_pushes_tenure_back(self):
        absences = [_absence("2021-01-01", "2021-01-31")]
        assert effective_tenure(self.HIRE, absences, date(2022, 2, 1)).as_tuple() == (2, 0, 0)
        assert effective_tenure(self.HIRE, absences, date(2022, 1, 1)).as_tuple() == (1, 11, 0)

    def test_deduction_larger_than_service_clamps_to_zero(self):
        absences = [_absence("2023-12-01", "2024-03-31")]
        result = effective_tenure(date(2024, 1, 1), absences, date(2024, 3, 31))
        assert result == TenureResult(years=0, months=0, days=0)

    def test_missing_hire_date_is_zero(self):
        assert effective_tenure(None, [_absence("2021-01-01", "2021-03-31")], date(2024, 1, 1)).is_zero

    def test_idempotent(self):
        absences = [_absence("2021-01-01", "2021-02-28")]
        first = effective_tenure(self.HIRE, absences, date(2024, 5, 17))
        second = effective_tenure(self.HIRE, absences, date(2024, 5, 17))
        assert first == second

    def test_absence_list_not_mutated(self):
        absences = [_absence("2022-01-01", "2022-03-31"), _absence("2021-01-01", "2021-02-28")]
        snapshot = list(absences)
        effective_tenure(self.HIRE, absences, date(2024, 5, 17))
        assert absences == snapshot

    def test_effective_start_date(self):
        absences = [_absence("2021-01-01", "2021-01-31")]
        assert effective_start_date(self.HIRE, absences, date(2022, 1, 1)) == date(2020, 2, 1)
        assert effective_start_date(None, absences, date(2022, 1, 1)) is None


# ═════════════════════════════════════════════════════════════════════
# absence_impact / format_duration
# ═════════════════════════════════════════════════════════════════════


class TestAbsenceImpact:

    def test_impact_of_single_absence(self):
        impact = absence_impact(
            date(2020, 1, 1), [_absence("2021-01-01", "2021-01-31")], date(2022, 1, 1),
        )
        assert impact.total_absence_days == 31
        assert impact.anniversary_delay_days == 31
        assert impact.tenure_reduction == "1 month, 1 day"

    def test_no_impact(self):
        impact = absence_impact(date(2020, 1, 1), [], date(2022, 1, 1))
        assert impact.total_absence_days == 0
        assert impact.tenure_reduction == "0 days"

    @pytest.mark.parametrize(
        "days, expected",
        [
            (0, "0 days"),
            (2, "2 days"),
            (60, "2 months"),
            (400, "1 year, 1 month, 5 days"),
            (730, "2 years"),
        ],
    )
    def test_format_duration(self, days, expected):
        assert format_duration(days) == expected


# ═════════════════════════════════════════════════════════════════════
# Date inputs
# ═════════════════════════════════════════════════════════════════════


class TestTenureDateInputs:

    def test_iso_strings_accepted(self):
        absences = [_absence("2021-01-01", "2021-01-31")]
        assert effective_tenure("2020-01-01", absences, "2022-02-01").as_tuple() == (2, 0, 0)
        assert elapsed("2020-01-15", "2024-06-20").as_tuple() == (4, 5, 5)
        assert effective_start_date("2020-01-01", absences, "2022-01-01") == date(2020, 2, 1)

    def test_blank_hire_date_is_new_hire(self):
        assert effective_tenure("", [], "2024-01-01").is_zero

    @pytest.mark.parametrize(
        "hire, as_of",
        [
            ("2020-13-01", date(2024, 1, 1)),
            (date(2020, 1, 1), "2024-02-30"),
            ("2020-01-01 garbage", date(2024, 1, 1)),
            (None, "not-a-date"),
        ],
    )
    def test_effective_tenure_rejects_malformed_dates(self, hire, as_of):
        with pytest.raises(DateParseError):
            effective_tenure(hire, [], as_of)

    def test_other_entry_points_reject_malformed_dates(self):
        with pytest.raises(DateParseError):
            effective_start_date("2020-13-01", [], date(2024, 1, 1))
        with pytest.raises(DateParseError):
            absence_impact(date(2020, 1, 1), [], "2024/01/01")
        with pytest.raises(DateParseError):
            elapsed("2020-01-01", 20240101)

"""Tests for booking policy rules."""

import pytest

from islandbook.domain.models import StayRange
from islandbook.domain.policy import BookingPolicy, PolicyViolation, validate_stay

from .helpers import TODAY, day

POLICY = BookingPolicy(min_days_ahead=1, max_consecutive_days=3, max_days_ahead=30)


def _reason(stay: StayRange, policy: BookingPolicy = POLICY) -> str:
    with pytest.raises(PolicyViolation) as exc_info:
        validate_stay(stay, TODAY, policy)
    return exc_info.value.reason


class TestAdvanceNotice:
    def test_start_today_rejected(self):
        assert _reason(StayRange(day(0), day(1))) == (
            "Start date has to be at least 1 day(s) ahead of arrival"
        )

    def test_start_tomorrow_accepted(self):
        validate_stay(StayRange(day(1), day(2)), TODAY, POLICY)

    def test_start_in_past_rejected_even_without_notice(self):
        policy = BookingPolicy(min_days_ahead=0, max_consecutive_days=3, max_days_ahead=30)
        assert _reason(StayRange(day(-1), day(1)), policy) == (
            "Start date has to be at least 0 day(s) ahead of arrival"
        )

    def test_zero_notice_allows_today(self):
        policy = BookingPolicy(min_days_ahead=0, max_consecutive_days=3, max_days_ahead=30)
        validate_stay(StayRange(day(0), day(1)), TODAY, policy)


class TestStayLength:
    def test_too_long(self):
        assert _reason(StayRange(day(1), day(4))) == "You can't book more than 3 day(s) at a time"

    def test_at_limit(self):
        # day(1)..day(3) spans 3 days counted inclusively
        validate_stay(StayRange(day(1), day(3)), TODAY, POLICY)

    def test_end_not_after_start(self):
        assert _reason(StayRange(day(2), day(2))) == "End date has to be after start date"
        assert _reason(StayRange(day(3), day(2))) == "End date has to be after start date"

    def test_empty_stay_today_reports_range_before_advance_notice(self):
        assert _reason(StayRange(TODAY, TODAY)) == "End date has to be after start date"


class TestHorizon:
    def test_too_far(self):
        assert _reason(StayRange(day(40), day(42))) == (
            "Start date has to be no more than 30 day(s) ahead of arrival"
        )

    def test_at_horizon(self):
        validate_stay(StayRange(day(29), day(30)), TODAY, POLICY)

    def test_just_past_horizon(self):
        assert "no more than 30" in _reason(StayRange(day(30), day(31)))


class TestRuleOrder:
    def test_advance_notice_wins_over_length(self):
        assert "at least" in _reason(StayRange(day(0), day(10)))

    def test_length_wins_over_horizon(self):
        assert "more than 3 day(s) at a time" in _reason(StayRange(day(40), day(50)))


class TestBookingPolicy:
    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="max_days_ahead"):
            BookingPolicy(min_days_ahead=1, max_consecutive_days=3, max_days_ahead=-1)

    def test_immutable(self):
        with pytest.raises(Exception):
            POLICY.min_days_ahead = 5

"""Tests for the repeating rule and RRULE/EXDATE encoding."""

from datetime import datetime, timezone

import pytest

from icalbuilder.ics.exceptions import ICalValidationError
from icalbuilder.ics.formatting import TimeMode
from icalbuilder.ics.models import Frequency
from icalbuilder.ics.recurrence import (
    RepeatingRule,
    encode_exdate,
    encode_rrule,
    validate_repeating,
)


class TestValidateRepeating:
    """Test rule validation and normalization."""

    def test_validate_repeating_when_none_then_none(self) -> None:
        assert validate_repeating(None) is None

    def test_validate_repeating_when_lower_case_freq_then_upper(self) -> None:
        rule = validate_repeating({"freq": "monthly"})
        assert rule.freq is Frequency.MONTHLY
        assert rule.freq.value == "MONTHLY"

    def test_validate_repeating_when_rule_instance_then_same(self) -> None:
        rule = RepeatingRule(freq="DAILY")
        assert validate_repeating(rule) is rule

    def test_validate_repeating_when_freq_missing_then_error(self) -> None:
        with pytest.raises(ICalValidationError, match=r"`repeating.freq` is a mandatory item!") as exc_info:
            validate_repeating({})
        assert exc_info.value.field == "repeating.freq"

    def test_validate_repeating_when_freq_unknown_then_lists_allowed(self) -> None:
        with pytest.raises(ICalValidationError) as exc_info:
            validate_repeating({"freq": "hello"})
        assert exc_info.value.message.startswith("`repeating.freq` must be one of the following:")
        assert "SECONDLY" in exc_info.value.message
        assert "YEARLY" in exc_info.value.message

    def test_validate_repeating_when_not_mapping_then_error(self) -> None:
        with pytest.raises(ICalValidationError, match="`repeating` must be an object"):
            validate_repeating("DAILY")

    @pytest.mark.parametrize("count", ["abc", float("nan"), float("inf"), -1])
    def test_validate_repeating_when_count_invalid_then_error(self, count) -> None:
        with pytest.raises(ICalValidationError, match="`repeating.count`"):
            validate_repeating({"freq": "DAILY", "count": count})

    def test_validate_repeating_when_count_zero_then_kept(self) -> None:
        assert validate_repeating({"freq": "DAILY", "count": 0}).count == 0

    @pytest.mark.parametrize("interval", ["abc", float("nan"), float("inf")])
    def test_validate_repeating_when_interval_invalid_then_error(self, interval) -> None:
        with pytest.raises(ICalValidationError, match="`repeating.interval`"):
            validate_repeating({"freq": "DAILY", "interval": interval})

    @pytest.mark.parametrize("until", ["hallo", 1234])
    def test_validate_repeating_when_until_invalid_then_error(self, until) -> None:
        with pytest.raises(ICalValidationError, match="`repeating.until`"):
            validate_repeating({"freq": "DAILY", "until": until})

    def test_validate_repeating_when_parts_explicitly_none_then_unset(self) -> None:
        rule = validate_repeating(
            {
                "freq": "weekly",
                "count": None,
                "interval": None,
                "until": None,
                "by_day": None,
                "byMonth": None,
                "by_month_day": None,
                "exclude": None,
            }
        )
        assert rule.to_json() == {"freq": "WEEKLY"}
        assert encode_rrule(rule, TimeMode.utc()) == "RRULE:FREQ=WEEKLY"

    def test_validate_repeating_when_until_string_then_datetime(self) -> None:
        rule = validate_repeating({"freq": "DAILY", "until": "2014-01-01T00:00:00Z"})
        assert rule.until == datetime(2014, 1, 1, tzinfo=timezone.utc)

    def test_validate_repeating_when_by_day_aliases_then_normalized(self) -> None:
        rule = validate_repeating({"freq": "WEEKLY", "byDay": ["SU", "we", "Th"]})
        assert rule.by_day == ["SU", "WE", "TH"]

    def test_validate_repeating_when_by_day_single_value_then_list(self) -> None:
        assert validate_repeating({"freq": "WEEKLY", "by_day": "mo"}).by_day == ["MO"]

    def test_validate_repeating_when_by_day_invalid_then_names_value(self) -> None:
        with pytest.raises(ICalValidationError) as exc_info:
            validate_repeating({"freq": "WEEKLY", "by_day": ["SU", "bar", "FOO"]})
        assert exc_info.value.message == "`repeating.by_day` contains invalid value `BAR`"

    def test_validate_repeating_when_by_month_invalid_then_names_value(self) -> None:
        with pytest.raises(ICalValidationError, match="`repeating.by_month` contains invalid value `13`"):
            validate_repeating({"freq": "YEARLY", "byMonth": [1, 13]})

    def test_validate_repeating_when_by_month_day_invalid_then_names_value(self) -> None:
        with pytest.raises(
            ICalValidationError, match="`repeating.by_month_day` contains invalid value `32`"
        ):
            validate_repeating({"freq": "MONTHLY", "byMonthDay": [1, 32, 0]})

    def test_validate_repeating_when_exclude_invalid_then_first_error(self) -> None:
        with pytest.raises(ICalValidationError, match="`repeating.exclude` has to be a valid date, got 'FOO'"):
            validate_repeating({"freq": "DAILY", "exclude": ["FOO", "BAR"]})

    def test_validate_repeating_when_exclude_wrong_type_then_error(self) -> None:
        with pytest.raises(ICalValidationError, match="`repeating.exclude`"):
            validate_repeating({"freq": "DAILY", "exclude": 42})

    def test_validate_repeating_when_exclude_single_then_list(self) -> None:
        rule = validate_repeating({"freq": "DAILY", "exclude": "2013-10-06T23:15:00Z"})
        assert rule.exclude == [datetime(2013, 10, 6, 23, 15, tzinfo=timezone.utc)]


class TestRepeatingRuleJson:
    """Test rule snapshots."""

    def test_to_json_when_minimal_then_only_freq(self) -> None:
        assert RepeatingRule(freq="daily").to_json() == {"freq": "DAILY"}

    def test_to_json_when_full_then_iso_dates(self) -> None:
        rule = validate_repeating(
            {
                "freq": "weekly",
                "count": 3,
                "interval": 2,
                "until": "2014-01-01T00:00:00Z",
                "byDay": ["mo"],
                "byMonth": 1,
                "byMonthDay": [1, 15],
                "exclude": ["2013-10-06T23:15:00Z"],
            }
        )
        assert rule.to_json() == {
            "freq": "WEEKLY",
            "count": 3,
            "interval": 2,
            "until": "2014-01-01T00:00:00+00:00",
            "by_day": ["MO"],
            "by_month": [1],
            "by_month_day": [1, 15],
            "exclude": ["2013-10-06T23:15:00+00:00"],
        }
        assert validate_repeating(rule.to_json()) == rule

    def test_to_json_when_unknown_keys_then_kept(self) -> None:
        rule = validate_repeating({"freq": "weekly", "wkst": "SU", "byDay": ["mo"]})
        assert rule.to_json() == {"freq": "WEEKLY", "by_day": ["MO"], "wkst": "SU"}
        assert validate_repeating(rule.to_json()) == rule


class TestEncodeRrule:
    """Test RRULE content lines."""

    def test_encode_rrule_when_all_parts_then_fixed_order(self) -> None:
        rule = validate_repeating(
            {
                "freq": "daily",
                "interval": 1,
                "count": 2,
                "byMonthDay": [1, 15],
                "byMonth": [1, 4],
                "byDay": ["mo", "we", "fr"],
            }
        )
        assert encode_rrule(rule, TimeMode.utc()) == (
            "RRULE:FREQ=DAILY;COUNT=2;INTERVAL=1;BYDAY=MO,WE,FR;BYMONTH=1,4;BYMONTHDAY=1,15"
        )

    def test_encode_rrule_when_until_then_utc(self) -> None:
        rule = validate_repeating({"freq": "WEEKLY", "interval": 3, "until": "2014-01-01T00:00:00Z"})
        assert encode_rrule(rule, TimeMode.zoned("Europe/Berlin")) == (
            "RRULE:FREQ=WEEKLY;UNTIL=20140101T000000Z;INTERVAL=3"
        )

    def test_encode_rrule_when_all_day_then_until_date(self) -> None:
        rule = validate_repeating({"freq": "DAILY", "until": "2014-01-01T00:00:00Z"})
        assert encode_rrule(rule, TimeMode.utc(), all_day=True) == "RRULE:FREQ=DAILY;UNTIL=20140101"

    def test_encode_rrule_when_floating_then_until_without_marker(self) -> None:
        rule = validate_repeating({"freq": "DAILY", "until": "2014-01-01T00:00:00Z"})
        assert encode_rrule(rule, TimeMode.floating()) == "RRULE:FREQ=DAILY;UNTIL=20140101T000000"


class TestEncodeExdate:
    """Test EXDATE content lines."""

    def test_encode_exdate_when_no_exclusions_then_none(self) -> None:
        assert encode_exdate(RepeatingRule(freq="DAILY"), TimeMode.utc()) is None

    def test_encode_exdate_when_utc_then_z_tokens(self) -> None:
        rule = validate_repeating(
            {"freq": "DAILY", "exclude": ["2013-10-06T23:15:00Z", "2013-10-07T23:15:00Z"]}
        )
        assert encode_exdate(rule, TimeMode.utc()) == "EXDATE:20131006T231500Z,20131007T231500Z"

    def test_encode_exdate_when_zoned_then_tzid(self) -> None:
        rule = validate_repeating({"freq": "DAILY", "exclude": "2013-10-06T23:15:00Z"})
        assert encode_exdate(rule, TimeMode.zoned("Europe/Berlin")) == (
            "EXDATE;TZID=Europe/Berlin:20131007T011500"
        )

    def test_encode_exdate_when_all_day_then_dates(self) -> None:
        rule = validate_repeating({"freq": "DAILY", "exclude": "2013-10-06T23:15:00Z"})
        assert encode_exdate(rule, TimeMode.utc(), all_day=True) == "EXDATE;VALUE=DATE:20131006"

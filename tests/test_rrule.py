import logging
import pytest
from datetime import datetime, timedelta, timezone
from pical.exceptions import RRuleError
from pical.rrule import Frequency, RecurrenceRule, WeekdaySelector, parse_rrule

AEST = timezone(timedelta(hours=10))


class TestWeekdaySelector:
    @pytest.mark.parametrize(
        "value,weekday,ordinal",
        [
            ("MO", 0, 0),
            ("SA", 5, 0),
            ("2TU", 1, 2),
            ("+1WE", 2, 1),
            ("-1FR", 4, -1),
            ("su", 6, 0),
        ],
    )
    def test_parse(self, value, weekday, ordinal):
        assert WeekdaySelector.parse(value) == WeekdaySelector(weekday, ordinal)

    @pytest.mark.parametrize("value", ["", "XX", "10MO", "MO,WE", "1", "-MO"])
    def test_parse_invalid(self, value):
        with pytest.raises(RRuleError):
            WeekdaySelector.parse(value)


class TestRecurrenceRuleParse:
    def test_daily_defaults(self):
        rule = RecurrenceRule.parse("FREQ=DAILY", AEST)

        assert rule == RecurrenceRule(Frequency.DAILY)
        assert rule.interval == 1
        assert rule.until is None
        assert rule.count is None

    def test_weekly_by_day_until(self):
        rule = RecurrenceRule.parse("FREQ=WEEKLY;BYDAY=SA;UNTIL=20240119T135959Z", AEST)

        assert rule.frequency is Frequency.WEEKLY
        assert rule.by_day == WeekdaySelector(5, 0)
        assert rule.until == datetime(2024, 1, 19, 23, 59, 59, tzinfo=AEST)
        assert rule.until.utcoffset() == timedelta(hours=10)

    def test_until_bare_date(self):
        rule = RecurrenceRule.parse("FREQ=DAILY;UNTIL=20240201", AEST)

        assert rule.until == datetime(2024, 2, 1, tzinfo=AEST)

    def test_order_independent(self):
        a = RecurrenceRule.parse("FREQ=MONTHLY;BYMONTHDAY=31;COUNT=4", AEST)
        b = RecurrenceRule.parse("COUNT=4;BYMONTHDAY=31;FREQ=MONTHLY", AEST)

        assert a == b
        assert a.by_month_day == 31
        assert a.count == 4

    def test_interval_and_count(self):
        rule = RecurrenceRule.parse("FREQ=YEARLY;INTERVAL=2;COUNT=0", AEST)

        assert rule.interval == 2
        assert rule.count == 0

    def test_unknown_keys_ignored(self):
        rule = RecurrenceRule.parse("FREQ=WEEKLY;WKST=MO;X-FOO=bar;", AEST)

        assert rule == RecurrenceRule(Frequency.WEEKLY)

    def test_lowercase_keys(self):
        rule = RecurrenceRule.parse("freq=daily;interval=3", AEST)

        assert rule.frequency is Frequency.DAILY
        assert rule.interval == 3

    def test_missing_freq(self):
        with pytest.raises(RRuleError, match="FREQ"):
            RecurrenceRule.parse("INTERVAL=2;COUNT=3", AEST)

    def test_unsupported_freq(self):
        with pytest.raises(RRuleError, match="FREQ"):
            RecurrenceRule.parse("FREQ=HOURLY", AEST)

    @pytest.mark.parametrize(
        "text",
        [
            "FREQ=DAILY;INTERVAL=0",
            "FREQ=DAILY;INTERVAL=two",
            "FREQ=DAILY;COUNT=-1",
            "FREQ=DAILY;COUNT=",
            "FREQ=DAILY;UNTIL=2024-01-01",
            "FREQ=DAILY;UNTIL=20240101T000000",
            "FREQ=MONTHLY;BYMONTHDAY=0",
            "FREQ=MONTHLY;BYMONTHDAY=32",
            "FREQ=MONTHLY;BYMONTHDAY=x",
            "FREQ=WEEKLY;BYDAY=MO,WE",
            "FREQ=DAILY;COUNT",
        ],
    )
    def test_malformed_values_reject_rule(self, text):
        with pytest.raises(RRuleError):
            RecurrenceRule.parse(text, AEST)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            RecurrenceRule.parse("FREQ=DAILY;COUNT=x", AEST)


class TestParseRRule:
    def test_returns_rule(self):
        assert parse_rrule("FREQ=DAILY", AEST) == RecurrenceRule(Frequency.DAILY)

    def test_failure_logged_not_raised(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = parse_rrule("FREQ=DAILY;INTERVAL=-3", AEST)

        assert result is None
        assert "INTERVAL" in caplog.text

    def test_missing_freq_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_rrule("COUNT=3", AEST) is None

        assert "FREQ" in caplog.text

"""Tests for salary and holiday configuration types."""

from datetime import date, time
from decimal import Decimal

import pytest

from earnings_engine.calculators import (
    ConfigurationError,
    HolidayConfig,
    OvertimePolicy,
    SalaryConfig,
    TimeWindow,
)


class TestSalaryConfig:
    """Test salary configuration defaults and invariants."""

    def test_defaults(self):
        """Default config is Mon-Fri 09:00-18:00 with an hour for lunch."""
        config = SalaryConfig()

        assert config.monthly_salary == Decimal("3000")
        assert config.work_start == time(9, 0)
        assert config.work_end == time(18, 0)
        assert config.lunch == TimeWindow(time(12, 0), time(13, 0))
        assert config.work_days == frozenset({1, 2, 3, 4, 5})
        assert config.overtime is None
        config.validate()

    def test_daily_work_seconds_with_lunch(self, salary_config):
        assert salary_config.daily_work_seconds == 28800

    def test_daily_work_seconds_without_lunch(self, salary_config):
        salary_config.lunch = None
        assert salary_config.daily_work_seconds == 32400

    def test_work_days_become_frozenset(self):
        config = SalaryConfig(work_days=[1, 3, 5])
        assert config.work_days == frozenset({1, 3, 5})

    def test_negative_salary_rejected(self):
        config = SalaryConfig(monthly_salary=Decimal("-1"))

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert exc_info.value.field == "monthly_salary"

    def test_zero_salary_allowed(self):
        SalaryConfig(monthly_salary=Decimal("0")).validate()

    def test_start_must_precede_end(self):
        config = SalaryConfig(work_start=time(18, 0), work_end=time(9, 0), lunch=None)

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert exc_info.value.field == "work_start"

    def test_equal_start_and_end_rejected(self):
        config = SalaryConfig(work_start=time(9, 0), work_end=time(9, 0), lunch=None)

        with pytest.raises(ConfigurationError):
            config.validate()

    def test_empty_work_days_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SalaryConfig(work_days=frozenset()).validate()

        assert exc_info.value.field == "work_days"

    def test_out_of_range_weekday_rejected(self):
        with pytest.raises(ConfigurationError, match="0..6"):
            SalaryConfig(work_days={1, 7}).validate()

    def test_lunch_outside_work_window_rejected(self):
        config = SalaryConfig(lunch=TimeWindow(time(8, 0), time(9, 30)))

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert exc_info.value.field == "lunch"

    def test_inverted_lunch_rejected(self):
        config = SalaryConfig(lunch=TimeWindow(time(13, 0), time(12, 0)))

        with pytest.raises(ConfigurationError):
            config.validate()

    def test_overtime_must_start_after_work_end(self):
        config = SalaryConfig(
            overtime=OvertimePolicy(TimeWindow(time(17, 0), time(20, 0)), Decimal("1.5"))
        )

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert exc_info.value.field == "overtime"

    def test_overtime_rate_below_one_rejected(self):
        config = SalaryConfig(
            overtime=OvertimePolicy(TimeWindow(time(18, 0), time(20, 0)), Decimal("0.9"))
        )

        with pytest.raises(ConfigurationError, match="at least 1.0"):
            config.validate()

    def test_holiday_overtime_rate_below_one_rejected(self):
        config = SalaryConfig(holiday_overtime_rate=Decimal("0.5"))

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert exc_info.value.field == "holiday_overtime_rate"

    @pytest.mark.parametrize(
        "changes, field",
        [
            ({"monthly_salary": Decimal("12345.123456")}, "monthly_salary"),
            ({"monthly_salary": Decimal("10000000000")}, "monthly_salary"),
            ({"monthly_salary": Decimal("NaN")}, "monthly_salary"),
            ({"holiday_overtime_rate": Decimal("1.123456")}, "holiday_overtime_rate"),
            ({"holiday_overtime_rate": Decimal("100")}, "holiday_overtime_rate"),
        ],
    )
    def test_amounts_beyond_stored_precision_rejected(self, changes, field):
        with pytest.raises(ConfigurationError) as exc_info:
            SalaryConfig(**changes).validate()

        assert exc_info.value.field == field

    def test_overtime_rate_beyond_stored_precision_rejected(self):
        config = SalaryConfig(
            overtime=OvertimePolicy(TimeWindow(time(18, 0), time(20, 0)), Decimal("1.00005"))
        )

        with pytest.raises(ConfigurationError, match="decimal places"):
            config.validate()

    def test_trailing_zeros_do_not_count_as_places(self):
        SalaryConfig(
            monthly_salary=Decimal("9999999999.9999"),
            holiday_overtime_rate=Decimal("1.500000"),
        ).validate()


class TestSalaryConfigUpdate:
    """Test in-place updates."""

    def test_update_applies_changes(self, salary_config):
        before = salary_config.updated_at

        salary_config.update(monthly_salary=Decimal("25000"), work_days=[1, 2, 3])

        assert salary_config.monthly_salary == Decimal("25000")
        assert salary_config.work_days == frozenset({1, 2, 3})
        assert salary_config.updated_at >= before

    def test_invalid_update_leaves_config_untouched(self, salary_config):
        """A rejected update must not partially apply."""
        with pytest.raises(ConfigurationError):
            salary_config.update(monthly_salary=Decimal("1"), work_end=time(8, 0))

        assert salary_config.monthly_salary == Decimal("21000")
        assert salary_config.work_end == time(18, 0)

    def test_update_can_disable_lunch(self, salary_config):
        salary_config.update(lunch=None)

        assert salary_config.lunch is None
        assert salary_config.daily_work_seconds == 32400


class TestTimeWindow:
    def test_seconds_ignore_sub_minute_fields(self):
        window = TimeWindow(time(12, 0, 59), time(13, 0))
        assert window.seconds == 3600


class TestHolidayConfig:
    """Test holiday records."""

    def test_with_changes_keeps_date(self):
        holiday = HolidayConfig(date=date(2024, 10, 1), name="National Day", holiday_id=7)

        changed = holiday.with_changes(name="Golden Week", is_workday=True)

        assert changed.date == date(2024, 10, 1)
        assert changed.name == "Golden Week"
        assert changed.is_workday is True
        assert changed.holiday_id == 7
        assert holiday.name == "National Day"

    def test_with_changes_none_means_unchanged(self):
        holiday = HolidayConfig(date=date(2024, 10, 1), name="National Day")

        assert holiday.with_changes() == holiday

    def test_identifier_not_part_of_equality(self):
        created = date(2024, 1, 1)
        a = HolidayConfig(date=created, name="New Year", holiday_id=1)
        b = HolidayConfig(date=created, name="New Year", holiday_id=2, created_at=a.created_at)

        assert a == b

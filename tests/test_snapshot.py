"""Tests for the snapshot document format."""

import json
from datetime import date, time
from decimal import Decimal

import pytest
from pydantic import ValidationError

from earnings_engine.calculators import (
    ConfigurationError,
    HolidayConfig,
    OvertimePolicy,
    SalaryConfig,
    TimeWindow,
)
from earnings_engine.services.snapshot import decode_snapshot, encode_snapshot


class TestSnapshotCodec:
    """Test encoding and decoding snapshot documents."""

    def test_decode_restores_domain_objects(self, overtime_config, march_holidays):
        configs, holidays = decode_snapshot(encode_snapshot([overtime_config], march_holidays))

        assert configs[0].overtime == OvertimePolicy(
            window=TimeWindow(time(18, 0), time(21, 0)), rate=Decimal("1.5")
        )
        assert configs[0].created_at == overtime_config.created_at
        assert holidays == march_holidays

    def test_amounts_encoded_as_strings(self, salary_config):
        document = json.loads(encode_snapshot([salary_config], []))

        assert document["salaryConfigs"][0]["monthlySalary"] == "21000"
        assert document["salaryConfigs"][0]["overtimeRate"] is None

    def test_decode_accepts_hand_written_document(self):
        document = {
            "salaryConfigs": [
                {
                    "monthlySalary": "8000.50",
                    "workStartTime": "10:00",
                    "workEndTime": "19:00",
                    "workDays": [1, 2, 3, 4, 5, 6],
                    "createdAt": "2024-01-02T08:00:00",
                    "updatedAt": "2024-01-02T08:00:00",
                }
            ],
            "holidayConfigs": [
                {"date": "2024-01-01", "name": "New Year's Day", "createdAt": "2024-01-01T00:00:00"}
            ],
        }

        configs, holidays = decode_snapshot(json.dumps(document))

        assert configs[0].monthly_salary == Decimal("8000.50")
        assert configs[0].lunch is None
        assert configs[0].daily_work_seconds == 32400
        assert holidays == [
            HolidayConfig(
                date=date(2024, 1, 1),
                name="New Year's Day",
                created_at=holidays[0].created_at,
            )
        ]

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            decode_snapshot('{"salaryConfigs": [], "holidayConfigs": [], "version": 2}')

    def test_half_set_overtime_rejected(self, salary_config):
        document = json.loads(encode_snapshot([salary_config], []))
        document["salaryConfigs"][0]["overtimeRate"] = "1.5"

        with pytest.raises(ConfigurationError) as exc_info:
            decode_snapshot(json.dumps(document))

        assert exc_info.value.field == "overtime"

    def test_invalid_invariants_rejected(self):
        snapshot = encode_snapshot([SalaryConfig(monthly_salary=Decimal("100"))], [])
        document = json.loads(snapshot)
        document["salaryConfigs"][0]["workDays"] = [9]

        with pytest.raises(ConfigurationError):
            decode_snapshot(json.dumps(document))

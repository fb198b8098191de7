#!/usr/bin/env python
"""Live earnings ticker - library-first demonstration.

Builds an explicit configuration and holiday calendar, then re-invokes the
engine on a fixed interval. The engine keeps no timers of its own; the
caller owns the refresh loop.

Usage:
    python main.py --salary 12000
    python main.py --once --at 2024-03-13T15:30
"""

from __future__ import annotations

import argparse
import time
from datetime import date, datetime, time as clock
from decimal import Decimal

from earnings_engine.calculators import (
    EarningsEngine,
    HolidayConfig,
    OvertimePolicy,
    SalaryConfig,
    TimeWindow,
    quantize_money,
)
from earnings_engine.calculators.types import WorkStatus

STATUS_LABELS = {
    WorkStatus.BEFORE_WORK: "not started",
    WorkStatus.WORKING: "working",
    WorkStatus.LUNCH_BREAK: "lunch break",
    WorkStatus.AFTER_WORK: "off work",
}


def build_engine(salary: Decimal, year: int) -> EarningsEngine:
    config = SalaryConfig(
        monthly_salary=salary,
        lunch=TimeWindow(start=clock(12), end=clock(13)),
        overtime=OvertimePolicy(
            window=TimeWindow(start=clock(18, 30), end=clock(21, 30)),
            rate=Decimal("1.5"),
        ),
        holiday_overtime_rate=Decimal("3"),
    )
    holidays = [
        HolidayConfig(date=date(year, 1, 1), name="New Year's Day"),
        HolidayConfig(date=date(year, 5, 1), name="Labour Day"),
        HolidayConfig(date=date(year, 10, 1), name="National Day"),
    ]
    return EarningsEngine(config, holidays)


def render(engine: EarningsEngine, instant: datetime) -> str:
    snap = engine.snapshot(instant)
    lines = [
        f"{instant:%Y-%m-%d %H:%M:%S}  [{STATUS_LABELS[snap.status]}]",
        f"  today   {quantize_money(snap.today):>12}",
        f"  month   {quantize_money(snap.month):>12}",
        f"  year    {quantize_money(snap.year):>12}",
    ]
    if snap.overtime:
        lines.append(f"  overtime {quantize_money(snap.overtime):>11}")
    if snap.next_holiday is not None:
        lines.append(
            f"  next holiday: {snap.next_holiday.name} in {snap.days_until_next_holiday} days"
        )
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description="Live earnings ticker")
    parser.add_argument("--salary", default="12000", help="Monthly salary")
    parser.add_argument("--interval", type=float, default=1.0, help="Refresh seconds")
    parser.add_argument("--once", action="store_true", help="Print once and exit")
    parser.add_argument("--at", type=datetime.fromisoformat, help="Evaluate at this instant")
    args = parser.parse_args()

    instant = args.at or datetime.now()
    year = instant.year
    engine = build_engine(Decimal(args.salary), year)

    if args.once or args.at:
        print(render(engine, instant))
        return

    try:
        while True:
            now = datetime.now()
            if now.year != year:
                year = now.year
                engine = build_engine(Decimal(args.salary), year)
            print(render(engine, now), end="\n\n", flush=True)
            time.sleep(args.interval)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()

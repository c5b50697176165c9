"""
달력용 예약 가능 날짜 계산

시즌/간격 규칙은 적용하지 않는다.
확정 예약 또는 차단 기간에 포함된 날만 빼고 돌려준다.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Iterator

from dateutil.relativedelta import relativedelta

from .errors import InvalidCalendarMonthError
from .types import StayPeriod


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """월의 첫날과 마지막 날 (양끝 포함)"""
    if not isinstance(year, int) or not isinstance(month, int):
        raise InvalidCalendarMonthError(year, month)
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise InvalidCalendarMonthError(year, month)
    first = date(year, month, 1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last


def shift_months(day: date, months: int) -> date:
    """
    months 개월 이동. date.min / date.max 를 넘어가면 그 값에서 멈춘다

    1년 1월이나 9999년 12월 근처의 조회 범위도 예외 없이 만들 수 있다.
    """
    index = day.year * 12 + (day.month - 1) + months
    if index < 12:
        return date.min
    if index >= 10000 * 12:
        return date.max
    return day + relativedelta(months=months)


def padded_window(start: date, end: date, months: int = 1) -> tuple[date, date]:
    """앞뒤로 months 개월 넓힌 조회 범위"""
    return shift_months(start, -months), shift_months(end, months)


def padded_month_window(year: int, month: int, months: int = 1) -> tuple[date, date]:
    """이전 달 1일 ~ 다음 달 말일 (months=1 기준)"""
    first, _ = month_bounds(year, month)
    window_start = shift_months(first, -months)
    # day=31 은 그 달의 말일로 맞춰진다
    window_end = shift_months(first, months) + relativedelta(day=31)
    return window_start, window_end


def iter_days(start: date, end: date) -> Iterator[date]:
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def available_dates(
    year: int,
    month: int,
    reservations: Iterable[StayPeriod],
    blocked_periods: Iterable[StayPeriod],
) -> list[date]:
    """해당 월에서 확정 예약/차단 기간에 걸리지 않은 날짜 목록"""
    first, last = month_bounds(year, month)
    taken = [*reservations, *blocked_periods]
    return [
        day for day in iter_days(first, last)
        if not any(period.covers(day) for period in taken)
    ]

"""
Booking 도메인 예외

정책상 거절(겹침, 최소 숙박, 간격)은 예외가 아니라 결과 값으로 돌려준다.
여기 있는 것은 입력 오류와 조회 실패뿐이다.
"""


class BookingInputError(ValueError):
    """규칙 평가 전에 걸러지는 입력 오류"""


class InvalidDateRangeError(BookingInputError):
    def __init__(self, start, end):
        super().__init__(f"End date must be after start date ({start} -> {end})")
        self.start = start
        self.end = end


class InvalidCalendarMonthError(BookingInputError):
    def __init__(self, year, month):
        super().__init__(f"Invalid year or month: year={year}, month={month}")
        self.year = year
        self.month = month


class ReservationNotFoundError(LookupError):
    pass


class SeasonRuleNotFoundError(LookupError):
    pass


class ReservationConflictError(Exception):
    """승인하려는 예약의 날짜가 이미 다른 확정 예약과 겹침"""

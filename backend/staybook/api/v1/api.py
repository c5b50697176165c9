# backend/staybook/api/v1/api.py
"""
Staybook API Router
- 예약 요청/승인
- 달력, 가용성 체크
- 시즌 규칙, 차단 기간 관리
"""

from fastapi import APIRouter

from staybook.api.v1 import (
    availability,
    blocked_dates,
    booking_rules,
    calendar,
    reservations,
)

api_router = APIRouter()

# ✅ 예약 요청/승인 워크플로우
api_router.include_router(reservations.router)

# ✅ 달력 (빈 날짜)
api_router.include_router(calendar.router)

# ✅ 가용성/규칙 사전 체크
api_router.include_router(availability.router)

# ✅ 시즌 규칙 관리
api_router.include_router(booking_rules.router)

# ✅ 차단 기간 관리
api_router.include_router(blocked_dates.router)

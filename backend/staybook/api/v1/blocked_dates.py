# backend/staybook/api/v1/blocked_dates.py
"""
Blocked Dates 관리 API

관리자가 직접 막는 기간 (청소, 개인 사용 등)
"""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from staybook.db.session import get_db
from staybook.domain.booking.errors import InvalidDateRangeError
from staybook.domain.booking.types import ensure_date_range
from staybook.repositories.blocked_date_repository import BlockedDateRepository

router = APIRouter(prefix="/blocked-dates", tags=["blocked-dates"])


class BlockedDateCreate(BaseModel):
    start_date: date
    end_date: date
    reason: Optional[str] = None


class BlockedDateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    start_date: date
    end_date: date
    reason: Optional[str] = None
    created_at: datetime


@router.get("", response_model=List[BlockedDateRead])
def list_blocked_dates(db: Session = Depends(get_db)) -> List[BlockedDateRead]:
    repo = BlockedDateRepository(db)
    return [BlockedDateRead.model_validate(b) for b in repo.list_all()]


@router.post("", response_model=BlockedDateRead, status_code=status.HTTP_201_CREATED)
def create_blocked_date(
    data: BlockedDateCreate,
    db: Session = Depends(get_db),
) -> BlockedDateRead:
    try:
        start, end = ensure_date_range(data.start_date, data.end_date)
    except InvalidDateRangeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    repo = BlockedDateRepository(db)
    blocked = repo.create(start, end, data.reason)

    db.commit()
    db.refresh(blocked)
    return BlockedDateRead.model_validate(blocked)


@router.delete("/{blocked_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blocked_date(blocked_id: str, db: Session = Depends(get_db)) -> None:
    repo = BlockedDateRepository(db)
    blocked = repo.get(blocked_id)
    if blocked is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blocked date not found",
        )
    repo.delete(blocked)
    db.commit()

# tenthouse/services/inquiries.py
"""Contact-form event inquiries: store them and let the owner know."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tenthouse.core.errors import NotFoundError, StorageError, ValidationError
from tenthouse.db.mixins import utcnow
from tenthouse.db.models.inquiry import Inquiry
from tenthouse.services.testimonials import UNKNOWN_IP, SubmissionResult, clamp_page

logger = logging.getLogger(__name__)

RECEIVED_MESSAGE = "Thank you! Your inquiry has been received."

_REQUIRED = (("name", "Name"), ("phone", "Phone"), ("email", "Email"), ("message", "Message"))


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _parse_event_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


class InquiryService:
    def __init__(
        self,
        db: Session,
        *,
        notifier: Optional[Callable[[Inquiry], None]] = None,
        now: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.notifier = notifier
        self._now = now

    def submit(
        self,
        name: Optional[str],
        phone: Optional[str],
        email: Optional[str],
        message: Optional[str],
        event_type: Optional[str] = None,
        event_date=None,
        ip: Optional[str] = None,
    ) -> SubmissionResult:
        fields = {
            "name": _text(name),
            "phone": _text(phone),
            "email": _text(email),
            "message": _text(message),
        }
        errors = [f"{label} is required" for key, label in _REQUIRED if not fields[key]]
        parsed_date = _parse_event_date(event_date)
        if event_date not in (None, "") and parsed_date is None:
            errors.append("Event date must be a valid date (YYYY-MM-DD)")
        if errors:
            raise ValidationError(errors, message="All fields are required")

        inquiry = Inquiry(
            **fields,
            event_type=_text(event_type) or None,
            event_date=parsed_date,
            ip_address=ip or UNKNOWN_IP,
            created_at=self._now(),
        )
        try:
            self.db.add(inquiry)
            self.db.commit()
            self.db.refresh(inquiry)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error saving inquiry")
            raise StorageError("Error saving inquiry. Please try again.") from exc

        if self.notifier is not None:
            try:
                self.notifier(inquiry)
            except Exception:
                logger.warning("Admin notification failed for inquiry %s", inquiry.id, exc_info=True)

        return SubmissionResult(id=inquiry.id, message=RECEIVED_MESSAGE)

    def list_recent(self, limit=20, offset=0, unread_only: bool = False) -> List[Inquiry]:
        limit, offset = clamp_page(limit, offset, 20, 50)
        stmt = select(Inquiry)
        if unread_only:
            stmt = stmt.where(Inquiry.viewed_at.is_(None))
        stmt = stmt.order_by(Inquiry.created_at.desc(), Inquiry.id.desc()).offset(offset).limit(limit)
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as exc:
            logger.exception("Error fetching inquiries")
            raise StorageError("Failed to load inquiries") from exc

    def mark_viewed(self, inquiry_id: int) -> Inquiry:
        inquiry = self.db.get(Inquiry, inquiry_id)
        if inquiry is None:
            raise NotFoundError("Inquiry")
        if inquiry.viewed_at is None:
            inquiry.viewed_at = self._now()
            try:
                self.db.commit()
                self.db.refresh(inquiry)
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.exception("Error marking inquiry %s viewed", inquiry_id)
                raise StorageError() from exc
        return inquiry

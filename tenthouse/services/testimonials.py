# tenthouse/services/testimonials.py
"""
Public side of testimonials: the submit (write) path and the approved-list /
statistics (read) path. Admin moderation lives in tenthouse.services.admin.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tenthouse.core.errors import RateLimitError, StorageError, ValidationError
from tenthouse.db.mixins import utcnow
from tenthouse.db.models.testimonial import STATUS_APPROVED, STATUS_PENDING, Testimonial
from tenthouse.services.rate_limit import RateLimiter
from tenthouse.services.validation import ValidationRules, coerce_rating, validate

logger = logging.getLogger(__name__)

UNKNOWN_IP = "0.0.0.0"
PENDING_MESSAGE = "Thank you for your review! It will be published after approval."
RATE_LIMITED_MESSAGE = (
    "You have submitted too many reviews recently. Please wait before submitting another one."
)
RECENT_DAYS = 30
# largest offset every supported driver binds as an INTEGER
MAX_OFFSET = 2**31 - 1


@dataclass
class SubmissionResult:
    id: int
    message: str


@dataclass
class TestimonialStats:
    total_count: int = 0
    average_rating: float = 0.0
    approved_count: int = 0
    recent_count: int = 0


def clamp_page(limit: Any, offset: Any, default_limit: int = 10, max_limit: int = 50) -> tuple[int, int]:
    """
    Normalise caller-supplied paging values: limit into [1, max_limit],
    offset into [0, MAX_OFFSET]. Anything non-numeric falls back to the
    defaults.
    """
    try:
        limit = int(limit)
    except (TypeError, ValueError, OverflowError):
        limit = default_limit
    try:
        offset = int(offset)
    except (TypeError, ValueError, OverflowError):
        offset = 0
    return min(max_limit, max(1, limit)), min(MAX_OFFSET, max(0, offset))


class TestimonialService:
    def __init__(
        self,
        db: Session,
        *,
        rules: ValidationRules = ValidationRules(),
        rate_limiter: Optional[RateLimiter] = None,
        notifier: Optional[Callable[[Testimonial], None]] = None,
        now: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.rules = rules
        self.rate_limiter = rate_limiter
        self.notifier = notifier
        self._now = now

    def submit(
        self,
        name: Any,
        rating: Any,
        message: Any,
        email: Optional[str] = None,
        ip: Optional[str] = None,
    ) -> SubmissionResult:
        result = validate(name, rating, message, self.rules)
        if not result.valid:
            raise ValidationError(result.errors)

        ip = ip or UNKNOWN_IP
        if self.rate_limiter is not None and self.rate_limiter.is_rate_limited(ip):
            logger.info("Rate limited testimonial submission from %s", ip)
            raise RateLimitError(RATE_LIMITED_MESSAGE, retry_after=self.rate_limiter.retry_after)

        now = self._now()
        email = (str(email).strip() if email is not None else "") or None
        testimonial = Testimonial(
            name=str(name).strip(),
            email=email,
            rating=coerce_rating(rating),
            message=str(message).strip(),
            status=STATUS_PENDING,
            ip_address=ip,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(testimonial)
            self.db.commit()
            self.db.refresh(testimonial)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error saving testimonial from %s", ip)
            raise StorageError("Failed to save testimonial. Please try again.") from exc

        logger.info("Testimonial %s saved (pending) from %s", testimonial.id, ip)
        self._notify(testimonial)
        return SubmissionResult(id=testimonial.id, message=PENDING_MESSAGE)

    def _notify(self, testimonial: Testimonial) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier(testimonial)
        except Exception:
            # the review is already stored; a lost email must not fail the request
            logger.warning("Admin notification failed for testimonial %s", testimonial.id, exc_info=True)


class TestimonialQueryService:
    def __init__(
        self,
        db: Session,
        *,
        default_limit: int = 10,
        max_limit: int = 50,
        now: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.default_limit = default_limit
        self.max_limit = max_limit
        self._now = now

    def list_approved(self, limit: Any = None, offset: Any = 0) -> List[Testimonial]:
        """
        Approved testimonials, newest first. Never more than max_limit rows.
        """
        limit, offset = clamp_page(
            self.default_limit if limit is None else limit, offset, self.default_limit, self.max_limit
        )
        stmt = (
            select(Testimonial)
            .where(Testimonial.status == STATUS_APPROVED)
            .order_by(Testimonial.created_at.desc(), Testimonial.id.desc())
            .offset(offset)
            .limit(limit)
        )
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as exc:
            logger.exception("Error fetching testimonials")
            raise StorageError("Failed to load testimonials") from exc

    def statistics(self) -> TestimonialStats:
        since = self._now() - timedelta(days=RECENT_DAYS)
        stmt = select(
            func.count(Testimonial.id),
            func.avg(Testimonial.rating),
            func.sum(case((Testimonial.status == STATUS_APPROVED, 1), else_=0)),
            func.sum(case((Testimonial.created_at > since, 1), else_=0)),
        )
        try:
            total, average, approved, recent = self.db.execute(stmt).one()
        except SQLAlchemyError:
            logger.exception("Error fetching testimonial statistics")
            return TestimonialStats()

        return TestimonialStats(
            total_count=int(total or 0),
            average_rating=round(float(average or 0), 2),
            approved_count=int(approved or 0),
            recent_count=int(recent or 0),
        )

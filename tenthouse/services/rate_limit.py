# tenthouse/services/rate_limit.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tenthouse.core.errors import StorageError
from tenthouse.db.mixins import utcnow
from tenthouse.db.models.testimonial import Testimonial

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Per-IP submission throttle backed by the testimonials table itself.

    The count and the later insert are two separate statements, so two
    requests racing from the same IP can both get through. That is accepted
    for a review form.
    """

    def __init__(
        self,
        db: Session,
        *,
        max_submissions: int = 5,
        window: timedelta = timedelta(hours=1),
        enabled: bool = True,
        now: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.max_submissions = max_submissions
        self.window = window
        self.enabled = enabled
        self._now = now

    @classmethod
    def from_settings(cls, db: Session, settings, now: Callable[[], datetime] = utcnow) -> "RateLimiter":
        return cls(
            db,
            max_submissions=settings.MAX_SUBMISSIONS_PER_HOUR,
            window=timedelta(minutes=settings.RATE_LIMIT_WINDOW_MINUTES),
            enabled=settings.ENABLE_RATE_LIMITING,
            now=now,
        )

    @property
    def retry_after(self) -> int:
        return int(self.window.total_seconds())

    def recent_submissions(self, ip: str) -> int:
        since = self._now() - self.window
        stmt = (
            select(func.count(Testimonial.id))
            .where(Testimonial.ip_address == ip)
            .where(Testimonial.created_at > since)
        )
        try:
            return int(self.db.scalar(stmt) or 0)
        except SQLAlchemyError as exc:
            logger.exception("Rate limit lookup failed for %s", ip)
            raise StorageError() from exc

    def is_rate_limited(self, ip: str) -> bool:
        if not self.enabled:
            return False
        return self.recent_submissions(ip) >= self.max_submissions

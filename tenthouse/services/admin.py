# tenthouse/services/admin.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tenthouse.core.errors import InvalidStatusError, NotFoundError, StorageError, ValidationError
from tenthouse.db.mixins import utcnow
from tenthouse.db.models.testimonial import STATUS_APPROVED, STATUSES, Testimonial
from tenthouse.services.testimonials import clamp_page

logger = logging.getLogger(__name__)


def _check_status(value: Any) -> str:
    status = (value or "").strip().lower() if isinstance(value, str) else value
    if status not in STATUSES:
        raise InvalidStatusError(str(value))
    return status


class TestimonialAdminService:
    """
    Moderation operations. Shares the storage with the public services but
    not their code paths; nothing here is reachable without an admin token.
    """

    def __init__(
        self,
        db: Session,
        *,
        default_limit: int = 20,
        max_limit: int = 50,
        now: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.default_limit = default_limit
        self.max_limit = max_limit
        self._now = now

    def list_all(self, limit: Any = None, offset: Any = 0, status: Optional[str] = None) -> List[Testimonial]:
        limit, offset = clamp_page(
            self.default_limit if limit is None else limit, offset, self.default_limit, self.max_limit
        )
        stmt = select(Testimonial)
        if status:
            stmt = stmt.where(Testimonial.status == _check_status(status))
        stmt = stmt.order_by(Testimonial.created_at.desc(), Testimonial.id.desc()).offset(offset).limit(limit)
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as exc:
            logger.exception("Error fetching all testimonials")
            raise StorageError("Failed to load testimonials") from exc

    def get(self, testimonial_id: int) -> Testimonial:
        try:
            testimonial = self.db.get(Testimonial, testimonial_id)
        except SQLAlchemyError as exc:
            logger.exception("Error loading testimonial %s", testimonial_id)
            raise StorageError() from exc
        if testimonial is None:
            raise NotFoundError()
        return testimonial

    def set_status(self, testimonial_id: int, new_status: str) -> Testimonial:
        status = _check_status(new_status)
        testimonial = self.get(testimonial_id)
        testimonial.status = status
        testimonial.updated_at = self._now()
        try:
            self.db.commit()
            self.db.refresh(testimonial)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error updating testimonial %s status", testimonial_id)
            raise StorageError("Failed to update status") from exc
        logger.info("Testimonial %s set to %s", testimonial_id, status)
        return testimonial

    def bulk_approve(self, ids: Iterable[int]) -> int:
        """
        Approve every existing testimonial in ids with one UPDATE.
        Returns how many rows changed; unknown ids are skipped silently.
        """
        ids = sorted({int(i) for i in (ids or [])})
        if not ids:
            raise ValidationError("No testimonials selected")

        stmt = (
            update(Testimonial)
            .where(Testimonial.id.in_(ids))
            .values(status=STATUS_APPROVED, updated_at=self._now())
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error bulk approving testimonials")
            raise StorageError("Failed to approve testimonials") from exc
        # rows already loaded in this session would otherwise keep their old status
        self.db.expire_all()
        logger.info("Bulk approved %s of %s testimonials", result.rowcount, len(ids))
        return result.rowcount

    def delete(self, testimonial_id: int) -> None:
        stmt = delete(Testimonial).where(Testimonial.id == testimonial_id)
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error deleting testimonial %s", testimonial_id)
            raise StorageError("Failed to delete testimonial") from exc
        if result.rowcount == 0:
            raise NotFoundError()
        logger.info("Testimonial %s deleted", testimonial_id)

from __future__ import annotations
from typing import Optional
from sqlalchemy import CheckConstraint, Integer, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from tenthouse.db.mixins import Base, CreatedUpdatedMixin

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)


class Testimonial(CreatedUpdatedMixin, Base):
    __tablename__ = "testimonials"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_testimonials_rating"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    # pending | approved | rejected, any transition allowed
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=STATUS_PENDING, server_default=STATUS_PENDING, index=True
    )
    ip_address: Mapped[Optional[str]] = mapped_column(String(45))

    def __repr__(self) -> str:
        return f"<Testimonial {self.id} {self.rating} stars {self.status}>"

"""
Tests for admin moderation: listing, status changes, bulk approve, delete
"""
from datetime import timedelta

import pytest

from tenthouse.core.errors import InvalidStatusError, NotFoundError, ValidationError
from tenthouse.db.models.testimonial import Testimonial
from tenthouse.services.admin import TestimonialAdminService


class TestListAll:

    def test_lists_every_status(self, db_session, make_testimonial, clock):
        rows = [
            make_testimonial(status=s, created_at=clock() - timedelta(minutes=i))
            for i, s in enumerate(["pending", "approved", "rejected"])
        ]

        listed = TestimonialAdminService(db_session).list_all()

        assert [r.id for r in listed] == [r.id for r in rows]

    def test_status_filter(self, db_session, make_testimonial):
        make_testimonial(status="approved")
        pending = make_testimonial(status="pending")

        listed = TestimonialAdminService(db_session).list_all(status="pending")

        assert [r.id for r in listed] == [pending.id]

    def test_unknown_status_filter(self, db_session):
        with pytest.raises(InvalidStatusError):
            TestimonialAdminService(db_session).list_all(status="spam")


class TestSetStatus:

    def test_any_transition_allowed(self, db_session, make_testimonial, clock):
        row = make_testimonial(status="pending")
        service = TestimonialAdminService(db_session, now=clock)

        for status in ("approved", "rejected", "pending", "rejected", "approved"):
            assert service.set_status(row.id, status).status == status

    def test_updated_at_refreshed(self, db_session, make_testimonial, clock):
        row = make_testimonial(created_at=clock())
        clock.advance(hours=3)

        updated = TestimonialAdminService(db_session, now=clock).set_status(row.id, "approved")

        assert updated.updated_at.replace(tzinfo=None) == clock().replace(tzinfo=None)
        assert updated.created_at.replace(tzinfo=None) == (clock() - timedelta(hours=3)).replace(tzinfo=None)

    def test_status_is_normalised(self, db_session, make_testimonial):
        row = make_testimonial()
        assert TestimonialAdminService(db_session).set_status(row.id, " Approved ").status == "approved"

    def test_invalid_status(self, db_session, make_testimonial):
        row = make_testimonial()
        with pytest.raises(InvalidStatusError) as exc_info:
            TestimonialAdminService(db_session).set_status(row.id, "published")
        assert exc_info.value.kind == "invalid_status"
        assert db_session.get(Testimonial, row.id).status == "pending"

    def test_missing_row(self, db_session):
        with pytest.raises(NotFoundError):
            TestimonialAdminService(db_session).set_status(999, "approved")


class TestBulkApprove:

    def test_counts_only_existing_rows(self, db_session, make_testimonial):
        first = make_testimonial()
        second = make_testimonial(status="rejected")
        untouched = make_testimonial()

        count = TestimonialAdminService(db_session).bulk_approve([first.id, second.id, 9999])

        assert count == 2
        assert db_session.get(Testimonial, first.id).status == "approved"
        assert db_session.get(Testimonial, second.id).status == "approved"
        assert db_session.get(Testimonial, untouched.id).status == "pending"

    def test_duplicate_ids_count_once(self, db_session, make_testimonial):
        row = make_testimonial()
        assert TestimonialAdminService(db_session).bulk_approve([row.id, row.id]) == 1

    @pytest.mark.parametrize("ids", [[], None, set()])
    def test_empty_selection(self, db_session, ids):
        with pytest.raises(ValidationError) as exc_info:
            TestimonialAdminService(db_session).bulk_approve(ids)
        assert exc_info.value.errors == ["No testimonials selected"]


class TestDelete:

    def test_delete(self, db_session, make_testimonial):
        row = make_testimonial()
        row_id = row.id
        TestimonialAdminService(db_session).delete(row_id)
        assert db_session.get(Testimonial, row_id) is None

    def test_delete_missing(self, db_session):
        with pytest.raises(NotFoundError):
            TestimonialAdminService(db_session).delete(12345)

    def test_get(self, db_session, make_testimonial):
        row = make_testimonial(name="Sunita Devi")
        assert TestimonialAdminService(db_session).get(row.id).name == "Sunita Devi"
        with pytest.raises(NotFoundError):
            TestimonialAdminService(db_session).get(row.id + 1)

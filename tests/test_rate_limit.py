"""
Unit Tests for the per-IP submission rate limiter
"""
from datetime import timedelta

from tenthouse.services.rate_limit import RateLimiter


class TestRateLimiter:

    def test_under_threshold(self, db_session, make_testimonial, clock):
        for _ in range(4):
            make_testimonial(ip_address="81.2.69.142", created_at=clock())
        limiter = RateLimiter(db_session, max_submissions=5, now=clock)

        assert limiter.recent_submissions("81.2.69.142") == 4
        assert limiter.is_rate_limited("81.2.69.142") is False

    def test_at_threshold(self, db_session, make_testimonial, clock):
        for _ in range(5):
            make_testimonial(ip_address="81.2.69.142", created_at=clock())
        limiter = RateLimiter(db_session, max_submissions=5, now=clock)

        assert limiter.is_rate_limited("81.2.69.142") is True
        # other visitors are unaffected
        assert limiter.is_rate_limited("8.8.4.4") is False

    def test_old_rows_fall_out_of_window(self, db_session, make_testimonial, clock):
        for _ in range(5):
            make_testimonial(ip_address="81.2.69.142", created_at=clock() - timedelta(minutes=61))
        make_testimonial(ip_address="81.2.69.142", created_at=clock() - timedelta(minutes=30))
        limiter = RateLimiter(db_session, max_submissions=5, now=clock)

        assert limiter.recent_submissions("81.2.69.142") == 1
        assert limiter.is_rate_limited("81.2.69.142") is False

    def test_disabled_never_limits(self, db_session, make_testimonial, clock):
        for _ in range(10):
            make_testimonial(ip_address="81.2.69.142", created_at=clock())
        limiter = RateLimiter(db_session, max_submissions=5, enabled=False, now=clock)

        assert limiter.is_rate_limited("81.2.69.142") is False

    def test_custom_window_and_threshold(self, db_session, make_testimonial, clock):
        make_testimonial(ip_address="81.2.69.142", created_at=clock() - timedelta(minutes=5))
        limiter = RateLimiter(db_session, max_submissions=1, window=timedelta(minutes=10), now=clock)
        assert limiter.is_rate_limited("81.2.69.142") is True
        assert limiter.retry_after == 600

        clock.advance(minutes=6)
        assert limiter.is_rate_limited("81.2.69.142") is False

    def test_from_settings(self, db_session):
        class FakeSettings:
            MAX_SUBMISSIONS_PER_HOUR = 3
            RATE_LIMIT_WINDOW_MINUTES = 15
            ENABLE_RATE_LIMITING = False

        limiter = RateLimiter.from_settings(db_session, FakeSettings)
        assert limiter.max_submissions == 3
        assert limiter.window == timedelta(minutes=15)
        assert limiter.enabled is False

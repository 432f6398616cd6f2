# tenthouse/services/notifications.py
"""
Admin notices for new submissions. These never raise: a submission that made
it into the database is a success whether or not the email goes out.
"""
from __future__ import annotations

import logging
from html import escape

from tenthouse.core.config import settings
from tenthouse.db.models.inquiry import Inquiry
from tenthouse.db.models.testimonial import Testimonial
from tenthouse.services.email_brevo import send_email_brevo

logger = logging.getLogger(__name__)


def _deliver(subject: str, html_content: str) -> bool:
    to_email = settings.ADMIN_NOTIFICATION_EMAIL
    if not to_email:
        return False
    if not settings.BREVO_API_KEY:
        # Don't break app if not configured
        logger.info("BREVO_API_KEY not configured; notification '%s' not sent", subject)
        return False
    try:
        send_email_brevo(to_email, subject, html_content)
    except Exception as e:
        logger.warning("Error sending notification '%s': %s", subject, e)
        return False
    return True


def notify_new_testimonial(testimonial: Testimonial) -> bool:
    subject = f"New review awaiting approval - {settings.SITE_NAME}"
    html_content = (
        "<p>A new review was submitted and is waiting for approval.</p>"
        f"<p><b>Name:</b> {escape(testimonial.name)}<br>"
        f"<b>Email:</b> {escape(testimonial.email or '-')}<br>"
        f"<b>Rating:</b> {testimonial.rating}/5</p>"
        f"<p>{escape(testimonial.message)}</p>"
    )
    return _deliver(subject, html_content)


def notify_new_inquiry(inquiry: Inquiry) -> bool:
    subject = f"New Inquiry from {settings.SITE_NAME} Website"
    html_content = (
        "<p>You have received a new inquiry:</p>"
        f"<p><b>Name:</b> {escape(inquiry.name)}<br>"
        f"<b>Phone:</b> {escape(inquiry.phone)}<br>"
        f"<b>Email:</b> {escape(inquiry.email)}<br>"
        f"<b>Event Type:</b> {escape(inquiry.event_type or '-')}<br>"
        f"<b>Date:</b> {inquiry.event_date.isoformat() if inquiry.event_date else '-'}</p>"
        f"<p>{escape(inquiry.message)}</p>"
    )
    return _deliver(subject, html_content)

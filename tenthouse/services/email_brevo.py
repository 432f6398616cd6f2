# tenthouse/services/email_brevo.py
import logging

import requests
from tenthouse.core.config import settings
from tenthouse.core.errors import NotificationError

logger = logging.getLogger(__name__)

BREVO_API = "https://api.brevo.com/v3/smtp/email"

def send_email_brevo(to_email: str, subject: str, html_content: str):
    key = settings.BREVO_API_KEY
    if not key:
        raise NotificationError("BREVO_API_KEY missing")

    payload = {
        "sender": {"email": settings.MAIL_FROM_EMAIL, "name": settings.MAIL_FROM_NAME},
        "to": [{"email": to_email}],
        "subject": subject,
        "htmlContent": html_content,
    }

    try:
        r = requests.post(
            BREVO_API,
            json=payload,
            headers={
                "api-key": key,
                "accept": "application/json",
                "content-type": "application/json",
            },
            timeout=10,
        )
    except requests.RequestException as e:
        raise NotificationError(f"Brevo request failed: {e}") from e

    if r.status_code >= 400:
        key_tail = key[-4:] if isinstance(key, str) else "????"
        raise NotificationError(f"Brevo error {r.status_code} key_endswith={key_tail} body={r.text}")

    logger.debug("Brevo accepted email to %s", to_email)
    return r.json()

# tenthouse/core/deps.py
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from tenthouse.core.config import settings
from tenthouse.core.errors import AuthenticationError
from tenthouse.core.security import decode_token
from tenthouse.db.session import get_db
from tenthouse.services.admin import TestimonialAdminService
from tenthouse.services.client_ip import get_client_ip
from tenthouse.services.inquiries import InquiryService
from tenthouse.services.notifications import notify_new_inquiry, notify_new_testimonial
from tenthouse.services.rate_limit import RateLimiter
from tenthouse.services.testimonials import TestimonialQueryService, TestimonialService
from tenthouse.services.validation import ValidationRules

DbSession = Annotated[Session, Depends(get_db)]

# tells Swagger which URL to use for the "Authorize" password flow
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_testimonial_service(db: DbSession) -> TestimonialService:
    limiter = RateLimiter.from_settings(db, settings)
    return TestimonialService(
        db,
        rules=ValidationRules.from_settings(settings),
        rate_limiter=limiter,
        notifier=notify_new_testimonial,
    )

def get_query_service(db: DbSession) -> TestimonialQueryService:
    return TestimonialQueryService(
        db,
        default_limit=settings.PAGE_DEFAULT_LIMIT,
        max_limit=settings.PAGE_MAX_LIMIT,
    )

def get_admin_service(db: DbSession) -> TestimonialAdminService:
    return TestimonialAdminService(db, max_limit=settings.PAGE_MAX_LIMIT)

def get_inquiry_service(db: DbSession) -> InquiryService:
    return InquiryService(db, notifier=notify_new_inquiry)

def require_admin(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """
    Dependency for every admin route:
    - reads Authorization: Bearer <access_token>
    - verifies signature, expiry and token type
    - returns the admin username
    """
    if not token:
        raise AuthenticationError("Not authenticated")
    payload = decode_token(token, token_type="access")
    return payload["sub"]

def client_ip(request: Request) -> str:
    return get_client_ip(request, trust_proxy_headers=settings.TRUST_PROXY_HEADERS)

async def read_payload(request: Request) -> dict:
    """
    Body of a public form post as a plain dict. The site posts both JSON
    (fetch) and form data (plain <form>), so accept either; anything that
    isn't an object decodes to {}.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    try:
        data = await request.json()
    except ValueError:
        # empty or malformed body
        return {}
    return data if isinstance(data, dict) else {}

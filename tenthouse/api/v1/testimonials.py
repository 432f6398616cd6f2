from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from starlette.concurrency import run_in_threadpool

from tenthouse.core.deps import client_ip, get_query_service, get_testimonial_service, read_payload
from tenthouse.schemas.testimonial import (
    SubmissionOut,
    TestimonialListOut,
    TestimonialOut,
    TestimonialStatsEnvelope,
    TestimonialStatsOut,
)
from tenthouse.services.testimonials import TestimonialQueryService, TestimonialService

router = APIRouter(prefix="/testimonials", tags=["testimonials"])

@router.get("", response_model=TestimonialListOut)
def list_testimonials(
    service: TestimonialQueryService = Depends(get_query_service),
    # strings on purpose: junk like ?limit=abc falls back to defaults instead of a 422
    limit: Optional[str] = Query(None, description="Page size, clamped to 1..50"),
    offset: Optional[str] = Query(None, description="Rows to skip, clamped to >= 0"),
):
    """
    Approved testimonials, newest first.
    """
    rows = service.list_approved(limit=limit, offset=offset or 0)
    return TestimonialListOut(data=[TestimonialOut.model_validate(r) for r in rows])

@router.post("", response_model=SubmissionOut, status_code=status.HTTP_201_CREATED)
async def submit_testimonial(
    request: Request,
    service: TestimonialService = Depends(get_testimonial_service),
    ip: str = Depends(client_ip),
):
    """
    Public review form. Accepts JSON or form-encoded {name, rating, message, email?}.
    - 400 with every failed rule on bad input
    - 429 when this IP submitted too often recently
    - the new review stays pending until an admin approves it
    """
    payload = await read_payload(request)
    # commit and the Brevo notice both block; keep them off the event loop
    result = await run_in_threadpool(
        service.submit,
        name=payload.get("name", ""),
        rating=payload.get("rating", ""),
        message=payload.get("message", ""),
        email=payload.get("email"),
        ip=ip,
    )
    return SubmissionOut(message=result.message, id=result.id)

@router.get("/stats", response_model=TestimonialStatsEnvelope)
def testimonial_stats(service: TestimonialQueryService = Depends(get_query_service)):
    stats = service.statistics()
    return TestimonialStatsEnvelope(data=TestimonialStatsOut(**asdict(stats)))

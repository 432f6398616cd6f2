from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from tenthouse.core.deps import get_admin_service, get_inquiry_service, require_admin
from tenthouse.schemas.inquiry import InquiryListOut, InquiryOut
from tenthouse.schemas.testimonial import (
    BulkApproveIn,
    BulkApproveOut,
    StatusUpdateIn,
    TestimonialAdminListOut,
    TestimonialAdminOut,
)
from tenthouse.services.admin import TestimonialAdminService
from tenthouse.services.inquiries import InquiryService

# every route below needs a valid admin bearer token
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

@router.get("/testimonials", response_model=TestimonialAdminListOut)
def admin_list_testimonials(
    service: TestimonialAdminService = Depends(get_admin_service),
    limit: int = Query(20),
    offset: int = Query(0),
    status_filter: Optional[str] = Query(None, alias="status", description="pending | approved | rejected"),
):
    rows = service.list_all(limit=limit, offset=offset, status=status_filter)
    return TestimonialAdminListOut(data=[TestimonialAdminOut.model_validate(r) for r in rows])

@router.get("/testimonials/{testimonial_id}", response_model=TestimonialAdminOut)
def admin_get_testimonial(testimonial_id: int, service: TestimonialAdminService = Depends(get_admin_service)):
    return service.get(testimonial_id)

@router.patch("/testimonials/{testimonial_id}/status", response_model=TestimonialAdminOut)
def admin_set_status(
    testimonial_id: int,
    payload: StatusUpdateIn,
    service: TestimonialAdminService = Depends(get_admin_service),
):
    return service.set_status(testimonial_id, payload.status)

@router.post("/testimonials/bulk-approve", response_model=BulkApproveOut)
def admin_bulk_approve(payload: BulkApproveIn, service: TestimonialAdminService = Depends(get_admin_service)):
    count = service.bulk_approve(payload.ids)
    return BulkApproveOut(count=count, message=f"Approved {count} testimonials")

@router.delete("/testimonials/{testimonial_id}", status_code=status.HTTP_204_NO_CONTENT)
def admin_delete_testimonial(testimonial_id: int, service: TestimonialAdminService = Depends(get_admin_service)):
    service.delete(testimonial_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/inquiries", response_model=InquiryListOut)
def admin_list_inquiries(
    service: InquiryService = Depends(get_inquiry_service),
    unread: bool = Query(False, description="Only inquiries nobody has opened yet"),
    limit: int = Query(20),
    offset: int = Query(0),
):
    rows = service.list_recent(limit=limit, offset=offset, unread_only=unread)
    return InquiryListOut(data=[InquiryOut.model_validate(r) for r in rows])

@router.post("/inquiries/{inquiry_id}/viewed", response_model=InquiryOut)
def admin_mark_inquiry_viewed(inquiry_id: int, service: InquiryService = Depends(get_inquiry_service)):
    return service.mark_viewed(inquiry_id)

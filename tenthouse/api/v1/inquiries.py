from fastapi import APIRouter, Depends, Request, status
from starlette.concurrency import run_in_threadpool

from tenthouse.core.deps import client_ip, get_inquiry_service, read_payload
from tenthouse.schemas.inquiry import InquirySubmissionOut
from tenthouse.services.inquiries import InquiryService

router = APIRouter(prefix="/inquiries", tags=["inquiries"])

@router.post("", response_model=InquirySubmissionOut, status_code=status.HTTP_201_CREATED)
async def submit_inquiry(
    request: Request,
    service: InquiryService = Depends(get_inquiry_service),
    ip: str = Depends(client_ip),
):
    """
    Contact form. The site sends eventType/date; snake_case keys work too.
    """
    payload = await read_payload(request)
    result = await run_in_threadpool(
        service.submit,
        name=payload.get("name"),
        phone=payload.get("phone"),
        email=payload.get("email"),
        message=payload.get("message"),
        event_type=payload.get("event_type", payload.get("eventType")),
        event_date=payload.get("event_date", payload.get("date")),
        ip=ip,
    )
    return InquirySubmissionOut(message=result.message, id=result.id)

from pydantic import BaseModel
from datetime import date, datetime
from typing import List

class InquirySubmissionOut(BaseModel):
    success: bool = True
    message: str
    id: int

class InquiryOut(BaseModel):
    id: int
    name: str
    phone: str
    email: str
    event_type: str | None
    event_date: date | None
    message: str
    ip_address: str | None
    created_at: datetime
    viewed_at: datetime | None

    class Config:
        from_attributes = True

class InquiryListOut(BaseModel):
    success: bool = True
    data: List[InquiryOut]

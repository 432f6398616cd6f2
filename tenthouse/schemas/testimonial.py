from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, Field

# What the public site gets back: no email, no IP, no moderation state.
class TestimonialOut(BaseModel):
    id: int
    name: str
    rating: int
    message: str
    created_at: datetime

    class Config:
        from_attributes = True

class TestimonialListOut(BaseModel):
    success: bool = True
    data: List[TestimonialOut]

class SubmissionOut(BaseModel):
    status: Literal["success"] = "success"
    message: str
    id: int

class TestimonialStatsOut(BaseModel):
    total_count: int = Field(0, alias="totalCount")
    average_rating: float = Field(0.0, alias="averageRating")
    approved_count: int = Field(0, alias="approvedCount")
    recent_count: int = Field(0, alias="recentCount")

    class Config:
        from_attributes = True
        populate_by_name = True

class TestimonialStatsEnvelope(BaseModel):
    success: bool = True
    data: TestimonialStatsOut

# ---- admin ----

class TestimonialAdminOut(BaseModel):
    id: int
    name: str
    email: str | None
    rating: int
    message: str
    status: str
    ip_address: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class TestimonialAdminListOut(BaseModel):
    success: bool = True
    data: List[TestimonialAdminOut]

class StatusUpdateIn(BaseModel):
    # checked by the service so an unknown value gets its own error kind
    status: str

class BulkApproveIn(BaseModel):
    ids: List[int]

class BulkApproveOut(BaseModel):
    success: bool = True
    count: int
    message: str

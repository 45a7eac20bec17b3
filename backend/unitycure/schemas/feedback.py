from pydantic import BaseModel, Field
from typing import Optional


class FeedbackDocument(BaseModel):
    service_id: str = Field(min_length=1)
    service_type: str = Field(min_length=1)
    user_id: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    review: Optional[str] = None

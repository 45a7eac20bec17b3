from pydantic import BaseModel, Field
from typing import Literal, Optional
from unitycure.schemas.common import GeoPoint

SosStatus = Literal["pending", "in_progress", "resolved"]


class SosReportDocument(BaseModel):
    location: GeoPoint
    symptoms: list[str] = []
    description: Optional[str] = None
    status: SosStatus = "pending"


class SosReportCreate(SosReportDocument):
    symptoms: list[str] = Field(min_length=1)

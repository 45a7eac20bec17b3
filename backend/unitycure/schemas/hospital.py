from pydantic import BaseModel, Field
from typing import Optional
from unitycure.schemas.common import GeoPoint


class Rating(BaseModel):
    average: float = Field(default=0.0, ge=0, le=5)
    count: int = Field(default=0, ge=0)


class HospitalDocument(BaseModel):
    name: str = Field(min_length=1)
    address: str
    location: GeoPoint
    contact: str
    services: list[str] = []
    specialty: Optional[str] = None
    emergency_services: bool = False
    rating: Rating = Rating()

from pydantic import BaseModel, Field
from typing import Optional
from unitycure.schemas.common import GeoPoint


class ProviderAdmin(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)


class ProviderDocument(BaseModel):
    provider_type: str
    name: str = Field(min_length=1)
    address: str
    location: GeoPoint
    contact: str
    services: list[str] = []
    specialty: Optional[str] = None
    admin: ProviderAdmin
    verified: bool = False

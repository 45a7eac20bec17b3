from pydantic import BaseModel, Field, field_validator
from typing import Literal


class GeoPoint(BaseModel):
    """GeoJSON point. Coordinates are always [longitude, latitude]."""
    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(min_length=2, max_length=2)

    @field_validator("coordinates")
    @classmethod
    def check_range(cls, value: list[float]) -> list[float]:
        lng, lat = value
        if not -180 <= lng <= 180 or not -90 <= lat <= 90:
            raise ValueError(f"coordinates out of range: {value}")
        return value

    @classmethod
    def from_lng_lat(cls, lng: float, lat: float) -> "GeoPoint":
        return cls(coordinates=[lng, lat])

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

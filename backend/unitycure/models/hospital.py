from sqlalchemy import Column, Integer, String, Text, Boolean, Float, DateTime, JSON
from sqlalchemy.sql import func
from unitycure.database import Base


class Hospital(Base):
    __tablename__ = "hospitals"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    address = Column(Text, nullable=False)
    location = Column(JSON, nullable=False)  # {"type": "Point", "coordinates": [lng, lat]}
    contact = Column(String(100), nullable=False)
    services = Column(JSON, default=list)
    specialty = Column(String(200))
    emergency_services = Column(Boolean, default=False)
    rating_average = Column(Float, default=0.0, nullable=False)
    rating_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def rating(self) -> dict:
        return {"average": self.rating_average, "count": self.rating_count}

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from unitycure.database import Base


class Provider(Base):
    __tablename__ = "providers"

    id = Column(Integer, primary_key=True, index=True)
    provider_type = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    address = Column(Text, nullable=False)
    location = Column(JSON, nullable=False)
    contact = Column(String(100), nullable=False)
    services = Column(JSON, default=list)
    specialty = Column(String(200))
    admin = Column(JSON, nullable=False)  # {"name": ..., "email": ...}
    verified = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

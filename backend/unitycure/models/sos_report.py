from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Enum
from sqlalchemy.sql import func
from unitycure.database import Base

SOS_STATUSES = ("pending", "in_progress", "resolved")


class SosReport(Base):
    __tablename__ = "sos_reports"

    id = Column(Integer, primary_key=True, index=True)
    location = Column(JSON, nullable=False)
    symptoms = Column(JSON, default=list)
    description = Column(Text)
    status = Column(
        Enum(*SOS_STATUSES, name="sos_status", native_enum=False, create_constraint=True, length=20),
        nullable=False,
        default="pending",
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

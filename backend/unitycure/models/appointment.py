from sqlalchemy import Column, Integer, String, Date, DateTime, JSON, Index
from sqlalchemy.sql import func
from unitycure.database import Base


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (Index("ix_appointments_date_doctor", "date", "doctor_name"),)

    id = Column(Integer, primary_key=True, index=True)
    doctor_name = Column(String(200), nullable=False)
    hospital = Column(String(255), nullable=False, index=True)
    type = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    time = Column(String(20), nullable=False)
    patient = Column(JSON, nullable=False)  # name, age?, contact, reason
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

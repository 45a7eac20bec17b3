from pydantic import BaseModel, Field
from datetime import date
from typing import Optional


class PatientInfo(BaseModel):
    name: str = Field(min_length=1)
    age: Optional[int] = Field(default=None, ge=0, le=150)
    contact: Optional[str] = None
    reason: Optional[str] = None


class AppointmentDocument(BaseModel):
    doctor_name: str
    hospital: str
    type: str
    date: date
    time: str
    patient: PatientInfo

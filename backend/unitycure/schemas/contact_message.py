from pydantic import BaseModel, field_validator
from typing import Literal, Optional

ContactStatus = Literal["new", "in_progress", "resolved"]


class ContactMessageDocument(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    newsletter: bool = False
    status: ContactStatus = "new"

    @field_validator("first_name", "last_name", "subject", "phone")
    @classmethod
    def strip(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

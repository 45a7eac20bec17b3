from pydantic import BaseModel, Field, field_validator
from typing import Literal

Role = Literal["Citizen", "Hospital Staff", "Doctor", "Dispatcher", "Platform Admin"]

DEFAULT_REDIRECT = "/user_dashboard.html"


class UserDocument(BaseModel):
    identifier: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: Role
    redirect: str = DEFAULT_REDIRECT

    @field_validator("identifier")
    @classmethod
    def strip_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("identifier must not be blank")
        return value


class UserCreate(UserDocument):
    password: str = Field(min_length=6)

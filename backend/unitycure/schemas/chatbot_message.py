from pydantic import BaseModel, Field
from typing import Optional


class ChatbotMessageDocument(BaseModel):
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    user_message: str = Field(min_length=1)
    bot_response: str = Field(min_length=1)

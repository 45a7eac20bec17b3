from typing import Optional
from unitycure.models.chatbot_message import ChatbotMessage
from unitycure.store.collections import Collections


class ChatService:
    """Persists chatbot exchanges; the completion call itself happens upstream."""

    def __init__(self, collections: Collections):
        self.messages = collections.chatbot_messages

    async def record_exchange(
        self,
        user_message: str,
        bot_response: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> ChatbotMessage:
        return await self.messages.insert({
            "user_id": user_id,
            "session_id": session_id,
            "user_message": user_message,
            "bot_response": bot_response,
        })

    async def history(self, user_id: str, limit: int = 50) -> list[ChatbotMessage]:
        return await self.messages.find_many(
            {"user_id": user_id}, sort=[("created_at", -1), ("id", -1)], limit=limit
        )

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from unitycure.models.feedback import Feedback
from unitycure.schemas.feedback import FeedbackDocument
from unitycure.schemas.hospital import Rating
from unitycure.store.collections import Collections

logger = logging.getLogger(__name__)


def round_rating(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class FeedbackService:
    def __init__(self, collections: Collections):
        self.feedback = collections.feedback
        self.hospitals = collections.hospitals

    async def submit(self, data: Union[FeedbackDocument, dict]) -> Feedback:
        feedback = await self.feedback.insert(data)
        if feedback.service_type == "hospital":
            await self.refresh_hospital_rating(feedback.service_id)
        return feedback

    async def refresh_hospital_rating(self, hospital_id: str) -> Optional[Rating]:
        """Recompute a hospital's rating from every hospital feedback row for it."""
        feedbacks = await self.feedback.find_many({"service_id": hospital_id, "service_type": "hospital"})
        if not feedbacks:
            return None
        try:
            row_id = int(hospital_id)
        except ValueError:
            logger.warning("Feedback references non-numeric hospital id %r", hospital_id)
            return None

        rating = Rating(
            average=round_rating(sum(f.rating for f in feedbacks) / len(feedbacks)),
            count=len(feedbacks),
        )
        if not await self.hospitals.update_rating(row_id, rating.average, rating.count):
            logger.warning("Feedback references unknown hospital %s", hospital_id)
            return None
        return rating

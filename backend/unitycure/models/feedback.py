from sqlalchemy import Column, Integer, String, Text, DateTime, Index, CheckConstraint
from sqlalchemy.sql import func
from unitycure.database import Base


class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        Index("ix_feedback_service", "service_id", "service_type"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating"),
    )

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(String(64), nullable=False)
    service_type = Column(String(50), nullable=False)
    user_id = Column(String(64), index=True)
    rating = Column(Integer, nullable=False, index=True)
    review = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

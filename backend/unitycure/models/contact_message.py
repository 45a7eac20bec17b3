from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Enum
from sqlalchemy.sql import func
from unitycure.database import Base

CONTACT_STATUSES = ("new", "in_progress", "resolved")


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50))
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    newsletter = Column(Boolean, default=False)
    status = Column(
        Enum(*CONTACT_STATUSES, name="contact_status", native_enum=False, create_constraint=True, length=20),
        nullable=False,
        default="new",
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

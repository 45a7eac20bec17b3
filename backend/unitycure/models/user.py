from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from unitycure.database import Base

USER_ROLES = ("Citizen", "Hospital Staff", "Doctor", "Dispatcher", "Platform Admin")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Lookups go through lower(identifier); see UserCollection
    identifier = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(Enum(*USER_ROLES, name="user_role", native_enum=False, create_constraint=True, length=32), nullable=False)
    redirect = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

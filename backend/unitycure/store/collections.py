"""
Document-style access to the entity tables.

Each collection validates incoming documents against its pydantic schema and
maps them onto the ORM model. Sort specs follow the (field, 1 | -1) convention.
"""

import math
from typing import Any, Iterable, Optional, Type, Union
from pydantic import BaseModel
from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker
from unitycure.exceptions import UserExistsException
from unitycure.models import (
    Appointment, ChatbotMessage, ContactMessage, Feedback, Hospital, Provider, SosReport, User,
)
from unitycure.schemas.appointment import AppointmentDocument
from unitycure.schemas.chatbot_message import ChatbotMessageDocument
from unitycure.schemas.contact_message import ContactMessageDocument
from unitycure.schemas.feedback import FeedbackDocument
from unitycure.schemas.hospital import HospitalDocument
from unitycure.schemas.provider import ProviderDocument
from unitycure.schemas.sos_report import SosReportDocument
from unitycure.schemas.user import UserDocument

EARTH_RADIUS_M = 6_371_000

Document = Union[BaseModel, dict]
SortSpec = Optional[Iterable[tuple[str, int]]]


def distance_m(a: list[float], b: list[float]) -> float:
    """Great-circle distance in metres between two [lng, lat] pairs."""
    lng1, lat1 = map(math.radians, a)
    lng2, lat2 = map(math.radians, b)
    h = math.sin((lat2 - lat1) / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin((lng2 - lng1) / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


class Collection:
    model: Type = None
    schema: Type[BaseModel] = None
    natural_key: Optional[str] = None

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    def validate(self, document: Document) -> BaseModel:
        if isinstance(document, self.schema):
            return document
        return self.schema.model_validate(document)

    def to_columns(self, document: Document) -> dict:
        return self.validate(document).model_dump(exclude_none=True)

    def _update_columns(self, columns: dict) -> dict:
        return columns

    def _where(self, filters: Optional[dict]) -> list:
        return [getattr(self.model, field) == value for field, value in (filters or {}).items()]

    def _key_clause(self, value: Any):
        return getattr(self.model, self.natural_key) == value

    async def insert(self, document: Document):
        obj = self.model(**self.to_columns(document))
        async with self.session_factory() as session:
            session.add(obj)
            await session.flush()
            await session.refresh(obj)
            await session.commit()
        return obj

    async def insert_many(self, documents: Iterable[Document]) -> int:
        objs = [self.model(**self.to_columns(d)) for d in documents]
        async with self.session_factory() as session:
            session.add_all(objs)
            await session.commit()
        return len(objs)

    async def upsert(self, document: Document) -> tuple[Any, bool]:
        """Insert, or update the row sharing the natural key. Returns (row, created)."""
        if self.natural_key is None:
            raise TypeError(f"{self.model.__name__} has no natural key to upsert on")
        columns = self.to_columns(document)
        async with self.session_factory() as session:
            existing = await session.scalar(
                select(self.model).where(self._key_clause(columns[self.natural_key])).limit(1)
            )
            if existing is None:
                obj = self.model(**columns)
                session.add(obj)
            else:
                obj = existing
                for field, value in self._update_columns(columns).items():
                    setattr(obj, field, value)
            await session.flush()
            await session.refresh(obj)
            await session.commit()
        return obj, existing is None

    async def get(self, row_id: int):
        async with self.session_factory() as session:
            return await session.get(self.model, row_id)

    async def find_many(self, filters: Optional[dict] = None, sort: SortSpec = None, limit: Optional[int] = None) -> list:
        stmt = select(self.model).where(*self._where(filters))
        for field, direction in sort or ():
            column = getattr(self.model, field)
            stmt = stmt.order_by(column.desc() if direction < 0 else column.asc())
        if limit:
            stmt = stmt.limit(limit)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def find_one(self, filters: Optional[dict] = None):
        rows = await self.find_many(filters, limit=1)
        return rows[0] if rows else None

    async def count(self, filters: Optional[dict] = None) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._where(filters))
        async with self.session_factory() as session:
            return await session.scalar(stmt) or 0


def bounding_box(lng: float, lat: float, max_distance: float) -> tuple[float, float, Optional[float], Optional[float]]:
    """Degree box that contains every point within max_distance metres of (lng, lat).

    Longitude bounds are None when the box reaches a pole or crosses the antimeridian.
    """
    angle = max_distance / EARTH_RADIUS_M
    dlat = math.degrees(angle)
    min_lat, max_lat = lat - dlat, lat + dlat
    if min_lat <= -90 or max_lat >= 90:
        return min_lat, max_lat, None, None
    dlng = math.degrees(math.asin(math.sin(angle) / math.cos(math.radians(lat))))
    if lng - dlng < -180 or lng + dlng > 180:
        return min_lat, max_lat, None, None
    return min_lat, max_lat, lng - dlng, lng + dlng


class GeoCollection(Collection):
    async def find_near(self, lng: float, lat: float, max_distance: float = 10000, limit: int = 20) -> list:
        """Rows within max_distance metres of (lng, lat), nearest first."""
        origin = [lng, lat]
        min_lat, max_lat, min_lng, max_lng = bounding_box(lng, lat, max_distance)
        row_lat = self.model.location[("coordinates", 1)].as_float()
        clauses = [row_lat >= min_lat, row_lat <= max_lat]
        if min_lng is not None:
            row_lng = self.model.location[("coordinates", 0)].as_float()
            clauses += [row_lng >= min_lng, row_lng <= max_lng]

        async with self.session_factory() as session:
            result = await session.execute(select(self.model).where(*clauses))
            candidates = result.scalars().all()

        ranked = []
        for row in candidates:
            d = distance_m(origin, row.location["coordinates"])
            if d <= max_distance:
                ranked.append((d, row.id, row))
        ranked.sort(key=lambda item: item[:2])
        return [row for _, _, row in ranked[:limit]]


class UserCollection(Collection):
    model = User
    schema = UserDocument
    natural_key = "identifier"

    def _key_clause(self, value: str):
        return func.lower(User.identifier) == value.lower()

    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        async with self.session_factory() as session:
            return await session.scalar(select(User).where(self._key_clause(identifier.strip())).limit(1))

    async def insert(self, document: Document) -> User:
        try:
            return await super().insert(document)
        except IntegrityError as e:
            raise UserExistsException(self.validate(document).identifier) from e

    async def upsert(self, document: Document) -> tuple[User, bool]:
        try:
            return await super().upsert(document)
        except IntegrityError as e:
            raise UserExistsException(self.validate(document).identifier) from e


class HospitalCollection(GeoCollection):
    model = Hospital
    schema = HospitalDocument
    natural_key = "name"

    def to_columns(self, document: Document) -> dict:
        columns = super().to_columns(document)
        rating = columns.pop("rating", {})
        columns["rating_average"] = rating.get("average", 0.0)
        columns["rating_count"] = rating.get("count", 0)
        return columns

    def _update_columns(self, columns: dict) -> dict:
        # Rating aggregates belong to the feedback pipeline, not to imports
        return {k: v for k, v in columns.items() if k not in ("rating_average", "rating_count")}

    async def update_rating(self, hospital_id: int, average: float, count: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                update(Hospital)
                .where(Hospital.id == hospital_id)
                .values(rating_average=average, rating_count=count)
            )
            await session.commit()
            return result.rowcount > 0


class ProviderCollection(GeoCollection):
    model = Provider
    schema = ProviderDocument

    async def search(self, term: str, limit: int = 50) -> list[Provider]:
        pattern = f"%{term}%"
        stmt = (
            select(Provider)
            .where(or_(Provider.name.ilike(pattern), Provider.specialty.ilike(pattern)))
            .order_by(Provider.name)
            .limit(limit)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())


class SosReportCollection(GeoCollection):
    model = SosReport
    schema = SosReportDocument


class AppointmentCollection(Collection):
    model = Appointment
    schema = AppointmentDocument


class FeedbackCollection(Collection):
    model = Feedback
    schema = FeedbackDocument


class ContactMessageCollection(Collection):
    model = ContactMessage
    schema = ContactMessageDocument


class ChatbotMessageCollection(Collection):
    model = ChatbotMessage
    schema = ChatbotMessageDocument


class Collections:
    """All entity collections bound to one store's session factory."""

    def __init__(self, session_factory: async_sessionmaker):
        self.users = UserCollection(session_factory)
        self.hospitals = HospitalCollection(session_factory)
        self.appointments = AppointmentCollection(session_factory)
        self.sos_reports = SosReportCollection(session_factory)
        self.feedback = FeedbackCollection(session_factory)
        self.providers = ProviderCollection(session_factory)
        self.contact_messages = ContactMessageCollection(session_factory)
        self.chatbot_messages = ChatbotMessageCollection(session_factory)

    def for_table(self, table: str) -> Collection:
        collection = getattr(self, table, None)
        if not isinstance(collection, Collection):
            raise KeyError(table)
        return collection

"""
Legacy row -> document transforms.

Legacy tables store coordinates as flat lat/lng columns, list fields as JSON or
comma-separated text and flags as 0/1 integers. Both the legacy migration and
backup restore run rows through these functions before validation.
"""

import json
import math
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional
from unitycure.exceptions import RowTransformException

LEGACY_TABLES = (
    "users", "appointments", "sos_reports", "feedback",
    "providers", "contact_messages", "chatbot_messages", "hospitals",
)

# Tables whose documents are matched on a natural key instead of appended
UPSERT_TABLES = ("users", "hospitals")


def to_point(row: dict) -> dict:
    lng = row.get("lng")
    lat = row.get("lat")
    return {
        "type": "Point",
        "coordinates": [float(lng) if lng is not None else 0.0, float(lat) if lat is not None else 0.0],
    }


def _list_items(items: list, table: str, field: str) -> list[str]:
    """Nulls are dropped, numbers keep their JSON text, nested values are rejected."""
    result = []
    for item in items:
        if item is None:
            continue
        if isinstance(item, str):
            result.append(item)
        elif isinstance(item, (bool, int, float)):
            result.append(json.dumps(item))
        else:
            raise RowTransformException(table, f"{field} holds a nested {type(item).__name__}")
    return result


def to_string_list(value: Any, table: str = "", field: str = "") -> list[str]:
    """JSON array first, comma-separated text second, empty list for null."""
    if value is None:
        return []
    if isinstance(value, list):
        return _list_items(value, table, field)
    if not isinstance(value, str):
        raise RowTransformException(table, f"{field} has unsupported type {type(value).__name__}")
    if not value.strip():
        return []
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError:
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(decoded, list):
        return _list_items(decoded, table, field)
    if isinstance(decoded, str):
        return [decoded] if decoded else []
    if isinstance(decoded, (int, float)) and not isinstance(decoded, bool):
        # a bare number such as "42" is a single-entry list
        return [value.strip()]
    raise RowTransformException(table, f"{field} decodes to {type(decoded).__name__}, not a list")


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def to_age(value: Any) -> Optional[int]:
    """Integer age, or None when the legacy value is missing or unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        value = int(value)
    if not isinstance(value, int) or not 0 <= value <= 150:
        return None
    return value


def to_date(value: Any, table: str = "") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # JS-style epoch milliseconds
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
    raise RowTransformException(table, f"unparseable date {value!r}")


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _with_optional(document: dict, row: dict, *fields: str) -> dict:
    for field in fields:
        if row.get(field) is not None:
            document[field] = row[field]
    return document


def user_document(row: dict) -> dict:
    return {
        "identifier": row.get("identifier"),
        "password": row.get("password"),
        "role": row.get("role"),
        "redirect": row.get("redirect"),
    }


def hospital_document(row: dict) -> dict:
    return {
        "name": row.get("name"),
        "address": row.get("address"),
        "location": to_point(row),
        "contact": _text(row.get("contact")),
        "services": to_string_list(row.get("services"), "hospitals", "services"),
        "specialty": row.get("specialty"),
        "emergency_services": to_bool(row.get("emergency_services")),
    }


def appointment_document(row: dict) -> dict:
    patient = {
        "name": row.get("patient_name"),
        "contact": _text(row.get("patient_contact")),
        "reason": row.get("reason"),
    }
    age = to_age(row.get("patient_age"))
    if age is not None:
        patient["age"] = age
    return {
        "doctor_name": row.get("doctor_name"),
        "hospital": row.get("hospital"),
        "type": row.get("type"),
        "date": to_date(row.get("date"), "appointments"),
        "time": _text(row.get("time")),
        "patient": patient,
    }


def sos_report_document(row: dict) -> dict:
    document = {
        "location": to_point(row),
        "symptoms": to_string_list(row.get("symptoms"), "sos_reports", "symptoms"),
        "description": row.get("description"),
    }
    return _with_optional(document, row, "status")


def feedback_document(row: dict) -> dict:
    return {
        "service_id": _text(row.get("service_id")),
        "service_type": row.get("service_type"),
        "user_id": _text(row.get("user_id")),
        "rating": row.get("rating"),
        "review": row.get("review"),
    }


def provider_document(row: dict) -> dict:
    document = {
        "provider_type": row.get("provider_type"),
        "name": row.get("name"),
        "address": row.get("address"),
        "location": to_point(row),
        "contact": _text(row.get("contact")),
        "services": to_string_list(row.get("services"), "providers", "services"),
        "specialty": row.get("specialty"),
        "admin": {"name": row.get("admin_name"), "email": row.get("admin_email")},
    }
    if row.get("verified") is not None:
        document["verified"] = to_bool(row["verified"])
    return document


def contact_message_document(row: dict) -> dict:
    document = {
        "first_name": row.get("first_name"),
        "last_name": row.get("last_name"),
        "email": row.get("email"),
        "phone": _text(row.get("phone")),
        "subject": row.get("subject"),
        "message": row.get("message"),
        "newsletter": to_bool(row.get("newsletter")),
    }
    return _with_optional(document, row, "status")


def chatbot_message_document(row: dict) -> dict:
    return {
        "user_id": _text(row.get("user_id")),
        "session_id": _text(row.get("session_id")),
        "user_message": row.get("user_message"),
        "bot_response": row.get("bot_response"),
    }


TRANSFORMS: dict[str, Callable[[dict], dict]] = {
    "users": user_document,
    "hospitals": hospital_document,
    "appointments": appointment_document,
    "sos_reports": sos_report_document,
    "feedback": feedback_document,
    "providers": provider_document,
    "contact_messages": contact_message_document,
    "chatbot_messages": chatbot_message_document,
}


def transform_row(table: str, row: dict) -> dict:
    try:
        return TRANSFORMS[table](row)
    except RowTransformException:
        raise
    except (TypeError, ValueError) as e:
        raise RowTransformException(table, str(e)) from e

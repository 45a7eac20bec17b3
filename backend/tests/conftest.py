from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path

import pytest

from unitycure.store.handle import SQLiteStore

# Column layout of the file-backed store the migration reads from
LEGACY_SCHEMA = {
    "users": "id INTEGER PRIMARY KEY AUTOINCREMENT, identifier TEXT UNIQUE, password TEXT, role TEXT, redirect TEXT",
    "hospitals": (
        "id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, address TEXT, lat REAL, lng REAL, contact TEXT, "
        "services TEXT, specialty TEXT, emergency_services INTEGER"
    ),
    "appointments": (
        "id INTEGER PRIMARY KEY AUTOINCREMENT, doctor_name TEXT, hospital TEXT, type TEXT, date TEXT, time TEXT, "
        "patient_name TEXT, patient_age INTEGER, patient_contact TEXT, reason TEXT"
    ),
    "sos_reports": "id INTEGER PRIMARY KEY AUTOINCREMENT, lat REAL, lng REAL, symptoms TEXT, description TEXT",
    "feedback": (
        "id INTEGER PRIMARY KEY AUTOINCREMENT, service_id TEXT, service_type TEXT, user_id TEXT, "
        "rating INTEGER, review TEXT"
    ),
    "providers": (
        "id INTEGER PRIMARY KEY AUTOINCREMENT, provider_type TEXT, name TEXT, address TEXT, lat REAL, lng REAL, "
        "contact TEXT, services TEXT, specialty TEXT, admin_name TEXT, admin_email TEXT"
    ),
    "contact_messages": (
        "id INTEGER PRIMARY KEY AUTOINCREMENT, first_name TEXT, last_name TEXT, email TEXT, phone TEXT, "
        "subject TEXT, message TEXT, newsletter INTEGER"
    ),
    "chatbot_messages": "id INTEGER PRIMARY KEY AUTOINCREMENT, user_id TEXT, user_message TEXT, bot_response TEXT",
}


@pytest.fixture
def legacy_rows() -> dict[str, list[dict]]:
    return {
        "users": [
            {"identifier": "alice@example.com", "password": "secret1", "role": "Citizen",
             "redirect": "/user_dashboard.html"},
            {"identifier": "dr.bob@uc.com", "password": "secret2", "role": "Doctor",
             "redirect": "/doctor_schedule.html"},
        ],
        "hospitals": [
            {"name": "Test Clinic", "address": "1 Main St", "lat": 40.7, "lng": -74.0, "contact": "555-0100",
             "services": "Emergency,Cardiology", "specialty": "General", "emergency_services": 1},
            {"name": "Harbor Hospital", "address": "2 Pier Rd", "lat": 40.6, "lng": -74.1, "contact": "555-0101",
             "services": '["Surgery", "Oncology"]', "specialty": "Specialized", "emergency_services": 0},
            {"name": "Quiet Care", "address": "3 Elm St", "lat": None, "lng": None, "contact": "555-0102",
             "services": None, "specialty": None, "emergency_services": 0},
        ],
        "appointments": [
            {"doctor_name": "Dr. Bob", "hospital": "Test Clinic", "type": "Checkup", "date": "2024-05-01",
             "time": "10:00", "patient_name": "Carol", "patient_age": 34, "patient_contact": "555-0199",
             "reason": "Annual"},
            {"doctor_name": "Dr. Bob", "hospital": "Test Clinic", "type": "Follow-up", "date": "2024-05-02",
             "time": "11:30", "patient_name": "Dan", "patient_age": None, "patient_contact": None,
             "reason": None},
        ],
        "sos_reports": [
            {"lat": 40.71, "lng": -74.01, "symptoms": '["chest pain", "dizziness"]', "description": "Collapsed"},
        ],
        "feedback": [
            {"service_id": "1", "service_type": "hospital", "user_id": "7", "rating": 5, "review": "Great"},
        ],
        "providers": [],
        "contact_messages": [
            {"first_name": "Eve", "last_name": "Stone", "email": " Eve@Example.com ", "phone": "555-0177",
             "subject": "Hours", "message": "When are you open?", "newsletter": 1},
        ],
        "chatbot_messages": [
            {"user_id": "7", "user_message": "Hello", "bot_response": "Hi, how can I help?"},
        ],
    }


@pytest.fixture
def make_legacy_db(tmp_path):
    """Build a legacy SQLite file holding only the tables passed in."""

    def make(tables: dict[str, list[dict]], path: Path | None = None) -> Path:
        path = path or tmp_path / "unitycure.db"
        conn = sqlite3.connect(path)
        try:
            for table, rows in tables.items():
                conn.execute(f"CREATE TABLE {table} ({LEGACY_SCHEMA[table]})")
                for row in rows:
                    columns = ", ".join(row)
                    marks = ", ".join("?" for _ in row)
                    conn.execute(f"INSERT INTO {table} ({columns}) VALUES ({marks})", list(row.values()))
            conn.commit()
        finally:
            conn.close()
        return path

    return make


@pytest.fixture
def open_store(tmp_path):
    """Async context manager yielding a fresh SQLite-backed live store."""

    @asynccontextmanager
    async def opener(name: str = "store.db"):
        store = await SQLiteStore.open(tmp_path / name)
        try:
            yield store
        finally:
            await store.dispose()

    return opener

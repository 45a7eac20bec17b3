from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from unitycure.exceptions import UserExistsException
from unitycure.services.chat_service import ChatService
from unitycure.services.user_service import UserService
from unitycure.store.collections import bounding_box, distance_m


def _hospital(name, lng, lat, **extra):
    doc = {
        "name": name,
        "address": f"{name} address",
        "location": {"type": "Point", "coordinates": [lng, lat]},
        "contact": "555-0100",
        "services": ["Emergency"],
    }
    doc.update(extra)
    return doc


def test_user_lookup_is_case_insensitive(open_store):
    async def scenario():
        async with open_store() as store:
            users = store.collections.users
            await users.insert({"identifier": "Alice@Example.com", "password": "secret1", "role": "Citizen"})
            found = await users.find_by_identifier("alice@example.COM")
            return found.identifier, found.redirect

    assert asyncio.run(scenario()) == ("Alice@Example.com", "/user_dashboard.html")


def test_duplicate_user_insert_raises_user_exists(open_store):
    async def scenario():
        async with open_store() as store:
            users = store.collections.users
            await users.insert({"identifier": "bob@uc.com", "password": "secret1", "role": "Doctor"})
            with pytest.raises(UserExistsException):
                await users.insert({"identifier": "bob@uc.com", "password": "other1", "role": "Doctor"})
            return await users.count()

    assert asyncio.run(scenario()) == 1


def test_register_rejects_identifier_in_other_case(open_store):
    async def scenario():
        async with open_store() as store:
            service = UserService(store.collections)
            await service.register({"identifier": "carol@uc.com", "password": "secret1", "role": "Citizen"})
            with pytest.raises(UserExistsException):
                await service.register({"identifier": "CAROL@uc.com", "password": "secret2", "role": "Citizen"})
            assert await service.authenticate("Carol@UC.com", "secret1") is not None
            assert await service.authenticate("carol@uc.com", "wrong") is None

    asyncio.run(scenario())


def test_role_must_be_one_of_the_known_roles(open_store):
    async def scenario():
        async with open_store() as store:
            with pytest.raises(ValidationError):
                await store.collections.users.insert(
                    {"identifier": "x@uc.com", "password": "secret1", "role": "Janitor"}
                )

    asyncio.run(scenario())


def test_hospital_upsert_updates_in_place_and_keeps_rating(open_store):
    async def scenario():
        async with open_store() as store:
            hospitals = store.collections.hospitals
            first, created = await hospitals.upsert(_hospital("Test Clinic", -74.0, 40.7))
            assert created
            await hospitals.update_rating(first.id, 4.5, 2)

            second, created = await hospitals.upsert(_hospital("Test Clinic", -74.0, 40.7, contact="555-9999"))
            assert not created
            return second, await hospitals.count()

    row, total = asyncio.run(scenario())
    assert total == 1
    assert row.contact == "555-9999"
    assert row.rating == {"average": 4.5, "count": 2}


def test_find_near_orders_by_distance(open_store):
    async def scenario():
        async with open_store() as store:
            hospitals = store.collections.hospitals
            await hospitals.insert_many([
                _hospital("Far", -73.0, 41.5),
                _hospital("Near", -74.001, 40.701),
                _hospital("Middle", -74.02, 40.72),
            ])
            return [h.name for h in await hospitals.find_near(-74.0, 40.7, max_distance=10000)]

    assert asyncio.run(scenario()) == ["Near", "Middle"]


def test_find_many_filters_sorts_and_limits(open_store):
    async def scenario():
        async with open_store() as store:
            hospitals = store.collections.hospitals
            await hospitals.insert_many([
                _hospital("Beta", 0, 0, emergency_services=True),
                _hospital("Alpha", 0, 0, emergency_services=True),
                _hospital("Gamma", 0, 0),
            ])
            rows = await hospitals.find_many({"emergency_services": True}, sort=[("name", 1)])
            first = await hospitals.find_one({"name": "Gamma"})
            return [h.name for h in rows], first.services, await hospitals.count({"emergency_services": False})

    names, services, non_emergency = asyncio.run(scenario())
    assert names == ["Alpha", "Beta"]
    assert services == ["Emergency"]
    assert non_emergency == 1


def test_provider_search_matches_name_and_specialty(open_store):
    async def scenario():
        async with open_store() as store:
            providers = store.collections.providers
            for name, specialty in [("Heart Partners", "Cardiology"), ("Bright Smiles", "Dental"),
                                    ("Downtown Clinic", "cardiology")]:
                await providers.insert({
                    "provider_type": "clinic", "name": name, "address": "1 St",
                    "location": {"type": "Point", "coordinates": [0, 0]}, "contact": "555",
                    "specialty": specialty, "admin": {"name": "Admin", "email": "a@b.c"},
                })
            return [p.name for p in await providers.search("cardio")]

    assert asyncio.run(scenario()) == ["Downtown Clinic", "Heart Partners"]


def test_chat_history_is_newest_first(open_store):
    async def scenario():
        async with open_store() as store:
            chat = ChatService(store.collections)
            for n in range(3):
                await chat.record_exchange(f"question {n}", f"answer {n}", user_id="7", session_id="s1")
            await chat.record_exchange("other", "reply", user_id="8")
            return [m.user_message for m in await chat.history("7", limit=2)]

    assert asyncio.run(scenario()) == ["question 2", "question 1"]


def test_bounding_box_contains_the_search_radius():
    min_lat, max_lat, min_lng, max_lng = bounding_box(-74.0, 40.7, 10000)
    north = [-74.0, max_lat]
    east = [max_lng, 40.7]
    assert distance_m([-74.0, 40.7], north) == pytest.approx(10000, rel=1e-6)
    assert distance_m([-74.0, 40.7], east) >= 10000 * (1 - 1e-6)
    assert min_lat < 40.7 < max_lat
    assert min_lng < -74.0 < max_lng


def test_bounding_box_drops_longitude_bounds_across_the_antimeridian():
    assert bounding_box(179.99, 0.0, 5000)[2:] == (None, None)
    assert bounding_box(0.0, 89.99, 5000)[2:] == (None, None)


def test_find_near_prefilter_excludes_far_rows_and_spans_the_antimeridian(open_store):
    async def scenario():
        async with open_store() as store:
            hospitals = store.collections.hospitals
            await hospitals.insert_many([
                _hospital("Same Latitude Far East", -70.0, 40.7),
                _hospital("Near", -74.001, 40.701),
                _hospital("Dateline East", -179.995, 0.0),
                _hospital("Dateline West", 179.995, 0.001),
            ])
            near_ny = [h.name for h in await hospitals.find_near(-74.0, 40.7, max_distance=5000)]
            near_dateline = [h.name for h in await hospitals.find_near(179.999, 0.0, max_distance=5000)]
            return near_ny, near_dateline

    near_ny, near_dateline = asyncio.run(scenario())
    assert near_ny == ["Near"]
    assert near_dateline == ["Dateline West", "Dateline East"]

import logging
from unitycure.schemas.common import GeoPoint
from unitycure.schemas.hospital import HospitalDocument
from unitycure.schemas.user import UserDocument
from unitycure.store.handle import StoreHandle

logger = logging.getLogger(__name__)

SEED_USERS = [
    UserDocument(identifier="citizen@example.com", password="Test@123", role="Citizen",
                 redirect="/user_dashboard.html"),
    UserDocument(identifier="9876543210", password="Test@123", role="Citizen",
                 redirect="/user_dashboard.html"),
    UserDocument(identifier="hospitaladmin@uc.com", password="Admin@123", role="Hospital Staff",
                 redirect="/resource_management.html"),
    UserDocument(identifier="doctor@uc.com", password="Doc@123", role="Doctor",
                 redirect="/doctor_schedule.html"),
    UserDocument(identifier="dispatcher@uc.com", password="Disp@123", role="Dispatcher",
                 redirect="/dispatcher_dashboard.html"),
    UserDocument(identifier="platformadmin@uc.com", password="Root@123", role="Platform Admin",
                 redirect="/platform_admin_dashboard.html"),
]

SEED_HOSPITALS = [
    HospitalDocument(
        name="Unity General Hospital",
        address="123 Healthcare Ave, Medical District",
        location=GeoPoint.from_lng_lat(-74.0060, 40.7128),
        contact="+1-555-0101",
        services=["Emergency", "Cardiology", "Pediatrics"],
        specialty="General",
        emergency_services=True,
    ),
    HospitalDocument(
        name="City Medical Center",
        address="456 Wellness Blvd, Downtown",
        location=GeoPoint.from_lng_lat(-73.9851, 40.7589),
        contact="+1-555-0102",
        services=["Surgery", "Oncology", "Neurology"],
        specialty="Specialized",
        emergency_services=True,
    ),
    HospitalDocument(
        name="Community Health Clinic",
        address="789 Care Street, Suburbia",
        location=GeoPoint.from_lng_lat(-73.9934, 40.7505),
        contact="+1-555-0103",
        services=["Primary Care", "Vaccination", "Mental Health"],
        specialty="Community",
        emergency_services=False,
    ),
]


async def seed(store: StoreHandle) -> dict[str, int]:
    """Insert the demo users and hospitals into empty tables. Idempotent."""
    seeded = {"users": 0, "hospitals": 0}
    collections = store.collections

    if await collections.users.count() == 0:
        seeded["users"] = await collections.users.insert_many(SEED_USERS)
        logger.info("Seeded %d users", seeded["users"])

    if await collections.hospitals.count() == 0:
        seeded["hospitals"] = await collections.hospitals.insert_many(SEED_HOSPITALS)
        logger.info("Seeded %d hospitals", seeded["hospitals"])

    return seeded

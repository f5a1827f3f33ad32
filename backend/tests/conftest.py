"""Shared fixtures: sample documents, a recording sink and a simple test schema."""

import copy
import json
from typing import Annotated, Any

import pytest
from pydantic import BaseModel, Field, StrictFloat, StrictStr

from app.validators import ModelSchema

TIMESTAMP = "2023-01-01T00:00:00Z"

SAMPLE_DOCUMENTS: dict[str, list[dict]] = {
    "users": [
        {
            "id": "user1",
            "email": "patient@clinic.org",
            "phone": "+1234567890",
            "firstName": "John",
            "lastName": "Doe",
            "userType": "patient",
            "isActive": True,
            "emailVerified": True,
            "phoneVerified": False,
            "createdAt": TIMESTAMP,
            "updatedAt": TIMESTAMP,
        }
    ],
    "patients": [
        {
            "id": "user1",
            "userId": "user1",
            "dateOfBirth": "1990-01-01T00:00:00Z",
            "gender": "male",
            "bloodType": "A+",
            "medicalHistory": "No significant medical history",
        }
    ],
    "doctors": [
        {
            "id": "user2",
            "userId": "user2",
            "specialty": "Cardiology",
            "licenseNumber": "MD12345",
            "yearsOfExperience": 10,
            "bio": "Experienced cardiologist",
            "verificationStatus": "verified",
            "verificationNotes": None,
            "adminNotes": "Top doctor",
            "location": "New York, NY",
            "languages": ["English", "Spanish"],
            "consultationFee": 200,
            "profilePictureUrl": None,
            "licenseDocumentUrl": None,
            "certificateUrl": None,
            "educationHistory": [],
            "experience": [],
            "education": "MD from Harvard Medical School",
            "servicesOffered": "Cardiac Consultation, ECG, Stress Test",
            "timezone": "America/New_York",
            "weeklySchedule": {
                "monday": [{"startTime": "09:00", "endTime": "12:00", "isAvailable": True}],
                "tuesday": [],
                "wednesday": [],
                "thursday": [],
                "friday": [],
                "saturday": [],
                "sunday": [],
            },
            "blockedDates": [],
            "createdAt": TIMESTAMP,
            "updatedAt": TIMESTAMP,
        }
    ],
    "appointments": [
        {
            "id": "appt1",
            "patientId": "user1",
            "doctorId": "user2",
            "appointmentDate": "2023-06-15T00:00:00Z",
            "startTime": "10:00",
            "endTime": "10:30",
            "status": "confirmed",
            "notes": "Regular checkup",
            "createdAt": TIMESTAMP,
            "updatedAt": TIMESTAMP,
            "appointmentType": "IN_PERSON",
            "patientName": "John Doe",
            "doctorName": "Dr. Smith",
            "doctorSpecialty": "Cardiology",
            "reason": "Annual checkup",
            "videoCallUrl": None,
        }
    ],
    "notifications": [
        {
            "id": "notif1",
            "userId": "user1",
            "title": "Appointment Reminder",
            "message": "You have an appointment tomorrow",
            "isRead": False,
            "createdAt": TIMESTAMP,
            "type": "appointment_booked",
            "relatedId": "appt1",
        }
    ],
}


class Person(BaseModel):
    """Minimal test contract: a name and an adult age."""

    name: StrictStr
    age: Annotated[StrictFloat, Field(ge=18)]


class RecordingSink:
    """Reporting sink that keeps every notification for assertions."""

    def __init__(self):
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def info(self, event: str, **data: Any) -> None:
        self.events.append(("info", event, data))

    def warning(self, event: str, **data: Any) -> None:
        self.events.append(("warning", event, data))

    def error(self, event: str, **data: Any) -> None:
        self.events.append(("error", event, data))

    @property
    def sequence(self) -> list[tuple[str, str]]:
        return [(level, event) for level, event, _ in self.events]


@pytest.fixture
def sample_documents() -> dict[str, list[dict]]:
    """Deep copy of one valid document per collection."""
    return copy.deepcopy(SAMPLE_DOCUMENTS)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def person_schema() -> ModelSchema:
    return ModelSchema(Person)


@pytest.fixture
def local_db_dir(tmp_path, sample_documents):
    """A local document store directory holding every sample collection."""
    for collection, documents in sample_documents.items():
        (tmp_path / f"{collection}.json").write_text(json.dumps(documents), encoding="utf-8")
    return tmp_path

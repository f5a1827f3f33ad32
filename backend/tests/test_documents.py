"""
Tests for the collection document schemas.

Each test starts from a valid sample document, breaks one thing, and checks
the reported field path and message.
"""

from datetime import date

import pytest

from app.models.documents import ISO_DATETIME_MESSAGE
from app.validators import get_schema_for_collection


def check(collection, document):
    data = {key: value for key, value in document.items() if key != "id"}
    return get_schema_for_collection(collection).check(data)


def fields(errors):
    return [e.field for e in errors]


class TestSampleDocuments:
    """Well-formed documents pass."""

    @pytest.mark.parametrize("collection", ["users", "patients", "doctors", "appointments", "notifications"])
    def test_sample_is_valid(self, sample_documents, collection):
        assert check(collection, sample_documents[collection][0]) == []

    def test_unknown_keys_are_ignored(self, sample_documents):
        user = sample_documents["users"][0]
        user["legacyField"] = {"anything": True}

        assert check("users", user) == []

    def test_optional_fields_may_be_omitted(self, sample_documents):
        notification = sample_documents["notifications"][0]
        del notification["relatedId"]
        del notification["type"]
        del notification["isRead"]

        assert check("notifications", notification) == []


class TestUsers:

    def test_invalid_email(self, sample_documents):
        user = sample_documents["users"][0]
        user["email"] = "not-an-email"

        errors = check("users", user)

        assert fields(errors) == ["email"]
        assert errors[0].message == "Invalid email format"
        assert errors[0].received == "not-an-email"

    def test_null_email_allowed(self, sample_documents):
        user = sample_documents["users"][0]
        user["email"] = None

        assert check("users", user) == []

    def test_unknown_user_type(self, sample_documents):
        user = sample_documents["users"][0]
        user["userType"] = "nurse"

        assert fields(check("users", user)) == ["userType"]

    def test_empty_first_name(self, sample_documents):
        user = sample_documents["users"][0]
        user["firstName"] = ""

        assert fields(check("users", user)) == ["firstName"]

    def test_missing_required_fields(self, sample_documents):
        user = sample_documents["users"][0]
        del user["lastName"]
        del user["createdAt"]

        errors = check("users", user)

        assert sorted(fields(errors)) == ["createdAt", "lastName"]
        assert all(e.received is None for e in errors)

    def test_strict_boolean(self, sample_documents):
        user = sample_documents["users"][0]
        user["isActive"] = "true"

        assert fields(check("users", user)) == ["isActive"]


class TestTimestamps:

    @pytest.mark.parametrize(
        "value",
        [
            "2023-01-01T00:00:00Z",
            "2023-01-01T00:00:00.123Z",
            "2023-01-01T10:30:00+05:30",
            "2023-01-01T10:30Z",
        ],
    )
    def test_accepted_formats(self, sample_documents, value):
        user = sample_documents["users"][0]
        user["createdAt"] = value

        assert check("users", user) == []

    @pytest.mark.parametrize(
        "value",
        [
            "yesterday",
            "2023-01-01",
            "2023-02-30T00:00:00Z",
            "2023-01-01 00:00:00Z",
            "2023-01-01T25:00:00Z",
            "2023-01-01T10:61:00Z",
            "2023-01-01T10:30:99Z",
        ],
    )
    def test_rejected_formats(self, sample_documents, value):
        user = sample_documents["users"][0]
        user["updatedAt"] = value

        errors = check("users", user)

        assert fields(errors) == ["updatedAt"]
        assert errors[0].message == ISO_DATETIME_MESSAGE
        assert errors[0].received == value


class TestPatients:

    @pytest.mark.parametrize("value", ["male", "Male", "M", " male "])
    def test_gender_normalized_to_male(self, sample_documents, value):
        patient = sample_documents["patients"][0]
        patient["gender"] = value

        assert check("patients", patient) == []

    @pytest.mark.parametrize("value", [None, "", "prefer not to say"])
    def test_gender_falls_back_to_other(self, sample_documents, value):
        patient = sample_documents["patients"][0]
        patient["gender"] = value

        assert check("patients", patient) == []

    def test_unknown_blood_type(self, sample_documents):
        patient = sample_documents["patients"][0]
        patient["bloodType"] = "Z+"

        assert fields(check("patients", patient)) == ["bloodType"]

    def test_medical_history_key_is_required(self, sample_documents):
        patient = sample_documents["patients"][0]
        del patient["medicalHistory"]

        assert fields(check("patients", patient)) == ["medicalHistory"]

    def test_medical_history_may_be_null(self, sample_documents):
        patient = sample_documents["patients"][0]
        patient["medicalHistory"] = None

        assert check("patients", patient) == []


class TestDoctors:

    def test_numbers_are_not_coerced_from_strings(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["yearsOfExperience"] = "10"

        errors = check("doctors", doctor)

        assert fields(errors) == ["yearsOfExperience"]
        assert errors[0].received == "10"

    def test_negative_fee(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["consultationFee"] = -5

        assert fields(check("doctors", doctor)) == ["consultationFee"]

    def test_nested_time_slot_path(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["weeklySchedule"]["monday"][0]["startTime"] = "9"

        errors = check("doctors", doctor)

        assert fields(errors) == ["weeklySchedule.monday.0.startTime"]
        assert errors[0].message == "Invalid start time format (HH:MM)"
        assert errors[0].received == "9"

    def test_education_start_year_in_future(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["educationHistory"] = [
            {
                "institution": "Harvard Medical School",
                "degree": "MD",
                "field": "Medicine",
                "startYear": date.today().year + 1,
                "isOngoing": True,
            }
        ]

        errors = check("doctors", doctor)

        assert fields(errors) == ["educationHistory.0.startYear"]
        assert errors[0].message == "Start year cannot be in the future"

    def test_experience_end_year_may_be_a_few_years_ahead(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["experience"] = [
            {
                "organization": "City Hospital",
                "position": "Resident",
                "startYear": 2015,
                "endYear": date.today().year + 2,
            }
        ]

        assert check("doctors", doctor) == []

    def test_invalid_document_url(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["licenseDocumentUrl"] = "license.pdf"

        errors = check("doctors", doctor)

        assert fields(errors) == ["licenseDocumentUrl"]
        assert errors[0].message == "Invalid license document URL"

    def test_language_list_items_are_strings(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["languages"] = ["English", 3]

        assert fields(check("doctors", doctor)) == ["languages.1"]


class TestAppointments:

    def test_invalid_end_time(self, sample_documents):
        appointment = sample_documents["appointments"][0]
        appointment["endTime"] = "10.30"

        errors = check("appointments", appointment)

        assert fields(errors) == ["endTime"]
        assert errors[0].message == "Invalid end time format (HH:MM)"

    def test_unknown_status(self, sample_documents):
        appointment = sample_documents["appointments"][0]
        appointment["status"] = "no_show"

        assert fields(check("appointments", appointment)) == ["status"]

    def test_video_call_url_key_is_required(self, sample_documents):
        appointment = sample_documents["appointments"][0]
        del appointment["videoCallUrl"]

        errors = check("appointments", appointment)

        assert fields(errors) == ["videoCallUrl"]
        assert errors[0].received is None

    def test_video_appointment(self, sample_documents):
        appointment = sample_documents["appointments"][0]
        appointment["appointmentType"] = "VIDEO"
        appointment["videoCallUrl"] = "https://meet.example.org/room/abc"

        assert check("appointments", appointment) == []


class TestNotifications:

    def test_title_too_long(self, sample_documents):
        notification = sample_documents["notifications"][0]
        notification["title"] = "x" * 101

        assert fields(check("notifications", notification)) == ["title"]

    def test_unknown_type(self, sample_documents):
        notification = sample_documents["notifications"][0]
        notification["type"] = "marketing"

        assert fields(check("notifications", notification)) == ["type"]


class TestAbsentOnlyFields:
    """Fields that may be left out but never stored as null."""

    @pytest.mark.parametrize("key", ["patientName", "doctorName", "doctorSpecialty"])
    def test_appointment_display_fields_reject_null(self, sample_documents, key):
        appointment = sample_documents["appointments"][0]
        appointment[key] = None

        errors = check("appointments", appointment)

        assert fields(errors) == [key]
        assert errors[0].received is None

    @pytest.mark.parametrize("key", ["patientName", "doctorName", "doctorSpecialty"])
    def test_appointment_display_fields_may_be_absent(self, sample_documents, key):
        appointment = sample_documents["appointments"][0]
        del appointment[key]

        assert check("appointments", appointment) == []

    def test_admin_notes_reject_null(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["adminNotes"] = None

        assert fields(check("doctors", doctor)) == ["adminNotes"]

    def test_weekly_schedule_rejects_null(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["weeklySchedule"] = None

        assert fields(check("doctors", doctor)) == ["weeklySchedule"]

    def test_history_entry_optional_text_rejects_null(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["educationHistory"] = [
            {"institution": "Yale", "degree": "MD", "field": "Medicine", "startYear": 2001, "description": None}
        ]
        doctor["experience"] = [
            {"organization": "City Hospital", "position": "Resident", "startYear": 2008, "location": None}
        ]

        errors = check("doctors", doctor)

        assert sorted(fields(errors)) == ["educationHistory.0.description", "experience.0.location"]

    def test_nullable_end_year(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["experience"] = [
            {"organization": "City Hospital", "position": "Resident", "startYear": 2008, "endYear": None}
        ]

        assert check("doctors", doctor) == []


class TestMessages:
    """Violations carry the message written for the field."""

    def test_empty_names(self, sample_documents):
        user = sample_documents["users"][0]
        user["firstName"] = ""
        user["lastName"] = ""

        messages = {e.field: e.message for e in check("users", user)}

        assert messages == {"firstName": "First name is required.", "lastName": "Last name is required."}

    def test_medical_history_too_long(self, sample_documents):
        patient = sample_documents["patients"][0]
        patient["medicalHistory"] = "x" * 4001

        errors = check("patients", patient)

        assert errors[0].message == "Medical history is too long (max 4000 characters)"

    def test_years_of_experience(self, sample_documents):
        doctor = sample_documents["doctors"][0]

        doctor["yearsOfExperience"] = -1
        assert check("doctors", doctor)[0].message == "Years of experience cannot be negative"

        doctor["yearsOfExperience"] = 2.5
        assert check("doctors", doctor)[0].message == "Years of experience must be an integer"

    def test_doctor_bounds(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["consultationFee"] = -5
        doctor["rating"] = 7
        doctor["certificateUrl"] = "certificate"

        messages = {e.field: e.message for e in check("doctors", doctor)}

        assert messages == {
            "consultationFee": "Consultation fee cannot be negative",
            "rating": "Rating cannot exceed 5",
            "certificateUrl": "Invalid certificate URL",
        }

    def test_history_entry_messages(self, sample_documents):
        doctor = sample_documents["doctors"][0]
        doctor["educationHistory"] = [
            {"institution": "", "degree": "MD", "field": "Medicine", "startYear": 1850, "endYear": 2000.5}
        ]

        messages = {e.field: e.message for e in check("doctors", doctor)}

        assert messages == {
            "educationHistory.0.institution": "Institution name is required",
            "educationHistory.0.startYear": "Start year must be after 1900",
            "educationHistory.0.endYear": "End year must be an integer",
        }

    def test_video_call_url(self, sample_documents):
        appointment = sample_documents["appointments"][0]
        appointment["videoCallUrl"] = "meet-room-42"

        assert check("appointments", appointment)[0].message == "Invalid video call URL"

    def test_notification_lengths(self, sample_documents):
        notification = sample_documents["notifications"][0]
        notification["title"] = ""
        notification["message"] = "x" * 501

        messages = {e.field: e.message for e in check("notifications", notification)}

        assert messages == {"title": "Notification title is required.", "message": "Message too long"}

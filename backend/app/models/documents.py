"""Collection document models — the structural contract of every stored collection.

Documents are stored with camelCase keys; models declare snake_case attributes
and validate against the camelCase aliases, so error paths match the stored keys.
Unknown keys are ignored. Scalar types are strict: "30" is not a number.

Optional fields come in two kinds:
    Optional[X] = None   the key may be absent or null
    X = None             the key may be absent, but an explicit null is rejected
"""

import re
from datetime import date
from typing import Annotated, Optional
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictStr,
)
from pydantic.alias_generators import to_camel

from app.models.enums import (
    AppointmentStatus,
    AppointmentType,
    BloodType,
    Gender,
    NotificationType,
    UserType,
    VerificationStatus,
)

ISO_DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T([01]\d|2[0-3]):[0-5]\d(:[0-5]\d(\.\d+)?)?(Z|[+-]\d{2}(:?\d{2})?)$"
)
TIME_OF_DAY_PATTERN = re.compile(r"^\d{2}:\d{2}$")

ISO_DATETIME_MESSAGE = "Invalid ISO 8601 datetime string format (e.g., YYYY-MM-DDTHH:mm:ss.sssZ)"


# ── Field-level checks ──
# Each helper raises ValueError with the message reported for the field.

def _check_iso_datetime(value: str) -> str:
    if not ISO_DATETIME_PATTERN.match(value):
        raise ValueError(ISO_DATETIME_MESSAGE)
    try:
        date.fromisoformat(value[:10])
    except ValueError:
        raise ValueError(ISO_DATETIME_MESSAGE) from None
    return value


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Invalid email format") from None
    return value


def _url(message: str) -> AfterValidator:
    def check(value: str) -> str:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _time_of_day(message: str) -> AfterValidator:
    def check(value: str) -> str:
        if not TIME_OF_DAY_PATTERN.match(value):
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _min_length(length: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) < length:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _max_length(length: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) > length:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _whole_number(message: str) -> AfterValidator:
    def check(value: float) -> float:
        if not float(value).is_integer():
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _at_least(bound: float, message: str) -> AfterValidator:
    def check(value: float) -> float:
        if value < bound:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _at_most(bound: float, message: str) -> AfterValidator:
    def check(value: float) -> float:
        if value > bound:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _year_at_most(years_ahead: int, message: str) -> AfterValidator:
    """Upper bound relative to the current year, evaluated at validation time."""

    def check(value: float) -> float:
        if value > date.today().year + years_ahead:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _normalize_gender(value):
    """Map free-text gender input onto Gender; null or empty becomes OTHER."""
    if value is None:
        return Gender.OTHER
    if not isinstance(value, str):
        return value
    normalized = value.strip().lower()
    if normalized in ("male", "m"):
        return Gender.MALE
    if normalized in ("female", "f", "fem"):
        return Gender.FEMALE
    return Gender.OTHER


def _required(message: str):
    """Non-empty string reporting message when empty."""
    return Annotated[StrictStr, _min_length(1, message)]


def _text(length: int, message: str):
    """String of at most length characters."""
    return Annotated[StrictStr, _max_length(length, message)]


# Whole numbers are checked as numbers first so 2000.5 reports the integer message
IsoDateTime = Annotated[StrictStr, AfterValidator(_check_iso_datetime)]
Email = Annotated[StrictStr, AfterValidator(_check_email)]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
StartTime = Annotated[StrictStr, _time_of_day("Invalid start time format (HH:MM)")]
EndTime = Annotated[StrictStr, _time_of_day("Invalid end time format (HH:MM)")]
StartYear = Annotated[
    StrictFloat,
    _whole_number("Start year must be an integer"),
    _at_least(1900, "Start year must be after 1900"),
    _year_at_most(0, "Start year cannot be in the future"),
]
EndYear = Annotated[
    StrictFloat,
    _whole_number("End year must be an integer"),
    _at_least(1900, "End year must be after 1900"),
    _year_at_most(10, "End year cannot be too far in the future"),
]
NormalizedGender = Annotated[Gender, BeforeValidator(_normalize_gender)]
LinkedUserId = _required("User ID linkage is required")


class DocumentModel(BaseModel):
    """Base for stored documents: camelCase keys, extra keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


# ── users ──

class UserProfile(DocumentModel):
    """A user account profile. The document id is the auth UID."""

    email: Optional[Email]
    phone: Optional[StrictStr] = None
    first_name: _required("First name is required.")
    last_name: _required("Last name is required.")
    user_type: UserType
    is_active: StrictBool = True
    email_verified: StrictBool = False
    phone_verified: StrictBool = False
    phone_verification_code: Optional[StrictStr] = None
    phone_verification_sent_at: Optional[IsoDateTime] = None
    email_verification_token: Optional[StrictStr] = None
    email_verification_sent_at: Optional[IsoDateTime] = None
    created_at: IsoDateTime
    updated_at: IsoDateTime
    profile_picture_url: Optional[StrictStr] = None


# ── patients ──

class PatientProfile(DocumentModel):
    """Patient details linked to a user. Contains PHI."""

    user_id: LinkedUserId
    id: StrictStr = None
    date_of_birth: Optional[IsoDateTime] = None
    gender: NormalizedGender = Gender.OTHER
    blood_type: Optional[BloodType] = None
    medical_history: Optional[_text(4000, "Medical history is too long (max 4000 characters)")]
    address: Optional[_text(500, "Address is too long")] = None


# ── doctors ──

class EducationEntry(DocumentModel):
    institution: _required("Institution name is required")
    degree: _required("Degree is required")
    field: _required("Field of study is required")
    start_year: StartYear
    end_year: Optional[EndYear] = None
    is_ongoing: StrictBool = False
    description: _text(500, "Description is too long (max 500 characters)") = None


class ExperienceEntry(DocumentModel):
    organization: _required("Organization name is required")
    position: _required("Position title is required")
    location: StrictStr = None
    start_year: StartYear
    end_year: Optional[EndYear] = None
    is_ongoing: StrictBool = False
    description: _text(1000, "Description is too long (max 1000 characters)") = None


class TimeSlot(DocumentModel):
    start_time: StartTime
    end_time: EndTime
    is_available: StrictBool = True


class WeeklySchedule(DocumentModel):
    monday: list[TimeSlot] = Field(default_factory=list)
    tuesday: list[TimeSlot] = Field(default_factory=list)
    wednesday: list[TimeSlot] = Field(default_factory=list)
    thursday: list[TimeSlot] = Field(default_factory=list)
    friday: list[TimeSlot] = Field(default_factory=list)
    saturday: list[TimeSlot] = Field(default_factory=list)
    sunday: list[TimeSlot] = Field(default_factory=list)


class DoctorProfile(DocumentModel):
    """Doctor profile, credentials and recurring availability."""

    user_id: LinkedUserId
    specialty: _required("Specialty is required") = "General Practice"
    license_number: _required("License number is required")
    years_of_experience: Annotated[
        StrictFloat,
        _whole_number("Years of experience must be an integer"),
        _at_least(0, "Years of experience cannot be negative"),
    ] = 0
    bio: Optional[_text(2000, "Biography is too long (max 2000 characters)")]
    verification_status: VerificationStatus = VerificationStatus.PENDING
    verification_notes: Optional[StrictStr]
    admin_notes: StrictStr = None
    location: Optional[StrictStr]
    education: Optional[_text(2000, "Education section is too long")]
    services_offered: Optional[_text(2000, "Services section is too long")]
    languages: Optional[list[StrictStr]]
    consultation_fee: Optional[Annotated[StrictFloat, _at_least(0, "Consultation fee cannot be negative")]]
    profile_picture_url: Optional[Annotated[StrictStr, _url("Invalid profile picture URL")]]
    profile_picture_path: Optional[StrictStr] = None
    license_document_url: Optional[Annotated[StrictStr, _url("Invalid license document URL")]]
    license_document_path: Optional[StrictStr] = None
    certificate_url: Optional[Annotated[StrictStr, _url("Invalid certificate URL")]]
    certificate_path: Optional[StrictStr] = None
    education_history: list[EducationEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    weekly_schedule: WeeklySchedule = None
    timezone: StrictStr = "UTC"
    blocked_dates: list[IsoDateTime] = Field(default_factory=list)
    created_at: IsoDateTime
    updated_at: IsoDateTime
    rating: Annotated[
        StrictFloat,
        _at_least(0, "Rating cannot be negative"),
        _at_most(5, "Rating cannot exceed 5"),
    ] = 0
    review_count: Annotated[
        StrictFloat,
        _whole_number("Review count must be an integer"),
        _at_least(0, "Review count cannot be negative"),
    ] = 0


# ── appointments ──

class Appointment(DocumentModel):
    """A booked consultation between a patient and a doctor. Contains PHI."""

    patient_id: NonEmptyStr
    patient_name: StrictStr = None
    doctor_id: NonEmptyStr
    doctor_name: StrictStr = None
    doctor_specialty: StrictStr = None
    appointment_date: IsoDateTime
    start_time: StartTime
    end_time: EndTime
    status: AppointmentStatus
    reason: Optional[_text(1000, "Reason exceeds maximum length")] = None
    notes: Optional[_text(2000, "Notes exceed maximum length")] = None
    created_at: IsoDateTime
    updated_at: IsoDateTime
    appointment_type: AppointmentType = AppointmentType.IN_PERSON
    video_call_url: Optional[Annotated[StrictStr, _url("Invalid video call URL")]]


# ── notifications ──

class Notification(DocumentModel):
    user_id: NonEmptyStr
    title: Annotated[
        StrictStr,
        _min_length(1, "Notification title is required."),
        _max_length(100, "Title too long"),
    ]
    message: Annotated[
        StrictStr,
        _min_length(1, "Notification message is required."),
        _max_length(500, "Message too long"),
    ]
    is_read: StrictBool = False
    created_at: IsoDateTime
    type: NotificationType = NotificationType.OTHER
    related_id: Optional[StrictStr] = None

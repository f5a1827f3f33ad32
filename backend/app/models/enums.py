"""Enumerations shared by the collection document models."""

from enum import Enum


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"  # Includes prefer not to say / non-binary


class BloodType(str, Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


class UserType(str, Enum):
    """Roles a user account can hold."""

    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"


class VerificationStatus(str, Enum):
    """Verification state of a doctor's credentials."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    COMPLETED = "completed"
    RESCHEDULED = "rescheduled"


class AppointmentType(str, Enum):
    IN_PERSON = "IN_PERSON"
    VIDEO = "VIDEO"


class NotificationType(str, Enum):
    APPOINTMENT_REQUEST = "appointment_request"
    APPOINTMENT_CONFIRMED = "appointment_confirmed"
    APPOINTMENT_CANCELED = "appointment_canceled"
    APPOINTMENT_RESCHEDULED = "appointment_rescheduled"
    APPOINTMENT_REMINDER = "appointment_reminder"
    NEW_MESSAGE = "new_message"
    APPOINTMENT_COMPLETED = "appointment_completed"
    VERIFICATION_STATUS_CHANGE = "verification_status_change"
    ACCOUNT_STATUS_CHANGE = "account_status_change"
    APPOINTMENT_BOOKED = "appointment_booked"
    SYSTEM_ALERT = "system_alert"
    SYSTEM = "system"
    OTHER = "other"
    PROFILE_UPDATE = "profile_update"
    APPOINTMENT_CREATED = "appointment_created"
    APPOINTMENT_CANCELLED = "appointment_cancelled"
    MESSAGE = "message"

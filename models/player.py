"""
Player registry data models for the league eligibility system.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .enums import MedicalStatus, RegistrationStatus, VerificationStatus
from .geography import GeographicLocation


@dataclass
class PlayerRecord:
    """Registry record for a player, joined with its ward/sub-county/county."""
    upid: str
    first_name: str
    last_name: str
    dob: Optional[date] = None
    sex: Optional[str] = None
    nationality: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = 'ACTIVE'
    registration_status: Optional[RegistrationStatus] = RegistrationStatus.DRAFT
    registration_status_raw: Optional[str] = None
    is_active: bool = True
    medical_clearance_status: Optional[MedicalStatus] = MedicalStatus.PENDING
    medical_clearance_date: Optional[date] = None
    medical_expiry_date: Optional[date] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    ward_id: Optional[str] = None
    ward_name: Optional[str] = None
    sub_county_id: Optional[str] = None
    sub_county_name: Optional[str] = None
    county_id: Optional[str] = None
    county_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.registration_status_raw is None and self.registration_status is not None:
            self.registration_status_raw = self.registration_status.value

    @property
    def registration_status_text(self) -> str:
        """Registration status as stored, including values that are not recognized."""
        if self.registration_status is not None:
            return self.registration_status.value
        return self.registration_status_raw or ''

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def location(self) -> GeographicLocation:
        return GeographicLocation(
            ward_id=self.ward_id,
            ward_name=self.ward_name,
            sub_county_id=self.sub_county_id,
            sub_county_name=self.sub_county_name,
            county_id=self.county_id,
            county_name=self.county_name
        )


@dataclass
class PlayerDocument:
    """An uploaded identity, medical or other document."""
    upid: str
    document_type: str
    verification_status: VerificationStatus = VerificationStatus.PENDING
    document_path: Optional[str] = None
    id: Optional[int] = None
    uploaded_at: Optional[datetime] = None


@dataclass
class PlayerConsent:
    """A named consent grant (or refusal) recorded for a player."""
    upid: str
    consent_type: str
    is_consented: bool
    consent_version: Optional[str] = None
    id: Optional[int] = None
    consent_timestamp: Optional[datetime] = None

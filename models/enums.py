"""
Enumerations shared by the registry records, rules and eligibility results.

Stored values are plain text; ``parse`` is the single place where raw
database values are decoded into members. Unrecognized values decode to
``None`` so callers can decide how to treat them.
"""

from enum import Enum
from typing import Optional


class _ParsableEnum(str, Enum):

    @classmethod
    def parse(cls, value) -> Optional['_ParsableEnum']:
        """Decode a stored value, returning None when it is not a known member."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


class RegistrationStatus(_ParsableEnum):
    DRAFT = 'DRAFT'
    SUBMITTED = 'SUBMITTED'
    IN_REVIEW = 'IN_REVIEW'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    SUSPENDED = 'SUSPENDED'
    INCOMPLETE = 'INCOMPLETE'


class MedicalStatus(_ParsableEnum):
    VALID = 'VALID'
    EXPIRED = 'EXPIRED'
    PENDING = 'PENDING'
    REJECTED = 'REJECTED'


class VerificationStatus(_ParsableEnum):
    PENDING = 'PENDING'
    VERIFIED = 'VERIFIED'
    REJECTED = 'REJECTED'


class DocumentType(_ParsableEnum):
    NATIONAL_ID = 'NATIONAL_ID'
    PASSPORT = 'PASSPORT'
    BIRTH_CERTIFICATE = 'BIRTH_CERTIFICATE'
    GUARDIAN_ID = 'GUARDIAN_ID'
    SELFIE = 'SELFIE'
    MEDICAL_CERTIFICATE = 'MEDICAL_CERTIFICATE'
    OTHER = 'OTHER'


class ConsentType(_ParsableEnum):
    TERMS_CONDITIONS = 'TERMS_CONDITIONS'
    DATA_PROCESSING = 'DATA_PROCESSING'
    MEDIA_CONSENT = 'MEDIA_CONSENT'
    GUARDIAN_CONSENT = 'GUARDIAN_CONSENT'


class RuleType(_ParsableEnum):
    AGE_RANGE = 'AGE_RANGE'
    GEOGRAPHIC = 'GEOGRAPHIC'
    PLAYER_STATUS = 'PLAYER_STATUS'
    DOCUMENT_REQUIREMENT = 'DOCUMENT_REQUIREMENT'
    CONSENT_REQUIREMENT = 'CONSENT_REQUIREMENT'
    GENDER_RESTRICTION = 'GENDER_RESTRICTION'
    MEDICAL_REQUIREMENT = 'MEDICAL_REQUIREMENT'


class GeographicScope(_ParsableEnum):
    WARD = 'WARD'
    SUBCOUNTY = 'SUBCOUNTY'
    COUNTY = 'COUNTY'

    @property
    def label(self) -> str:
        """Human-readable name used in violation messages."""
        return {'WARD': 'ward', 'SUBCOUNTY': 'sub-county', 'COUNTY': 'county'}[self.value]


class Severity(_ParsableEnum):
    CRITICAL = 'CRITICAL'
    HIGH = 'HIGH'
    MEDIUM = 'MEDIUM'
    LOW = 'LOW'

    @property
    def rank(self) -> int:
        """Blocking weight, higher is more severe."""
        return {'CRITICAL': 4, 'HIGH': 3, 'MEDIUM': 2, 'LOW': 1}[self.value]

    @property
    def blocks_eligibility(self) -> bool:
        return self in (Severity.CRITICAL, Severity.HIGH)


class OverallStatus(_ParsableEnum):
    ELIGIBLE = 'ELIGIBLE'
    INELIGIBLE = 'INELIGIBLE'
    PENDING_REVIEW = 'PENDING_REVIEW'
    NEEDS_ACTION = 'NEEDS_ACTION'

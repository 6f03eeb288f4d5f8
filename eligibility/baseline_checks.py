"""
Baseline checks run for every eligibility evaluation, independent of the
tournament's configured rules.

Each check returns a CheckOutcome carrying at most one violation or one warning.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from models.enums import (
    ConsentType, DocumentType, MedicalStatus, RegistrationStatus, Severity, VerificationStatus
)
from models.player import PlayerConsent, PlayerDocument, PlayerRecord
from models.result import EligibilityViolation, EligibilityWarning

logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_DOCUMENTS = (DocumentType.NATIONAL_ID.value, DocumentType.SELFIE.value)
DEFAULT_REQUIRED_CONSENTS = (ConsentType.TERMS_CONDITIONS.value, ConsentType.DATA_PROCESSING.value)


@dataclass
class CheckOutcome:
    violation: Optional[EligibilityViolation] = None
    warning: Optional[EligibilityWarning] = None


def verified_document_types(documents: Iterable[PlayerDocument]) -> List[str]:
    return [d.document_type for d in documents if d.verification_status == VerificationStatus.VERIFIED]


def granted_consent_types(consents: Iterable[PlayerConsent]) -> List[str]:
    return [c.consent_type for c in consents if c.is_consented]


def is_medical_expired(player: PlayerRecord, as_of: date) -> bool:
    """An expiry date on or before the evaluation date counts as expired."""
    return player.medical_expiry_date is not None and player.medical_expiry_date <= as_of


def _registration_violation(rule_id: str, rule_name: str, reason: str, severity: Severity,
                            can_override: bool, suggested_action: str) -> CheckOutcome:
    return CheckOutcome(violation=EligibilityViolation(
        rule_id=rule_id,
        rule_name=rule_name,
        rule_type='REGISTRATION_STATUS',
        reason=reason,
        severity=severity,
        can_override=can_override,
        suggested_action=suggested_action
    ))


def check_registration_status(player: PlayerRecord) -> CheckOutcome:
    """Check that the player's registration status allows tournament participation."""
    status = player.registration_status

    if status == RegistrationStatus.APPROVED:
        return CheckOutcome()

    if status == RegistrationStatus.IN_REVIEW:
        return CheckOutcome(warning=EligibilityWarning(
            rule_id='REG_STATUS_001',
            rule_name='Registration Under Review',
            rule_type='REGISTRATION_STATUS',
            message='Registration is still under review. Participation may be provisional pending approval.',
            suggested_action='Contact administration for review status'
        ))

    if status in (RegistrationStatus.DRAFT, RegistrationStatus.SUBMITTED):
        return _registration_violation(
            'REG_STATUS_002', 'Registration Incomplete',
            f"Registration status is {status.value}. Must be approved for tournament participation.",
            Severity.HIGH, False, 'Complete registration process and wait for approval'
        )

    if status == RegistrationStatus.REJECTED:
        return _registration_violation(
            'REG_STATUS_003', 'Registration Rejected',
            'Registration has been rejected. Cannot participate until issues are resolved.',
            Severity.CRITICAL, False, 'Review rejection reasons and resubmit registration'
        )

    if status == RegistrationStatus.SUSPENDED:
        return _registration_violation(
            'REG_STATUS_004', 'Registration Suspended',
            'Player registration is suspended. Cannot participate in tournaments.',
            Severity.CRITICAL, True, 'Contact administration regarding suspension'
        )

    if status == RegistrationStatus.INCOMPLETE:
        return _registration_violation(
            'REG_STATUS_005', 'Registration Incomplete',
            'Missing required registration information or documents.',
            Severity.HIGH, False, 'Complete all required registration steps'
        )

    logger.warning(f"Player {player.upid} has unrecognized registration status {player.registration_status_raw!r}")
    return _registration_violation(
        'REG_STATUS_006', 'Unknown Registration Status',
        f"Unknown registration status: {player.registration_status_raw}",
        Severity.CRITICAL, False, 'Contact system administrator'
    )


def check_document_verification(documents: Sequence[PlayerDocument],
                                required_documents: Sequence[str] = DEFAULT_REQUIRED_DOCUMENTS) -> CheckOutcome:
    """
    Check that the required documents are uploaded, verified and not rejected.
    Missing uploads take priority over pending verification, which takes priority over rejections.
    """
    uploaded = {d.document_type for d in documents}
    verified = set(verified_document_types(documents))
    rejected = [d.document_type for d in documents if d.verification_status == VerificationStatus.REJECTED]

    missing = [doc for doc in required_documents if doc not in uploaded]
    if missing:
        return CheckOutcome(violation=EligibilityViolation(
            rule_id='DOC_001',
            rule_name='Missing Required Documents',
            rule_type='DOCUMENT_VERIFICATION',
            reason=f"Missing required documents: {', '.join(missing)}",
            severity=Severity.HIGH,
            can_override=False,
            suggested_action='Upload all required documents'
        ))

    unverified = [doc for doc in required_documents if doc not in verified]
    if unverified:
        return CheckOutcome(warning=EligibilityWarning(
            rule_id='DOC_002',
            rule_name='Documents Pending Verification',
            rule_type='DOCUMENT_VERIFICATION',
            message=f"Documents pending verification: {', '.join(unverified)}",
            suggested_action='Wait for document verification or contact administration'
        ))

    if rejected:
        return CheckOutcome(violation=EligibilityViolation(
            rule_id='DOC_003',
            rule_name='Documents Rejected',
            rule_type='DOCUMENT_VERIFICATION',
            reason=f"Rejected documents need to be re-uploaded: {', '.join(rejected)}",
            severity=Severity.HIGH,
            can_override=False,
            suggested_action='Re-upload rejected documents with correct information'
        ))

    return CheckOutcome()


def check_consent_verification(consents: Sequence[PlayerConsent],
                               required_consents: Sequence[str] = DEFAULT_REQUIRED_CONSENTS) -> CheckOutcome:
    """Check that every required consent has been granted."""
    granted = set(granted_consent_types(consents))
    missing = [consent for consent in required_consents if consent not in granted]

    if missing:
        return CheckOutcome(violation=EligibilityViolation(
            rule_id='CONSENT_001',
            rule_name='Missing Required Consents',
            rule_type='CONSENT_VERIFICATION',
            reason=f"Missing required consents: {', '.join(missing)}",
            severity=Severity.HIGH,
            can_override=False,
            suggested_action='Grant all required consents'
        ))

    return CheckOutcome()


def check_medical_clearance(player: PlayerRecord, as_of: date) -> CheckOutcome:
    """Check the player's medical clearance status and expiry."""
    status = player.medical_clearance_status

    if status == MedicalStatus.PENDING:
        return CheckOutcome(warning=EligibilityWarning(
            rule_id='MEDICAL_001',
            rule_name='Medical Clearance Pending',
            rule_type='MEDICAL_CLEARANCE',
            message='Medical clearance is still pending review',
            suggested_action='Wait for medical clearance approval or contact medical officer'
        ))

    if status == MedicalStatus.REJECTED:
        return CheckOutcome(violation=EligibilityViolation(
            rule_id='MEDICAL_002',
            rule_name='Medical Clearance Rejected',
            rule_type='MEDICAL_CLEARANCE',
            reason='Medical clearance has been rejected',
            severity=Severity.HIGH,
            can_override=True,
            suggested_action='Consult medical officer and resubmit medical documents'
        ))

    if status == MedicalStatus.EXPIRED or is_medical_expired(player, as_of):
        return CheckOutcome(violation=EligibilityViolation(
            rule_id='MEDICAL_003',
            rule_name='Medical Clearance Expired',
            rule_type='MEDICAL_CLEARANCE',
            reason='Medical clearance has expired',
            severity=Severity.HIGH,
            can_override=False,
            suggested_action='Renew medical clearance'
        ))

    return CheckOutcome()

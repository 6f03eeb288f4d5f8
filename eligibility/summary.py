"""
Summary aggregation for eligibility results.
"""

from datetime import date
from typing import List, Sequence

from models.enums import MedicalStatus, OverallStatus, RegistrationStatus, RuleType, Severity
from models.player import PlayerConsent, PlayerDocument, PlayerRecord
from models.result import EligibilitySummary, EligibilityViolation, EligibilityWarning
from .baseline_checks import (
    DEFAULT_REQUIRED_CONSENTS, DEFAULT_REQUIRED_DOCUMENTS, granted_consent_types,
    is_medical_expired, verified_document_types
)

READY_STEP = 'Ready for tournament participation'


def determine_overall_status(violations: Sequence[EligibilityViolation],
                             warnings: Sequence[EligibilityWarning]) -> OverallStatus:
    """First match wins: any CRITICAL, then any HIGH, then any warning."""
    if any(v.severity == Severity.CRITICAL for v in violations):
        return OverallStatus.INELIGIBLE
    if any(v.severity == Severity.HIGH for v in violations):
        return OverallStatus.NEEDS_ACTION
    if warnings:
        return OverallStatus.PENDING_REVIEW
    return OverallStatus.ELIGIBLE


def is_eligible(violations: Sequence[EligibilityViolation]) -> bool:
    return not any(v.severity.blocks_eligibility for v in violations)


def build_summary(player: PlayerRecord, documents: Sequence[PlayerDocument], consents: Sequence[PlayerConsent],
                  violations: Sequence[EligibilityViolation], warnings: Sequence[EligibilityWarning],
                  as_of: date, required_documents: Sequence[str] = DEFAULT_REQUIRED_DOCUMENTS,
                  required_consents: Sequence[str] = DEFAULT_REQUIRED_CONSENTS) -> EligibilitySummary:
    """
    Aggregate a player's findings into a summary.

    The document, consent and medical flags are recomputed from the records
    rather than read off the findings.
    """
    verified = set(verified_document_types(documents))
    documents_verified = all(doc in verified for doc in required_documents)

    granted = set(granted_consent_types(consents))
    consents_granted = all(consent in granted for consent in required_consents)

    medical_clearance_valid = (
        player.medical_clearance_status == MedicalStatus.VALID and not is_medical_expired(player, as_of)
    )

    age_eligible = not any(v.rule_type == RuleType.AGE_RANGE.value for v in violations)
    geographic_eligible = not any(v.rule_type == RuleType.GEOGRAPHIC.value for v in violations)

    next_steps: List[str] = []
    if not documents_verified:
        next_steps.append('Complete document verification')
    if not consents_granted:
        next_steps.append('Grant required consents')
    if not medical_clearance_valid:
        next_steps.append('Obtain valid medical clearance')
    if player.registration_status != RegistrationStatus.APPROVED:
        next_steps.append('Complete registration approval')

    for violation in violations:
        if violation.suggested_action and violation.suggested_action not in next_steps:
            next_steps.append(violation.suggested_action)

    if not next_steps:
        next_steps.append(READY_STEP)

    return EligibilitySummary(
        overall_status=determine_overall_status(violations, warnings),
        registration_status=player.registration_status_text,
        documents_verified=documents_verified,
        consents_granted=consents_granted,
        medical_clearance_valid=medical_clearance_valid,
        age_eligible=age_eligible,
        geographic_eligible=geographic_eligible,
        next_steps=next_steps
    )

"""
Eligibility check result models.

``to_dict`` renders each result in the camelCase shape returned by the API
layer; every value is plain data.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import OverallStatus, Severity


@dataclass
class EligibilityViolation:
    """A finding that blocks or conditionally blocks eligibility."""
    rule_id: str
    rule_name: str
    rule_type: str
    reason: str
    severity: Severity
    can_override: bool
    suggested_action: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'ruleId': self.rule_id,
            'ruleName': self.rule_name,
            'ruleType': self.rule_type,
            'reason': self.reason,
            'severity': self.severity.value,
            'canOverride': self.can_override
        }
        if self.suggested_action is not None:
            data['suggestedAction'] = self.suggested_action
        return data


@dataclass
class EligibilityWarning:
    """A soft finding that is surfaced but never blocks eligibility."""
    rule_id: str
    rule_name: str
    rule_type: str
    message: str
    suggested_action: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'ruleId': self.rule_id,
            'ruleName': self.rule_name,
            'ruleType': self.rule_type,
            'message': self.message
        }
        if self.suggested_action is not None:
            data['suggestedAction'] = self.suggested_action
        return data


@dataclass
class EligibilitySummary:
    """Aggregated status for display and decision support."""
    overall_status: OverallStatus
    registration_status: str
    documents_verified: bool
    consents_granted: bool
    medical_clearance_valid: bool
    age_eligible: bool
    geographic_eligible: bool
    next_steps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'overallStatus': self.overall_status.value,
            'registrationStatus': self.registration_status,
            'documentsVerified': self.documents_verified,
            'consentsGranted': self.consents_granted,
            'medicalClearanceValid': self.medical_clearance_valid,
            'ageEligible': self.age_eligible,
            'geographicEligible': self.geographic_eligible,
            'nextSteps': list(self.next_steps)
        }


@dataclass
class EligibilityCheckResult:
    """Verdict of an enhanced eligibility check for one player and tournament."""
    is_eligible: bool
    violations: List[EligibilityViolation]
    warnings: List[EligibilityWarning]
    summary: EligibilitySummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isEligible': self.is_eligible,
            'violations': [v.to_dict() for v in self.violations],
            'warnings': [w.to_dict() for w in self.warnings],
            'summary': self.summary.to_dict()
        }


@dataclass
class LegacyViolation:
    """Violation shape returned by the legacy eligibility check."""
    rule_id: str
    rule_name: str
    rule_type: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ruleId': self.rule_id,
            'ruleName': self.rule_name,
            'ruleType': self.rule_type,
            'reason': self.reason
        }


@dataclass
class LegacyEligibilityResult:
    """Result of the legacy eligibility check: a flag and a list of violations."""
    is_eligible: bool
    violations: List[LegacyViolation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isEligible': self.is_eligible,
            'violations': [v.to_dict() for v in self.violations]
        }

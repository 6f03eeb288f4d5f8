"""
Models package for the league eligibility system.

This package contains all data models and dataclasses used throughout the system.
"""

from .enums import (
    ConsentType, DocumentType, GeographicScope, MedicalStatus, OverallStatus,
    RegistrationStatus, RuleType, Severity, VerificationStatus
)
from .geography import County, SubCounty, Ward, GeographicLocation
from .player import PlayerRecord, PlayerDocument, PlayerConsent
from .rules import EligibilityRule, RuleConfigError, parse_rule_config
from .result import (
    EligibilityCheckResult, EligibilitySummary, EligibilityViolation, EligibilityWarning,
    LegacyEligibilityResult, LegacyViolation
)

__all__ = [
    'ConsentType', 'DocumentType', 'GeographicScope', 'MedicalStatus', 'OverallStatus',
    'RegistrationStatus', 'RuleType', 'Severity', 'VerificationStatus',
    'County', 'SubCounty', 'Ward', 'GeographicLocation',
    'PlayerRecord', 'PlayerDocument', 'PlayerConsent',
    'EligibilityRule', 'RuleConfigError', 'parse_rule_config',
    'EligibilityCheckResult', 'EligibilitySummary', 'EligibilityViolation', 'EligibilityWarning',
    'LegacyEligibilityResult', 'LegacyViolation'
]

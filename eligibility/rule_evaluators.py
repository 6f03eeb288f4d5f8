"""
Evaluators for tournament-configured eligibility rules.

Every evaluator is a pure function of the rule, the player snapshot, the
player's documents and consents and the evaluation date, and returns at
most one violation.
"""

import logging
from datetime import date
from typing import Callable, Dict, Optional, Sequence

from models.enums import MedicalStatus, RuleType, Severity
from models.player import PlayerConsent, PlayerDocument, PlayerRecord
from models.result import EligibilityViolation, EligibilityWarning
from models.rules import EligibilityRule
from utils.date_utils import DateUtils
from .baseline_checks import CheckOutcome, granted_consent_types, verified_document_types

logger = logging.getLogger(__name__)

RuleEvaluator = Callable[
    [EligibilityRule, PlayerRecord, Sequence[PlayerDocument], Sequence[PlayerConsent], date],
    Optional[EligibilityViolation]
]


def _violation(rule: EligibilityRule, reason: str, severity: Severity, can_override: bool,
               suggested_action: str) -> EligibilityViolation:
    return EligibilityViolation(
        rule_id=rule.id,
        rule_name=rule.name,
        rule_type=rule.parsed_type.value,
        reason=reason,
        severity=severity,
        can_override=can_override,
        suggested_action=suggested_action
    )


def evaluate_age_range(rule, player, documents, consents, as_of) -> Optional[EligibilityViolation]:
    config = rule.config

    if player.dob is None:
        return _violation(rule, 'Date of birth is not set', Severity.HIGH, False,
                          'Update profile with correct date of birth')

    age = DateUtils.age_in_years(player.dob, config.age_calculation_date)

    if config.min_age is not None and age < config.min_age:
        return _violation(rule, f"Player is {age} years old, minimum age is {config.min_age}",
                          Severity.HIGH, True,
                          'Wait until minimum age is reached or apply for age exception')

    if config.max_age is not None and age > config.max_age:
        return _violation(rule, f"Player is {age} years old, maximum age is {config.max_age}",
                          Severity.HIGH, True,
                          'Apply for age exception if allowed by tournament rules')

    return None


def evaluate_geographic(rule, player, documents, consents, as_of) -> Optional[EligibilityViolation]:
    config = rule.config
    scope_name = config.scope.label
    area_id = player.location.id_for_scope(config.scope)

    if not area_id:
        return _violation(rule, f"Player {scope_name} is not set", Severity.HIGH, False,
                          f"Update profile with correct {scope_name} information")

    if area_id not in config.allowed_ids:
        return _violation(rule, f"Player's {scope_name} is not eligible for this tournament",
                          Severity.HIGH, True, 'Apply for geographic exception if allowed')

    return None


def evaluate_player_status(rule, player, documents, consents, as_of) -> Optional[EligibilityViolation]:
    allowed = rule.config.allowed_statuses
    if player.status not in allowed:
        return _violation(rule,
                          f"Player status is {player.status}, allowed statuses are: {', '.join(allowed)}",
                          Severity.MEDIUM, True, 'Contact administration to update player status')
    return None


def evaluate_document_requirement(rule, player, documents, consents, as_of) -> Optional[EligibilityViolation]:
    verified = set(verified_document_types(documents))
    missing = [doc for doc in rule.config.required_documents if doc not in verified]
    if missing:
        return _violation(rule, f"Missing required documents: {', '.join(missing)}",
                          Severity.HIGH, False, 'Upload and verify all required documents')
    return None


def evaluate_consent_requirement(rule, player, documents, consents, as_of) -> Optional[EligibilityViolation]:
    granted = set(granted_consent_types(consents))
    missing = [consent for consent in rule.config.required_consents if consent not in granted]
    if missing:
        return _violation(rule, f"Missing required consents: {', '.join(missing)}",
                          Severity.HIGH, False, 'Grant all required consents')
    return None


def evaluate_gender_restriction(rule, player, documents, consents, as_of) -> Optional[EligibilityViolation]:
    allowed = rule.config.allowed_genders
    if player.sex not in allowed:
        return _violation(rule, f"Tournament is restricted to {' and '.join(allowed)} players only",
                          Severity.HIGH, False, 'Register for appropriate gender category')
    return None


def evaluate_medical_requirement(rule, player, documents, consents, as_of) -> Optional[EligibilityViolation]:
    config = rule.config

    if not config.require_valid_medical:
        return None

    if player.medical_clearance_status != MedicalStatus.VALID:
        return _violation(rule, 'Valid medical clearance is required for this tournament',
                          Severity.HIGH, False, 'Obtain valid medical clearance')

    # Only reached with a VALID clearance
    if config.max_medical_age and player.medical_clearance_date is not None:
        days_since = DateUtils.days_between(player.medical_clearance_date, as_of)
        if days_since > config.max_medical_age:
            return _violation(
                rule,
                f"Medical clearance is {days_since} days old, maximum allowed is {config.max_medical_age} days",
                Severity.MEDIUM, True, 'Renew medical clearance'
            )

    return None


RULE_EVALUATORS: Dict[RuleType, RuleEvaluator] = {
    RuleType.AGE_RANGE: evaluate_age_range,
    RuleType.GEOGRAPHIC: evaluate_geographic,
    RuleType.PLAYER_STATUS: evaluate_player_status,
    RuleType.DOCUMENT_REQUIREMENT: evaluate_document_requirement,
    RuleType.CONSENT_REQUIREMENT: evaluate_consent_requirement,
    RuleType.GENDER_RESTRICTION: evaluate_gender_restriction,
    RuleType.MEDICAL_REQUIREMENT: evaluate_medical_requirement,
}


def evaluate_rule(rule: EligibilityRule, player: PlayerRecord, documents: Sequence[PlayerDocument],
                  consents: Sequence[PlayerConsent], as_of: date) -> CheckOutcome:
    """
    Dispatch a rule to the evaluator for its type.

    Unknown rule types are skipped. A known rule whose stored config could not be
    parsed is skipped too, but reported as a warning so it does not go unnoticed.
    """
    rule_type = rule.parsed_type
    evaluator = RULE_EVALUATORS.get(rule_type) if rule_type else None
    if evaluator is None:
        logger.debug(f"No evaluator for rule {rule.id} of type {rule.rule_type}, skipping")
        return CheckOutcome()

    if rule.config is None:
        return CheckOutcome(warning=EligibilityWarning(
            rule_id=rule.id,
            rule_name=rule.name,
            rule_type=rule_type.value,
            message='Rule configuration is invalid and was not evaluated',
            suggested_action='Ask the tournament administrator to correct the rule configuration'
        ))

    logger.debug(f"Evaluating {rule.rule_type} rule {rule.id} for player {player.upid}")
    return CheckOutcome(violation=evaluator(rule, player, documents, consents, as_of))

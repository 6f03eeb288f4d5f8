"""
Legacy eligibility evaluation, kept for callers that have not moved to the
enhanced check. Only age, geographic and player-status rules are evaluated
and every violation blocks eligibility.
"""

from datetime import date
from typing import Sequence

from models.enums import RuleType
from models.player import PlayerRecord
from models.result import LegacyEligibilityResult, LegacyViolation
from models.rules import EligibilityRule
from .rule_evaluators import RULE_EVALUATORS

LEGACY_RULE_TYPES = (RuleType.AGE_RANGE, RuleType.GEOGRAPHIC, RuleType.PLAYER_STATUS)


def _legacy_reason(rule: EligibilityRule, player: PlayerRecord, reason: str) -> str:
    """The legacy check words two of its findings differently from the enhanced check."""
    if rule.parsed_type == RuleType.AGE_RANGE and player.dob is None:
        return 'Player date of birth is not set'
    if rule.parsed_type == RuleType.GEOGRAPHIC and player.location.id_for_scope(rule.config.scope):
        return f"Player's {rule.config.scope.label} is not in the allowed list"
    return reason


def legacy_not_found_result() -> LegacyEligibilityResult:
    return LegacyEligibilityResult(
        is_eligible=False,
        violations=[LegacyViolation(
            rule_id='SYSTEM',
            rule_name='Player Not Found',
            rule_type='SYSTEM',
            reason='Player does not exist in the registry'
        )]
    )


def evaluate_legacy(player: PlayerRecord, rules: Sequence[EligibilityRule], as_of: date) -> LegacyEligibilityResult:
    violations = []
    for rule in rules:
        if rule.parsed_type not in LEGACY_RULE_TYPES or rule.config is None:
            continue
        violation = RULE_EVALUATORS[rule.parsed_type](rule, player, (), (), as_of)
        if violation:
            violations.append(LegacyViolation(
                rule_id=violation.rule_id,
                rule_name=violation.rule_name,
                rule_type=violation.rule_type,
                reason=_legacy_reason(rule, player, violation.reason)
            ))

    return LegacyEligibilityResult(is_eligible=not violations, violations=violations)

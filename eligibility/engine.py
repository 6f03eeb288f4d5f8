"""
Player eligibility engine.

Fetches a player's registry record, documents, consents and the tournament's
active rules, runs the baseline checks and the configured rules, and returns
an EligibilityCheckResult. Ineligibility is always reported as data; only
data-store failures (sqlite3.Error) propagate to the caller.
"""

import sqlite3
import logging
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from database.document_manager import DocumentManager
from database.player_manager import PlayerManager
from database.rule_manager import RuleManager
from models.enums import OverallStatus, Severity
from models.player import PlayerConsent, PlayerDocument, PlayerRecord
from models.result import (
    EligibilityCheckResult, EligibilitySummary, EligibilityViolation, EligibilityWarning, LegacyEligibilityResult
)
from models.rules import EligibilityRule
from .baseline_checks import (
    DEFAULT_REQUIRED_CONSENTS, DEFAULT_REQUIRED_DOCUMENTS, check_consent_verification,
    check_document_verification, check_medical_clearance, check_registration_status
)
from .legacy import evaluate_legacy, legacy_not_found_result
from .rule_evaluators import evaluate_rule
from .summary import build_summary, is_eligible

logger = logging.getLogger(__name__)

T = TypeVar('T')


def latest_by_type(records: Iterable[T], key: Callable[[T], str]) -> List[T]:
    """Keep only the most recent record per type; records must be in insertion order."""
    latest = {}
    for record in records:
        latest[key(record)] = record
    return list(latest.values())


def _configured_types(config, key: str, default: Sequence[str]) -> Sequence[str]:
    """Read a list of required document or consent types from config; an empty list means none are required."""
    value = config.get(key)
    if value is None:
        return default
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        logger.warning(f"Config '{key}' must be a list, got {value!r}. Using defaults {list(default)}")
        return default
    return [str(item) for item in value]


def player_not_found_result() -> EligibilityCheckResult:
    return EligibilityCheckResult(
        is_eligible=False,
        violations=[EligibilityViolation(
            rule_id='SYSTEM_001',
            rule_name='Player Not Found',
            rule_type='SYSTEM',
            reason='Player does not exist in the registry',
            severity=Severity.CRITICAL,
            can_override=False,
            suggested_action='Verify the player ID and ensure registration is complete'
        )],
        warnings=[],
        summary=EligibilitySummary(
            overall_status=OverallStatus.INELIGIBLE,
            registration_status='UNKNOWN',
            documents_verified=False,
            consents_granted=False,
            medical_clearance_valid=False,
            age_eligible=False,
            geographic_eligible=False,
            next_steps=['Complete player registration']
        )
    )


class EligibilityEngine:
    """Evaluates whether a player may take part in a tournament."""

    def __init__(self, database_manager, required_documents: Optional[Sequence[str]] = None,
                 required_consents: Optional[Sequence[str]] = None):
        self.db_manager = database_manager
        self.player_manager = PlayerManager(database_manager)
        self.document_manager = DocumentManager(database_manager)
        self.rule_manager = RuleManager(database_manager)

        config = database_manager.config
        if required_documents is None:
            required_documents = _configured_types(config, 'required_documents', DEFAULT_REQUIRED_DOCUMENTS)
        if required_consents is None:
            required_consents = _configured_types(config, 'required_consents', DEFAULT_REQUIRED_CONSENTS)
        self.required_documents = tuple(required_documents)
        self.required_consents = tuple(required_consents)

    def check_player_eligibility_v2(self, upid: str, tournament_id: str,
                                    as_of: Optional[date] = None) -> EligibilityCheckResult:
        """
        Enhanced eligibility check for one player and tournament.

        as_of is the evaluation date used for medical expiry and medical age; it defaults to today.
        """
        as_of = as_of or date.today()

        with sqlite3.connect(self.db_manager.db_path) as conn:
            player = self.player_manager.get_player_by_upid(upid, conn)
            if player is None:
                logger.info(f"Eligibility check for unknown player {upid} (tournament {tournament_id})")
                return player_not_found_result()

            documents = self.document_manager.get_player_documents(upid, conn)
            consents = self.document_manager.get_player_consents(upid, conn)
            rules = self.rule_manager.get_active_rules(tournament_id, conn)

        result = self.evaluate_player(player, documents, consents, rules, as_of)
        logger.info(
            f"Eligibility for player {upid} in tournament {tournament_id}: "
            f"{result.summary.overall_status.value} ({len(result.violations)} violations, "
            f"{len(result.warnings)} warnings)"
        )
        return result

    def evaluate_player(self, player: PlayerRecord, documents: Sequence[PlayerDocument],
                        consents: Sequence[PlayerConsent], rules: Sequence[EligibilityRule],
                        as_of: date) -> EligibilityCheckResult:
        """Run all checks over an already-fetched snapshot. Performs no I/O."""
        documents = latest_by_type(documents, lambda d: d.document_type)
        consents = latest_by_type(consents, lambda c: c.consent_type)

        violations: List[EligibilityViolation] = []
        warnings: List[EligibilityWarning] = []

        outcomes = [
            check_registration_status(player),
            check_document_verification(documents, self.required_documents),
            check_consent_verification(consents, self.required_consents),
            check_medical_clearance(player, as_of),
        ]
        outcomes.extend(evaluate_rule(rule, player, documents, consents, as_of) for rule in rules)

        for outcome in outcomes:
            if outcome.violation:
                violations.append(outcome.violation)
            if outcome.warning:
                warnings.append(outcome.warning)

        summary = build_summary(player, documents, consents, violations, warnings, as_of,
                                self.required_documents, self.required_consents)

        return EligibilityCheckResult(
            is_eligible=is_eligible(violations),
            violations=violations,
            warnings=warnings,
            summary=summary
        )

    def check_player_eligibility(self, upid: str, tournament_id: str) -> LegacyEligibilityResult:
        """Legacy eligibility check: age, geographic and player-status rules only."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            player = self.player_manager.get_player_by_upid(upid, conn)
            if player is None:
                return legacy_not_found_result()
            rules = self.rule_manager.get_active_rules(tournament_id, conn)

        return evaluate_legacy(player, rules, date.today())


def check_player_eligibility_v2(database_manager, upid: str, tournament_id: str,
                                as_of: Optional[date] = None) -> EligibilityCheckResult:
    return EligibilityEngine(database_manager).check_player_eligibility_v2(upid, tournament_id, as_of)


def check_player_eligibility(database_manager, upid: str, tournament_id: str) -> LegacyEligibilityResult:
    return EligibilityEngine(database_manager).check_player_eligibility(upid, tournament_id)

"""
Tournament eligibility rule management.

Rules are validated when written: a payload that does not parse for its
declared rule type is rejected with RuleConfigError and never stored.
"""

import json
import sqlite3
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple, Union
from models.enums import RuleType
from models.rules import (
    EligibilityRule, RuleConfig, RuleConfigError, config_to_payload, load_config_payload, parse_rule_config
)

logger = logging.getLogger(__name__)


class RuleManager:
    """Manages eligibility rules scoped to tournaments."""

    def __init__(self, database_manager):
        self.db_manager = database_manager

    def add_rule(self, tournament_id: str, rule_type: Union[RuleType, str], name: str,
                 config: Union[Dict[str, Any], RuleConfig, str], description: Optional[str] = None,
                 is_active: bool = True, rule_id: Optional[str] = None) -> str:
        """
        Validate and store a rule for a tournament.
        Returns the rule id. Raises RuleConfigError for unknown rule types or malformed configs.
        """
        parsed_type = RuleType.parse(rule_type)
        if parsed_type is None:
            raise RuleConfigError(f"Unknown rule type: {rule_type}")

        if isinstance(config, (dict, str, bytes)):
            payload = load_config_payload(config)
        else:
            payload = config_to_payload(config)
        parse_rule_config(parsed_type, payload)

        rule_id = rule_id or str(uuid.uuid4())
        with sqlite3.connect(self.db_manager.db_path) as conn:
            conn.execute("""
                INSERT INTO eligibility_rules (id, tournament_id, rule_type, name, description, config, is_active)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (rule_id, tournament_id, parsed_type.value, name, description,
                  json.dumps(payload), 1 if is_active else 0))
            conn.commit()

        logger.info(f"Added {parsed_type.value} rule '{name}' ({rule_id}) to tournament {tournament_id}")
        return rule_id

    def set_rule_active(self, rule_id: str, is_active: bool) -> bool:
        """Activate or deactivate a rule. Returns False if the rule does not exist."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE eligibility_rules SET is_active = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?
            """, (1 if is_active else 0, rule_id))
            conn.commit()
            return cursor.rowcount > 0

    def get_active_rules(self, tournament_id: str, conn: Optional[sqlite3.Connection] = None) -> List[EligibilityRule]:
        """Get the active rules for a tournament in creation order."""
        if conn is None:
            with sqlite3.connect(self.db_manager.db_path) as conn:
                return self.get_active_rules(tournament_id, conn)

        cursor = conn.cursor()
        cursor.execute("""
            SELECT id, tournament_id, rule_type, name, description, config, is_active
            FROM eligibility_rules
            WHERE tournament_id = ? AND is_active = 1
            ORDER BY rowid
        """, (tournament_id,))
        return [self._row_to_rule(row) for row in cursor.fetchall()]

    def get_rules(self, tournament_id: str) -> List[EligibilityRule]:
        """Get all rules for a tournament, active or not."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, tournament_id, rule_type, name, description, config, is_active
                FROM eligibility_rules
                WHERE tournament_id = ?
                ORDER BY rowid
            """, (tournament_id,))
            return [self._row_to_rule(row) for row in cursor.fetchall()]

    @staticmethod
    def _row_to_rule(row: Tuple) -> EligibilityRule:
        """
        Decode a stored rule. Rows of an unknown type keep config=None; rows whose
        payload no longer parses for their type are logged and also keep config=None.
        """
        rule = EligibilityRule(
            id=row[0],
            tournament_id=row[1],
            rule_type=row[2],
            name=row[3],
            description=row[4],
            is_active=bool(row[6])
        )

        try:
            rule.raw_config = load_config_payload(row[5])
        except RuleConfigError as e:
            logger.error(f"Rule {rule.id} ({rule.name}) has an unreadable config: {e}")
            return rule

        if rule.parsed_type is None:
            logger.debug(f"Rule {rule.id} has unsupported type {rule.rule_type}")
            return rule

        try:
            rule.config = parse_rule_config(rule.parsed_type, rule.raw_config)
        except RuleConfigError as e:
            logger.error(f"Rule {rule.id} ({rule.name}) has a malformed {rule.rule_type} config: {e}")
        return rule

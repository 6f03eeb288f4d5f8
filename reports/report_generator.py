"""
Report generator for the league eligibility system.
"""

import json
import pandas as pd
import logging
from datetime import date
from typing import Dict, List, Optional, Sequence
from database.database_manager import DatabaseManager
from database.player_manager import PlayerManager
from eligibility.engine import EligibilityEngine
from models.player import PlayerRecord
from models.result import EligibilityCheckResult

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Generates tournament eligibility reports."""

    def __init__(self, database_manager: DatabaseManager, engine: Optional[EligibilityEngine] = None):
        self.db_manager = database_manager
        self.player_manager = PlayerManager(database_manager)
        self.engine = engine or EligibilityEngine(database_manager)

    def _select_players(self, upids: Optional[Sequence[str]]) -> List[PlayerRecord]:
        if upids is None:
            return self.player_manager.get_all_players(active_only=True)

        players = []
        for upid in upids:
            player = self.player_manager.get_player_by_upid(upid)
            if player is None:
                logger.warning(f"Skipping unknown player {upid}")
                continue
            players.append(player)
        return players

    def check_players(self, tournament_id: str, upids: Optional[Sequence[str]] = None,
                      as_of: Optional[date] = None) -> Dict[str, EligibilityCheckResult]:
        """Run the eligibility check for each selected player, keyed by UPID."""
        results = {}
        for player in self._select_players(upids):
            results[player.upid] = self.engine.check_player_eligibility_v2(player.upid, tournament_id, as_of)
        return results

    def generate_tournament_report(self, tournament_id: str, output_file: str,
                                   upids: Optional[Sequence[str]] = None,
                                   as_of: Optional[date] = None) -> int:
        """
        Generate one row per player with the overall eligibility verdict.
        Returns the number of players in the report.
        """
        players = self._select_players(upids)
        if not players:
            logger.warning("No players found for report generation")
            return 0

        data = []
        for player in players:
            result = self.engine.check_player_eligibility_v2(player.upid, tournament_id, as_of)
            data.append({
                'UPID': player.upid,
                'First Name': player.first_name,
                'Last Name': player.last_name,
                'County': player.county_name or '',
                'Registration Status': result.summary.registration_status,
                'Overall Status': result.summary.overall_status.value,
                'Eligible': result.is_eligible,
                'Violations': len(result.violations),
                'Warnings': len(result.warnings),
                'Next Steps': '; '.join(result.summary.next_steps)
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated eligibility report for tournament {tournament_id} "
                    f"with {len(data)} players: {output_file}")
        return len(data)

    def generate_violation_report(self, tournament_id: str, output_file: str,
                                  upids: Optional[Sequence[str]] = None,
                                  as_of: Optional[date] = None) -> int:
        """
        Generate one row per violation, most severe first.
        Returns the number of violations written.
        """
        data = []
        for upid, result in self.check_players(tournament_id, upids, as_of).items():
            for violation in result.violations:
                data.append({
                    'UPID': upid,
                    'Rule ID': violation.rule_id,
                    'Rule Name': violation.rule_name,
                    'Rule Type': violation.rule_type,
                    'Severity': violation.severity.value,
                    'Severity Rank': violation.severity.rank,
                    'Can Override': violation.can_override,
                    'Reason': violation.reason,
                    'Suggested Action': violation.suggested_action or ''
                })

        columns = ['UPID', 'Rule ID', 'Rule Name', 'Rule Type', 'Severity', 'Can Override',
                   'Reason', 'Suggested Action']
        if not data:
            logger.info(f"No violations found for tournament {tournament_id}")
            pd.DataFrame(columns=columns).to_csv(output_file, index=False, encoding='utf-8')
            return 0

        df = pd.DataFrame(data)
        df = df.sort_values(by=['Severity Rank', 'UPID'], ascending=[False, True], kind='stable')
        df[columns].to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated violation report with {len(data)} violations: {output_file}")
        return len(data)

    @staticmethod
    def export_result_json(result: EligibilityCheckResult, output_file: str) -> None:
        """Write a single result in its API shape."""
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info(f"Exported eligibility result to {output_file}")

"""
Command-line entry point for the league eligibility system.

Usage:
    python eligibility_main.py check UPID TOURNAMENT_ID [config.yaml]
    python eligibility_main.py report TOURNAMENT_ID OUTPUT_CSV [config.yaml]
    python eligibility_main.py import CSV_FILE [config.yaml]
"""

import json
import logging
import sys
from typing import List, Optional

from config.config_manager import ConfigManager
from database.database_manager import DatabaseManager
from database.geography_manager import GeographyManager
from database.player_manager import PlayerManager
from eligibility.engine import EligibilityEngine
from reports.report_generator import ReportGenerator

logger = logging.getLogger(__name__)

USAGE = __doc__

# Positional arguments per command, excluding the optional config file
COMMAND_ARGS = {'check': 2, 'report': 2, 'import': 1}


def setup(config_file: str) -> DatabaseManager:
    """Configure logging, open the database and seed geography from the config."""
    config = ConfigManager.load_config(config_file)
    logging.basicConfig(
        level=getattr(logging, str(config.get('log_level', 'INFO')).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    db_manager = DatabaseManager(config.get('database_path', 'league_players.db'), config_file)
    GeographyManager(db_manager).load_from_config()
    return db_manager


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point. Returns the process exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in COMMAND_ARGS:
        print(USAGE)
        return 2

    command = argv[0]
    expected = COMMAND_ARGS[command]
    args = argv[1:]
    if len(args) not in (expected, expected + 1):
        print(USAGE)
        return 2

    config_file = args[expected] if len(args) > expected else "config.yaml"
    db_manager = setup(config_file)

    if command == 'check':
        upid, tournament_id = args[0], args[1]
        result = EligibilityEngine(db_manager).check_player_eligibility_v2(upid, tournament_id)
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.is_eligible else 1

    if command == 'report':
        tournament_id, output_file = args[0], args[1]
        rows = ReportGenerator(db_manager).generate_tournament_report(tournament_id, output_file)
        print(f"Wrote {rows} players to {output_file}")
        return 0

    players = PlayerManager(db_manager).load_players_from_csv(args[0])
    print(f"Imported {players} players")
    logger.info(f"Database statistics: {db_manager.get_database_stats()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

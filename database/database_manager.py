"""
Core database management for the league eligibility system.
"""

import sqlite3
import logging
from typing import Dict
from config.config_manager import ConfigManager

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages core database operations and initialization."""

    def __init__(self, db_path: str = "league_players.db", config_file: str = "config.yaml"):
        self.db_path = db_path
        self.config = ConfigManager.load_config(config_file)
        self.init_database()

    def init_database(self) -> None:
        """Initialize the database with required tables."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()

            # Geographic hierarchy
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS counties (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL UNIQUE,
                    code TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS sub_counties (
                    id TEXT PRIMARY KEY,
                    county_id TEXT NOT NULL REFERENCES counties(id),
                    name TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS wards (
                    id TEXT PRIMARY KEY,
                    sub_county_id TEXT NOT NULL REFERENCES sub_counties(id),
                    name TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            # Player registry
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS player_registry (
                    upid TEXT PRIMARY KEY,
                    first_name TEXT NOT NULL,
                    last_name TEXT NOT NULL,
                    dob TEXT,
                    sex TEXT,
                    nationality TEXT,
                    email TEXT,
                    phone TEXT,
                    status TEXT DEFAULT 'ACTIVE',
                    registration_status TEXT DEFAULT 'DRAFT',
                    is_active INTEGER DEFAULT 1,
                    medical_clearance_status TEXT DEFAULT 'PENDING',
                    medical_clearance_date TEXT,
                    medical_expiry_date TEXT,
                    guardian_name TEXT,
                    guardian_phone TEXT,
                    ward_id TEXT REFERENCES wards(id),
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            # Documents and consents are append-style
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS player_documents (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    upid TEXT NOT NULL REFERENCES player_registry(upid),
                    document_type TEXT NOT NULL,
                    verification_status TEXT NOT NULL DEFAULT 'PENDING',
                    document_path TEXT,
                    uploaded_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS player_consents (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    upid TEXT NOT NULL REFERENCES player_registry(upid),
                    consent_type TEXT NOT NULL,
                    is_consented INTEGER NOT NULL,
                    consent_version TEXT,
                    consent_timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            # Tournament eligibility rules
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS eligibility_rules (
                    id TEXT PRIMARY KEY,
                    tournament_id TEXT NOT NULL,
                    rule_type TEXT NOT NULL,
                    name TEXT NOT NULL,
                    description TEXT,
                    config TEXT NOT NULL,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_documents_upid ON player_documents(upid)")
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_consents_upid ON player_consents(upid)")
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_rules_tournament
                ON eligibility_rules(tournament_id, is_active)
            """)

            conn.commit()
            logger.info("Database initialized successfully")

    def get_database_stats(self) -> Dict[str, int]:
        """Get basic database statistics."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            stats = {}
            for table in ('player_registry', 'player_documents', 'player_consents',
                          'eligibility_rules', 'counties', 'sub_counties', 'wards'):
                cursor.execute(f"SELECT COUNT(*) FROM {table}")
                stats[table] = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM eligibility_rules WHERE is_active = 1")
            stats['active_rules'] = cursor.fetchone()[0]

            return stats

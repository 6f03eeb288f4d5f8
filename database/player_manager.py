"""
Player registry management for the league eligibility system.
"""

import sqlite3
import pandas as pd
import logging
from datetime import date
from typing import List, Optional, Tuple
from models.enums import MedicalStatus, RegistrationStatus
from models.player import PlayerRecord
from utils.date_utils import DateUtils

logger = logging.getLogger(__name__)

_PLAYER_SELECT = """
    SELECT p.upid, p.first_name, p.last_name, p.dob, p.sex, p.nationality, p.email, p.phone,
           p.status, p.registration_status, p.is_active,
           p.medical_clearance_status, p.medical_clearance_date, p.medical_expiry_date,
           p.guardian_name, p.guardian_phone,
           p.ward_id, w.name, sc.id, sc.name, c.id, c.name,
           p.created_at, p.updated_at
    FROM player_registry p
    LEFT JOIN wards w ON p.ward_id = w.id
    LEFT JOIN sub_counties sc ON w.sub_county_id = sc.id
    LEFT JOIN counties c ON sc.county_id = c.id
"""


class PlayerManager:
    """Manages player registry operations."""

    def __init__(self, database_manager):
        self.db_manager = database_manager
        self.config = database_manager.config

    def load_players_from_csv(self, csv_file: str, delimiter: str = ',') -> int:
        """
        Load players from a registry CSV file and update the database.
        Returns the number of players processed.
        """
        try:
            df = pd.read_csv(csv_file, delimiter=delimiter, dtype=str, encoding='utf-8')
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Error loading CSV file: {e}")
            return 0

        logger.info(f"Loaded CSV with {len(df)} rows")

        players_processed = 0
        for index, row in df.iterrows():
            if self._process_csv_row(row):
                players_processed += 1

        logger.info(f"Processed {players_processed} players from CSV")
        return players_processed

    @staticmethod
    def _cell(row: pd.Series, key: str) -> Optional[str]:
        value = row.get(key)
        if value is None or pd.isna(value):
            return None
        value = str(value).strip()
        return value or None

    def _process_csv_row(self, row: pd.Series) -> bool:
        """Process a single CSV row and update database."""
        upid = self._cell(row, 'UPID')
        first_name = self._cell(row, 'FirstName')
        last_name = self._cell(row, 'LastName')

        # Skip if essential fields are missing
        if not upid or not first_name or not last_name:
            logger.warning(f"Skipping row without UPID or name: {row.to_dict()}")
            return False

        dob_text = self._cell(row, 'DOB')
        dob = DateUtils.parse_date(dob_text)
        if dob_text and dob is None:
            logger.warning(f"Could not parse date of birth '{dob_text}' for player {upid}")

        registration_raw = self._cell(row, 'RegistrationStatus') or RegistrationStatus.DRAFT.value
        medical_raw = self._cell(row, 'MedicalClearanceStatus') or MedicalStatus.PENDING.value

        record = PlayerRecord(
            upid=upid,
            first_name=first_name,
            last_name=last_name,
            dob=dob,
            sex=self._cell(row, 'Sex'),
            nationality=self._cell(row, 'Nationality'),
            email=self._cell(row, 'Email'),
            phone=self._cell(row, 'Phone'),
            status=self._cell(row, 'Status') or 'ACTIVE',
            registration_status=RegistrationStatus.parse(registration_raw),
            registration_status_raw=registration_raw.upper(),
            medical_clearance_status=MedicalStatus.parse(medical_raw),
            medical_clearance_date=DateUtils.parse_date(self._cell(row, 'MedicalClearanceDate')),
            medical_expiry_date=DateUtils.parse_date(self._cell(row, 'MedicalExpiryDate')),
            guardian_name=self._cell(row, 'GuardianName'),
            guardian_phone=self._cell(row, 'GuardianPhone'),
            ward_id=self._cell(row, 'WardId')
        )

        try:
            self.add_or_update_player(record)
        except sqlite3.Error as e:
            logger.error(f"Error processing row {upid}: {e}")
            return False
        return True

    def add_or_update_player(self, record: PlayerRecord) -> None:
        """Insert a player or update the existing registry row with the same UPID."""
        if record.registration_status is not None:
            registration = record.registration_status.value
        else:
            registration = record.registration_status_raw
        medical = record.medical_clearance_status.value if record.medical_clearance_status else None

        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT 1 FROM player_registry WHERE upid = ?", (record.upid,))
            exists = cursor.fetchone() is not None

            values = (
                record.first_name, record.last_name, DateUtils.format_date(record.dob),
                record.sex, record.nationality, record.email, record.phone, record.status,
                registration, 1 if record.is_active else 0, medical,
                DateUtils.format_date(record.medical_clearance_date),
                DateUtils.format_date(record.medical_expiry_date),
                record.guardian_name, record.guardian_phone, record.ward_id
            )

            if exists:
                cursor.execute("""
                    UPDATE player_registry SET
                        first_name = ?, last_name = ?, dob = ?, sex = ?, nationality = ?,
                        email = ?, phone = ?, status = ?, registration_status = ?, is_active = ?,
                        medical_clearance_status = ?, medical_clearance_date = ?, medical_expiry_date = ?,
                        guardian_name = ?, guardian_phone = ?, ward_id = ?,
                        updated_at = CURRENT_TIMESTAMP
                    WHERE upid = ?
                """, values + (record.upid,))
                logger.info(f"Updated player {record.upid} ({record.full_name})")
            else:
                cursor.execute("""
                    INSERT INTO player_registry (
                        first_name, last_name, dob, sex, nationality, email, phone, status,
                        registration_status, is_active, medical_clearance_status,
                        medical_clearance_date, medical_expiry_date, guardian_name, guardian_phone,
                        ward_id, upid
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, values + (record.upid,))
                logger.info(f"Added new player {record.upid} ({record.full_name})")

            conn.commit()

    def update_registration_status(self, upid: str, status: RegistrationStatus) -> bool:
        """Set a player's registration status. Returns False if the player does not exist."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE player_registry SET registration_status = ?, updated_at = CURRENT_TIMESTAMP
                WHERE upid = ?
            """, (RegistrationStatus(status).value, upid))
            conn.commit()
            return cursor.rowcount > 0

    def update_medical_clearance(self, upid: str, status: MedicalStatus,
                                 clearance_date: Optional[date] = None,
                                 expiry_date: Optional[date] = None) -> bool:
        """Record a medical clearance outcome. Returns False if the player does not exist."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE player_registry SET
                    medical_clearance_status = ?, medical_clearance_date = ?, medical_expiry_date = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE upid = ?
            """, (MedicalStatus(status).value, DateUtils.format_date(clearance_date),
                  DateUtils.format_date(expiry_date), upid))
            conn.commit()
            return cursor.rowcount > 0

    def get_player_by_upid(self, upid: str, conn: Optional[sqlite3.Connection] = None) -> Optional[PlayerRecord]:
        """Get a player joined with ward, sub-county and county, or None if not registered."""
        if conn is None:
            with sqlite3.connect(self.db_manager.db_path) as conn:
                return self.get_player_by_upid(upid, conn)

        cursor = conn.cursor()
        cursor.execute(_PLAYER_SELECT + " WHERE p.upid = ? LIMIT 1", (upid,))
        row = cursor.fetchone()
        return self._row_to_player(row) if row else None

    def get_all_players(self, active_only: bool = True) -> List[PlayerRecord]:
        """Get all registered players ordered by last and first name."""
        query = _PLAYER_SELECT
        if active_only:
            query += " WHERE p.is_active = 1"
        query += " ORDER BY p.last_name, p.first_name"

        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(query)
            return [self._row_to_player(row) for row in cursor.fetchall()]

    @staticmethod
    def _row_to_player(row: Tuple) -> PlayerRecord:
        """Decode a joined registry row into a PlayerRecord."""
        return PlayerRecord(
            upid=row[0],
            first_name=row[1],
            last_name=row[2],
            dob=DateUtils.parse_date(row[3]),
            sex=row[4],
            nationality=row[5],
            email=row[6],
            phone=row[7],
            status=row[8],
            registration_status=RegistrationStatus.parse(row[9]),
            registration_status_raw=row[9],
            is_active=bool(row[10]),
            medical_clearance_status=MedicalStatus.parse(row[11]),
            medical_clearance_date=DateUtils.parse_date(row[12]),
            medical_expiry_date=DateUtils.parse_date(row[13]),
            guardian_name=row[14],
            guardian_phone=row[15],
            ward_id=row[16],
            ward_name=row[17],
            sub_county_id=row[18],
            sub_county_name=row[19],
            county_id=row[20],
            county_name=row[21],
            created_at=row[22],
            updated_at=row[23]
        )

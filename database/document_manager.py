"""
Document and consent management for the league eligibility system.

Both collections are append-style: a re-upload or a renewed consent adds a
new row, and readers treat the most recent row per type as current.
"""

import sqlite3
import logging
from typing import List, Optional
from models.enums import VerificationStatus
from models.player import PlayerConsent, PlayerDocument

logger = logging.getLogger(__name__)


class DocumentManager:
    """Manages player documents and consents."""

    def __init__(self, database_manager):
        self.db_manager = database_manager

    def add_document(self, upid: str, document_type: str,
                     verification_status: VerificationStatus = VerificationStatus.PENDING,
                     document_path: Optional[str] = None) -> int:
        """Record an uploaded document. Returns the new document id."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO player_documents (upid, document_type, verification_status, document_path)
                VALUES (?, ?, ?, ?)
            """, (upid, document_type, VerificationStatus(verification_status).value, document_path))
            conn.commit()
            logger.info(f"Added {document_type} document for player {upid}")
            return cursor.lastrowid

    def set_verification_status(self, document_id: int, status: VerificationStatus) -> bool:
        """Record the outcome of a document review. Returns False if the document does not exist."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE player_documents SET verification_status = ? WHERE id = ?
            """, (VerificationStatus(status).value, document_id))
            conn.commit()
            return cursor.rowcount > 0

    def get_player_documents(self, upid: str, conn: Optional[sqlite3.Connection] = None) -> List[PlayerDocument]:
        """Get all documents for a player in upload order."""
        if conn is None:
            with sqlite3.connect(self.db_manager.db_path) as conn:
                return self.get_player_documents(upid, conn)

        cursor = conn.cursor()
        cursor.execute("""
            SELECT id, upid, document_type, verification_status, document_path, uploaded_at
            FROM player_documents
            WHERE upid = ?
            ORDER BY id
        """, (upid,))

        documents = []
        for row in cursor.fetchall():
            documents.append(PlayerDocument(
                id=row[0],
                upid=row[1],
                document_type=row[2],
                verification_status=VerificationStatus.parse(row[3]) or VerificationStatus.PENDING,
                document_path=row[4],
                uploaded_at=row[5]
            ))
        return documents

    def add_consent(self, upid: str, consent_type: str, is_consented: bool = True,
                    consent_version: Optional[str] = None) -> int:
        """Record a consent grant or withdrawal. Returns the new consent id."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO player_consents (upid, consent_type, is_consented, consent_version)
                VALUES (?, ?, ?, ?)
            """, (upid, consent_type, 1 if is_consented else 0, consent_version))
            conn.commit()
            action = "granted" if is_consented else "withdrew"
            logger.info(f"Player {upid} {action} consent {consent_type}")
            return cursor.lastrowid

    def get_player_consents(self, upid: str, conn: Optional[sqlite3.Connection] = None) -> List[PlayerConsent]:
        """Get all consents for a player in the order they were recorded."""
        if conn is None:
            with sqlite3.connect(self.db_manager.db_path) as conn:
                return self.get_player_consents(upid, conn)

        cursor = conn.cursor()
        cursor.execute("""
            SELECT id, upid, consent_type, is_consented, consent_version, consent_timestamp
            FROM player_consents
            WHERE upid = ?
            ORDER BY id
        """, (upid,))

        return [
            PlayerConsent(
                id=row[0],
                upid=row[1],
                consent_type=row[2],
                is_consented=bool(row[3]),
                consent_version=row[4],
                consent_timestamp=row[5]
            )
            for row in cursor.fetchall()
        ]

"""
Geographic hierarchy management (county -> sub-county -> ward).
"""

import sqlite3
import logging
from typing import Dict, Any, List, Optional
from models.geography import County, GeographicLocation, SubCounty, Ward

logger = logging.getLogger(__name__)


class GeographyManager:
    """Manages counties, sub-counties and wards."""

    def __init__(self, database_manager):
        self.db_manager = database_manager
        self.config = database_manager.config

    def add_county(self, county_id: str, name: str, code: Optional[str] = None) -> None:
        with sqlite3.connect(self.db_manager.db_path) as conn:
            conn.execute("""
                INSERT INTO counties (id, name, code) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET name = excluded.name, code = excluded.code
            """, (county_id, name, code))
            conn.commit()

    def add_sub_county(self, sub_county_id: str, county_id: str, name: str) -> None:
        with sqlite3.connect(self.db_manager.db_path) as conn:
            conn.execute("""
                INSERT INTO sub_counties (id, county_id, name) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET county_id = excluded.county_id, name = excluded.name
            """, (sub_county_id, county_id, name))
            conn.commit()

    def add_ward(self, ward_id: str, sub_county_id: str, name: str) -> None:
        with sqlite3.connect(self.db_manager.db_path) as conn:
            conn.execute("""
                INSERT INTO wards (id, sub_county_id, name) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET sub_county_id = excluded.sub_county_id, name = excluded.name
            """, (ward_id, sub_county_id, name))
            conn.commit()

    def load_from_config(self) -> int:
        """
        Seed the hierarchy from the 'geography' config section.

        Expected shape:
            geography:
              counties:
                C-NAIROBI:
                  name: Nairobi
                  code: "047"
                  sub_counties:
                    SC-WESTLANDS:
                      name: Westlands
                      wards:
                        W-PARKLANDS: Parklands

        Returns the number of wards loaded.
        """
        geography: Dict[str, Any] = self.config.get('geography') or {}
        counties = geography.get('counties') or {}
        wards_loaded = 0

        for county_id, county_info in counties.items():
            county_info = county_info or {}
            self.add_county(str(county_id), county_info.get('name', str(county_id)), county_info.get('code'))

            for sub_county_id, sub_county_info in (county_info.get('sub_counties') or {}).items():
                sub_county_info = sub_county_info or {}
                self.add_sub_county(str(sub_county_id), str(county_id),
                                    sub_county_info.get('name', str(sub_county_id)))

                for ward_id, ward_name in (sub_county_info.get('wards') or {}).items():
                    self.add_ward(str(ward_id), str(sub_county_id), str(ward_name or ward_id))
                    wards_loaded += 1

        if wards_loaded:
            logger.info(f"Loaded {len(counties)} counties and {wards_loaded} wards from configuration")
        return wards_loaded

    def get_ward_location(self, ward_id: str) -> Optional[GeographicLocation]:
        """Resolve a ward to its sub-county and county."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT w.id, w.name, sc.id, sc.name, c.id, c.name
                FROM wards w
                LEFT JOIN sub_counties sc ON w.sub_county_id = sc.id
                LEFT JOIN counties c ON sc.county_id = c.id
                WHERE w.id = ?
            """, (ward_id,))
            row = cursor.fetchone()

        if not row:
            return None

        return GeographicLocation(
            ward_id=row[0],
            ward_name=row[1],
            sub_county_id=row[2],
            sub_county_name=row[3],
            county_id=row[4],
            county_name=row[5]
        )

    def get_counties(self) -> List[County]:
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name, code FROM counties ORDER BY name")
            return [County(id=row[0], name=row[1], code=row[2]) for row in cursor.fetchall()]

    def get_sub_counties(self, county_id: str) -> List[SubCounty]:
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, county_id, name FROM sub_counties WHERE county_id = ? ORDER BY name
            """, (county_id,))
            return [SubCounty(id=row[0], county_id=row[1], name=row[2]) for row in cursor.fetchall()]

    def get_wards(self, sub_county_id: str) -> List[Ward]:
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, sub_county_id, name FROM wards WHERE sub_county_id = ? ORDER BY name
            """, (sub_county_id,))
            return [Ward(id=row[0], sub_county_id=row[1], name=row[2]) for row in cursor.fetchall()]

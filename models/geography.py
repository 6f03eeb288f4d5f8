"""
Geographic hierarchy models: county -> sub-county -> ward.
"""

from dataclasses import dataclass
from typing import Optional

from .enums import GeographicScope


@dataclass
class County:
    """A county, the top level of the hierarchy."""
    id: str
    name: str
    code: Optional[str] = None


@dataclass
class SubCounty:
    """A sub-county within a county."""
    id: str
    county_id: str
    name: str


@dataclass
class Ward:
    """A ward within a sub-county."""
    id: str
    sub_county_id: str
    name: str


@dataclass
class GeographicLocation:
    """A ward resolved transitively to its sub-county and county."""
    ward_id: Optional[str] = None
    ward_name: Optional[str] = None
    sub_county_id: Optional[str] = None
    sub_county_name: Optional[str] = None
    county_id: Optional[str] = None
    county_name: Optional[str] = None

    def id_for_scope(self, scope: GeographicScope) -> Optional[str]:
        if scope == GeographicScope.WARD:
            return self.ward_id
        if scope == GeographicScope.SUBCOUNTY:
            return self.sub_county_id
        if scope == GeographicScope.COUNTY:
            return self.county_id
        return None

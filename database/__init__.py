"""
Database package for the league eligibility system.
"""

from .database_manager import DatabaseManager
from .player_manager import PlayerManager
from .document_manager import DocumentManager
from .geography_manager import GeographyManager
from .rule_manager import RuleManager

__all__ = ['DatabaseManager', 'PlayerManager', 'DocumentManager', 'GeographyManager', 'RuleManager']

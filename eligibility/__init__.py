"""
Player eligibility evaluation for the league eligibility system.
"""

from .engine import EligibilityEngine, check_player_eligibility, check_player_eligibility_v2

__all__ = ['EligibilityEngine', 'check_player_eligibility', 'check_player_eligibility_v2']

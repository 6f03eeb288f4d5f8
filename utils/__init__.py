"""
Utility functions package for the league eligibility system.
"""

from .date_utils import DateUtils

__all__ = ['DateUtils']

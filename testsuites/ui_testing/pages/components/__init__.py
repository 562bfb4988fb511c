"""
Reusable components shared by page objects.
"""

from .filter_component import FilterComponent, YearRange
from .movie_card import MovieCardComponent

__all__ = [
    "FilterComponent",
    "MovieCardComponent",
    "YearRange",
]

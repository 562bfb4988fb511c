"""
================================================================================
Page Objects
================================================================================

Page Object Model for TMDB Discover: the discover page plus the filter panel
and movie card components it is built from.

Author: Automation Team
License: MIT
================================================================================
"""

from .discover_page import DiscoverPage
from .components import FilterComponent, MovieCardComponent, YearRange

__all__ = [
    "DiscoverPage",
    "FilterComponent",
    "MovieCardComponent",
    "YearRange",
]

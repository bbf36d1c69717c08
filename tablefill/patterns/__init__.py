"""
Patterns package for TableFill.

Re-exports the abstract interfaces and the concrete pattern builders so
downstream code can import from `tablefill.patterns` directly.
"""

from tablefill.patterns.abstract import (
    AbstractPatternBuilder,
    PatternBuilder,
    PatternResult,
)
from tablefill.patterns.all_off import AllOffPattern
from tablefill.patterns.cumulative import CumulativeOnPattern
from tablefill.patterns.randomized import RandomizedPattern
from tablefill.patterns.sweep import SweepDownPattern, SweepUpPattern

__all__ = [
    # Abstracts
    "AbstractPatternBuilder",
    "PatternBuilder",
    "PatternResult",
    # Concrete patterns
    "AllOffPattern",
    "CumulativeOnPattern",
    "RandomizedPattern",
    "SweepDownPattern",
    "SweepUpPattern",
]

"""
Channel layouts: how many outputs the I/O board has and which patterns run.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Layout:
    """A channel count and the ordered patterns run against it."""

    name: str
    channel_count: int
    patterns: Tuple[str, ...]


LAYOUTS: Dict[str, Layout] = {
    "io24": Layout(
        name="io24",
        channel_count=24,
        patterns=("sweep_up", "sweep_down", "all_off", "randomized"),
    ),
    "io40": Layout(
        name="io40",
        channel_count=40,
        patterns=("sweep_up", "sweep_down", "cumulative_on", "all_off", "randomized"),
    ),
}


__all__ = ["LAYOUTS", "Layout"]

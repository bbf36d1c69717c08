"""
Abstract pattern interfaces and result contracts for TableFill.

Concrete patterns (sweep up/down, cumulative-on, all-off, randomized) implement
the PatternBuilder protocol and return a PatternResult so the generator can
chain them: each builder starts from the state the previous one returned.
"""

from __future__ import annotations

import abc
from typing import List, NamedTuple, Protocol, runtime_checkable

from tablefill.domain.models import EventRecord, RecipeContext, SequenceState


class PatternResult(NamedTuple):
    """
    Records emitted by one pattern plus the state to continue from.
    """

    records: List[EventRecord]
    state: SequenceState


@runtime_checkable
class PatternBuilder(Protocol):
    """
    Common interface all pattern builders must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the pattern.
    notes : str
        Tag written to the `notes` column of every emitted record.
    """

    name: str
    description: str
    notes: str

    def build(self, state: SequenceState, context: RecipeContext) -> PatternResult:
        """
        Emit this pattern's records starting from `state`.

        Parameters
        ----------
        state : SequenceState
            Running clock, channel and ON/OFF value left by the previous pattern.
        context : RecipeContext
            Per-run constants (recipe ID, channel count, hops, RNG).

        Returns
        -------
        PatternResult
            Ordered records and the final state.
        """
        ...


class AbstractPatternBuilder(abc.ABC):
    """
    ABC helper for class-based implementations.

    Subclasses set `name`, `description` and `notes` and implement `build`.
    """

    name: str
    description: str
    notes: str

    @abc.abstractmethod
    def build(
        self, state: SequenceState, context: RecipeContext
    ) -> PatternResult:  # pragma: no cover - interface only
        """Emit records and return the final state."""
        raise NotImplementedError


__all__ = [
    "AbstractPatternBuilder",
    "PatternBuilder",
    "PatternResult",
]

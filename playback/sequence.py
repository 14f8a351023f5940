"""
sequence.py — Precomputed Step Sequences
=========================================
A StepSequence is the full, ordered, immutable list of Steps for one
algorithm run.  It is built once when the user picks an algorithm and
never mutated afterwards; picking another algorithm builds a new one.

    seq = build_sequence("graph-bfs")
    len(seq)          # number of steps, always >= 1
    seq[seq.clamp(99)]

Unknown algorithm ids fall back to DEFAULT_ALGORITHM instead of raising,
so the UI always has something to show.
"""

from typing import Iterable, Iterator, Tuple, Dict, Any, Optional

import structlog

from algorithms import DEFAULT_ALGORITHM, get_algorithm
from algorithms.step import Step

log = structlog.get_logger(__name__)


class EmptySequenceError(ValueError):
    """A StepSequence must contain at least the initial state."""


def clamp_index(index: int, length: int) -> int:
    """Constrain `index` into [0, length - 1]."""
    if length < 1:
        raise EmptySequenceError("cannot clamp into an empty sequence")
    if index < 0:
        return 0
    if index > length - 1:
        return length - 1
    return index


class StepSequence:
    """
    Attributes:
        algorithm_id : Registry key this sequence was built for.
        steps        : Tuple of Steps; steps[i].index == i.
    """

    __slots__ = ("_algorithm_id", "_steps")

    def __init__(self, steps: Iterable[Step], algorithm_id: str = ""):
        frozen: Tuple[Step, ...] = tuple(steps)
        if not frozen:
            raise EmptySequenceError(
                f"step sequence for {algorithm_id or 'unnamed algorithm'} is empty"
            )
        for position, step in enumerate(frozen):
            if step.index != position:
                raise ValueError(
                    f"step at position {position} carries index {step.index}"
                )
        self._algorithm_id = algorithm_id
        self._steps = frozen

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def algorithm_id(self) -> str:
        return self._algorithm_id

    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    @property
    def last_index(self) -> int:
        return len(self._steps) - 1

    def clamp(self, index: int) -> int:
        return clamp_index(index, len(self._steps))

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index: int) -> Step:
        return self._steps[index]

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StepSequence):
            return NotImplemented
        return self._algorithm_id == other._algorithm_id and self._steps == other._steps

    __hash__ = None  # steps carry dict payloads

    def __repr__(self) -> str:
        return f"StepSequence({self._algorithm_id!r}, length={len(self._steps)})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm_id": self._algorithm_id,
            "length":       len(self._steps),
            "steps":        [s.to_dict() for s in self._steps],
        }


def resolve_algorithm_id(algorithm_id: Optional[str]) -> str:
    """Return `algorithm_id` if registered, otherwise DEFAULT_ALGORITHM."""
    if get_algorithm(algorithm_id) is not None:
        return algorithm_id
    log.warning(
        "sequence.unknown_algorithm",
        requested=algorithm_id,
        fallback=DEFAULT_ALGORITHM,
    )
    return DEFAULT_ALGORITHM


def build_sequence(algorithm_id: Optional[str]) -> StepSequence:
    """
    Run the registered generator for `algorithm_id` to completion.

    Pure and deterministic: two calls with the same id return equal
    sequences.  Never raises for an unknown id; the default algorithm's
    sequence is returned instead.
    """
    key = resolve_algorithm_id(algorithm_id)
    info = get_algorithm(key)
    sequence = StepSequence(info.fn(), algorithm_id=key)
    log.debug("sequence.built", algorithm_id=key, length=len(sequence))
    return sequence

"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • Which renderer applies (array bars, graph, tree, heap, bits, …)
    • The algorithm-specific payload (array contents, pointers, queue, …)
    • Which line of pseudocode is executing right now
    • A plain-English explanation of *why* this step happened

Design decisions:
  - Step is a plain dataclass. It is a SNAPSHOT. The generator is the
    only writer; the playback controller and renderer are pure readers.
  - The playback engine only ever looks at `index`.  Everything else is
    opaque to it and exists for the renderer.
  - `data` is a free-form mapping so different algorithms can push
    whatever they need without growing the dataclass.  It is frozen on
    construction: dicts become read-only MappingProxyType views and
    lists become tuples.  `to_dict()` thaws it back for JSON.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Any


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        index           : 0-based position of this step in its sequence.
        kind            : Renderer key — "array", "graph", "tree", "heap",
                          "bits", "activities" or "counting".
        title           : Short headline ("Comparing 38 with 45").
        explanation     : Human-readable "why" text for the Learning panel.
        pseudocode_line : 0-based pseudocode line executing now, -1 for none.
        data            : Algorithm-specific snapshot payload.
        is_final        : True on the very last step.
    """

    index:            int
    kind:             str               = "array"
    title:            str               = ""
    explanation:      str               = ""
    pseudocode_line:  int               = -1
    data:             Mapping[str, Any] = field(default_factory=dict)
    is_final:         bool              = False

    def __post_init__(self):
        object.__setattr__(self, "data", _freeze(self.data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":           self.index,
            "kind":            self.kind,
            "title":           self.title,
            "explanation":     self.explanation,
            "pseudocode_line": self.pseudocode_line,
            "data":            _plain(self.data),
            "is_final":        self.is_final,
        }


def _freeze(value: Any) -> Any:
    """Deep-copy into read-only containers (dict → mappingproxy, list → tuple)."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _plain(value: Any) -> Any:
    """Copy back into JSON-friendly containers (tuples → lists)."""
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that algorithms use to construct Steps cleanly.
    It owns the running index, so generators never number steps by hand.

    Usage inside an algorithm generator:
        sb = StepBuilder(kind="array")
        sb.data["array"] = list(arr)
        sb.pseudocode_line = 3
        yield sb.build("Compare 38 with 45", "38 < 45, so search the right half.")
    """

    def __init__(self, kind: str = "array"):
        self.kind:             str             = kind
        self.pseudocode_line:  int             = -1
        self.data:             Dict[str, Any]  = {}
        self._next_index:      int             = 0

    @property
    def count(self) -> int:
        """Number of steps built so far."""
        return self._next_index

    def build(self, title: str, explanation: str = "", is_final: bool = False) -> Step:
        step = Step(
            index=self._next_index,
            kind=self.kind,
            title=title,
            explanation=explanation or title,
            pseudocode_line=self.pseudocode_line,
            data=self.data,
            is_final=is_final,
        )
        self._next_index += 1
        return step

"""Step, StepBuilder and StepSequence tests."""

import dataclasses

import pytest

from algorithms import DEFAULT_ALGORITHM, REGISTRY
from algorithms.step import Step, StepBuilder
from playback import EmptySequenceError, StepSequence, build_sequence, clamp_index, resolve_algorithm_id
from conftest import make_sequence


# ============================================================
# Step / StepBuilder
# ============================================================

def test_step_is_immutable():
    step = Step(index=0, title="x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        step.index = 3


def test_builder_numbers_steps_and_snapshots_data():
    sb = StepBuilder(kind="array")
    sb.data["array"] = [3, 1, 2]
    first = sb.build("first")
    sb.data["array"].append(9)
    second = sb.build("second", "why", is_final=True)

    assert (first.index, second.index) == (0, 1)
    assert first.data["array"] == (3, 1, 2)
    assert second.data["array"] == (3, 1, 2, 9)
    assert first.explanation == "first"
    assert second.explanation == "why"
    assert second.is_final
    assert sb.count == 2


def test_to_dict_is_json_friendly():
    step = Step(index=2, kind="graph", data={"edge": ("A", "B"), "nested": {"q": ("C",)}})
    out = step.to_dict()
    assert out["data"] == {"edge": ["A", "B"], "nested": {"q": ["C"]}}
    assert out["kind"] == "graph"


# ============================================================
# StepSequence
# ============================================================

def test_empty_sequence_rejected():
    with pytest.raises(EmptySequenceError):
        StepSequence([])


def test_empty_sequence_error_is_value_error():
    assert issubclass(EmptySequenceError, ValueError)


def test_step_indices_must_match_positions():
    with pytest.raises(ValueError):
        StepSequence([Step(index=0), Step(index=2)])


def test_sequence_is_a_read_only_view():
    seq = make_sequence(4)
    assert len(seq) == 4
    assert seq.last_index == 3
    assert [s.index for s in seq] == [0, 1, 2, 3]
    assert isinstance(seq.steps, tuple)
    assert seq[2].title == "step 2"


def test_step_payload_is_read_only():
    seq = build_sequence("insertion-sort")
    data = seq[0].data
    before = tuple(data["array"])

    with pytest.raises(AttributeError):
        data["array"].append(999)
    with pytest.raises(TypeError):
        data["array"] = [999]
    with pytest.raises(TypeError):
        data["extra"] = 1

    assert tuple(seq[0].data["array"]) == before
    assert "extra" not in seq[0].data
    assert build_sequence("insertion-sort")[0].data["array"] == before


def test_nested_payload_is_frozen():
    step = Step(index=0, data={"nodes": [{"id": "A", "adj": ["B"]}]})
    node = step.data["nodes"][0]
    with pytest.raises(TypeError):
        node["id"] = "Z"
    with pytest.raises(AttributeError):
        node["adj"].append("C")


def test_payload_is_copied_from_the_caller():
    source = {"array": [1, 2]}
    step = Step(index=0, data=source)
    source["array"].append(3)
    assert step.data["array"] == (1, 2)


@pytest.mark.parametrize("index, expected", [(-1, 0), (0, 0), (2, 2), (3, 3), (4, 3), (10**9, 3)])
def test_clamp(index, expected):
    assert make_sequence(4).clamp(index) == expected
    assert clamp_index(index, 4) == expected


def test_clamp_is_idempotent():
    seq = make_sequence(5)
    for i in range(-3, 9):
        assert seq.clamp(seq.clamp(i)) == seq.clamp(i)


def test_clamp_into_empty_raises():
    with pytest.raises(EmptySequenceError):
        clamp_index(0, 0)


# ============================================================
# build_sequence
# ============================================================

def test_unknown_algorithm_falls_back_to_default():
    seq = build_sequence("does-not-exist")
    assert seq.algorithm_id == DEFAULT_ALGORITHM
    assert seq == build_sequence(DEFAULT_ALGORITHM)


@pytest.mark.parametrize("raw", [None, ""])
def test_missing_algorithm_id_falls_back(raw):
    assert resolve_algorithm_id(raw) == DEFAULT_ALGORITHM


def test_known_ids_resolve_to_themselves():
    for key in REGISTRY:
        assert resolve_algorithm_id(key) == key


def test_build_is_deterministic():
    for key in REGISTRY:
        assert build_sequence(key) == build_sequence(key)


def test_builds_are_independent_objects():
    a = build_sequence("insertion-sort")
    b = build_sequence("insertion-sort")
    assert a is not b
    assert a[0] is not b[0]

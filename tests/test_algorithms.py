"""Registry and step-generator tests."""

import pytest

from algorithms import REGISTRY, categories, get_algorithm, list_algorithms, search_algorithms
from algorithms.samples import COURSE_DAG, SAMPLE_GRAPH
from playback import build_sequence


ALL_KEYS = list(REGISTRY)


# ============================================================
# Shared invariants for every generator
# ============================================================

@pytest.mark.parametrize("key", ALL_KEYS)
def test_generator_yields_well_formed_steps(key):
    steps = list(REGISTRY[key].fn())
    assert len(steps) >= 1
    assert [s.index for s in steps] == list(range(len(steps)))
    assert steps[-1].is_final
    assert not any(s.is_final for s in steps[:-1])


@pytest.mark.parametrize("key", ALL_KEYS)
def test_generator_is_deterministic(key):
    assert list(REGISTRY[key].fn()) == list(REGISTRY[key].fn())


@pytest.mark.parametrize("key", ALL_KEYS)
def test_pseudocode_lines_are_in_range(key):
    info = REGISTRY[key]
    for step in info.fn():
        assert -1 <= step.pseudocode_line < len(info.pseudocode)
        assert step.title
        assert step.explanation


@pytest.mark.parametrize("key", ALL_KEYS)
def test_metadata_is_complete(key):
    info = REGISTRY[key]
    assert info.key == key
    assert info.label and info.category
    assert info.complexity_time and info.complexity_space
    assert info.description and info.problem_statement
    assert info.use_cases and info.key_insights


# ============================================================
# Specific algorithm outcomes
# ============================================================

def test_binary_search_finds_target():
    seq = build_sequence("binary-search")
    assert len(seq) == 4
    final = seq[seq.last_index].data
    assert final["found"] is True
    assert final["mid"] == 6
    assert final["array"][final["mid"]] == final["target"] == 45


def test_insertion_sort_sorts():
    final = build_sequence("insertion-sort")[-1].data
    assert list(final["array"]) == sorted(final["array"])


def test_counting_sort_output_is_sorted():
    final = build_sequence("counting-sort")[-1].data
    assert final["phase"] == "final"
    assert list(final["output"]) == sorted(final["array"])


def test_dutch_flag_partitions():
    final = build_sequence("dutch-national-flag")[-1].data
    assert list(final["array"]) == sorted(final["array"])


def test_kadane_finds_maximum_subarray():
    final = build_sequence("kadanes-algorithm")[-1].data
    assert final["max_sum"] == 6
    assert (final["max_start"], final["max_end"]) == (3, 6)


def test_kadane_starts_at_negative_infinity():
    first = build_sequence("kadanes-algorithm")[0].data
    assert first["max_sum"] is None


def test_graph_bfs_order():
    final = build_sequence("graph-bfs")[-1].data
    assert final["order"] == ("A", "B", "C", "D", "E", "F", "G", "H")
    assert set(final["node_states"].values()) == {"visited"}
    assert final["queue"] == ()


def test_graph_dfs_order():
    final = build_sequence("graph-dfs")[-1].data
    assert final["order"] == ("A", "B", "E", "F", "C", "G", "D", "H")
    assert final["stack"] == ()


def test_dfs_marks_call_stack_while_descending():
    states_seen = set()
    for step in build_sequence("graph-dfs"):
        states_seen.update(step.data["node_states"].values())
    assert {"unvisited", "current", "stack", "visited"} <= states_seen


def test_topological_order_respects_dependencies():
    final = build_sequence("topological-sort")[-1].data
    assert final["directed"] is True
    completed = list(reversed(final["completed"]))
    assert sorted(completed) == sorted(COURSE_DAG)
    for node, course in COURSE_DAG.items():
        for dep in course["dependencies"]:
            assert completed.index(dep) < completed.index(node)


def test_graph_steps_cover_sample_graph():
    first = build_sequence("graph-bfs")[0].data
    assert {n["id"] for n in first["nodes"]} == set(SAMPLE_GRAPH)


def test_min_heap_property_after_insert():
    final = build_sequence("min-heap")[-1].data
    heap = final["heap"]
    assert heap[0] == 5
    for i in range(1, len(heap)):
        assert heap[(i - 1) // 2] <= heap[i]


def test_max_heap_property_after_extract():
    final = build_sequence("max-heap")[-1].data
    heap = final["heap"]
    assert final["extracted"] == 60
    for i in range(1, len(heap)):
        assert heap[(i - 1) // 2] >= heap[i]


def test_bst_finds_target():
    final = build_sequence("bst")[-1].data
    assert final["found"] is True
    assert final["current"] == 62
    assert final["path"] == (50, 75, 62)


def test_greedy_selects_non_overlapping_activities():
    final = build_sequence("greedy-algorithm")[-1].data
    assert final["selected"] == (0, 1, 3, 4)


def test_bit_manipulation_ends_with_swap():
    final = build_sequence("bit-manipulation")[-1]
    assert final.kind == "bits"
    assert "a=20, b=10" in final.title


# ============================================================
# Registry helpers
# ============================================================

def test_get_algorithm():
    assert get_algorithm("min-heap").label == "Min Heap"
    assert get_algorithm("nope") is None
    assert get_algorithm(None) is None


def test_list_algorithms_preserves_registry_order():
    assert [a.key for a in list_algorithms()] == ALL_KEYS
    assert len(ALL_KEYS) == 13


def test_categories_start_with_all_and_are_unique():
    cats = categories()
    assert cats[0] == "all"
    assert len(cats) == len(set(cats))
    assert {"Sorting", "Graph", "Heap", "Searching"} <= set(cats)


def test_search_by_label_is_case_insensitive():
    assert [a.key for a in search_algorithms("HEAP")] == ["min-heap", "max-heap"]


def test_search_by_tag():
    keys = {a.key for a in search_algorithms("queue")}
    assert "graph-bfs" in keys


def test_search_within_category():
    keys = [a.key for a in search_algorithms("", "Sorting")]
    assert keys == ["insertion-sort", "counting-sort", "dutch-national-flag"]
    assert search_algorithms("heap", "Sorting") == []


def test_empty_search_returns_everything():
    assert len(search_algorithms()) == len(REGISTRY)

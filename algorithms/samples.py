"""
samples.py — Fixed Sample Inputs
=================================
Every visualization runs against one hard-wired input.  There is no
user-supplied data in this app, which is what makes step sequences
deterministic and safe to rebuild at will.

Node coordinates are percentages of the canvas (0–100 on x, 0–280 on y)
so the renderer can scale them to any viewport.
"""

from typing import Dict, List, Tuple, Any

# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------
BINARY_SEARCH_ARRAY:  List[int] = [5, 13, 19, 24, 29, 38, 45, 53, 67, 78, 91]
BINARY_SEARCH_TARGET: int       = 45

INSERTION_SORT_ARRAY: List[int] = [29, 10, 14, 37, 20, 25, 44, 15]

COUNTING_SORT_ARRAY:  List[int] = [4, 2, 2, 8, 3, 3, 1, 0, 5, 7, 6, 2]

DUTCH_FLAG_ARRAY:     List[int] = [2, 0, 1, 1, 0, 2, 0, 1, 2, 0, 1, 2]

KADANE_ARRAY:         List[int] = [-2, 1, -3, 4, -1, 2, 1, -5, 4]

MIN_HEAP:             List[int] = [10, 15, 20, 30, 40, 50, 60]
MIN_HEAP_INSERT:      int       = 5

MAX_HEAP:             List[int] = [60, 50, 40, 30, 20, 10, 5]

BIT_NUMBER:           int       = 42
BIT_WIDTH:            int       = 8
SINGLE_NUMBER_ARRAY:  List[int] = [4, 1, 2, 1, 2]
XOR_SWAP_PAIR:        Tuple[int, int] = (10, 20)

# ---------------------------------------------------------------------------
# Binary search tree: inserted in this order, then searched for 62
# ---------------------------------------------------------------------------
BST_VALUES: List[int] = [50, 25, 75, 12, 37, 62, 87]
BST_TARGET: int       = 62

# ---------------------------------------------------------------------------
# Undirected sample graph shared by BFS and DFS
# ---------------------------------------------------------------------------
SAMPLE_GRAPH: Dict[str, Dict[str, Any]] = {
    "A": {"x": 50, "y": 50,  "neighbors": ["B", "C", "D"]},
    "B": {"x": 25, "y": 120, "neighbors": ["A", "E", "F"]},
    "C": {"x": 75, "y": 120, "neighbors": ["A", "G"]},
    "D": {"x": 50, "y": 180, "neighbors": ["A", "H"]},
    "E": {"x": 10, "y": 190, "neighbors": ["B"]},
    "F": {"x": 40, "y": 190, "neighbors": ["B"]},
    "G": {"x": 90, "y": 190, "neighbors": ["C"]},
    "H": {"x": 60, "y": 250, "neighbors": ["D"]},
}
GRAPH_START: str = "A"

# ---------------------------------------------------------------------------
# Course-prerequisite DAG for topological sort
#   dependencies = courses that must be taken BEFORE this one
# ---------------------------------------------------------------------------
COURSE_DAG: Dict[str, Dict[str, Any]] = {
    "A": {"label": "Math 101",    "x": 50, "y": 50,  "dependencies": []},
    "B": {"label": "CS 101",      "x": 20, "y": 120, "dependencies": []},
    "C": {"label": "Physics 101", "x": 80, "y": 120, "dependencies": ["A"]},
    "D": {"label": "CS 201",      "x": 35, "y": 190, "dependencies": ["B"]},
    "E": {"label": "Math 201",    "x": 65, "y": 190, "dependencies": ["A"]},
    "F": {"label": "CS 301",      "x": 50, "y": 260, "dependencies": ["D", "E"]},
}

# ---------------------------------------------------------------------------
# Activity selection: (id, start, finish)
# ---------------------------------------------------------------------------
ACTIVITIES: List[Tuple[int, int, int]] = [
    (0, 1, 2),
    (1, 3, 4),
    (2, 0, 6),
    (3, 5, 7),
    (4, 8, 9),
    (5, 5, 9),
]


def graph_edges(graph: Dict[str, Dict[str, Any]]) -> List[Tuple[str, str]]:
    """Undirected edge list (each pair once, in adjacency order)."""
    edges: List[Tuple[str, str]] = []
    seen = set()
    for node_id, node in graph.items():
        for nbr in node["neighbors"]:
            key = frozenset((node_id, nbr))
            if key not in seen:
                seen.add(key)
                edges.append((node_id, nbr))
    return edges


def graph_nodes(graph: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Renderer-friendly node list: [{"id", "x", "y", "label"}, …]."""
    return [
        {"id": nid, "x": n["x"], "y": n["y"], "label": n.get("label", nid)}
        for nid, n in graph.items()
    ]

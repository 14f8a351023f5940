"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict keyed by the algorithm id used in URLs and the UI:
    {
        "binary-search": AlgoInfo(key, label, category, fn, pseudocode, …),
        …
    }

Every `fn` is a zero-argument generator over a fixed sample input, so
the registry doubles as the lookup table `AlgorithmId -> () -> Steps`.
Adding a new algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.binary_search_tree  import binary_search_tree  as _bst,    PSEUDOCODE as _bst_pc
from algorithms.graph_dfs           import graph_dfs           as _dfs,    PSEUDOCODE as _dfs_pc
from algorithms.graph_bfs           import graph_bfs           as _bfs,    PSEUDOCODE as _bfs_pc
from algorithms.binary_search       import binary_search       as _bs,     PSEUDOCODE as _bs_pc
from algorithms.insertion_sort      import insertion_sort      as _ins,    PSEUDOCODE as _ins_pc
from algorithms.topological_sort    import topological_sort    as _topo,   PSEUDOCODE as _topo_pc
from algorithms.kadanes             import kadanes_algorithm   as _kad,    PSEUDOCODE as _kad_pc
from algorithms.counting_sort       import counting_sort       as _cnt,    PSEUDOCODE as _cnt_pc
from algorithms.min_heap            import min_heap            as _minh,   PSEUDOCODE as _minh_pc
from algorithms.max_heap            import max_heap            as _maxh,   PSEUDOCODE as _maxh_pc
from algorithms.dutch_national_flag import dutch_national_flag as _dnf,    PSEUDOCODE as _dnf_pc
from algorithms.bit_manipulation    import bit_manipulation    as _bits,   PSEUDOCODE as _bits_pc
from algorithms.greedy_activity     import greedy_activity     as _greedy, PSEUDOCODE as _greedy_pc


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "binary-search"
    label:             str                    # human label, e.g. "Binary Search"
    category:          str                    # library tab, e.g. "Searching"
    fn:                Callable               # zero-arg step generator
    pseudocode:        List[str]              # lines for the code panel
    tags:              List[str] = field(default_factory=list)
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""
    problem_statement: str      = ""
    use_cases:         List[str] = field(default_factory=list)
    key_insights:      List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "key":               self.key,
            "label":             self.label,
            "category":          self.category,
            "tags":              list(self.tags),
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
            "problem_statement": self.problem_statement,
            "use_cases":         list(self.use_cases),
            "key_insights":      list(self.key_insights),
            "pseudocode":        list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bst": AlgoInfo(
        key="bst", label="Binary Search Tree", category="Tree", fn=_bst, pseudocode=_bst_pc,
        tags=["tree", "search", "binary", "recursive"],
        complexity_time="Average O(log n) for search, insert, delete; O(n) if the tree degenerates",
        complexity_space="O(n)",
        description=(
            "A binary tree where every left subtree holds smaller values and every right "
            "subtree larger ones, so each comparison discards a whole subtree."
        ),
        use_cases=["Dynamic sets and lookup tables", "Database indexing", "Priority queues"],
        key_insights=[
            "Operations are O(log n) while the tree stays balanced",
            "An in-order traversal yields the values in sorted order",
            "Self-balancing variants (AVL, red-black) guarantee O(log n) worst case",
        ],
    ),

    "graph-dfs": AlgoInfo(
        key="graph-dfs", label="Depth-First Search (Graph)", category="Graph", fn=_dfs, pseudocode=_dfs_pc,
        tags=["graph", "search", "traversal", "recursive", "stack"],
        complexity_time="O(V + E)", complexity_space="O(V) for the recursion stack",
        description="Explores as far as possible along each branch before backtracking.",
        use_cases=["Topological sorting", "Connected components", "Maze solving", "Cycle detection"],
        key_insights=[
            "Implemented with recursion or an explicit stack",
            "Does NOT guarantee shortest paths",
            "Pre-, in- and post-order tree traversals are all DFS",
        ],
    ),

    "graph-bfs": AlgoInfo(
        key="graph-bfs", label="Breadth-First Search (Graph)", category="Graph", fn=_bfs, pseudocode=_bfs_pc,
        tags=["graph", "search", "traversal", "queue", "shortest path"],
        complexity_time="O(V + E)", complexity_space="O(V) for the queue",
        description="Explores layer by layer using a FIFO queue, in order of distance from the start.",
        use_cases=["Shortest paths in unweighted graphs", "Web crawlers", "Social network distance"],
        key_insights=[
            "Visits every node at depth d before any node at depth d + 1",
            "Finds shortest paths by hop count",
            "Uses more memory than DFS on wide graphs",
        ],
    ),

    "binary-search": AlgoInfo(
        key="binary-search", label="Binary Search", category="Searching", fn=_bs, pseudocode=_bs_pc,
        tags=["search", "divide and conquer", "sorted array", "logarithmic"],
        complexity_time="O(log n)", complexity_space="O(1) iterative",
        description="Repeatedly halves a sorted array by comparing the target with the middle element.",
        use_cases=["Lookup in sorted arrays", "Finding insertion points", "git bisect"],
        key_insights=[
            "Requires sorted input",
            "Halves the search space on every comparison",
            "Adapts naturally to lower/upper-bound queries",
        ],
    ),

    "insertion-sort": AlgoInfo(
        key="insertion-sort", label="Insertion Sort", category="Sorting", fn=_ins, pseudocode=_ins_pc,
        tags=["sorting", "in-place", "stable", "quadratic", "elementary"],
        complexity_time="O(n²) worst/average, O(n) when already sorted", complexity_space="O(1)",
        description="Grows a sorted prefix one element at a time, shifting larger elements right.",
        use_cases=["Small datasets", "Nearly sorted data", "Online sorting as data arrives"],
        key_insights=[
            "In-place and stable",
            "Used inside hybrid sorts such as Timsort for short runs",
        ],
    ),

    "topological-sort": AlgoInfo(
        key="topological-sort", label="Topological Sort", category="Graph", fn=_topo, pseudocode=_topo_pc,
        tags=["graph", "dag", "dependencies", "scheduling", "dfs"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Orders the vertices of a DAG so every edge points forward.",
        use_cases=["Task scheduling", "Course prerequisites", "Package dependency resolution", "Build order"],
        key_insights=[
            "Only defined for directed acyclic graphs",
            "A DAG can have many valid orderings",
            "DFS finishing order reversed, or Kahn's BFS-based algorithm",
        ],
    ),

    "kadanes-algorithm": AlgoInfo(
        key="kadanes-algorithm", label="Kadane's Algorithm", category="Dynamic Programming",
        fn=_kad, pseudocode=_kad_pc,
        tags=["dynamic programming", "array", "maximum subarray", "optimization"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Finds the maximum-sum contiguous subarray in a single pass.",
        use_cases=["Maximum profit windows", "Signal and image processing", "Bioinformatics"],
        key_insights=[
            "The best subarray ending at i either extends the one ending at i-1 or starts fresh",
            "Tracking start/end indices recovers the subarray itself",
        ],
    ),

    "counting-sort": AlgoInfo(
        key="counting-sort", label="Counting Sort", category="Sorting", fn=_cnt, pseudocode=_cnt_pc,
        tags=["sorting", "non-comparative", "linear time", "stable", "integer"],
        complexity_time="O(n + k)", complexity_space="O(n + k)",
        description="Counts occurrences of each key, then uses prefix sums to place elements.",
        use_cases=["Small-range integer keys", "Radix sort digit passes"],
        key_insights=[
            "Not comparison-based, so it beats the O(n log n) bound",
            "Stable when the output pass runs right to left",
        ],
    ),

    "min-heap": AlgoInfo(
        key="min-heap", label="Min Heap", category="Heap", fn=_minh, pseudocode=_minh_pc,
        tags=["heap", "priority queue", "binary tree", "data structure", "complete tree"],
        complexity_time="O(1) find-min, O(log n) insert / extract-min", complexity_space="O(n)",
        description="A complete binary tree where every parent is ≤ its children.",
        use_cases=["Priority queues", "Dijkstra's algorithm", "k smallest elements"],
        key_insights=[
            "Stored as an array: children of i live at 2i + 1 and 2i + 2",
            "Insert appends then sifts up",
        ],
    ),

    "max-heap": AlgoInfo(
        key="max-heap", label="Max Heap", category="Heap", fn=_maxh, pseudocode=_maxh_pc,
        tags=["heap", "priority queue", "binary tree", "data structure", "complete tree"],
        complexity_time="O(1) find-max, O(log n) insert / extract-max", complexity_space="O(n)",
        description="A complete binary tree where every parent is ≥ its children.",
        use_cases=["Priority scheduling", "Heap sort", "k largest elements"],
        key_insights=[
            "Extract moves the last element to the root, then sifts down",
            "Sift-down always swaps with the larger child",
        ],
    ),

    "dutch-national-flag": AlgoInfo(
        key="dutch-national-flag", label="Dutch National Flag Algorithm", category="Sorting",
        fn=_dnf, pseudocode=_dnf_pc,
        tags=["sorting", "in-place", "linear time", "partitioning", "three-way"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Dijkstra's single-pass three-way partition of 0s, 1s and 2s.",
        problem_statement=(
            "Given an array containing only 0s, 1s and 2s, sort it in place so equal "
            "values are grouped together."
        ),
        use_cases=["Sort Colors", "Three-way quicksort partitioning", "Segregating binary arrays"],
        key_insights=[
            "Three pointers split the array into four regions",
            "mid does not advance after a swap with high",
        ],
    ),

    "bit-manipulation": AlgoInfo(
        key="bit-manipulation", label="Bit Manipulation", category="Bit Operations",
        fn=_bits, pseudocode=_bits_pc,
        tags=["bit manipulation", "binary", "optimization", "bitwise operations", "algorithms"],
        complexity_time="O(1) per operation", complexity_space="O(1)",
        description="Classic bitwise idioms: counting, testing, setting, clearing and toggling bits.",
        problem_statement=(
            "Solve integer problems at the bit level: count set bits, test for powers of "
            "two and manipulate individual bits."
        ),
        use_cases=["Flags and bitmasks", "Encoding and decoding", "Finding unique elements"],
        key_insights=[
            "n & (n - 1) clears the lowest set bit",
            "x ^ x == 0 and x ^ 0 == x",
        ],
    ),

    "greedy-algorithm": AlgoInfo(
        key="greedy-algorithm", label="Greedy Algorithm", category="Algorithm Paradigm",
        fn=_greedy, pseudocode=_greedy_pc,
        tags=["greedy", "optimization", "algorithm paradigm", "activity selection", "knapsack"],
        complexity_time="O(n log n) for activity selection", complexity_space="O(n)",
        description="Makes the locally optimal choice at every step; shown on activity selection.",
        problem_statement=(
            "Given activities with start and finish times, select the maximum number "
            "that one person can attend without overlap."
        ),
        use_cases=["Minimum spanning trees", "Huffman coding", "Activity selection", "Coin change"],
        key_insights=[
            "Earliest finish first is provably optimal for activity selection",
            "Greedy choices are not optimal for every problem",
        ],
    ),
}

# Fallback visualization for unknown ids.
DEFAULT_ALGORITHM: str = "binary-search"


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Optional[str]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    if key is None:
        return None
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def categories() -> List[str]:
    """"all" followed by every category in first-seen order."""
    seen: List[str] = ["all"]
    for info in REGISTRY.values():
        if info.category not in seen:
            seen.append(info.category)
    return seen


def search_algorithms(query: str = "", category: str = "all") -> List[AlgoInfo]:
    """Case-insensitive match on label, category or any tag, within a category."""
    needle = (query or "").strip().lower()
    out = []
    for info in REGISTRY.values():
        if category not in ("all", "", None) and info.category != category:
            continue
        haystack = [info.label.lower(), info.category.lower()] + [t.lower() for t in info.tags]
        if needle and not any(needle in h for h in haystack):
            continue
        out.append(info)
    return out


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "DEFAULT_ALGORITHM",
    "get_algorithm",
    "list_algorithms",
    "categories",
    "search_algorithms",
]

"""
graph_dfs.py — Depth-First Search
==================================
Recursive DFS over the fixed 8-node sample graph, starting at A.

Yields a Step at:
  1. Initialise
  2. Enter a node  →  CURRENT, pushed on the call stack
  3. Finish a node →  VISITED, popped (backtrack)
  4. Final step    →  full visiting order (A, B, E, F, C, G, D, H)

The data payload exposes the call stack at every step so the UI can
render the "recursion stack" panel.
"""

from typing import Generator, List, Dict

from algorithms.samples import SAMPLE_GRAPH, GRAPH_START, graph_edges, graph_nodes
from algorithms.step import Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def dfs(graph, node, visited):",           # 0
    "    visited.add(node)",                    # 1
    "    for neighbor in graph[node]:",         # 2
    "        if neighbor not in visited:",      # 3
    "            dfs(graph, neighbor, visited)",# 4
    "    return visited",                       # 5
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def graph_dfs() -> Generator[Step, None, None]:
    sb = StepBuilder(kind="graph")
    sb.data["nodes"] = graph_nodes(SAMPLE_GRAPH)
    sb.data["edges"] = graph_edges(SAMPLE_GRAPH)

    states: Dict[str, str] = {nid: "unvisited" for nid in SAMPLE_GRAPH}
    stack: List[str] = []
    order: List[str] = []

    def snapshot(current=None, edge=None):
        sb.data["node_states"] = dict(states)
        sb.data["current"] = current
        sb.data["active_edge"] = edge
        sb.data["stack"] = list(stack)
        sb.data["order"] = list(order)

    def visit(node: str, parent=None) -> Generator[Step, None, None]:
        stack.append(node)
        order.append(node)
        states[node] = "current"
        snapshot(current=node, edge=[parent, node] if parent else None)
        sb.pseudocode_line = 1
        yield sb.build(
            f"Visit {node}",
            f"Visit '{node}' and mark it visited. DFS goes as deep as "
            f"possible along each branch before backtracking.",
        )

        for nbr in SAMPLE_GRAPH[node]["neighbors"]:
            if states[nbr] == "unvisited":
                states[node] = "stack"
                yield from visit(nbr, node)
                states[node] = "current"

        stack.pop()
        states[node] = "visited"
        if stack:
            states[stack[-1]] = "current"
        snapshot(current=stack[-1] if stack else None)
        sb.pseudocode_line = 5
        if stack:
            yield sb.build(
                f"Backtrack from {node}",
                f"Every neighbour of '{node}' has been explored — "
                f"backtrack to '{stack[-1]}'.",
            )

    snapshot()
    sb.pseudocode_line = 0
    yield sb.build(
        f"Start at {GRAPH_START}",
        f"Initialise: call dfs('{GRAPH_START}') with an empty visited set.",
    )

    yield from visit(GRAPH_START)

    snapshot()
    sb.pseudocode_line = 5
    yield sb.build(
        "Traversal complete",
        f"The call stack is empty. DFS visited every node in order: "
        f"{' → '.join(order)}.",
        is_final=True,
    )

"""
graph_bfs.py — Breadth-First Search
====================================
Generator-based BFS over the fixed 8-node sample graph, starting at A.
Yields a Step at every meaningful event:
  1. Initialise  →  source in the queue
  2. Dequeue a node  →  mark it CURRENT
  3. Enqueue an unseen neighbour  →  mark it FRONTIER
  4. Node finished  →  VISITED
  5. Final step  →  full traversal order

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from typing import Generator, List, Dict
from collections import deque

from algorithms.samples import SAMPLE_GRAPH, GRAPH_START, graph_edges, graph_nodes
from algorithms.step import Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def bfs(graph, start):",                   # 0
    "    queue = deque([start])",               # 1
    "    visited = {start}",                    # 2
    "    while queue:",                         # 3
    "        node = queue.popleft()",           # 4
    "        for neighbor in graph[node]:",     # 5
    "            if neighbor not in visited:",  # 6
    "                visited.add(neighbor)",    # 7
    "                queue.append(neighbor)",   # 8
    "    return visited",                       # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def graph_bfs() -> Generator[Step, None, None]:
    """
    Yields Step snapshots for a full BFS traversal of SAMPLE_GRAPH.

    Yields:
        Step – one per event (dequeue, enqueue, finish, done).
    """

    sb = StepBuilder(kind="graph")
    sb.data["nodes"] = graph_nodes(SAMPLE_GRAPH)
    sb.data["edges"] = graph_edges(SAMPLE_GRAPH)

    queue = deque([GRAPH_START])
    discovered: List[str] = [GRAPH_START]
    order: List[str] = []
    states: Dict[str, str] = {nid: "unvisited" for nid in SAMPLE_GRAPH}
    states[GRAPH_START] = "frontier"

    def snapshot(current=None, edge=None):
        sb.data["node_states"] = dict(states)
        sb.data["current"] = current
        sb.data["active_edge"] = edge
        sb.data["queue"] = list(queue)
        sb.data["order"] = list(order)

    # --- initialisation step ---
    snapshot()
    sb.pseudocode_line = 1
    yield sb.build(
        f"Start at {GRAPH_START}",
        f"Initialise: '{GRAPH_START}' is placed into the queue and marked as "
        f"discovered. BFS explores the graph layer by layer from here.",
    )

    # --- main loop ---
    while queue:
        node = queue.popleft()
        states[node] = "current"
        snapshot(current=node)
        sb.pseudocode_line = 4
        yield sb.build(
            f"Dequeue {node}",
            f"Dequeue '{node}' — BFS always expands the node that was "
            f"discovered earliest (FIFO).",
        )

        for nbr in SAMPLE_GRAPH[node]["neighbors"]:
            if nbr in discovered:
                continue
            discovered.append(nbr)
            queue.append(nbr)
            states[nbr] = "frontier"
            snapshot(current=node, edge=[node, nbr])
            sb.pseudocode_line = 8
            yield sb.build(
                f"Enqueue {nbr}",
                f"'{nbr}' is a new neighbour of '{node}' — mark it discovered "
                f"and enqueue it behind everything already waiting.",
            )

        states[node] = "visited"
        order.append(node)

    snapshot()
    sb.pseudocode_line = 9
    yield sb.build(
        "Traversal complete",
        f"The queue is empty. BFS visited every node in order: {' → '.join(order)}.",
        is_final=True,
    )

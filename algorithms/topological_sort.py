"""
topological_sort.py — Topological Sort (DFS finishing order)
=============================================================
Orders the course-prerequisite DAG so every course comes after the
courses it depends on.  Edges point from a prerequisite to the course
that needs it; a node is "completed" once all of its dependants are,
and the reversed completion order is a valid schedule.
"""

from typing import Generator, List, Dict

from algorithms.samples import COURSE_DAG, graph_nodes
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def topological_sort(graph):",             # 0
    "    visited, order = set(), []",           # 1
    "    def visit(node):",                     # 2
    "        visited.add(node)",                # 3
    "        for nxt in graph[node]:",          # 4
    "            if nxt not in visited:",       # 5
    "                visit(nxt)",               # 6
    "        order.append(node)",               # 7
    "    for node in graph:",                   # 8
    "        if node not in visited: visit(node)",  # 9
    "    return order[::-1]",                   # 10
]


def _dependants(dag) -> Dict[str, List[str]]:
    out: Dict[str, List[str]] = {nid: [] for nid in dag}
    for nid, node in dag.items():
        for dep in node["dependencies"]:
            out[dep].append(nid)
    return out


def topological_sort() -> Generator[Step, None, None]:
    adjacency = _dependants(COURSE_DAG)
    edges = [[src, dst] for src, dsts in adjacency.items() for dst in dsts]

    visited: List[str] = []
    completed: List[str] = []
    stack: List[str] = []

    sb = StepBuilder(kind="graph")
    sb.data.update(nodes=graph_nodes(COURSE_DAG), edges=edges, directed=True)

    def snapshot(active=None):
        states = {}
        for nid in COURSE_DAG:
            if nid in completed:
                states[nid] = "visited"
            elif nid == active:
                states[nid] = "current"
            elif nid in stack:
                states[nid] = "stack"
            else:
                states[nid] = "unvisited"
        sb.data.update(
            node_states=states, current=active, stack=list(stack),
            visited_order=list(visited), completed=list(completed),
            order=[COURSE_DAG[n]["label"] for n in reversed(completed)],
        )

    def visit(node: str) -> Generator[Step, None, None]:
        visited.append(node)
        stack.append(node)
        snapshot(node)
        sb.pseudocode_line = 3
        label = COURSE_DAG[node]["label"]
        yield sb.build(
            f"Visit {label}",
            f"Visit {label}. Before it can be finished, every course that "
            f"requires it must be finished first.",
        )
        for nxt in adjacency[node]:
            if nxt not in visited:
                yield from visit(nxt)
        stack.pop()
        completed.append(node)
        snapshot(stack[-1] if stack else None)
        sb.pseudocode_line = 7
        yield sb.build(
            f"Finish {label}",
            f"All courses depending on {label} are done, so it is prepended "
            f"to the schedule.",
        )

    snapshot()
    sb.pseudocode_line = 1
    yield sb.build(
        "Course prerequisites",
        "An edge X → Y means X must be taken before Y. We need an order that "
        "respects every edge.",
    )

    for node in COURSE_DAG:
        if node not in visited:
            yield from visit(node)

    snapshot()
    sb.pseudocode_line = 10
    order = [COURSE_DAG[n]["label"] for n in reversed(completed)]
    yield sb.build(
        "Topological order",
        f"Reverse finishing order gives a valid schedule: {' → '.join(order)}.",
        is_final=True,
    )

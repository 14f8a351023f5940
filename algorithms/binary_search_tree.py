"""
binary_search_tree.py — BST Search
===================================
Builds a binary search tree from BST_VALUES (insertion order), then
walks it looking for BST_TARGET.  One Step per node comparison plus an
initial and a final step.

Node layout is computed from the insertion structure: each level halves
the horizontal span of its parent, so the renderer can place nodes
without knowing anything about trees.
"""

from typing import Generator, List, Dict, Optional, Any

from algorithms.samples import BST_VALUES, BST_TARGET
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def find(self, value):",                   # 0
    "    current = self.root",                  # 1
    "    while current:",                       # 2
    "        if value == current.value:",       # 3
    "            return True",                  # 4
    "        if value < current.value:",        # 5
    "            current = current.left",       # 6
    "        else:",                            # 7
    "            current = current.right",      # 8
    "    return False",                         # 9
]


class _Node:
    __slots__ = ("value", "left", "right", "x", "y")

    def __init__(self, value: int, x: float, y: float):
        self.value = value
        self.left: Optional["_Node"] = None
        self.right: Optional["_Node"] = None
        self.x = x
        self.y = y


def _build_tree(values: List[int]) -> Optional[_Node]:
    root: Optional[_Node] = None
    for value in values:
        if root is None:
            root = _Node(value, 50.0, 50.0)
            continue
        current, span = root, 25.0
        while True:
            if value == current.value:
                break
            if value < current.value:
                if current.left is None:
                    current.left = _Node(value, current.x - span, current.y + 70)
                    break
                current = current.left
            else:
                if current.right is None:
                    current.right = _Node(value, current.x + span, current.y + 70)
                    break
                current = current.right
            span /= 2
    return root


def _flatten(root: Optional[_Node]):
    nodes: List[Dict[str, Any]] = []
    edges: List[List[int]] = []
    pending = [root] if root else []
    while pending:
        node = pending.pop(0)
        nodes.append({"id": node.value, "x": node.x, "y": node.y, "label": str(node.value)})
        for child in (node.left, node.right):
            if child is not None:
                edges.append([node.value, child.value])
                pending.append(child)
    return nodes, edges


def binary_search_tree() -> Generator[Step, None, None]:
    root = _build_tree(BST_VALUES)
    nodes, edges = _flatten(root)
    target = BST_TARGET

    sb = StepBuilder(kind="tree")
    sb.data.update(nodes=nodes, edges=edges, target=target,
                   current=None, path=[], found=False)

    sb.pseudocode_line = 1
    yield sb.build(
        f"Searching for {target}",
        f"Start at the root. Every left subtree holds smaller values and every "
        f"right subtree larger ones, so each comparison discards a whole subtree.",
    )

    path: List[int] = []
    current = root
    while current is not None:
        path.append(current.value)
        sb.data.update(current=current.value, path=list(path))

        if target == current.value:
            sb.data["found"] = True
            sb.pseudocode_line = 4
            yield sb.build(
                f"Found {target}!",
                f"{target} == {current.value}: the value is in the tree, reached "
                f"via {' → '.join(str(v) for v in path)}.",
                is_final=True,
            )
            return

        if target < current.value:
            sb.pseudocode_line = 6
            yield sb.build(
                f"{target} < {current.value}",
                f"Comparing {target} with {current.value}: {target} < {current.value}, "
                f"so go to the left subtree.",
            )
            current = current.left
        else:
            sb.pseudocode_line = 8
            yield sb.build(
                f"{target} > {current.value}",
                f"Comparing {target} with {current.value}: {target} > {current.value}, "
                f"so go to the right subtree.",
            )
            current = current.right

    sb.data["current"] = None
    sb.pseudocode_line = 9
    yield sb.build(
        f"{target} not found",
        "Fell off the bottom of the tree — the value is not present.",
        is_final=True,
    )

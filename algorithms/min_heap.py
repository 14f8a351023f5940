"""
min_heap.py — Min-Heap Insert
==============================
Appends MIN_HEAP_INSERT to an array-backed min-heap and sifts it up:
compare with the parent, swap while smaller, stop at the root or when
the heap property holds.
"""

from typing import Generator, List

from algorithms.samples import MIN_HEAP, MIN_HEAP_INSERT
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def push(heap, value):",                   # 0
    "    heap.append(value)",                   # 1
    "    i = len(heap) - 1",                    # 2
    "    while i > 0:",                         # 3
    "        parent = (i - 1) // 2",            # 4
    "        if heap[i] >= heap[parent]: break",# 5
    "        heap[i], heap[parent] = heap[parent], heap[i]",  # 6
    "        i = parent",                       # 7
]


def min_heap() -> Generator[Step, None, None]:
    heap = list(MIN_HEAP)
    value = MIN_HEAP_INSERT
    sb = StepBuilder(kind="heap")

    def snapshot(highlighted=(), swapping=()):
        sb.data.update(heap=list(heap), highlighted=list(highlighted),
                       swapping=list(swapping), inserted=value)

    snapshot()
    sb.pseudocode_line = 0
    yield sb.build(
        "Initial min-heap",
        "Every parent is ≤ its children, so the minimum sits at the root.",
    )

    heap.append(value)
    i = len(heap) - 1
    snapshot([i])
    sb.pseudocode_line = 1
    yield sb.build(
        f"Insert {value} at the end",
        f"Append {value} at index {i}, the next free slot of the complete tree.",
    )

    while i > 0:
        parent = (i - 1) // 2
        snapshot([i, parent])
        sb.pseudocode_line = 5
        yield sb.build(
            f"Compare {heap[i]} with parent {heap[parent]}",
            f"Compare heap[{i}] = {heap[i]} with its parent heap[{parent}] = {heap[parent]}.",
        )
        if heap[i] >= heap[parent]:
            break

        snapshot([i, parent], [i, parent])
        sb.pseudocode_line = 6
        yield sb.build(
            f"{heap[i]} < {heap[parent]}: swap",
            f"{heap[i]} is smaller than its parent, which breaks the heap property. Swap them.",
        )
        heap[i], heap[parent] = heap[parent], heap[i]
        i = parent
        snapshot([i])
        sb.pseudocode_line = 7
        yield sb.build(
            "After swap",
            f"{heap[i]} moved up to index {i}.",
        )

    snapshot()
    sb.pseudocode_line = -1
    yield sb.build(
        "Min-heap property restored",
        f"The heap is valid again with {heap[0]} at the root: {heap}.",
        is_final=True,
    )

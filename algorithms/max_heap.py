"""
max_heap.py — Max-Heap Extract
===============================
Removes the root of an array-backed max-heap: move the last element to
the root, then sift it down by swapping with the larger child until
both children are smaller (or it reaches a leaf).
"""

from typing import Generator, List, Optional

from algorithms.samples import MAX_HEAP
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def pop(heap):",                           # 0
    "    top = heap[0]",                        # 1
    "    heap[0] = heap.pop()",                 # 2
    "    i = 0",                                # 3
    "    while True:",                          # 4
    "        largest, l, r = i, 2*i + 1, 2*i + 2",  # 5
    "        if l < n and heap[l] > heap[largest]: largest = l",  # 6
    "        if r < n and heap[r] > heap[largest]: largest = r",  # 7
    "        if largest == i: break",           # 8
    "        heap[i], heap[largest] = heap[largest], heap[i]",  # 9
    "        i = largest",                      # 10
    "    return top",                           # 11
]


def max_heap() -> Generator[Step, None, None]:
    heap = list(MAX_HEAP)
    extracted: Optional[int] = None
    sb = StepBuilder(kind="heap")

    def snapshot(highlighted=(), swapping=()):
        sb.data.update(heap=list(heap), highlighted=list(highlighted),
                       swapping=list(swapping), extracted=extracted)

    snapshot()
    sb.pseudocode_line = 0
    yield sb.build(
        "Initial max-heap",
        "Every parent is ≥ its children, so the maximum sits at the root.",
    )

    extracted = heap[0]
    snapshot([0])
    sb.pseudocode_line = 1
    yield sb.build(
        f"Extract maximum {extracted}",
        f"The root {extracted} is the largest element; remove it.",
    )

    last = heap.pop()
    if heap:
        heap[0] = last
    snapshot([0])
    sb.pseudocode_line = 2
    yield sb.build(
        "Move last element to root",
        f"Fill the hole at the root with the last element ({last}) so the tree stays complete.",
    )

    i, n = 0, len(heap)
    while True:
        largest, left, right = i, 2 * i + 1, 2 * i + 2
        if left < n:
            snapshot([i, left])
            sb.pseudocode_line = 6
            yield sb.build(
                f"Compare {heap[i]} with left child {heap[left]}",
                f"Compare heap[{i}] = {heap[i]} with its left child heap[{left}] = {heap[left]}.",
            )
            if heap[left] > heap[largest]:
                largest = left
        if right < n:
            snapshot([i, right])
            sb.pseudocode_line = 7
            yield sb.build(
                f"Compare {heap[i]} with right child {heap[right]}",
                f"Compare heap[{i}] = {heap[i]} with its right child heap[{right}] = {heap[right]}.",
            )
            if heap[right] > heap[largest]:
                largest = right

        if largest == i:
            break

        snapshot([i, largest], [i, largest])
        sb.pseudocode_line = 9
        yield sb.build(
            f"{heap[largest]} > {heap[i]}: swap",
            f"The larger child {heap[largest]} beats {heap[i]}. Swap them.",
        )
        heap[i], heap[largest] = heap[largest], heap[i]
        i = largest
        snapshot([i])
        sb.pseudocode_line = 10
        yield sb.build("After swap", f"{heap[i]} moved down to index {i}.")

    snapshot()
    sb.pseudocode_line = 11
    yield sb.build(
        "Max-heap property restored",
        f"Extracted {extracted}; the remaining heap is {heap}.",
        is_final=True,
    )

"""
counting_sort.py — Counting Sort
=================================
Three phases, each yielding one Step per element touched:
  1. counting     – tally every value into the count array
  2. cumulative   – prefix-sum the count array
  3. output       – place elements right-to-left (keeps the sort stable)
"""

from typing import Generator, List, Optional

from algorithms.samples import COUNTING_SORT_ARRAY
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def counting_sort(arr):",                  # 0
    "    count = [0] * (max(arr) + 1)",         # 1
    "    for x in arr:",                        # 2
    "        count[x] += 1",                    # 3
    "    for i in range(1, len(count)):",       # 4
    "        count[i] += count[i - 1]",         # 5
    "    output = [None] * len(arr)",           # 6
    "    for x in reversed(arr):",              # 7
    "        count[x] -= 1",                    # 8
    "        output[count[x]] = x",             # 9
    "    return output",                        # 10
]


def counting_sort() -> Generator[Step, None, None]:
    arr = list(COUNTING_SORT_ARRAY)
    count = [0] * (max(arr) + 1)
    output: List[Optional[int]] = [None] * len(arr)

    sb = StepBuilder(kind="counting")

    def snapshot(phase: str, index: int, count_index: int = -1):
        sb.data.update(
            phase=phase,
            index=index,
            count_index=count_index,
            array=list(arr),
            count=list(count),
            output=list(output),
        )

    snapshot("initial", -1)
    sb.pseudocode_line = 1
    yield sb.build(
        "Initialise counts",
        f"Create a count array of size max(arr) + 1 = {len(count)}, filled with zeros.",
    )

    for i, x in enumerate(arr):
        count[x] += 1
        snapshot("counting", i, x)
        sb.pseudocode_line = 3
        yield sb.build(
            f"count[{x}]++",
            f"Read arr[{i}] = {x}: now count[{x}] = {count[x]}.",
        )

    for i in range(1, len(count)):
        count[i] += count[i - 1]
        snapshot("cumulative", -1, i)
        sb.pseudocode_line = 5
        yield sb.build(
            f"count[{i}] += count[{i - 1}]",
            f"Make the counts cumulative: count[{i}] = {count[i]} elements are ≤ {i}.",
        )

    for i in range(len(arr) - 1, -1, -1):
        x = arr[i]
        count[x] -= 1
        output[count[x]] = x
        snapshot("output", i, x)
        sb.pseudocode_line = 9
        yield sb.build(
            f"Place {x} at {count[x]}",
            f"Scanning right to left keeps equal keys in order: arr[{i}] = {x} "
            f"goes to output[{count[x]}].",
        )

    snapshot("final", -1)
    sb.pseudocode_line = 10
    yield sb.build(
        "Sorting complete",
        f"The output array is sorted: {output}.",
        is_final=True,
    )

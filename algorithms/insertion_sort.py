"""
insertion_sort.py — Insertion Sort
===================================
Classic in-place insertion sort.  Steps: pick the key, every shift of a
larger element one slot to the right, the insertion itself, and the
final sorted array.  `sorted` lists the indices of the sorted prefix.
"""

from typing import Generator, List

from algorithms.samples import INSERTION_SORT_ARRAY
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def insertion_sort(arr):",                 # 0
    "    for i in range(1, len(arr)):",          # 1
    "        key = arr[i]",                     # 2
    "        j = i - 1",                        # 3
    "        while j >= 0 and arr[j] > key:",   # 4
    "            arr[j + 1] = arr[j]",          # 5
    "            j -= 1",                       # 6
    "        arr[j + 1] = key",                 # 7
    "    return arr",                           # 8
]


def insertion_sort() -> Generator[Step, None, None]:
    arr = list(INSERTION_SORT_ARRAY)
    sb = StepBuilder(kind="array")

    def snapshot(current, comparing, sorted_upto, key=None):
        sb.data.update(
            array=list(arr),
            current=current,
            comparing=comparing,
            sorted=list(range(sorted_upto)),
            key=key,
            highlight=[i for i in (current, comparing) if i is not None],
        )

    snapshot(None, None, 1)
    sb.pseudocode_line = 0
    yield sb.build(
        "Initial array",
        "A single element is trivially sorted, so the sorted prefix starts as [arr[0]].",
    )

    for i in range(1, len(arr)):
        key = arr[i]
        snapshot(i, i - 1, i, key)
        sb.pseudocode_line = 2
        yield sb.build(
            f"Pick key {key}",
            f"Take arr[{i}] = {key} and find where it belongs in the sorted prefix.",
        )

        j = i - 1
        while j >= 0 and arr[j] > key:
            arr[j + 1] = arr[j]
            snapshot(i, j, i, key)
            sb.pseudocode_line = 5
            yield sb.build(
                f"Shift {arr[j]} right",
                f"{arr[j]} > {key}, so shift it one position to the right.",
            )
            j -= 1

        arr[j + 1] = key
        snapshot(j + 1, None, i + 1, key)
        sb.pseudocode_line = 7
        yield sb.build(
            f"Insert {key} at {j + 1}",
            f"Place {key} at index {j + 1}; the first {i + 1} elements are now sorted.",
        )

    snapshot(None, None, len(arr))
    sb.pseudocode_line = 8
    yield sb.build(
        "Sorted",
        f"Every element has been inserted: {arr}.",
        is_final=True,
    )

"""
binary_search.py — Binary Search
=================================
Iterative binary search for 45 in a fixed sorted array.

Yields a Step for the initial window, for every midpoint comparison,
for every window shrink, and a final "found" (or "not found") step.
This is also the fallback visualization for unknown algorithm ids.
"""

from typing import Generator, List

from algorithms.samples import BINARY_SEARCH_ARRAY, BINARY_SEARCH_TARGET
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def binary_search(arr, target):",          # 0
    "    left, right = 0, len(arr) - 1",         # 1
    "    while left <= right:",                 # 2
    "        mid = (left + right) // 2",        # 3
    "        if arr[mid] == target:",           # 4
    "            return mid",                   # 5
    "        elif arr[mid] < target:",          # 6
    "            left = mid + 1",               # 7
    "        else:",                            # 8
    "            right = mid - 1",              # 9
    "    return -1",                            # 10
]


def binary_search() -> Generator[Step, None, None]:
    arr = list(BINARY_SEARCH_ARRAY)
    target = BINARY_SEARCH_TARGET

    sb = StepBuilder(kind="array")
    sb.data.update(array=arr, target=target, left=0, right=len(arr) - 1,
                   mid=None, found=False)

    sb.pseudocode_line = 1
    yield sb.build(
        f"Searching for {target}",
        f"The array is sorted, so we can discard half of it with every "
        f"comparison. The window starts as the whole array [0, {len(arr) - 1}].",
    )

    left, right = 0, len(arr) - 1
    while left <= right:
        mid = (left + right) // 2
        sb.data.update(left=left, right=right, mid=mid, highlight=[mid])
        sb.pseudocode_line = 3

        if arr[mid] == target:
            sb.data["found"] = True
            sb.pseudocode_line = 5
            yield sb.build(
                f"Found {target}!",
                f"arr[{mid}] = {arr[mid]} == {target}: the target is at index {mid}.",
                is_final=True,
            )
            return

        if arr[mid] < target:
            sb.pseudocode_line = 7
            yield sb.build(
                f"{arr[mid]} < {target}",
                f"arr[{mid}] = {arr[mid]} is smaller than {target}, so the target "
                f"can only be in the right half. Move left to {mid + 1}.",
            )
            left = mid + 1
        else:
            sb.pseudocode_line = 9
            yield sb.build(
                f"{arr[mid]} > {target}",
                f"arr[{mid}] = {arr[mid]} is larger than {target}, so the target "
                f"can only be in the left half. Move right to {mid - 1}.",
            )
            right = mid - 1

    sb.data.update(left=left, right=right, mid=None, highlight=[])
    sb.pseudocode_line = 10
    yield sb.build(
        f"{target} not found",
        "The window is empty — the target is not in the array.",
        is_final=True,
    )

"""
kadanes.py — Kadane's Algorithm (maximum subarray)
===================================================
Scans the array once, tracking the best sum ending here (`current_sum`)
and the best sum seen anywhere (`max_sum`) along with its bounds.
"""

from typing import Generator, List

from algorithms.samples import KADANE_ARRAY
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def max_subarray(arr):",                   # 0
    "    current_sum, max_sum = 0, float('-inf')",  # 1
    "    for x in arr:",                        # 2
    "        if current_sum < 0:",              # 3
    "            current_sum = 0",              # 4
    "        current_sum += x",                 # 5
    "        max_sum = max(max_sum, current_sum)",  # 6
    "    return max_sum",                       # 7
]


def kadanes_algorithm() -> Generator[Step, None, None]:
    arr = list(KADANE_ARRAY)
    current_sum = 0
    max_sum = None          # -inf; JSON has no infinity
    current_start = max_start = max_end = 0

    sb = StepBuilder(kind="array")

    def snapshot(index: int):
        sb.data.update(
            array=list(arr), index=index,
            current_sum=current_sum, max_sum=max_sum,
            current_start=current_start, max_start=max_start, max_end=max_end,
            highlight=[index] if 0 <= index < len(arr) else [],
            window=[max_start, max_end] if max_sum is not None else [],
        )

    snapshot(-1)
    sb.pseudocode_line = 1
    yield sb.build(
        "Initialise",
        "Start with current_sum = 0 and max_sum = -∞.",
    )

    for i, x in enumerate(arr):
        reset = current_sum < 0
        if reset:
            current_sum = 0
            current_start = i
        current_sum += x
        snapshot(i)
        sb.pseudocode_line = 5
        note = (
            f"The running sum went negative, so restart the subarray at index {i}. "
            if reset else ""
        )
        yield sb.build(
            f"Add arr[{i}] = {x}",
            f"{note}Add arr[{i}] = {x}: current_sum = {current_sum}.",
        )

        if max_sum is None or current_sum > max_sum:
            max_sum = current_sum
            max_start, max_end = current_start, i
            snapshot(i)
            sb.pseudocode_line = 6
            yield sb.build(
                f"max_sum = {max_sum}",
                f"New best: max_sum = {max_sum} for indices {max_start}..{max_end}.",
            )

    snapshot(len(arr))
    sb.pseudocode_line = 7
    yield sb.build(
        f"Maximum sum {max_sum}",
        f"The maximum subarray is arr[{max_start}..{max_end}] = "
        f"{arr[max_start:max_end + 1]} with sum {max_sum}.",
        is_final=True,
    )

"""
dutch_national_flag.py — Dutch National Flag (three-way partition)
===================================================================
Sorts an array of 0s, 1s and 2s in one pass with three pointers:

    [0 .. low)      all 0s
    [low .. mid)    all 1s
    [mid .. high]   unknown
    (high .. end]   all 2s

Every swap yields a "before" Step (with swap_indices) and an "after"
Step; every pointer move yields its own Step.
"""

from typing import Generator, List

from algorithms.samples import DUTCH_FLAG_ARRAY
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def sort_colors(arr):",                    # 0
    "    low, mid, high = 0, 0, len(arr) - 1",   # 1
    "    while mid <= high:",                   # 2
    "        if arr[mid] == 0:",                # 3
    "            arr[low], arr[mid] = arr[mid], arr[low]",  # 4
    "            low += 1; mid += 1",           # 5
    "        elif arr[mid] == 1:",              # 6
    "            mid += 1",                     # 7
    "        else:",                            # 8
    "            arr[mid], arr[high] = arr[high], arr[mid]",  # 9
    "            high -= 1",                    # 10
    "    return arr",                           # 11
]


def dutch_national_flag() -> Generator[Step, None, None]:
    arr = list(DUTCH_FLAG_ARRAY)
    low, mid, high = 0, 0, len(arr) - 1

    sb = StepBuilder(kind="array")

    def snapshot(swap=None):
        sb.data.update(
            array=list(arr), low=low, mid=mid, high=high,
            swap_indices=list(swap or []),
            highlight=list(swap or []),
        )

    snapshot()
    sb.pseudocode_line = 1
    yield sb.build(
        "Initial array",
        f"Start with low=0, mid=0, high={high}. Everything is still unknown.",
    )

    while mid <= high:
        if arr[mid] == 0:
            snapshot([low, mid])
            sb.pseudocode_line = 4
            yield sb.build(
                f"arr[{mid}] = 0 → swap with low",
                f"arr[{mid}] = 0 belongs in the left section. Swap it with arr[{low}].",
            )
            arr[low], arr[mid] = arr[mid], arr[low]
            low += 1
            mid += 1
            snapshot()
            sb.pseudocode_line = 5
            yield sb.build(
                f"low={low}, mid={mid}",
                f"After the swap the 0 is in place. Increment low and mid: low={low}, mid={mid}.",
            )
        elif arr[mid] == 1:
            mid += 1
            snapshot()
            sb.pseudocode_line = 7
            yield sb.build(
                f"arr[{mid - 1}] = 1 → mid={mid}",
                f"arr[{mid - 1}] = 1 is already in the middle section. No swap; "
                f"just increment mid to {mid}.",
            )
        else:
            snapshot([mid, high])
            sb.pseudocode_line = 9
            yield sb.build(
                f"arr[{mid}] = 2 → swap with high",
                f"arr[{mid}] = 2 belongs in the right section. Swap it with arr[{high}].",
            )
            arr[mid], arr[high] = arr[high], arr[mid]
            high -= 1
            snapshot()
            sb.pseudocode_line = 10
            yield sb.build(
                f"high={high}",
                f"Decrement high to {high}. mid stays put because the value "
                f"swapped in from the right has not been examined yet.",
            )

    snapshot()
    sb.pseudocode_line = 11
    yield sb.build(
        "Sorting complete",
        f"All 0s are on the left, 1s in the middle and 2s on the right: {arr}.",
        is_final=True,
    )

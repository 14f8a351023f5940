"""
greedy_activity.py — Greedy Activity Selection
===============================================
Sort activities by finish time, take the first, then take every later
activity that starts no earlier than the last chosen one finishes.
Earliest-finish-first leaves the most room for what comes after, which
is why the greedy choice is optimal here.
"""

from typing import Generator, List, Dict, Any

from algorithms.samples import ACTIVITIES
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def select(activities):",                  # 0
    "    activities.sort(key=lambda a: a.finish)",  # 1
    "    chosen = [activities[0]]",             # 2
    "    for a in activities[1:]:",             # 3
    "        if a.start >= chosen[-1].finish:", # 4
    "            chosen.append(a)",             # 5
    "    return chosen",                        # 6
]


def greedy_activity() -> Generator[Step, None, None]:
    ordered: List[Dict[str, Any]] = [
        {"id": aid, "start": start, "finish": finish}
        for aid, start, finish in sorted(ACTIVITIES, key=lambda a: a[2])
    ]
    selected: List[int] = []
    last_finish = -1

    sb = StepBuilder(kind="activities")

    def snapshot(current: int, status: str = ""):
        sb.data.update(activities=ordered, selected=list(selected),
                       current=current, last_finish=last_finish, status=status)

    snapshot(-1)
    sb.pseudocode_line = 1
    yield sb.build(
        "Sort by finish time",
        f"We have {len(ordered)} activities. Sort them by finish time so the "
        f"earliest-ending activity is considered first.",
    )

    first = ordered[0]
    selected.append(first["id"])
    last_finish = first["finish"]
    snapshot(0, "selected")
    sb.pseudocode_line = 2
    yield sb.build(
        f"Select activity {first['id']}",
        f"Activity {first['id']} finishes earliest (at {first['finish']}), "
        f"so choosing it is always safe.",
    )

    for i, act in enumerate(ordered[1:], start=1):
        if act["start"] >= last_finish:
            snapshot(i, "considering")
            sb.pseudocode_line = 4
            yield sb.build(
                f"Consider activity {act['id']}",
                f"Activity {act['id']} starts at {act['start']} ≥ {last_finish} "
                f"(last finish time), so it fits.",
            )
            selected.append(act["id"])
            last_finish = act["finish"]
            snapshot(i, "selected")
            sb.pseudocode_line = 5
            yield sb.build(
                f"Select activity {act['id']}",
                f"Selected activity {act['id']}. The new last finish time is {last_finish}.",
            )
        else:
            snapshot(i, "skipped")
            sb.pseudocode_line = 4
            yield sb.build(
                f"Skip activity {act['id']}",
                f"Activity {act['id']} starts at {act['start']} < {last_finish} "
                f"(last finish time): it overlaps, so skip it.",
            )

    snapshot(-1, "done")
    sb.pseudocode_line = 6
    yield sb.build(
        f"{len(selected)} activities selected",
        f"Selected activities {', '.join(str(a) for a in selected)} — the maximum "
        f"number of non-overlapping activities.",
        is_final=True,
    )

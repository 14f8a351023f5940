"""
canvas.py — SVG Step Renderer
==============================
Pure rendering function: Step → SVG string.

The renderer consumes only the Step (its `kind` and `data` payload) and
a visual config, and produces an SVG string ready to inject into the DOM.
One private drawer per step kind:

    array       – value boxes with pointer markers (L / R / MID, low/mid/high…)
    counting    – input, count and output rows for counting sort
    graph       – nodes + edges at fixed coordinates, queue/stack overlay
    tree        – BST nodes + edges, search path highlighted
    heap        – array-backed heap laid out as a complete binary tree
    bits        – 8-bit row with highlighted positions
    activities  – activity-selection timeline

Design decisions:
  - NO mutation.  Stateless: the caller passes everything in.
  - Node coordinates in step data are percentages; the drawer scales them.
  - Every piece of text goes through markupsafe.escape.
"""

from typing import Dict, List, Optional, Any, Callable
import math

from markupsafe import escape

from algorithms.step import Step


# ---------------------------------------------------------------------------
# Visual Config: color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    width:  int = 900
    height: int = 420
    bg:     str = "#0d1117"

    colors: Dict[str, str] = {
        "default":     "#1c2128",
        "window":      "#0ea5e9",   # active search range / sorted prefix
        "highlight":   "#f43f5e",   # element being compared
        "swap":        "#f59e0b",
        "found":       "#10b981",
        "muted":       "#30363d",
        "text":        "#e6edf3",
        "subtext":     "#7d8590",
        "accent":      "#a855f7",
    }

    node_colors: Dict[str, str] = {
        "unvisited":  "#1c2128",
        "frontier":   "#0ea5e9",
        "stack":      "#f59e0b",
        "current":    "#06b6d4",
        "visited":    "#10b981",
    }

    flag_colors: Dict[int, str] = {0: "#dc2626", 1: "#f8fafc", 2: "#2563eb"}

    box_size:     int = 52
    box_gap:      int = 10
    node_radius:  int = 22
    font_size:    int = 16
    font_family:  str = "'DM Sans', sans-serif"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_step(step: Optional[Step], config: CanvasConfig = CONFIG) -> str:
    """
    Returns an SVG string for `step` (an empty canvas for None).
    Unknown kinds fall back to the step title only.
    """
    parts = [
        f'<svg width="100%" viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]
    if step is not None:
        drawer = _DRAWERS.get(step.kind, _draw_caption_only)
        parts.append(drawer(step, config))
        parts.append(_caption(step.title, config))
    parts.append("</svg>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Shared primitives
# ---------------------------------------------------------------------------
def _text(x: float, y: float, value: Any, config: CanvasConfig,
          size: Optional[int] = None, color: Optional[str] = None, weight: str = "600") -> str:
    return (
        f'<text x="{x:.1f}" y="{y:.1f}" text-anchor="middle" '
        f'font-size="{size or config.font_size}" font-family="{config.font_family}" '
        f'fill="{color or config.colors["text"]}" font-weight="{weight}">{escape(str(value))}</text>'
    )


def _box(x: float, y: float, value: Any, fill: str, config: CanvasConfig,
         text_color: Optional[str] = None, stroke: Optional[str] = None) -> str:
    s = config.box_size
    return (
        f'<rect x="{x:.1f}" y="{y:.1f}" width="{s}" height="{s}" rx="8" fill="{fill}" '
        f'stroke="{stroke or config.colors["muted"]}" stroke-width="2"/>'
        + _text(x + s / 2, y + s / 2 + 6, "" if value is None else value, config, color=text_color)
    )


def _caption(title: str, config: CanvasConfig) -> str:
    return _text(config.width / 2, 34, title, config, size=20, weight="700")


def _row_origin(n: int, config: CanvasConfig) -> float:
    total = n * config.box_size + (n - 1) * config.box_gap
    return (config.width - total) / 2


def _draw_caption_only(step: Step, config: CanvasConfig) -> str:
    return _text(config.width / 2, config.height / 2, step.explanation, config,
                 size=14, color=config.colors["subtext"], weight="400")


# ---------------------------------------------------------------------------
# Arrays (binary search, insertion sort, Dutch flag, Kadane)
# ---------------------------------------------------------------------------
_POINTER_KEYS = ("left", "right", "mid", "low", "high", "current", "comparing")


def _draw_array(step: Step, config: CanvasConfig) -> str:
    data = step.data
    values: List[Any] = data.get("array", [])
    highlight = set(data.get("highlight", []))
    sorted_idx = set(data.get("sorted", []))
    swap_idx = set(data.get("swap_indices", []))
    window = data.get("window") or []
    found = data.get("found", False)

    left, right = data.get("left"), data.get("right")
    x0 = _row_origin(len(values), config)
    y = config.height / 2 - config.box_size / 2
    parts = []

    for i, value in enumerate(values):
        x = x0 + i * (config.box_size + config.box_gap)
        fill = config.colors["default"]
        text_color = None
        if "low" in data and isinstance(value, int) and value in config.flag_colors:
            fill = config.flag_colors[value]
            text_color = "#0d1117" if value == 1 else None
        elif i in sorted_idx:
            fill = config.colors["window"]
        elif left is not None and right is not None and left <= i <= right:
            fill = config.colors["window"]
        elif window and window[0] <= i <= window[1]:
            fill = config.colors["window"]

        stroke = None
        if i in swap_idx:
            stroke = config.colors["swap"]
        elif i in highlight:
            stroke = config.colors["found"] if found else config.colors["highlight"]
            if found:
                fill = config.colors["found"]
        parts.append(_box(x, y, value, fill, config, text_color=text_color, stroke=stroke))
        parts.append(_text(x + config.box_size / 2, y + config.box_size + 20, i, config,
                           size=12, color=config.colors["subtext"], weight="400"))

        markers = [k.upper() for k in _POINTER_KEYS if data.get(k) == i]
        if markers:
            parts.append(_text(x + config.box_size / 2, y - 14, "/".join(markers), config,
                               size=12, color=config.colors["accent"]))

    if "current_sum" in data:
        best = "-∞" if data.get("max_sum") is None else data["max_sum"]
        parts.append(_text(config.width / 2, config.height - 40,
                           f"current_sum = {data['current_sum']}    max_sum = {best}",
                           config, size=16, color=config.colors["subtext"]))
    if "key" in data and data.get("key") is not None:
        parts.append(_text(config.width / 2, config.height - 40, f"key = {data['key']}",
                           config, size=16, color=config.colors["subtext"]))
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Counting sort
# ---------------------------------------------------------------------------
def _draw_counting(step: Step, config: CanvasConfig) -> str:
    data = step.data
    parts = []
    rows = (
        ("input", data.get("array", []), data.get("index", -1), 80),
        ("count", data.get("count", []), data.get("count_index", -1), 190),
        ("output", data.get("output", []), -1, 300),
    )
    for label, values, active, y in rows:
        x0 = _row_origin(len(values), config)
        parts.append(_text(x0 - 40, y + config.box_size / 2 + 5, label, config,
                           size=13, color=config.colors["subtext"]))
        for i, value in enumerate(values):
            x = x0 + i * (config.box_size + config.box_gap)
            fill = config.colors["highlight"] if i == active else config.colors["default"]
            parts.append(_box(x, y, value, fill, config))
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Graphs (BFS, DFS, topological sort)
# ---------------------------------------------------------------------------
def _scale(node: Dict[str, Any], config: CanvasConfig):
    return 60 + node["x"] / 100 * (config.width - 120), 40 + node["y"] / 280 * (config.height - 80)


def _draw_graph(step: Step, config: CanvasConfig) -> str:
    data = step.data
    nodes = {n["id"]: n for n in data.get("nodes", [])}
    states = data.get("node_states", {})
    active = data.get("active_edge") or []
    directed = data.get("directed", False)
    r = config.node_radius
    parts = []

    for src, dst in data.get("edges", []):
        if src not in nodes or dst not in nodes:
            continue
        x1, y1 = _scale(nodes[src], config)
        x2, y2 = _scale(nodes[dst], config)
        is_active = set(active) == {src, dst}
        stroke = config.colors["highlight"] if is_active else config.colors["muted"]
        dx, dy = x2 - x1, y2 - y1
        dist = math.hypot(dx, dy) or 1.0
        ux, uy = dx / dist, dy / dist
        parts.append(
            f'<line x1="{x1 + ux * r:.1f}" y1="{y1 + uy * r:.1f}" '
            f'x2="{x2 - ux * r:.1f}" y2="{y2 - uy * r:.1f}" '
            f'stroke="{stroke}" stroke-width="{4 if is_active else 2}"/>'
        )
        if directed:
            tip_x, tip_y = x2 - ux * r, y2 - uy * r
            px, py = -uy * 5, ux * 5
            parts.append(
                f'<polygon points="{tip_x:.1f},{tip_y:.1f} '
                f'{tip_x - ux * 10 + px:.1f},{tip_y - uy * 10 + py:.1f} '
                f'{tip_x - ux * 10 - px:.1f},{tip_y - uy * 10 - py:.1f}" fill="{stroke}"/>'
            )

    for node_id, node in nodes.items():
        cx, cy = _scale(node, config)
        fill = config.node_colors.get(states.get(node_id, "unvisited"), config.node_colors["unvisited"])
        parts.append(
            f'<circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r}" fill="{fill}" '
            f'stroke="{config.colors["muted"]}" stroke-width="2"/>'
        )
        parts.append(_text(cx, cy + 5, node_id, config, size=14))
        if node.get("label") and node["label"] != node_id:
            parts.append(_text(cx, cy + r + 16, node["label"], config,
                               size=11, color=config.colors["subtext"], weight="400"))

    for key in ("queue", "stack"):
        if key in data:
            parts.append(_text(110, config.height - 16, f"{key}: [{', '.join(data[key])}]",
                               config, size=13, color=config.colors["subtext"], weight="400"))
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Trees (BST) and heaps
# ---------------------------------------------------------------------------
def _draw_tree(step: Step, config: CanvasConfig) -> str:
    data = step.data
    nodes = {n["id"]: n for n in data.get("nodes", [])}
    path = set(data.get("path", []))
    current = data.get("current")
    found = data.get("found", False)
    r = config.node_radius
    parts = []

    for parent, child in data.get("edges", []):
        x1, y1 = _scale(nodes[parent], config)
        x2, y2 = _scale(nodes[child], config)
        stroke = config.colors["window"] if parent in path and child in path else config.colors["muted"]
        parts.append(f'<line x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}" '
                     f'stroke="{stroke}" stroke-width="2"/>')

    for node_id, node in nodes.items():
        cx, cy = _scale(node, config)
        fill = config.colors["default"]
        if node_id == current:
            fill = config.colors["found"] if found else config.colors["highlight"]
        elif node_id in path:
            fill = config.colors["window"]
        parts.append(f'<circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r}" fill="{fill}" '
                     f'stroke="{config.colors["muted"]}" stroke-width="2"/>')
        parts.append(_text(cx, cy + 5, node["label"], config, size=14))
    return "\n".join(parts)


def _draw_heap(step: Step, config: CanvasConfig) -> str:
    data = step.data
    heap: List[Any] = data.get("heap", [])
    highlighted = set(data.get("highlighted", []))
    swapping = set(data.get("swapping", []))
    r = config.node_radius
    parts = []

    positions = []
    for i in range(len(heap)):
        depth = int(math.log2(i + 1))
        slot = i - (2 ** depth - 1)
        span = config.width / (2 ** depth)
        positions.append((span * slot + span / 2, 90 + depth * 80))

    for i in range(1, len(heap)):
        (x1, y1), (x2, y2) = positions[(i - 1) // 2], positions[i]
        parts.append(f'<line x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}" '
                     f'stroke="{config.colors["muted"]}" stroke-width="2"/>')

    for i, value in enumerate(heap):
        cx, cy = positions[i]
        fill = config.colors["default"]
        if i in swapping:
            fill = config.colors["swap"]
        elif i in highlighted:
            fill = config.colors["highlight"]
        parts.append(f'<circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r}" fill="{fill}" '
                     f'stroke="{config.colors["muted"]}" stroke-width="2"/>')
        parts.append(_text(cx, cy + 5, value, config, size=14))

    if data.get("extracted") is not None:
        parts.append(_text(config.width - 90, config.height - 20, f"extracted: {data['extracted']}",
                           config, size=14, color=config.colors["accent"]))
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Bits
# ---------------------------------------------------------------------------
def _draw_bits(step: Step, config: CanvasConfig) -> str:
    data = step.data
    bits = data.get("binary", "")
    highlight = set(data.get("highlight_bits", []))
    parts = [_text(config.width / 2, 80, data.get("operation_name", ""), config, size=18,
                   color=config.colors["accent"])]

    if data.get("original_binary"):
        x0 = _row_origin(len(data["original_binary"]), config)
        for i, bit in enumerate(data["original_binary"]):
            parts.append(_box(x0 + i * (config.box_size + config.box_gap), 110, bit,
                              config.colors["muted"], config))

    x0 = _row_origin(len(bits), config)
    for i, bit in enumerate(bits):
        fill = config.colors["highlight"] if i in highlight else (
            config.colors["window"] if bit == "1" else config.colors["default"])
        parts.append(_box(x0 + i * (config.box_size + config.box_gap), 190, bit, fill, config))

    parts.append(_text(config.width / 2, 290, f"value = {data.get('value', '')}", config, size=16))
    if data.get("operation"):
        parts.append(_text(config.width / 2, 320, data["operation"], config, size=14,
                           color=config.colors["subtext"], weight="400"))
    for n, line in enumerate(data.get("trace", [])):
        parts.append(_text(config.width / 2, 345 + n * 18, line, config, size=12,
                           color=config.colors["subtext"], weight="400"))
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Activity selection
# ---------------------------------------------------------------------------
def _draw_activities(step: Step, config: CanvasConfig) -> str:
    data = step.data
    activities = data.get("activities", [])
    selected = set(data.get("selected", []))
    current = data.get("current", -1)
    status = data.get("status", "")
    horizon = max((a["finish"] for a in activities), default=1) or 1
    unit = (config.width - 160) / horizon
    parts = []

    for row, act in enumerate(activities):
        y = 70 + row * 48
        x = 120 + act["start"] * unit
        w = max((act["finish"] - act["start"]) * unit, 4)
        fill = config.colors["default"]
        if act["id"] in selected:
            fill = config.colors["found"]
        if row == current:
            fill = {"skipped": config.colors["highlight"],
                    "considering": config.colors["swap"]}.get(status, fill)
        parts.append(_text(70, y + 22, f"#{act['id']}", config, size=13, color=config.colors["subtext"]))
        parts.append(f'<rect x="{x:.1f}" y="{y}" width="{w:.1f}" height="32" rx="6" fill="{fill}" '
                     f'stroke="{config.colors["muted"]}"/>')
        parts.append(_text(x + w / 2, y + 21, f"{act['start']}–{act['finish']}", config, size=12))

    if data.get("last_finish", -1) >= 0:
        lx = 120 + data["last_finish"] * unit
        parts.append(f'<line x1="{lx:.1f}" y1="60" x2="{lx:.1f}" y2="{config.height - 20}" '
                     f'stroke="{config.colors["accent"]}" stroke-dasharray="6 4"/>')
    return "\n".join(parts)


_DRAWERS: Dict[str, Callable[[Step, CanvasConfig], str]] = {
    "array":      _draw_array,
    "counting":   _draw_counting,
    "graph":      _draw_graph,
    "tree":       _draw_tree,
    "heap":       _draw_heap,
    "bits":       _draw_bits,
    "activities": _draw_activities,
}

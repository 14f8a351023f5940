"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – prev/play-pause/next/reset, step label, speed
  • algorithm_library   – search box, category tabs, algorithm cards
  • explanation_panel   – problem statement, complexity, use cases, insights
  • pseudocode_viewer   – with live line highlighting

Design:
  - All panels are stateless render functions.
  - State is passed in as arguments.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import Optional, List

from markupsafe import escape

from algorithms import AlgoInfo
from playback import PlaybackSnapshot, SPEED_PRESETS


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(snapshot: Optional[PlaybackSnapshot] = None) -> str:
    if snapshot is None:
        snapshot = PlaybackSnapshot(current_index=0, length=1, is_playing=False, speed_multiplier=1.0)

    play_icon = "⏸" if snapshot.is_playing else "▶"
    play_label = "Pause" if snapshot.is_playing else "Play"
    prev_attr = "disabled" if snapshot.at_start else ""
    next_attr = "disabled" if snapshot.at_end else ""

    options = []
    for preset in SPEED_PRESETS:
        sel = "selected" if preset == snapshot.speed_multiplier else ""
        options.append(f'<option value="{preset}" {sel}>{preset:g}x</option>')

    return f"""
    <div class="panel playback-controls" data-playing="{str(snapshot.is_playing).lower()}">
      <div class="button-row">
        <button id="btn-reset" title="Reset to start">⏮</button>
        <button id="btn-prev" title="Previous step" {prev_attr}>◀</button>
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next step" {next_attr}>▶</button>
      </div>
      <div class="step-info">
        <span id="step-label">{snapshot.label}</span>
        {' <span class="finished-badge">DONE</span>' if snapshot.at_end else ''}
      </div>
      <input type="range" id="step-slider" min="0" max="{snapshot.length - 1}" value="{snapshot.current_index}">
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">
          {''.join(options)}
        </select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Library (sidebar)
# ---------------------------------------------------------------------------
def algorithm_library(
    algorithms: List[AlgoInfo],
    selected_key: str = "",
    categories: Optional[List[str]] = None,
    active_category: str = "all",
    query: str = "",
) -> str:
    tabs = []
    for cat in categories or ["all"]:
        active = "active" if cat == active_category else ""
        tabs.append(f'<button class="tab-btn {active}" data-category="{escape(cat)}">'
                    f'{escape(cat.capitalize() if cat == "all" else cat)}</button>')

    cards = []
    for algo in algorithms:
        sel = "selected" if algo.key == selected_key else ""
        tags = "".join(f'<span class="tag">{escape(t)}</span>' for t in algo.tags)
        cards.append(f"""
        <div class="algo-card {sel}" data-key="{escape(algo.key)}">
          <div class="algo-title">{escape(algo.label)}</div>
          <div class="algo-meta">{escape(algo.category)} · {escape(algo.complexity_time)}</div>
          <div class="algo-tags">{tags}</div>
        </div>""")

    if not cards:
        cards.append('<p class="placeholder">No algorithms match your search.</p>')

    return f"""
    <div class="panel algorithm-library">
      <h3>📚 Algorithms</h3>
      <input type="search" id="algo-search" placeholder="Search algorithms…" value="{escape(query)}">
      <div class="tabs">
        {''.join(tabs)}
      </div>
      <div class="algo-list">
        {''.join(cards)}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(info: Optional[AlgoInfo] = None) -> str:
    if info is None:
        return """<div class="explanation-text" style="color: #7d8590; padding: 20px;">Select an algorithm from the library.</div>"""

    def bullets(items: List[str]) -> str:
        return "".join(f"<li>{escape(item)}</li>" for item in items)

    return f"""
    <div class="explanation-text">
      <h3>{escape(info.label)}</h3>
      <p>{escape(info.description)}</p>
      <h4>Problem</h4>
      <p>{escape(info.problem_statement)}</p>
      <table>
        <tr><td>Time:</td><td><strong>{escape(info.complexity_time)}</strong></td></tr>
        <tr><td>Space:</td><td><strong>{escape(info.complexity_space)}</strong></td></tr>
      </table>
      <h4>Use cases</h4>
      <ul>{bullets(info.use_cases)}</ul>
      <h4>Key insights</h4>
      <ul>{bullets(info.key_insights)}</ul>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
    algo_label: str = "",
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div style="color: #7d8590; padding: 20px; text-align: center;">
            Select an algorithm to view pseudocode
          </div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = "highlight" if i == current_line else ""
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block" data-label="{escape(algo_label)}">
      {''.join(lines_html)}
    </div>
    """

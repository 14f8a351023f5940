"""Renderer and control-panel tests."""

import pytest

from algorithms import REGISTRY, get_algorithm, list_algorithms, categories
from algorithms.step import Step
from playback import PlaybackSnapshot, build_sequence
from ui import algorithm_library, explanation_panel, playback_controls, pseudocode_viewer, render_step


# ============================================================
# Canvas
# ============================================================

@pytest.mark.parametrize("key", list(REGISTRY))
def test_every_step_renders(key):
    for step in build_sequence(key):
        svg = render_step(step)
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")


def test_none_renders_empty_canvas():
    svg = render_step(None)
    assert svg.startswith("<svg") and svg.endswith("</svg>")


def test_unknown_kind_renders_explanation_only():
    svg = render_step(Step(index=0, kind="hologram", title="T", explanation="just text"))
    assert "just text" in svg


def test_text_is_escaped():
    svg = render_step(Step(index=0, kind="array", title="<b>", data={"array": ["<x>"]}))
    assert "<b>" not in svg
    assert "&lt;x&gt;" in svg


def test_directed_graph_draws_arrowheads():
    step = build_sequence("topological-sort")[0]
    assert "<polygon" in render_step(step)
    undirected = build_sequence("graph-bfs")[0]
    assert "<polygon" not in render_step(undirected)


# ============================================================
# Panels
# ============================================================

def snapshot(index, length=5, playing=False, speed=1.0):
    return PlaybackSnapshot(current_index=index, length=length, is_playing=playing, speed_multiplier=speed)


def test_controls_disable_prev_at_start():
    html = playback_controls(snapshot(0))
    assert 'id="btn-prev" title="Previous step" disabled' in html
    assert 'id="btn-next" title="Next step" >' in html
    assert "Step 1 of 5" in html


def test_controls_disable_next_at_end():
    html = playback_controls(snapshot(4))
    assert 'id="btn-next" title="Next step" disabled' in html
    assert "DONE" in html


def test_controls_show_pause_while_playing():
    assert 'title="Pause"' in playback_controls(snapshot(1, playing=True))
    assert 'title="Play"' in playback_controls(snapshot(1))


def test_controls_mark_selected_speed():
    html = playback_controls(snapshot(0, speed=1.5))
    assert '<option value="1.5" selected>1.5x</option>' in html


def test_library_marks_selection_and_handles_empty_results():
    html = algorithm_library(list_algorithms(), selected_key="bst", categories=categories())
    assert 'algo-card selected" data-key="bst"' in html
    assert "No algorithms match" in algorithm_library([], query="zzz")


def test_explanation_panel():
    html = explanation_panel(get_algorithm("kadanes-algorithm"))
    assert "Kadane&#39;s Algorithm" in html
    assert "Select an algorithm" in explanation_panel(None)


def test_pseudocode_highlights_current_line():
    html = pseudocode_viewer(["a < b", "return"], current_line=1)
    assert '<div class="code-line highlight" data-line="1">return</div>' in html
    assert "a &lt; b" in html
    assert "Select an algorithm" in pseudocode_viewer([])

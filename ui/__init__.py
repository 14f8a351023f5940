"""
ui/
---
Presentation layer.

    from ui import render_step
    from ui import playback_controls, algorithm_library, …
"""

from ui.canvas import render_step, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_library,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_step",
    "CanvasConfig",
    "playback_controls",
    "algorithm_library",
    "pseudocode_viewer",
    "explanation_panel",
]

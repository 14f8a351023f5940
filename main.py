"""
main.py — Algorithm Step Visualizer Flask App
===============================================
The web server that powers the visualizer.

Routes:
  GET  /                           – main UI
  GET  /api/algorithms             – library search (?q=&category=)
  GET  /api/algorithms/<id>        – metadata card for one algorithm
  POST /api/select                 – load an algorithm's step sequence
  GET  /api/state                  – current playback state + rendered step
  POST /api/playback/<command>     – play / pause / toggle / reset / next / prev
  POST /api/playback/seek          – jump to step N (clamped)
  POST /api/playback/speed         – change the speed multiplier
  POST /api/playback/tick          – deliver one animation-frame timestamp

State management:
  The cookie session only carries an opaque session id.  The id maps to
  a PlaybackSession in an in-memory SessionStore (one per process), which
  holds:
    • the loaded StepSequence
    • the PlaybackController
    • a ManualScheduler driven by the page's requestAnimationFrame loop
  Each route holds the PlaybackSession's lock while it runs a command
  and renders the response, so concurrent requests from one browser
  apply one at a time.

Running:
  Importing this module builds nothing; the app comes from the factory.
      python main.py
      flask --app main:create_app run
"""

import math
import secrets
from numbers import Real
from typing import Any, Dict, Optional

import structlog
from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request, session
from werkzeug.exceptions import HTTPException

from algorithms import categories, get_algorithm, search_algorithms
from config import AppSettings, settings as default_settings
from logconfig import bind_context, clear_context, configure_logging
from playback import PlaybackSession, SessionStore
from ui import algorithm_library, explanation_panel, playback_controls, pseudocode_viewer, render_step

log = structlog.get_logger(__name__)

bp = Blueprint("visualizer", __name__)

SESSION_KEY = "sid"
STORE_KEY = "playback_sessions"

PLAYBACK_COMMANDS = ("play", "pause", "toggle", "reset", "next", "prev")


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(settings: Optional[AppSettings] = None) -> Flask:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["APP_SETTINGS"] = settings
    app.extensions[STORE_KEY] = SessionStore(
        max_sessions=settings.max_sessions,
        default_algorithm=settings.default_algorithm,
        base_interval_ms=settings.base_interval_ms,
        default_speed=settings.default_speed,
    )
    app.register_blueprint(bp)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if request.path.startswith("/api/"):
            return jsonify({"error": exc.description}), exc.code
        return exc

    @app.teardown_request
    def drop_log_context(_exc):
        clear_context()

    log.info("app.created", env=settings.env, max_sessions=settings.max_sessions)
    return app


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------
def get_session() -> PlaybackSession:
    """Look up (or create) the PlaybackSession for this browser."""
    sid = session.get(SESSION_KEY)
    if not sid:
        sid = secrets.token_urlsafe(16)
        session[SESSION_KEY] = sid
    bind_context(session_id=sid)
    return current_app.extensions[STORE_KEY].get(sid)


def bad_request(message: str):
    return jsonify({"error": message}), 400


def json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def read_number(body: Dict[str, Any], key: str) -> Optional[float]:
    """A finite JSON number under `key`, or None."""
    value = body.get(key)
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if not math.isfinite(value):
        return None
    return value


def playback_payload(ps: PlaybackSession, **extra: Any) -> Dict[str, Any]:
    """Render state and step together; both come from one locked read."""
    with ps.lock:
        snapshot = ps.controller.get_state()
        step = ps.controller.current_step
    info = get_algorithm(snapshot.algorithm_id)

    payload = {
        "state":      snapshot.to_dict(),
        "step":       step.to_dict(),
        "canvas":     render_step(step),
        "controls":   playback_controls(snapshot),
        "pseudocode": pseudocode_viewer(
            info.pseudocode if info else [],
            current_line=step.pseudocode_line,
            algo_label=info.label if info else "",
        ),
    }
    payload.update(extra)
    return payload


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@bp.route("/")
def index():
    ps = get_session()
    with ps.lock:
        snapshot = ps.controller.get_state()
        step = ps.controller.current_step
    info = get_algorithm(snapshot.algorithm_id)

    library_html = algorithm_library(
        search_algorithms(),
        selected_key=snapshot.algorithm_id,
        categories=categories(),
    )
    pseudocode_html = pseudocode_viewer(
        pseudocode_lines=info.pseudocode if info else [],
        current_line=step.pseudocode_line,
        algo_label=info.label if info else "",
    )

    return render_template_string(INDEX_TEMPLATE,
        library=library_html,
        svg=render_step(step),
        playback=playback_controls(snapshot),
        pseudocode=pseudocode_html,
        explanation=explanation_panel(info),
        step_explanation=step.explanation,
    )


# ---------------------------------------------------------------------------
# API: Algorithm Library
# ---------------------------------------------------------------------------
@bp.route("/api/algorithms")
def api_algorithms():
    query = request.args.get("q", "")
    category = request.args.get("category", "all")
    matches = search_algorithms(query, category)
    selected = get_session().algorithm_id
    return jsonify({
        "algorithms": [a.to_dict() for a in matches],
        "categories": categories(),
        "library":    algorithm_library(matches, selected_key=selected,
                                        categories=categories(), active_category=category,
                                        query=query),
    })


@bp.route("/api/algorithms/<algorithm_id>")
def api_algorithm_detail(algorithm_id: str):
    info = get_algorithm(algorithm_id)
    if info is None:
        return jsonify({"error": f"unknown algorithm {algorithm_id!r}"}), 404
    return jsonify(info.to_dict())


@bp.route("/api/select", methods=["POST"])
def api_select():
    body = json_body()
    algorithm_id = body.get("algorithm_id")
    if algorithm_id is not None and not isinstance(algorithm_id, str):
        return bad_request("algorithm_id must be a string")

    ps = get_session()
    with ps.lock:
        loaded = ps.select(algorithm_id)
        payload = playback_payload(
            ps,
            explanation=explanation_panel(get_algorithm(loaded)),
            fallback=loaded != algorithm_id,
        )
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
@bp.route("/api/state")
def api_state():
    return jsonify(playback_payload(get_session()))


@bp.route("/api/playback/seek", methods=["POST"])
def api_playback_seek():
    body = json_body()
    index = read_number(body, "index")
    if index is None:
        return bad_request("index must be a finite number")
    ps = get_session()
    with ps.lock:
        changed = ps.controller.seek(int(index))
        payload = playback_payload(ps, changed=changed)
    return jsonify(payload)


@bp.route("/api/playback/speed", methods=["POST"])
def api_playback_speed():
    body = json_body()
    ps = get_session()
    with ps.lock:
        if not ps.controller.set_speed(body.get("multiplier")):
            return bad_request("multiplier must be a positive, finite number")
        payload = playback_payload(ps, changed=True)
    return jsonify(payload)


@bp.route("/api/playback/tick", methods=["POST"])
def api_playback_tick():
    body = json_body()
    timestamp = read_number(body, "timestamp")
    if timestamp is None:
        return bad_request("timestamp must be a finite number")
    ps = get_session()
    with ps.lock:
        before = ps.controller.current_index
        ps.tick(float(timestamp))
        payload = playback_payload(ps, changed=ps.controller.current_index != before)
    return jsonify(payload)


@bp.route("/api/playback/<command>", methods=["POST"])
def api_playback_command(command: str):
    if command not in PLAYBACK_COMMANDS:
        return jsonify({"error": f"unknown playback command {command!r}"}), 404
    ps = get_session()
    with ps.lock:
        changed = getattr(ps.controller, command)()
        payload = playback_payload(ps, changed=changed)
    return jsonify(payload)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Algorithm Step Visualizer</title>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg: #010409;
      --panel: #161b22;
      --border: #30363d;
      --text: #e6edf3;
      --muted: #7d8590;
      --accent: #0ea5e9;
      --hot: #f43f5e;
    }

    body {
      font-family: 'DM Sans', sans-serif;
      background: var(--bg);
      color: var(--text);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar { width: 320px; border-right: 1px solid var(--border); overflow-y: auto; padding: 20px 14px; }
    #main { flex: 1; display: flex; flex-direction: column; }
    #canvas-container { flex: 1; display: flex; align-items: center; justify-content: center; padding: 12px; }
    #canvas-svg { width: 100%; max-width: 960px; }
    #step-explanation { padding: 8px 20px; color: var(--muted); min-height: 40px; }
    #playback { padding: 0 20px 12px; }
    #bottom-panel { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; padding: 16px; max-height: 340px; }
    #bottom-panel > div { background: var(--panel); border: 1px solid var(--border); border-radius: 10px; overflow-y: auto; padding: 12px; }

    .panel h3 { margin-bottom: 10px; }
    .tabs { display: flex; flex-wrap: wrap; gap: 6px; margin: 10px 0; }
    .tab-btn, .button-row button { background: var(--panel); color: var(--text); border: 1px solid var(--border); border-radius: 6px; padding: 6px 10px; cursor: pointer; }
    .tab-btn.active { border-color: var(--accent); color: var(--accent); }
    button[disabled] { opacity: 0.4; cursor: default; }
    #algo-search { width: 100%; padding: 8px; background: var(--panel); color: var(--text); border: 1px solid var(--border); border-radius: 6px; }
    .algo-card { padding: 10px; border: 1px solid var(--border); border-radius: 8px; margin-bottom: 8px; cursor: pointer; }
    .algo-card.selected { border-color: var(--accent); }
    .algo-meta { color: var(--muted); font-size: 12px; }
    .tag { font-size: 11px; margin-right: 4px; color: var(--accent); }
    .button-row { display: flex; gap: 8px; align-items: center; }
    .step-info { margin: 8px 0; }
    .finished-badge { color: var(--hot); font-weight: 700; }
    #step-slider { width: 100%; }
    .code-line { font-family: 'JetBrains Mono', monospace; font-size: 13px; white-space: pre; padding: 1px 6px; }
    .code-line.highlight { background: rgba(14, 165, 233, 0.2); border-left: 3px solid var(--accent); }
    .explanation-text h4 { margin-top: 10px; }
    .explanation-text ul { padding-left: 18px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="library">{{ library|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>
    <div id="step-explanation">{{ step_explanation }}</div>
    <div id="playback">{{ playback|safe }}</div>

    <div id="bottom-panel">
      <div id="explanation">{{ explanation|safe }}</div>
      <div id="pseudocode">{{ pseudocode|safe }}</div>
    </div>
  </div>

  <script>
    let playing = false;
    let tickInFlight = false;
    let category = 'all';

    async function send(method, url, data) {
      const res = await fetch(url, {
        method: method,
        headers: {'Content-Type': 'application/json'},
        body: data === undefined ? undefined : JSON.stringify(data),
      });
      return await res.json();
    }

    function apply(data) {
      if (!data || data.error) return;
      if (data.canvas) document.getElementById('canvas-svg').innerHTML = data.canvas;
      if (data.controls) document.getElementById('playback').innerHTML = data.controls;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.step) document.getElementById('step-explanation').textContent = data.step.explanation;
      const wasPlaying = playing;
      playing = data.state.is_playing;
      if (playing && !wasPlaying) requestAnimationFrame(frame);
    }

    // Animation-frame loop: the server decides whether a step is due.
    async function frame(ts) {
      if (!playing) return;
      if (!tickInFlight) {
        tickInFlight = true;
        try {
          const data = await send('POST', '/api/playback/tick', {timestamp: ts});
          if (data.changed || !data.state.is_playing) apply(data);
        } finally {
          tickInFlight = false;
        }
      }
      requestAnimationFrame(frame);
    }

    document.addEventListener('click', async (e) => {
      const btn = e.target.closest('button, .algo-card');
      if (!btn || btn.disabled) return;
      const commands = {'btn-reset': 'reset', 'btn-prev': 'prev', 'btn-play': 'toggle', 'btn-next': 'next'};
      if (commands[btn.id]) {
        apply(await send('POST', '/api/playback/' + commands[btn.id]));
      } else if (btn.classList.contains('algo-card')) {
        apply(await send('POST', '/api/select', {algorithm_id: btn.dataset.key}));
        refreshLibrary();
      } else if (btn.classList.contains('tab-btn')) {
        category = btn.dataset.category;
        refreshLibrary();
      }
    });

    document.addEventListener('change', async (e) => {
      if (e.target.id === 'speed-selector') {
        apply(await send('POST', '/api/playback/speed', {multiplier: parseFloat(e.target.value)}));
      } else if (e.target.id === 'step-slider') {
        apply(await send('POST', '/api/playback/seek', {index: parseInt(e.target.value, 10)}));
      }
    });

    document.addEventListener('input', (e) => {
      if (e.target.id === 'algo-search') refreshLibrary();
    });

    async function refreshLibrary() {
      const q = document.getElementById('algo-search')?.value || '';
      const params = new URLSearchParams({q: q, category: category});
      const data = await send('GET', '/api/algorithms?' + params.toString());
      const library = document.getElementById('library');
      library.innerHTML = data.library;
      const search = document.getElementById('algo-search');
      search.focus();
      search.setSelectionRange(q.length, q.length);
    }

    send('GET', '/api/state').then(apply);
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app = create_app()
    print("=" * 60)
    print("  Algorithm Step Visualizer")
    print(f"  Open http://{default_settings.host}:{default_settings.port}")
    print("=" * 60)
    app.run(host=default_settings.host, port=default_settings.port, debug=default_settings.debug)

from __future__ import annotations

import logging
import os
import secrets
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Coord,
    SessionController,
    SessionView,
    TimerScheduler,
    parse_cell_key,
)

logger = logging.getLogger(__name__)


def _truthy(value: Optional[str]) -> bool:
    return str(value or '').lower() in ('1', 'true', 'yes', 'on')


MAX_GAMES = 256


class GameRegistry:
    """In-process games keyed by id. Nothing is persisted; a server restart forgets every game.

    Holds at most `max_games`; creating one more evicts the least recently used game.
    """

    def __init__(self, scheduler_factory: Callable[[], Any], max_games: int = MAX_GAMES) -> None:
        if max_games < 1:
            raise ValueError('max_games must be at least 1')
        self._scheduler_factory = scheduler_factory
        self._max_games = max_games
        self._games: 'OrderedDict[str, SessionController]' = OrderedDict()
        self._lock = threading.Lock()

    def create(self, seed: Optional[int] = None) -> Tuple[str, SessionController]:
        game_id = secrets.token_hex(8)
        controller = SessionController(scheduler=self._scheduler_factory(), seed=seed)
        evicted = []
        with self._lock:
            self._games[game_id] = controller
            while len(self._games) > self._max_games:
                evicted.append(self._games.popitem(last=False))
        for old_id, old in evicted:
            old.close()
            logger.info('evicted game %s (registry full)', old_id)
        logger.debug('created game %s', game_id)
        return game_id, controller

    def get(self, game_id: Optional[str]) -> Optional[SessionController]:
        if not game_id:
            return None
        with self._lock:
            controller = self._games.get(str(game_id))
            if controller is not None:
                self._games.move_to_end(str(game_id))
            return controller

    def close(self, game_id: Optional[str]) -> bool:
        """Drops a game. Returns False when the id is unknown."""
        if not game_id:
            return False
        with self._lock:
            controller = self._games.pop(str(game_id), None)
        if controller is None:
            return False
        controller.close()
        logger.debug('closed game %s', game_id)
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)


# ---------- JSON helpers ----------

def view_to_json(view: SessionView) -> Dict[str, Any]:
    return {
        "grid": [
            [{"id": c.id, "row": c.row, "col": c.col, "value": c.value, "state": c.state} for c in row]
            for row in view.grid
        ],
        "status": view.status,
        "mistakes": view.mistakes,
        "sumExpression": view.sum_expression,
        "sumHighlight": view.sum_highlight,
        "openedCount": view.opened_count,
        "totalPlayable": view.total_playable,
        "openedPercent": view.opened_percent,
        "isResolving": view.is_resolving,
        "isPointerActive": view.is_pointer_active,
        "message": view.message,
    }


def cell_from_json(value: Any, size: int) -> Optional[Coord]:
    """Resolves a 'r-c' id (or [r, c]) to a coordinate; None stays None. Raises ValueError."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise ValueError(f"bad cell: {value!r}")
        coord = (int(value[0]), int(value[1]))
    else:
        coord = parse_cell_key(str(value))
    if not (0 <= coord[0] < size and 0 <= coord[1] < size):
        raise ValueError(f"cell out of bounds: {value!r}")
    return coord


def _seed_from(body: Dict[str, Any]) -> Optional[int]:
    seed = body.get("seed", None)
    if seed is None:
        return None
    return int(seed)


def create_app(scheduler_factory: Callable[[], Any] = TimerScheduler, max_games: int = MAX_GAMES) -> Flask:
    app = Flask(__name__)
    registry = GameRegistry(scheduler_factory, max_games=max_games)
    app.extensions["minesum_games"] = registry

    def _lookup(body: Dict[str, Any]):
        game_id = body.get("gameId")
        if not game_id:
            return None, (jsonify({"ok": False, "error": "gameId required"}), 400)
        controller = registry.get(game_id)
        if controller is None:
            return None, (jsonify({"ok": False, "error": "unknown game"}), 404)
        return controller, None

    def _ok(controller: SessionController, accepted: Optional[bool] = None) -> Any:
        payload: Dict[str, Any] = {"ok": True, "view": view_to_json(controller.view())}
        if accepted is not None:
            payload["accepted"] = bool(accepted)
        return jsonify(payload)

    @app.get("/")
    def index() -> Any:
        return jsonify({
            "ok": True,
            "name": "MineSum10",
            "endpoints": [
                "/api/new", "/api/state", "/api/pointer/down",
                "/api/pointer/up", "/api/pointer/cancel", "/api/restart", "/api/close",
            ],
        })

    @app.post("/api/new")
    def api_new() -> Any:
        body = request.get_json(force=True, silent=True) or {}
        try:
            seed = _seed_from(body)
        except (TypeError, ValueError) as e:
            return jsonify({"ok": False, "error": f"bad seed: {e}"}), 400
        game_id, controller = registry.create(seed=seed)
        return jsonify({"ok": True, "gameId": game_id, "view": view_to_json(controller.view())})

    @app.post("/api/state")
    def api_state() -> Any:
        body = request.get_json(force=True, silent=True) or {}
        controller, err = _lookup(body)
        if err:
            return err
        return _ok(controller)

    @app.post("/api/pointer/down")
    def api_pointer_down() -> Any:
        body = request.get_json(force=True, silent=True) or {}
        controller, err = _lookup(body)
        if err:
            return err
        try:
            coord = cell_from_json(body.get("cell"), controller.board.size)
        except (TypeError, ValueError) as e:
            return jsonify({"ok": False, "error": str(e)}), 400
        if coord is None:
            return jsonify({"ok": False, "error": "cell required"}), 400
        return _ok(controller, controller.pointer_down(coord))

    @app.post("/api/pointer/up")
    def api_pointer_up() -> Any:
        body = request.get_json(force=True, silent=True) or {}
        controller, err = _lookup(body)
        if err:
            return err
        try:
            coord = cell_from_json(body.get("cell"), controller.board.size)
        except (TypeError, ValueError) as e:
            return jsonify({"ok": False, "error": str(e)}), 400
        return _ok(controller, controller.pointer_up(coord))

    @app.post("/api/pointer/cancel")
    def api_pointer_cancel() -> Any:
        body = request.get_json(force=True, silent=True) or {}
        controller, err = _lookup(body)
        if err:
            return err
        return _ok(controller, controller.pointer_cancel())

    @app.post("/api/restart")
    def api_restart() -> Any:
        body = request.get_json(force=True, silent=True) or {}
        controller, err = _lookup(body)
        if err:
            return err
        try:
            seed = _seed_from(body)
        except (TypeError, ValueError) as e:
            return jsonify({"ok": False, "error": f"bad seed: {e}"}), 400
        controller.restart(seed=seed)
        return _ok(controller)

    @app.post("/api/close")
    def api_close() -> Any:
        body = request.get_json(force=True, silent=True) or {}
        game_id = body.get("gameId")
        if not game_id:
            return jsonify({"ok": False, "error": "gameId required"}), 400
        if not registry.close(game_id):
            return jsonify({"ok": False, "error": "unknown game"}), 404
        return jsonify({"ok": True})

    return app


app = create_app(max_games=int(os.getenv("MINESUM_MAX_GAMES", str(MAX_GAMES))))


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, os.getenv("MINESUM_LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    debug = _truthy(os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")))
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)

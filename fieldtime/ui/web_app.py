"""
Web application module for the FieldTime game-state engine.

This module contains the Flask server that exposes the game controller as a
JSON API for display clients. It renders nothing itself; clients read
``/api/state`` and post commands.
"""
import logging
import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from ..models import CommandStatus, Player, Position
from ..services import GameController, PersistenceError, PersistenceService
from ..utils import APP_TITLE
from ..utils.constants import AUTOSAVE_DIR, DEFAULT_WEB_HOST, DEFAULT_WEB_PORT

logger = logging.getLogger(__name__)

STATUS_HTTP_CODES = {
    CommandStatus.NO_SUCH_PLAYER: 404,
    CommandStatus.INVALID: 400,
}


def _status_response(controller: GameController, status: CommandStatus):
    """Map a command status onto a JSON response and HTTP code."""
    if status.ok:
        return jsonify({"status": status.value, "state": _build_state(controller)})
    code = STATUS_HTTP_CODES.get(status, 409)
    return jsonify({"error": status.value}), code


def _build_player_data(player: Player) -> Dict[str, Any]:
    position = player.current_position
    return {
        "id": player.id,
        "first_name": player.first_name,
        "last_name": player.last_name,
        "display_name": player.display_name,
        "number": player.number,
        "is_active": player.is_active,
        "position": position.value,
        "position_short": position.short,
        "positions_played": player.positions_played(),
        "seconds_played": player.seconds_played,
        "seconds_on_bench": player.seconds_on_bench,
        "play_time": player.formatted_play_time(),
        "bench_time": player.formatted_bench_time(),
    }


def _build_state(controller: GameController) -> Dict[str, Any]:
    clock = controller.clock
    return {
        "clock": {
            "remaining_seconds": clock.remaining_seconds,
            "duration_seconds": clock.duration_seconds,
            "formatted": controller.formatted_time(),
            "is_running": clock.is_running,
        },
        "players": [_build_player_data(p) for p in controller.players],
        "active_positions": [p.value for p in controller.picker_positions()],
        "addable_positions": [p.value for p in controller.addable_positions()],
        "swap_queue": controller.describe_queue(),
    }


def _json_body() -> Tuple[Optional[Dict[str, Any]], Optional[Tuple[Any, int]]]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, (jsonify({"error": "JSON object body required"}), 400)
    return data, None


def create_app(
    controller: Optional[GameController] = None,
    state_file: Optional[str] = None,
) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        controller: Game controller to expose (a fresh one is created if omitted)
        state_file: Optional JSON file to load at startup and save after each change

    Returns:
        Configured Flask application instance
    """
    if controller is None:
        game_state = PersistenceService.load_game_from_file(state_file) if state_file else None
        controller = GameController(game_state)

    if state_file:
        def _persist(ctrl: GameController) -> None:
            try:
                PersistenceService.save_game_to_file(ctrl.to_game_state(), state_file)
            except PersistenceError as exc:
                logger.warning("%s", exc)

        # Elapsed seconds are saved with the next pause or command, not every tick
        controller.add_listener(_persist, on_tick=False)

    app = Flask(__name__)
    app.config["CONTROLLER"] = controller

    @app.route("/")
    def index():
        return jsonify({"app": APP_TITLE, "state": "/api/state"})

    # ==================== Game control ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        return jsonify(_build_state(controller))

    @app.route("/api/game/start", methods=["POST"])
    def start_game():
        controller.start_game()
        return _status_response(controller, CommandStatus.APPLIED)

    @app.route("/api/game/pause", methods=["POST"])
    def pause_game():
        controller.pause_game()
        return _status_response(controller, CommandStatus.APPLIED)

    @app.route("/api/game/reset", methods=["POST"])
    def reset_game():
        if state_file:
            # Keep a copy of the finished game before wiping it
            PersistenceService.auto_save(
                controller.to_game_state(),
                os.path.join(os.path.dirname(state_file), AUTOSAVE_DIR),
            )
        controller.reset_game()
        return _status_response(controller, CommandStatus.APPLIED)

    @app.route("/api/game/reset-clock", methods=["POST"])
    def reset_clock():
        controller.reset_clock_only()
        return _status_response(controller, CommandStatus.APPLIED)

    @app.route("/api/game/reset-positions", methods=["POST"])
    def reset_positions():
        controller.reset_positions()
        return _status_response(controller, CommandStatus.APPLIED)

    @app.route("/api/game/length", methods=["POST"])
    def set_game_length():
        data, error = _json_body()
        if error:
            return error
        return _status_response(controller, controller.set_game_length(data.get("minutes")))

    @app.route("/api/game/suspend", methods=["POST"])
    def suspend_game():
        controller.prepare_for_suspension()
        return _status_response(controller, CommandStatus.APPLIED)

    @app.route("/api/game/resume", methods=["POST"])
    def resume_game():
        applied = controller.resume_from_suspension()
        return jsonify({"status": CommandStatus.APPLIED.value,
                        "applied_seconds": applied,
                        "state": _build_state(controller)})

    # ==================== Roster ==================== #

    @app.route("/api/players", methods=["POST"])
    def create_player():
        data, error = _json_body()
        if error:
            return error
        number = data.get("number")
        if number is not None and (isinstance(number, bool) or not isinstance(number, int)):
            return jsonify({"error": "number must be an integer"}), 400
        player_id = controller.add_player(
            data.get("first_name") or "", data.get("last_name"), number
        )
        if player_id is None:
            return jsonify({"error": "first_name is required"}), 400
        return jsonify({"id": player_id, "state": _build_state(controller)}), 201

    @app.route("/api/players/<player_id>", methods=["PUT"])
    def rename_player(player_id: str):
        data, error = _json_body()
        if error:
            return error
        status = controller.rename_player(
            player_id, data.get("first_name") or "", data.get("last_name")
        )
        return _status_response(controller, status)

    @app.route("/api/players/<player_id>", methods=["DELETE"])
    def delete_player(player_id: str):
        return _status_response(controller, controller.remove_player(player_id))

    @app.route("/api/players/reorder", methods=["POST"])
    def reorder_players():
        data, error = _json_body()
        if error:
            return error
        try:
            from_index = int(data["from_index"])
            to_index = int(data["to_index"])
        except (KeyError, TypeError, ValueError):
            return jsonify({"error": "from_index and to_index are required"}), 400
        return _status_response(controller, controller.reorder_players(from_index, to_index))

    @app.route("/api/players/<player_id>/position", methods=["POST"])
    def set_player_position(player_id: str):
        data, error = _json_body()
        if error:
            return error
        position = Position.parse(data.get("position"))
        if position is None:
            return jsonify({"error": "Unknown position"}), 400
        return _status_response(controller, controller.assign_or_queue(player_id, position))

    # ==================== Swap queue ==================== #

    @app.route("/api/queue/apply", methods=["POST"])
    def apply_queue():
        return _status_response(controller, controller.apply_queue())

    @app.route("/api/queue", methods=["DELETE"])
    def clear_queue():
        return _status_response(controller, controller.clear_queue())

    # ==================== Field positions ==================== #

    @app.route("/api/positions", methods=["POST"])
    def add_position():
        data, error = _json_body()
        if error:
            return error
        position = Position.parse(data.get("position"))
        if position is None:
            return jsonify({"error": "Unknown position"}), 400
        return _status_response(controller, controller.add_position(position))

    @app.route("/api/positions/<name>", methods=["DELETE"])
    def remove_position(name: str):
        position = Position.parse(name)
        if position is None:
            return jsonify({"error": "Unknown position"}), 400
        return _status_response(controller, controller.remove_position(position))

    return app


def run_web_app(
    host: str = DEFAULT_WEB_HOST,
    port: int = DEFAULT_WEB_PORT,
    state_file: Optional[str] = None,
) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to
        port: Port number to listen on
        state_file: Optional JSON file for loading and saving game state
    """
    app = create_app(state_file=state_file)
    logger.info("Starting %s at http://%s:%s", APP_TITLE, host, port)
    # The reloader would start a second controller and a second clock thread
    app.run(host=host, port=port, debug=False, use_reloader=False)

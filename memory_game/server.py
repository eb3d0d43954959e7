# memory_game/server.py
from __future__ import annotations
import argparse
import logging
import threading
from dataclasses import replace
from typing import Optional

from flask import Flask, Response, jsonify, request

from .config import Settings
from .game import Game
from .view import render_text, snapshot

logger = logging.getLogger(__name__)

app = Flask(__name__)

# One in-memory game per process; the core is single player.
SETTINGS = Settings()
GAME: Optional[Game] = None
GAME_LOCK = threading.Lock()


def make_game(symbols=None) -> Game:
    return Game(
        symbols=SETTINGS.symbols if symbols is None else symbols,
        reveal_delay=SETTINGS.reveal_delay,
        tick_interval=SETTINGS.tick_interval,
    )


def ok(game: Game):
    return jsonify({"status": "ok", **snapshot(game.state)})


def error(message: str, code: int = 400):
    return jsonify({"status": "error", "message": message}), code


def body() -> dict:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


@app.get("/health")
def health():
    return jsonify({"status": "ok", "game": GAME is not None})


@app.post("/new")
def api_new():
    global GAME
    data = body()
    symbols = data.get("symbols")
    if symbols is not None and not isinstance(symbols, list):
        return error("symbols must be a list")

    try:
        game = make_game(symbols)
    except ValueError as e:
        return error(str(e))

    with GAME_LOCK:
        if GAME is not None:
            GAME.close()
        GAME = game
    return ok(game)


@app.post("/pick")
def api_pick():
    game = GAME
    if game is None:
        return error("game not created")

    data = body()
    try:
        game.select(data["index"])
    except KeyError:
        return error("missing index")
    except ValueError as e:
        return error(str(e))
    return ok(game)


@app.post("/restart")
def api_restart():
    if GAME is None:
        return error("game not created")
    data = body()
    symbols = data.get("symbols")
    if symbols is not None and not isinstance(symbols, list):
        return error("symbols must be a list")
    with GAME_LOCK:
        game = GAME
        try:
            game.restart(symbols)
        except ValueError as e:
            return error(str(e))
    return ok(game)


@app.get("/state")
def api_state():
    game = GAME
    if game is None:
        return error("game not created")
    return ok(game)


@app.get("/board")
def api_board():
    game = GAME
    if game is None:
        return error("game not created")
    return Response(render_text(game.state, SETTINGS.columns) + "\n", mimetype="text/plain")


def parse_args(settings: Settings):
    p = argparse.ArgumentParser(description="Memory matching game server")
    p.add_argument("-H", "--host", default=settings.host)
    p.add_argument("-p", "--port", type=int, default=settings.port)
    p.add_argument("--reveal-delay-ms", type=int, default=settings.reveal_delay_ms)
    p.add_argument("--tick-interval-ms", type=int, default=settings.tick_interval_ms)
    p.add_argument("--debug", action="store_true", help="flask debug mode (development only)")
    return p.parse_args()


def main():
    global SETTINGS
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    settings = Settings.from_env()
    a = parse_args(settings)
    SETTINGS = replace(settings, host=a.host, port=a.port,
                       reveal_delay_ms=a.reveal_delay_ms, tick_interval_ms=a.tick_interval_ms)
    logger.info("serving memory game on %s:%d", SETTINGS.host, SETTINGS.port)
    app.run(host=SETTINGS.host, port=SETTINGS.port, debug=a.debug, use_reloader=False)


if __name__ == "__main__":
    main()

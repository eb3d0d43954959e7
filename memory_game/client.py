# memory_game/client.py
from __future__ import annotations
import argparse
import logging
import time
from typing import Dict, List, Optional

import requests

from .simulation import Player

logger = logging.getLogger(__name__)


class MemoryClient:
    """Thin HTTP client for memory_game.server."""

    def __init__(self, base_url: str = "http://127.0.0.1:5000", timeout: float = 5.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _call(self, method: str, path: str, payload: Optional[Dict] = None) -> Dict:
        r = self.session.request(method, f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def health(self) -> Dict:
        return self._call("GET", "/health")

    def new_game(self, symbols: Optional[List[str]] = None) -> Dict:
        return self._call("POST", "/new", {"symbols": symbols} if symbols is not None else {})

    def pick(self, index: int) -> Dict:
        return self._call("POST", "/pick", {"index": index})

    def restart(self) -> Dict:
        return self._call("POST", "/restart", {})

    def state(self) -> Dict:
        return self._call("GET", "/state")


def play_remote(client: MemoryClient, player: Optional[Player] = None,
                poll_interval: float = 0.2, max_polls: int = 100_000) -> Dict:
    """Play the server's current game until it completes; returns the final snapshot."""
    player = player or Player()
    snap = client.state()
    for _ in range(max_polls):
        if snap["complete"]:
            return snap
        index = player.choose(snap)
        if index is None:
            # pair is face up, wait for the server to resolve it
            time.sleep(poll_interval)
            snap = client.state()
            continue
        logger.debug("picking %d", index)
        snap = client.pick(index)
    raise RuntimeError("game did not complete")


def main():
    ap = argparse.ArgumentParser(description="Play a memory game on a running server")
    ap.add_argument("--url", default="http://127.0.0.1:5000")
    ap.add_argument("--poll", type=float, default=0.2)
    a = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    client = MemoryClient(a.url)
    client.new_game()
    t0 = time.time()
    final = play_remote(client, poll_interval=a.poll)
    print(final["message"])
    print(f"Wall time {time.time() - t0:.1f}s")


if __name__ == "__main__":
    main()

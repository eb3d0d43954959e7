# memory_game/config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .deck import DEFAULT_SYMBOLS, check_symbols


@dataclass(frozen=True)
class Settings:
    symbols: Tuple[str, ...] = DEFAULT_SYMBOLS
    reveal_delay_ms: int = 1000
    tick_interval_ms: int = 1000
    columns: int = 6
    host: str = "127.0.0.1"
    port: int = 5000

    def __post_init__(self) -> None:
        check_symbols(self.symbols)
        if self.reveal_delay_ms < 0:
            raise ValueError("reveal delay must not be negative")
        if self.tick_interval_ms <= 0:
            raise ValueError("tick interval must be positive")
        if self.columns <= 0:
            raise ValueError("columns must be positive")
        if not 0 < self.port < 65536:
            raise ValueError("port out of range")

    @property
    def reveal_delay(self) -> float:
        return self.reveal_delay_ms / 1000.0

    @property
    def tick_interval(self) -> float:
        return self.tick_interval_ms / 1000.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        symbols = env.get("MEMORY_SYMBOLS")
        return cls(
            symbols=tuple(s.strip() for s in symbols.split(",") if s.strip()) if symbols else DEFAULT_SYMBOLS,
            reveal_delay_ms=_int(env, "MEMORY_REVEAL_DELAY_MS", 1000),
            tick_interval_ms=_int(env, "MEMORY_TICK_INTERVAL_MS", 1000),
            columns=_int(env, "MEMORY_COLUMNS", 6),
            host=env.get("MEMORY_HOST", "127.0.0.1"),
            port=_int(env, "MEMORY_PORT", 5000),
        )


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None

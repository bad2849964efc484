# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Shared, observable storage for the client's session token.

Every controller attached to the same store sees writes made by the others,
the way browser tabs share one storage origin.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from verdict.shared.logging import logger

SESSION_TOKEN_KEY = "auth_session_token"


@dataclass(slots=True, frozen=True)
class TokenChange:
    key: str
    old_value: str | None
    new_value: str | None
    source: object | None = None


TokenListener = Callable[[TokenChange], None]


class TokenStore:
    key = SESSION_TOKEN_KEY

    def __init__(self) -> None:
        self._listeners: list[TokenListener] = []

    def get(self) -> str | None:
        raise NotImplementedError

    def _write(self, value: str | None) -> None:
        raise NotImplementedError

    def set(self, token: str, *, source: object | None = None) -> None:
        self._replace(token, source)

    def clear(self, *, source: object | None = None) -> None:
        self._replace(None, source)

    def subscribe(self, listener: TokenListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _replace(self, value: str | None, source: object | None) -> None:
        old_value = self.get()
        self._write(value)
        if old_value == value:
            return
        self._notify(TokenChange(self.key, old_value, value, source))

    def _notify(self, change: TokenChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"token_store: listener failed for key={change.key}")


class MemoryTokenStore(TokenStore):
    def __init__(self, initial: str | None = None) -> None:
        super().__init__()
        self._value = initial

    def get(self) -> str | None:
        return self._value

    def _write(self, value: str | None) -> None:
        self._value = value


class FileTokenStore(TokenStore):
    """Keeps the token in a small JSON file so it survives restarts.

    Reads always go to disk. While anyone is subscribed, a polling task on the
    running event loop watches the file and announces writes made by other
    store instances or processes, so every controller sharing the file hears
    about a clear.
    """

    def __init__(self, path: str | Path, *, poll_interval: float = 1.0) -> None:
        super().__init__()
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._poll_interval = poll_interval
        self._last_seen: str | None = None
        self._watch_task: asyncio.Task[None] | None = None
        logger.debug(f"FileTokenStore: initialized path={self._path}")

    @property
    def watching(self) -> bool:
        return self._watch_task is not None and not self._watch_task.done()

    def subscribe(self, listener: TokenListener) -> Callable[[], None]:
        unsubscribe = super().subscribe(listener)
        self._start_watching()

        def _unsubscribe() -> None:
            unsubscribe()
            if not self._listeners:
                self._stop_watching()

        return _unsubscribe

    def _start_watching(self) -> None:
        if self.watching:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"FileTokenStore: no running loop, external changes not watched path={self._path}")
            return
        self._last_seen = self.get()
        self._watch_task = loop.create_task(self._watch(), name="verdict-token-file-watch")

    def _stop_watching(self) -> None:
        if self._watch_task is not None:
            self._watch_task.cancel()
            self._watch_task = None

    async def _watch(self) -> None:
        while True:
            await asyncio.sleep(self._poll_interval)
            try:
                current = self.get()
            except OSError as exc:
                logger.warning(f"FileTokenStore: poll failed path={self._path}: {exc}")
                continue
            if current == self._last_seen:
                continue
            previous, self._last_seen = self._last_seen, current
            logger.debug(f"FileTokenStore: external change detected path={self._path}")
            self._notify(TokenChange(self.key, previous, current))

    def _load(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"FileTokenStore: corrupt token file path={self._path}, ignoring")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> str | None:
        value = self._load().get(self.key)
        return value if isinstance(value, str) and value else None

    def _write(self, value: str | None) -> None:
        data = self._load()
        if value is None:
            data.pop(self.key, None)
        else:
            data[self.key] = value

        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=".token-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_path, self._path)
            self._last_seen = value
        except OSError:
            logger.exception(f"FileTokenStore: failed to persist token path={self._path}")
            Path(tmp_path).unlink(missing_ok=True)
            raise


__all__ = [
    "FileTokenStore",
    "MemoryTokenStore",
    "SESSION_TOKEN_KEY",
    "TokenChange",
    "TokenListener",
    "TokenStore",
]

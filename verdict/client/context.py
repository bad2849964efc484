# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

import httpx

from verdict.shared.config import ClientConfig, load_config
from verdict.shared.logging import logger

from .api import AuthApiClient
from .controller import SessionController, StateListener
from .state import AuthState, LoginCredentials, RegisterCredentials
from .token_store import FileTokenStore, MemoryTokenStore, TokenStore


class AuthContext:
    """What a UI layer receives: current auth state plus the auth actions.

    Built once per application instance and used as an async context manager,
    which restores any persisted session on entry and stops the background
    timers and closes the HTTP client on exit.
    """

    def __init__(
        self,
        controller: SessionController,
        *,
        api: AuthApiClient | None = None,
    ) -> None:
        self.controller = controller
        self._api = api

    @classmethod
    def from_config(
        cls,
        config: ClientConfig | None = None,
        *,
        store: TokenStore | None = None,
        url_prefix: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AuthContext:
        app_config = load_config()
        config = config or app_config.client
        if store is None:
            if config.token_file:
                store = FileTokenStore(config.token_file, poll_interval=config.token_poll_interval)
            else:
                store = MemoryTokenStore()
        api = AuthApiClient(
            config.base_url,
            prefix=url_prefix or app_config.session.url_prefix,
            timeout=config.request_timeout,
            transport=transport,
        )
        controller = SessionController(
            api,
            store,
            refresh_interval=config.refresh_interval,
            check_interval=config.check_interval,
        )
        return cls(controller, api=api)

    async def __aenter__(self) -> AuthContext:
        await self.controller.start()
        logger.debug(f"auth_context: started status={self.controller.status}")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            await self.controller.stop()
        finally:
            if self._api is not None:
                await self._api.aclose()
        logger.debug("auth_context: stopped")

    @property
    def state(self) -> AuthState:
        return self.controller.state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self.controller.subscribe(listener)

    async def login(self, email: str, password: str) -> None:
        await self.controller.login(LoginCredentials(email=email, password=password))

    async def register(self, name: str, email: str, password: str) -> None:
        await self.controller.register(RegisterCredentials(name=name, email=email, password=password))

    async def logout(self) -> None:
        await self.controller.logout()

    async def get_current_user(self) -> None:
        await self.controller.get_current_user()

    def clear_error(self) -> None:
        self.controller.clear_error()

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Client-side session state machine.

States are ``loading``, ``authenticated`` and ``unauthenticated``. While
authenticated two background tasks run on the event loop: a one-shot refresh
that re-arms itself after every rotation, and a periodic liveness check against
``/auth/me``. Every transition out of ``authenticated`` goes through
``_cancel_timers`` which bumps a generation counter, so a timer task started
before the teardown can never write state after it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import replace

from verdict.shared.logging import logger

from .api import AuthApi, AuthApiError, SessionRejectedError
from .state import AuthError, AuthState, AuthStatus, LoginCredentials, RegisterCredentials, User
from .token_store import TokenChange, TokenStore

DEFAULT_REFRESH_INTERVAL = 23 * 60 * 60.0
DEFAULT_CHECK_INTERVAL = 60.0

StateListener = Callable[[AuthState], None]


def _auth_error(exc: AuthApiError, fallback: str) -> AuthError:
    return AuthError(message=exc.message or fallback, code=exc.code)


class SessionController:
    def __init__(
        self,
        api: AuthApi,
        store: TokenStore,
        *,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        check_interval: float = DEFAULT_CHECK_INTERVAL,
    ) -> None:
        self._api = api
        self._store = store
        self._refresh_interval = refresh_interval
        self._check_interval = check_interval

        self._state = AuthState()
        self._listeners: list[StateListener] = []

        self._refresh_task: asyncio.Task[None] | None = None
        self._check_task: asyncio.Task[None] | None = None
        self._timer_generation = 0
        self._unsubscribe_store: Callable[[], None] | None = None

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def status(self) -> AuthStatus:
        return self._state.status

    @property
    def user(self) -> User | None:
        return self._state.user

    @property
    def error(self) -> AuthError | None:
        return self._state.error

    @property
    def timers_active(self) -> bool:
        return any(
            task is not None and not task.done()
            for task in (self._refresh_task, self._check_task)
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # lifecycle

    async def start(self) -> None:
        if self._unsubscribe_store is None:
            self._unsubscribe_store = self._store.subscribe(self._on_token_change)

        token = self._store.get()
        if not token:
            self._set_unauthenticated()
            return

        self._set_loading()
        try:
            user = await self._api.me(token)
        except AuthApiError as exc:
            logger.warning(f"session: restore failed code={exc.code}")
            self._store.clear(source=self)
            self._set_unauthenticated(_auth_error(exc, "Failed to get user information"))
            return

        self._set_authenticated(user)
        self._start_timers()
        logger.info(f"session: restored user_id={user.id}")

    async def stop(self) -> None:
        if self._unsubscribe_store is not None:
            self._unsubscribe_store()
            self._unsubscribe_store = None
        pending = [t for t in (self._refresh_task, self._check_task) if t is not None]
        self._cancel_timers()
        current = asyncio.current_task()
        others = [t for t in pending if t is not current]
        if others:
            await asyncio.gather(*others, return_exceptions=True)

    # actions

    async def login(self, credentials: LoginCredentials) -> None:
        self._set_loading(clear_error=True)
        try:
            result = await self._api.login(credentials.email, credentials.password)
        except AuthApiError as exc:
            logger.warning(f"session: login failed code={exc.code}")
            self._cancel_timers()
            self._store.clear(source=self)
            self._set_unauthenticated(_auth_error(exc, "Login failed"))
            raise

        self._store.set(result.session_token, source=self)
        self._set_authenticated(result.user)
        self._start_timers()
        logger.info(f"session: logged in user_id={result.user.id}")

    async def register(self, credentials: RegisterCredentials) -> None:
        self._set_loading(clear_error=True)
        try:
            await self._api.register(credentials.name, credentials.email, credentials.password)
        except AuthApiError as exc:
            logger.warning(f"session: registration failed code={exc.code}")
            self._set_unauthenticated(_auth_error(exc, "Registration failed"))
            raise

        await self.login(credentials.as_login())

    async def logout(self) -> None:
        token = self._store.get()

        self._cancel_timers()
        self._store.clear(source=self)
        self._set_unauthenticated()

        if not token:
            return
        try:
            await self._api.logout(token)
        except AuthApiError as exc:
            logger.warning(f"session: server logout failed code={exc.code}, local state cleared")
        else:
            logger.info("session: logged out")

    async def get_current_user(self) -> None:
        token = self._store.get()
        if not token:
            self._cancel_timers()
            self._set_unauthenticated()
            return

        try:
            user = await self._api.me(token)
        except AuthApiError as exc:
            logger.warning(f"session: get current user failed code={exc.code}")
            self._cancel_timers()
            self._store.clear(source=self)
            self._set_unauthenticated(_auth_error(exc, "Failed to get user information"))
            return

        self._set_authenticated(user)

    def clear_error(self) -> None:
        if self._state.error is not None:
            self._transition(replace(self._state, error=None))

    # timers

    def _start_timers(self) -> None:
        self._cancel_timers()
        generation = self._timer_generation
        self._refresh_task = asyncio.create_task(
            self._refresh_loop(generation), name="verdict-session-refresh"
        )
        self._check_task = asyncio.create_task(
            self._check_loop(generation), name="verdict-session-check"
        )

    def _cancel_timers(self) -> None:
        self._timer_generation += 1
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        for task in (self._refresh_task, self._check_task):
            # a timer that is itself tearing down finishes on its own
            if task is not None and task is not current and not task.done():
                task.cancel()
        self._refresh_task = None
        self._check_task = None

    def _is_stale(self, generation: int) -> bool:
        return generation != self._timer_generation

    async def _refresh_loop(self, generation: int) -> None:
        while True:
            await asyncio.sleep(self._refresh_interval)
            if self._is_stale(generation):
                return

            token = self._store.get()
            if not token:
                return

            try:
                result = await self._api.refresh(token)
            except AuthApiError as exc:
                logger.warning(f"session: token refresh failed code={exc.code}")
                if not self._is_stale(generation):
                    await self.logout()
                return

            if self._is_stale(generation):
                return
            self._store.set(result.session_token, source=self)
            self._set_authenticated(result.user)
            logger.debug(f"session: token rotated, expires_at={result.expires_at}")

    async def _check_loop(self, generation: int) -> None:
        while True:
            await asyncio.sleep(self._check_interval)
            if self._is_stale(generation):
                return

            token = self._store.get()
            if not token:
                self._cancel_timers()
                self._set_unauthenticated()
                return

            try:
                user = await self._api.me(token)
            except SessionRejectedError as exc:
                if self._is_stale(generation):
                    return
                if self._store.get() != token:
                    # rotated by the refresh task while the check was in flight
                    logger.debug("session: liveness check raced a token rotation, retrying")
                    continue
                logger.info(f"session: liveness check rejected code={exc.code}")
                await self.logout()
                return
            except AuthApiError as exc:
                logger.warning(f"session: liveness check error ignored code={exc.code}")
                continue

            if self._is_stale(generation):
                return
            self._set_authenticated(user)

    # token store events

    def _on_token_change(self, change: TokenChange) -> None:
        if change.source is self or change.new_value is not None:
            return
        logger.info("session: token cleared externally")
        self._cancel_timers()
        self._set_unauthenticated()

    # transitions

    def _set_loading(self, *, clear_error: bool = False) -> None:
        error = None if clear_error else self._state.error
        self._transition(replace(self._state, status=AuthStatus.LOADING, error=error))

    def _set_authenticated(self, user: User) -> None:
        self._transition(AuthState(status=AuthStatus.AUTHENTICATED, user=user))

    def _set_unauthenticated(self, error: AuthError | None = None) -> None:
        self._transition(AuthState(status=AuthStatus.UNAUTHENTICATED, error=error))

    def _transition(self, state: AuthState) -> None:
        previous = self._state
        self._state = state
        if previous.status != state.status:
            logger.debug(f"session: {previous.status} -> {state.status}")
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("session: state listener failed")

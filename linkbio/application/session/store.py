# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from linkbio.domain.session import SessionAction, SessionState, reduce
from linkbio.shared.logging import logger

Listener = Callable[[SessionState, SessionAction], None]


class SessionStore:
    """Holds the session state; consumers read it, subscribe to it and dispatch actions."""

    def __init__(self, initial: SessionState | None = None) -> None:
        self._state = initial or SessionState()
        self._listeners: list[Listener] = []

    def get_state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, action: SessionAction) -> SessionState:
        previous = self._state
        self._state = reduce(previous, action)
        if previous.status != self._state.status:
            logger.debug(
                f"session: {previous.status.value} -> {self._state.status.value} "
                f"on {type(action).__name__}"
            )
        for listener in list(self._listeners):
            listener(self._state, action)
        return self._state

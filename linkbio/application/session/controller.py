# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authentication lifecycle: restore, login, signup, logout and token refresh.

The controller owns no state of its own. Session state lives in the injected
:class:`SessionStore`, tokens live in the injected token persistence strategy,
and navigation/notifications go through the view layer's ports.
"""

from __future__ import annotations

from linkbio.application.interfaces import Navigator, Notifier
from linkbio.application.session.store import SessionStore
from linkbio.domain.session import (
    Authenticated,
    LoggedOut,
    RestoreFinished,
    RestoreStarted,
    SessionState,
    UserLoaded,
)
from linkbio.domain.users import (
    AuthApi,
    InvalidSessionError,
    SessionExpiredError,
    SignupValues,
    TokenStore,
    User,
)
from linkbio.shared.errors import AppError
from linkbio.shared.logging import logger

LOGIN_SUCCESS = "Signed in successfully!"
SIGNUP_SUCCESS = "User created successfully!"
SIGNUP_FAILED = "Could not create the user"
SIGNUP_SIGN_IN = "Account created, please sign in"


class SessionController:
    def __init__(
        self,
        *,
        auth_api: AuthApi,
        tokens: TokenStore,
        store: SessionStore,
        navigator: Navigator,
        notifier: Notifier,
        dashboard_path: str = "/dash",
        landing_path: str = "/",
        public_profile_prefix: str = "/user/",
    ) -> None:
        self._auth_api = auth_api
        self._tokens = tokens
        self._store = store
        self._navigator = navigator
        self._notifier = notifier
        self._dashboard_path = dashboard_path
        self._landing_path = landing_path
        self._public_profile_prefix = public_profile_prefix

    @property
    def state(self) -> SessionState:
        return self._store.get_state()

    @property
    def user(self) -> User | None:
        return self._store.get_state().user

    @property
    def is_authenticated(self) -> bool | None:
        return self._store.get_state().is_authenticated

    @property
    def access_token(self) -> str | None:
        return self._tokens.access_token()

    async def restore_session(self) -> SessionState:
        """Re-establish the session from persisted tokens; failures end logged out."""
        self._store.dispatch(RestoreStarted())
        try:
            await self._restore()
        finally:
            self._store.dispatch(RestoreFinished())
        return self.state

    async def _restore(self) -> None:
        if not self._tokens.refresh_token():
            logger.debug("session.restore: no refresh token")
            self.logout()
            return

        try:
            access_token = await self.refresh_token()
        except SessionExpiredError:
            self.logout()
            return

        if not await self.update_user_data(access_token):
            logger.info("session.restore: profile fetch failed, logging out")
            self.logout()
            return

        self._authenticate()
        logger.info(f"session.restore: ok user_id={self.user.id if self.user else None}")

    async def login(self, email: str, password: str) -> None:
        """Raises the underlying request error so the form can display it."""
        try:
            pair = await self._auth_api.login(email, password)
        except AppError as exc:
            logger.warning(f"session.login: failed code={exc.code}")
            raise

        self.register_tokens(pair.access_token, pair.refresh_token)

        if not await self.update_user_data(pair.access_token):
            self._tokens.clear()
            logger.warning("session.login: token accepted but profile fetch failed")
            raise InvalidSessionError()

        self._notifier.success(LOGIN_SUCCESS)
        self._authenticate()
        logger.info(f"session.login: ok user_id={self.user.id if self.user else None}")

    async def signup(self, values: SignupValues) -> bool:
        try:
            result = await self._auth_api.create_user(values)
        except AppError as exc:
            logger.error(f"session.signup: failed code={exc.code} message={exc}")
            self._notifier.error(str(exc) or SIGNUP_FAILED)
            return False

        if not result.user_id:
            logger.warning("session.signup: response carried no user id")
            self._notifier.error(SIGNUP_FAILED)
            return False

        if result.tokens is None:
            # the account exists; only the automatic sign-in is missing
            logger.info(f"session.signup: created without tokens user_id={result.user_id}")
            self._notifier.success(SIGNUP_SIGN_IN)
            self._navigate(self._landing_path)
            return False

        self._notifier.success(SIGNUP_SUCCESS)
        self.register_tokens(result.tokens.access_token, result.tokens.refresh_token)

        if not await self.update_user_data(result.tokens.access_token):
            self._tokens.clear()
            logger.warning(f"session.signup: profile fetch failed user_id={result.user_id}")
            self._notifier.error(SIGNUP_FAILED)
            return False

        self._authenticate()
        logger.info(f"session.signup: ok user_id={result.user_id}")
        return True

    def logout(self) -> None:
        try:
            self._tokens.clear()
        except Exception:
            logger.exception("session.logout: failed to clear tokens")
        self._store.dispatch(LoggedOut())
        self._navigate(self._landing_path)

    async def refresh_token(self) -> str:
        """Exchange the persisted refresh token for a new access token."""
        self._tokens.clear_access()

        refresh_token = self._tokens.refresh_token()
        if not refresh_token:
            raise SessionExpiredError()

        try:
            access_token = await self._auth_api.refresh(refresh_token)
        except AppError as exc:
            logger.info(f"session.refresh: rejected code={exc.code}")
            raise SessionExpiredError(context={"cause": exc.code}) from exc

        self.register_tokens(access_token)
        return access_token

    async def update_user_data(self, access_token: str | None = None) -> bool:
        token = access_token or self._tokens.access_token()
        if not token:
            return False

        try:
            user = await self._auth_api.me(token)
        except AppError as exc:
            logger.info(f"session.me: failed code={exc.code}")
            return False

        if user is None or not user.id:
            return False

        self._store.dispatch(UserLoaded(user))
        return True

    def register_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        self._tokens.store(access_token, refresh_token)

    def _authenticate(self) -> None:
        self._store.dispatch(Authenticated())
        self._navigate(self._dashboard_path)

    def _navigate(self, path: str) -> None:
        current = self._navigator.current_path
        if current.startswith(self._public_profile_prefix):
            return
        if current == path:
            return
        self._navigator.replace(path)

"""Email/password sign-in against the hosted identity provider.

``FirebaseIdentityProvider`` wraps the Identity Toolkit REST API and pushes
auth-state changes to its subscribers. ``SessionManager`` owns one such
subscription for its lifetime and is what the rest of the app asks for the
current user.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import requests

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"


class AuthError(RuntimeError):
    pass


@dataclass(frozen=True)
class User:
    uid: str
    email: Optional[str] = None
    id_token: str = field(default="", repr=False, compare=False)


AuthListener = Callable[[Optional[User]], None]


class FirebaseIdentityProvider:
    def __init__(self, api_key: str, session: requests.Session | None = None, timeout: int = 10):
        if not api_key:
            raise AuthError("FIREBASE_API_KEY not configured")
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()
        self._listeners: List[AuthListener] = []
        self.current_user: Optional[User] = None

    def on_auth_state_changed(self, callback: AuthListener) -> Callable[[], None]:
        """Register ``callback`` and report the current state to it right away."""
        self._listeners.append(callback)
        callback(self.current_user)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set_user(self, user: Optional[User]):
        self.current_user = user
        for listener in list(self._listeners):
            listener(user)

    def _post(self, endpoint: str, payload: dict) -> dict:
        url = f"{IDENTITY_TOOLKIT_URL}/accounts:{endpoint}"
        try:
            response = self._session.post(url, params={"key": self.api_key}, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise AuthError(f"Network error: {exc}") from exc
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.ok:
            message = (body.get("error") or {}).get("message") if isinstance(body, dict) else None
            raise AuthError(message or f"{response.status_code} {response.reason}")
        return body

    def _user_from_response(self, body: dict) -> User:
        uid = body.get("localId")
        if not uid:
            raise AuthError("Identity provider returned no user id")
        return User(uid=uid, email=body.get("email"), id_token=body.get("idToken", ""))

    def sign_in_with_password(self, email: str, password: str) -> User:
        body = self._post(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        user = self._user_from_response(body)
        self._set_user(user)
        return user

    def create_user_with_password(self, email: str, password: str) -> User:
        body = self._post(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        user = self._user_from_response(body)
        self._set_user(user)
        return user

    def sign_out(self):
        self._set_user(None)


class SessionManager:
    def __init__(self, provider):
        self._provider = provider
        self._listeners: List[AuthListener] = []
        self.user: Optional[User] = None
        self.ready = False
        self._unsubscribe = provider.on_auth_state_changed(self._on_auth_state)

    @property
    def user_id(self) -> Optional[str]:
        return self.user.uid if self.user else None

    def _on_auth_state(self, user: Optional[User]):
        self.user = user
        self.ready = True
        for listener in list(self._listeners):
            listener(user)

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, email: str, password: str) -> str:
        try:
            user = self._provider.sign_in_with_password(email.strip(), password)
        except Exception as exc:
            logger.exception("Sign-in failed")
            return f"Sign-in error: {exc}"
        logger.info("Signed in as %s", user.uid)
        return ""

    def sign_up(self, email: str, password: str) -> str:
        try:
            user = self._provider.create_user_with_password(email.strip(), password)
        except Exception as exc:
            logger.exception("Sign-up failed")
            return f"Sign-up error: {exc}"
        logger.info("Created account %s", user.uid)
        return ""

    def sign_out(self) -> str:
        previous = self.user_id
        try:
            self._provider.sign_out()
        except Exception as exc:
            logger.exception("Sign-out failed")
            return f"Sign-out error: {exc}"
        logger.info("Signed out %s", previous)
        return ""

    def close(self):
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        self._listeners.clear()

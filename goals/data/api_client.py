from typing import Any

import requests
from requests.adapters import HTTPAdapter

_SECRET_GETTER = None
_USER_GETTER = None


class ApiError(RuntimeError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def _build_session():
    session = requests.Session()
    # Failures surface to the user once; the adapter never retries.
    adapter = HTTPAdapter(max_retries=0, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


_SESSION = _build_session()


def configure(secret_getter, user_getter):
    global _SECRET_GETTER, _USER_GETTER
    _SECRET_GETTER = secret_getter
    _USER_GETTER = user_getter


def _get_secret(path, default=None):
    if _SECRET_GETTER is None:
        return default
    return _SECRET_GETTER(path, default)


def api_base_url():
    return str(_get_secret(("app", "API_BASE_URL")) or "").strip()


def backend_token():
    return str(_get_secret(("app", "BACKEND_SESSION_SECRET")) or "").strip()


def is_enabled():
    return bool(api_base_url() and backend_token())


def request(method: str, path: str, params: dict | None = None, json: dict | None = None, timeout: int = 10) -> Any:
    base = api_base_url().rstrip("/")
    if not base:
        raise ApiError("API_BASE_URL not configured")
    token = backend_token()
    if not token:
        raise ApiError("BACKEND_SESSION_SECRET not configured")
    user_id = _USER_GETTER() if _USER_GETTER else None
    if not user_id:
        raise ApiError("Missing user id for API request")
    headers = {
        "X-User-Id": user_id,
        "X-Backend-Token": token,
    }
    url = f"{base}{path}"
    try:
        response = _SESSION.request(method, url, params=params, json=json, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise ApiError(f"API unreachable: {exc}") from exc
    if not response.ok:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        raise ApiError(f"API error {response.status_code} {response.reason}: {detail}", response.status_code)
    if response.status_code == 204:
        return None
    return response.json()

from unittest import mock

from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from goals.auth import FirebaseIdentityProvider
from goals.data.documents import SqlDocumentStore


def memory_store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    return SqlDocumentStore(engine)


def provider_response(status_code=200, body=None, reason="OK"):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.json.return_value = body if body is not None else {}
    return response


def account_body(uid, email):
    return {"localId": uid, "email": email, "idToken": f"token-{uid}", "refreshToken": "refresh"}


def provider_error(message):
    return provider_response(400, {"error": {"code": 400, "message": message}}, reason="Bad Request")


def mocked_provider():
    http = mock.Mock()
    return FirebaseIdentityProvider("test-api-key", session=http), http

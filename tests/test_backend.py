import os
import tempfile
from unittest import TestCase, mock

from fastapi.testclient import TestClient

from backend.db import _normalize_database_url
from backend.main import create_app
from backend.settings import reset_settings

SECRET = "test-backend-secret"


def headers(uid="u1", token=SECRET):
    values = {}
    if uid is not None:
        values["X-User-Id"] = uid
    if token is not None:
        values["X-Backend-Token"] = token
    return values


class DocumentApiTests(TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        env = {
            "DATABASE_URL": f"sqlite:///{os.path.join(self.tmpdir.name, 'test.db')}",
            "BACKEND_SESSION_SECRET": SECRET,
            "ALLOWED_USER_IDS": "",
        }
        patcher = mock.patch.dict(os.environ, env)
        patcher.start()
        self.addCleanup(patcher.stop)
        reset_settings()
        self.addCleanup(reset_settings)
        self.client = TestClient(create_app())
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def put(self, path, data, merge=True, uid="u1"):
        return self.client.put(f"/v1/{path}", json={"data": data, "merge": merge}, headers=headers(uid))

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"ok": True})

    def test_requires_backend_token(self):
        self.assertEqual(self.client.get("/v1/users/u1/entries/2026-06-15", headers=headers(token=None)).status_code, 401)
        self.assertEqual(self.client.get("/v1/users/u1/entries/2026-06-15", headers=headers(token="nope")).status_code, 401)

    def test_requires_user_id(self):
        response = self.client.get("/v1/users/u1/entries/2026-06-15", headers=headers(uid=None))
        self.assertEqual(response.status_code, 401)

    def test_rejects_other_users_documents(self):
        response = self.client.get("/v1/users/u2/entries/2026-06-15", headers=headers("u1"))
        self.assertEqual(response.status_code, 403)

    def test_allow_list(self):
        with mock.patch.dict(os.environ, {"ALLOWED_USER_IDS": "u1, u3"}):
            reset_settings()
            self.assertEqual(self.client.get("/v1/users/u2/entries", headers=headers("u2")).status_code, 403)
            self.assertEqual(self.client.get("/v1/users/u3/entries", headers=headers("u3")).status_code, 200)

    def test_unknown_collection(self):
        response = self.client.get("/v1/users/u1/habits/x", headers=headers())
        self.assertEqual(response.status_code, 404)

    def test_missing_document(self):
        response = self.client.get("/v1/users/u1/entries/2026-06-15", headers=headers())
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"path": "users/u1/entries/2026-06-15", "exists": False, "data": None},
        )

    def test_write_then_read(self):
        entry = {"date": "2026-06-15", "rating": {"material": 4, "ego": 2, "running": 5}, "notes": {"ego": "x"}}
        response = self.put("users/u1/entries/2026-06-15", entry)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["ok"])

        body = self.client.get("/v1/users/u1/entries/2026-06-15", headers=headers()).json()
        self.assertTrue(body["exists"])
        self.assertEqual(body["data"], entry)

    def test_merge_keeps_untouched_fields(self):
        self.put("users/u1/entries/2026-06-15", {"rating": {"material": 4, "ego": 2}, "notes": {"ego": "a"}})
        response = self.put("users/u1/entries/2026-06-15", {"notes": {"ego": "b"}})
        self.assertEqual(response.json()["data"], {"rating": {"material": 4, "ego": 2}, "notes": {"ego": "b"}})

    def test_overwrite_replaces_document(self):
        self.put("users/u1/months/2026-06", {"material": 80, "ego": 60})
        response = self.put("users/u1/months/2026-06", {"material": 20}, merge=False)
        self.assertEqual(response.json()["data"], {"material": 20})

    def test_list_ordered_and_scoped(self):
        for day in ("2026-06-03", "2026-05-30", "2026-06-01"):
            self.put(f"users/u1/entries/{day}", {"date": day})
        self.put("users/u2/entries/2026-06-02", {"date": "2026-06-02"}, uid="u2")

        response = self.client.get("/v1/users/u1/entries", params={"order_by": "date"}, headers=headers())
        self.assertEqual(
            [item["date"] for item in response.json()["items"]],
            ["2026-05-30", "2026-06-01", "2026-06-03"],
        )


class DatabaseUrlTests(TestCase):
    def test_sqlite_uses_async_driver(self):
        self.assertEqual(_normalize_database_url("sqlite:///goals.db"), "sqlite+aiosqlite:///goals.db")

    def test_postgres_sslmode(self):
        url = _normalize_database_url("postgres://u:p@db.example.com/goals?sslmode=require&channel_binding=require")
        self.assertEqual(url, "postgresql+asyncpg://u:p@db.example.com/goals?ssl=true")

from unittest import TestCase, mock

from goals.auth import SessionManager
from goals.data import repositories
from goals.data.documents import DocumentStoreError
from goals.entry_form import AppState, EntryForm, pick_mantras, resolve_app_state
from goals.constants import MANTRAS
from goals.models import DailyEntry

from support import account_body, memory_store, mocked_provider, provider_response

TODAY = "2026-06-15"


class EntryFormTests(TestCase):
    def setUp(self):
        self.store = memory_store()
        repositories.configure(lambda: self.store)
        self.provider, self.http = mocked_provider()
        self.session = SessionManager(self.provider)
        self.form = EntryForm(self.session, today_getter=lambda: TODAY)

    def tearDown(self):
        self.form.close()
        self.session.close()
        repositories.configure(None)

    def sign_in(self, uid, email):
        self.http.post.return_value = provider_response(body=account_body(uid, email))
        self.assertEqual(self.session.sign_in(email, "secret1"), "")

    def test_starts_unauthenticated_once_provider_reported(self):
        self.assertEqual(self.form.state, AppState.UNAUTHENTICATED)
        self.assertFalse(self.form.needs_load)

    def test_sign_in_loads_todays_defaults(self):
        self.sign_in("u1", "a@example.com")
        self.assertEqual(self.form.state, AppState.AUTHENTICATED)
        self.assertEqual(self.form.loaded_key, ("u1", TODAY))
        self.assertEqual(self.form.draft, DailyEntry.default(TODAY))
        self.assertEqual(self.form.month_summary, {"material": 0, "ego": 0, "running": 0})

    def test_edits_stay_in_draft_until_save(self):
        self.sign_in("u1", "a@example.com")
        self.form.set_rating("material", 5)
        self.form.set_note("material", "sold the old bike")
        self.assertIsNone(self.store.get(repositories.entry_path("u1", TODAY)))

        self.assertTrue(self.form.save())
        self.assertEqual(self.form.status, "Saved ✓")
        stored = repositories.load_entry("u1", TODAY)
        self.assertEqual(stored.rating["material"], 5)
        self.assertEqual(stored.notes["material"], "sold the old bike")
        self.assertEqual(self.form.month_summary, {"material": 100, "ego": 60, "running": 60})

    def test_date_navigation_loads_entry_and_discards_draft(self):
        self.sign_in("u1", "a@example.com")
        repositories.save_entry("u1", DailyEntry.default("2026-06-14").with_rating("ego", 1))
        repositories.save_month_summary("u1", "2026-06", {"material": 60, "ego": 20, "running": 60})
        self.form.set_rating("running", 5)

        self.form.select_date("2026-06-14")
        self.assertEqual(self.form.draft.rating, {"material": 3, "ego": 1, "running": 3})
        self.assertEqual(self.form.month_summary["ego"], 20)

        self.form.select_date(TODAY)
        self.assertEqual(self.form.draft, DailyEntry.default(TODAY))

    def test_navigation_never_recomputes(self):
        self.sign_in("u1", "a@example.com")
        with mock.patch("goals.entry_form.metrics.recompute_month") as recompute:
            self.form.select_date("2026-05-01")
        recompute.assert_not_called()
        self.assertEqual(self.form.month, "2026-05")

    def test_load_error_keeps_default_draft(self):
        self.sign_in("u1", "a@example.com")
        self.form.set_rating("ego", 5)
        with mock.patch("goals.entry_form.repositories.load_entry", side_effect=DocumentStoreError("read timed out")):
            self.form.select_date("2026-06-10")
        self.assertEqual(self.form.status, "Load error: read timed out")
        self.assertEqual(self.form.draft, DailyEntry.default("2026-06-10"))

    def test_save_error_is_reported(self):
        self.sign_in("u1", "a@example.com")
        self.form.set_rating("ego", 4)
        with mock.patch("goals.entry_form.repositories.save_entry", side_effect=DocumentStoreError("write rejected")):
            self.assertFalse(self.form.save())
        self.assertEqual(self.form.status, "Save error: write rejected")
        self.assertEqual(self.form.draft.rating["ego"], 4)
        self.assertFalse(self.form.saving)

    def test_save_recomputes_only_the_saved_month(self):
        self.sign_in("u1", "a@example.com")
        with mock.patch("goals.entry_form.metrics.recompute_month", return_value={"material": 60, "ego": 60, "running": 60}) as recompute:
            self.form.save()
        recompute.assert_called_once_with("u1", "2026-06")

    def test_save_requires_user(self):
        self.assertFalse(self.form.save())

    def test_sign_out_clears_user_state(self):
        self.sign_in("u1", "a@example.com")
        self.form.select_date("2026-05-02")
        self.form.set_rating("material", 1)
        self.form.save()

        self.assertEqual(self.session.sign_out(), "")
        self.assertEqual(self.form.state, AppState.UNAUTHENTICATED)
        self.assertEqual(self.form.selected_date, TODAY)
        self.assertEqual(self.form.draft, DailyEntry.default(TODAY))
        self.assertIsNone(self.form.month_summary)
        self.assertIsNone(self.form.loaded_key)

    def test_switching_users_never_shows_previous_data(self):
        self.sign_in("u1", "a@example.com")
        self.form.set_rating("material", 5)
        self.form.set_note("ego", "private note")
        self.form.save()
        self.session.sign_out()

        snapshots = []
        self.session.subscribe(lambda user: snapshots.append((self.form.draft, self.form.month_summary)))
        self.sign_in("u2", "b@example.com")

        self.assertEqual(self.form.loaded_key, ("u2", TODAY))
        self.assertEqual(self.form.draft, DailyEntry.default(TODAY))
        self.assertEqual(self.form.month_summary, {"material": 0, "ego": 0, "running": 0})
        for draft, summary in snapshots:
            self.assertNotEqual(draft.notes["ego"], "private note")
            self.assertNotEqual((summary or {}).get("material"), 100)

    def test_ensure_loaded_after_external_reset(self):
        self.sign_in("u1", "a@example.com")
        self.form.loaded_key = None
        self.assertTrue(self.form.needs_load)
        self.form.ensure_loaded()
        self.assertEqual(self.form.loaded_key, ("u1", TODAY))


class AppStateTests(TestCase):
    def test_loading_until_first_report(self):
        provider = mock.Mock()
        provider.on_auth_state_changed.return_value = lambda: None
        session = SessionManager(provider)
        self.assertEqual(resolve_app_state(session), AppState.LOADING)

        callback = provider.on_auth_state_changed.call_args[0][0]
        callback(None)
        self.assertEqual(resolve_app_state(session), AppState.UNAUTHENTICATED)

    def test_pick_mantras_uses_candidates(self):
        mantras = pick_mantras()
        for key, value in mantras.items():
            self.assertIn(value, MANTRAS[key])

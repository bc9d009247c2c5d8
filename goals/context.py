from dataclasses import dataclass, field
from typing import Dict

from goals.auth import FirebaseIdentityProvider, SessionManager
from goals.entry_form import EntryForm, pick_mantras


@dataclass
class AppContext:
    session: SessionManager
    form: EntryForm
    mantras: Dict[str, str] = field(default_factory=pick_mantras)
    storage_label: str = ""

    @property
    def user(self):
        return self.session.user

    def close(self):
        self.form.close()
        self.session.close()


def build_app_context(api_key, storage_label="", provider=None):
    """One context per browser session: provider, session, form and mantras."""
    provider = provider or FirebaseIdentityProvider(api_key)
    session = SessionManager(provider)
    form = EntryForm(session)
    return AppContext(session=session, form=form, storage_label=storage_label)

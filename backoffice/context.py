from dataclasses import dataclass, field
from typing import Optional

import httpx

from backoffice.auth import AuthSession
from backoffice.cache import QueryCache
from backoffice.client import ContractClient, api_client
from backoffice.i18n import Translator
from backoffice.notifications import Notifier


@dataclass
class AppContext:
    """
    Everything a page needs for one browser session: identity, cache,
    notifications and translations. Built at start-up and reset on sign-out.
    """

    auth: AuthSession
    translator: Translator = field(default_factory=Translator)
    cache: QueryCache = field(default_factory=QueryCache)
    notifier: Notifier = field(default_factory=Notifier)
    http: Optional[httpx.Client] = None
    base_url: Optional[str] = None
    role_prefetched: bool = False

    def t(self, key, **values):
        return self.translator.t(key, **values)

    def client(self, contract, token=None) -> ContractClient:
        return api_client(contract, token=token, http=self.http, base_url=self.base_url)

    def sign_out(self):
        self.auth.sign_out()
        self.cache.clear()
        self.role_prefetched = False

"""Token providers for hubs.

Public API:
    :class:`GetToken` -- the provider interface.
    :class:`NoToken`, :class:`StaticToken` -- trivial providers.
    :class:`TokenStore` -- scope-keyed on-disk token persistence.
    :class:`InstalledFlowAuthenticator` -- OAuth2 installed-application flow.
"""

from apiary.auth.base import GetToken, NoToken, StaticToken
from apiary.auth.installed_flow import InstalledFlowAuthenticator
from apiary.auth.token_store import TokenStore

__all__ = [
    "GetToken",
    "InstalledFlowAuthenticator",
    "NoToken",
    "StaticToken",
    "TokenStore",
]

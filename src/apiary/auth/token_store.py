"""Persistent token store keyed by scope set.

Stores tokens in ``<config-dir>/<api>/tokens.json``. Each entry records the
exact, sorted scope list it was granted for; a lookup only matches an entry
with the same scope list. Files are written atomically with ``0o600``
permissions so that tokens are never world-readable, even momentarily.

See Also:
    :class:`~apiary.auth.installed_flow.InstalledFlowAuthenticator` -- the
    flow that fills the store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from apiary.config import _atomic_write
from apiary.models import StoredToken, TokenFile, TokenInfo

logger = logging.getLogger(__name__)

TOKEN_FILE_NAME = "tokens.json"


class TokenStore:
    """Read/write tokens in a single JSON file.

    Args:
        path: The token file. Its parent directory is created on first save.

    Example::

        store = TokenStore(Path("~/.google-service-cli/cloudtasks2-beta3/tokens.json"))
        store.save(["https://www.googleapis.com/auth/cloud-platform"],
                   TokenInfo(access_token="ya29..."))
        assert store.get(["https://www.googleapis.com/auth/cloud-platform"])
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path).expanduser()

    @classmethod
    def for_api(cls, config_dir: Path, api_name: str) -> TokenStore:
        return cls(config_dir / api_name / TOKEN_FILE_NAME)

    @property
    def path(self) -> Path:
        """The filesystem path of the token file."""
        return self._path

    def get(self, scopes: Sequence[str]) -> Optional[TokenInfo]:
        """Return the token stored for exactly *scopes*, if any."""
        key = sorted(scopes)
        for entry in self._load().tokens:
            if entry.scopes == key:
                return entry.token
        return None

    def save(self, scopes: Sequence[str], token: TokenInfo) -> None:
        """Store *token* for *scopes*, replacing any previous entry for them.

        Raises:
            OSError: If the file cannot be written.
        """
        key = sorted(scopes)
        data = self._load()
        tokens = [entry for entry in data.tokens if entry.scopes != key]
        tokens.append(StoredToken(scopes=key, token=token))
        text = json.dumps(TokenFile(tokens=tokens).model_dump(mode="json"), indent=2) + "\n"
        _atomic_write(self._path, text, mode=0o600)

    def remove(self, scopes: Sequence[str]) -> bool:
        """Forget the token for *scopes*. Returns whether one was stored."""
        key = sorted(scopes)
        data = self._load()
        tokens = [entry for entry in data.tokens if entry.scopes != key]
        if len(tokens) == len(data.tokens):
            return False
        text = json.dumps(TokenFile(tokens=tokens).model_dump(mode="json"), indent=2) + "\n"
        _atomic_write(self._path, text, mode=0o600)
        return True

    def clear(self) -> None:
        """Delete the token file if it exists."""
        if self._path.is_file():
            self._path.unlink()

    def _load(self) -> TokenFile:
        if not self._path.is_file():
            return TokenFile()
        try:
            return TokenFile.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (ValidationError, OSError) as exc:
            logger.warning("Ignoring unreadable token file %s: %s", self._path, exc)
            return TokenFile()

"""Tests for the scope-keyed token store."""

from __future__ import annotations

import json
import os
import stat
from datetime import datetime, timezone
from pathlib import Path

import pytest

from apiary.auth.token_store import TokenStore
from apiary.models import TokenInfo

CLOUD = "https://www.googleapis.com/auth/cloud-platform"
READONLY = "https://www.googleapis.com/auth/playmovies_partner.readonly"


@pytest.fixture()
def store(tmp_path: Path) -> TokenStore:
    return TokenStore.for_api(tmp_path, "cloudtasks2-beta3")


class TestTokenStore:
    def test_path_layout(self, store: TokenStore, tmp_path: Path) -> None:
        assert store.path == tmp_path / "cloudtasks2-beta3" / "tokens.json"

    def test_get_returns_none_when_no_file(self, store: TokenStore) -> None:
        assert store.get([CLOUD]) is None

    def test_save_and_get(self, store: TokenStore) -> None:
        expires = datetime(2030, 1, 1, tzinfo=timezone.utc)
        store.save([CLOUD], TokenInfo(access_token="a", refresh_token="r", expires_at=expires))
        token = store.get([CLOUD])
        assert token is not None
        assert token.access_token == "a"
        assert token.refresh_token == "r"
        assert token.expires_at == expires

    def test_lookup_requires_exact_scope_set(self, store: TokenStore) -> None:
        store.save([CLOUD], TokenInfo(access_token="a"))
        assert store.get([CLOUD, READONLY]) is None
        assert store.get([READONLY]) is None

    def test_scope_order_does_not_matter(self, store: TokenStore) -> None:
        store.save([READONLY, CLOUD], TokenInfo(access_token="both"))
        token = store.get([CLOUD, READONLY])
        assert token is not None
        assert token.access_token == "both"

    def test_save_replaces_entry_for_same_scopes(self, store: TokenStore) -> None:
        store.save([CLOUD], TokenInfo(access_token="old"))
        store.save([READONLY], TokenInfo(access_token="other"))
        store.save([CLOUD], TokenInfo(access_token="new"))
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert len(data["tokens"]) == 2
        assert store.get([CLOUD]).access_token == "new"  # type: ignore[union-attr]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_is_private(self, store: TokenStore) -> None:
        store.save([CLOUD], TokenInfo(access_token="a"))
        mode = stat.S_IMODE(store.path.stat().st_mode)
        assert mode == 0o600

    def test_remove(self, store: TokenStore) -> None:
        store.save([CLOUD], TokenInfo(access_token="a"))
        assert store.remove([CLOUD]) is True
        assert store.get([CLOUD]) is None
        assert store.remove([CLOUD]) is False

    def test_clear(self, store: TokenStore) -> None:
        store.save([CLOUD], TokenInfo(access_token="a"))
        store.clear()
        assert not store.path.exists()
        store.clear()

    def test_corrupt_file_reads_as_empty(self, store: TokenStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")
        assert store.get([CLOUD]) is None
        store.save([CLOUD], TokenInfo(access_token="fresh"))
        assert store.get([CLOUD]).access_token == "fresh"  # type: ignore[union-attr]


class TestTokenInfo:
    def test_unknown_expiry_is_valid(self) -> None:
        assert not TokenInfo(access_token="a").is_expired(30)

    def test_past_expiry(self) -> None:
        token = TokenInfo(access_token="a", expires_at=datetime(2000, 1, 1, tzinfo=timezone.utc))
        assert token.is_expired()

    def test_naive_expiry_treated_as_utc(self) -> None:
        assert not TokenInfo(access_token="a", expires_at=datetime(2999, 1, 1)).is_expired(30)

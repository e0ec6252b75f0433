"""Tests for apiary.common.url: parameter encoding and URI templates."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from apiary.common.field_mask import FieldMask
from apiary.common.url import Params, to_query_value


@pytest.mark.parametrize(
    "value,expected",
    [
        ("x", "x"),
        (True, "true"),
        (False, "false"),
        (25, "25"),
        (2.0, "2"),
        (2.5, "2.5"),
        (FieldMask(["read_mask"]), "readMask"),
        (FieldMask(), ""),
        (datetime(2024, 1, 1, tzinfo=timezone.utc), "2024-01-01T00:00:00Z"),
        (timedelta(seconds=90), "90s"),
        (b"ab", "YWI="),
    ],
)
def test_to_query_value(value, expected: str) -> None:
    assert to_query_value(value) == expected


class TestParams:
    def test_preserves_order_and_duplicates(self) -> None:
        params = Params()
        params.push("videoIds", "a")
        params.push("videoIds", "b")
        params.push("alt", "json")
        assert list(params) == [("videoIds", "a"), ("videoIds", "b"), ("alt", "json")]

    def test_get_returns_first(self) -> None:
        params = Params()
        params.extend([("a", "1"), ("a", "2")])
        assert params.get("a") == "1"
        assert params.get("missing") is None

    def test_reserved_expansion_keeps_slashes(self) -> None:
        params = Params()
        params.push("parent", "projects/p/locations/l")
        url = params.uri_replacement("https://x/v2beta3/{+parent}/queues", "parent", "{+parent}", True)
        assert url == "https://x/v2beta3/projects/p/locations/l/queues"

    def test_simple_expansion_escapes_everything(self) -> None:
        params = Params()
        params.push("accountId", "a/b c")
        url = params.uri_replacement("https://x/v1/accounts/{accountId}", "accountId", "{accountId}", False)
        assert url == "https://x/v1/accounts/a%2Fb%20c"

    def test_missing_path_param_raises(self) -> None:
        with pytest.raises(ValueError, match="name"):
            Params().uri_replacement("https://x/{+name}", "name", "{+name}", True)

    def test_reserved_expansion_keeps_sub_delimiters(self) -> None:
        params = Params()
        params.push("name", "projects/p/queues/a:b@c,d")
        url = params.uri_replacement("https://x/{+name}", "name", "{+name}", True)
        assert url == "https://x/projects/p/queues/a:b@c,d"

    def test_reserved_expansion_escapes_query_and_fragment(self) -> None:
        params = Params()
        params.push("name", "a?b#c d%")
        url = params.uri_replacement("https://x/{+name}", "name", "{+name}", True)
        assert url == "https://x/a%3Fb%23c%20d%25"

    def test_remove(self) -> None:
        params = Params()
        params.extend([("name", "n"), ("readMask", ""), ("alt", "json")])
        params.remove(["name"])
        assert list(params) == [("readMask", ""), ("alt", "json")]

"""
Tests for rdsync.sync.identity module.
"""

import hashlib
import re

import pytest

from rdsync.sync.identity import (
    SESSION_KEY_LENGTH,
    SESSION_NAME_PREFIX,
    session_key,
    session_name,
)


class TestSessionKey:
    """Tests for session_key."""

    def test_md5_of_joined_triple(self) -> None:
        expected = hashlib.md5(b"/app-web-staging").hexdigest()
        assert session_key("/app", "web", "staging") == expected

    def test_lowercase_hex(self) -> None:
        assert re.fullmatch(r"[0-9a-f]{32}", session_key("/srv", "API", "Prod"))

    @pytest.mark.parametrize(
        "changed",
        [
            ("/app/src", "web", "staging"),
            ("/app", "worker", "staging"),
            ("/app", "web", "production"),
        ],
    )
    def test_any_input_changes_key(self, changed: tuple[str, str, str]) -> None:
        assert session_key(*changed) != session_key("/app", "web", "staging")


class TestSessionName:
    """Tests for session_name."""

    def test_known_value(self) -> None:
        digest = hashlib.md5(b"/app-web-staging").hexdigest()
        name = session_name("/app", "web", "staging")
        assert name == "rd-" + digest[:16]
        assert len(name) == 19

    def test_stable_across_calls(self) -> None:
        names = {session_name("/app", "web", "staging") for _ in range(10)}
        assert len(names) == 1

    def test_length(self) -> None:
        for args in [("", "", ""), ("/very/long/path" * 20, "d", "n"), ("/ü", "ß", "名前")]:
            assert len(session_name(*args)) == len(SESSION_NAME_PREFIX) + SESSION_KEY_LENGTH

    def test_prefix(self) -> None:
        assert session_name("/app", "web", "staging").startswith("rd-")

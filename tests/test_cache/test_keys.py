"""Tests for cache-key derivation."""

from __future__ import annotations

import itertools
import os
import re
import subprocess
import sys

import pytest

from kep.cache import derive_key
from kep.cache.keys import KEY_LENGTH


class TestFormat:
    @pytest.mark.parametrize(
        "tokens",
        [["echo", "hello"], ["ls"], [""], ["curl", "https://example.com/?q=a b"]],
    )
    def test_fixed_width_lowercase_hex(self, tokens: list[str]) -> None:
        key = derive_key(tokens)
        assert len(key) == KEY_LENGTH == 64
        assert re.fullmatch(r"[0-9a-f]+", key)

    def test_usable_as_file_name(self, tmp_path) -> None:
        key = derive_key(["cat", "/etc/passwd", "../../x"])
        path = tmp_path / key
        path.write_bytes(b"")
        assert path.parent == tmp_path


class TestDeterminism:
    def test_same_tokens_same_key(self) -> None:
        assert derive_key(["echo", "hello"]) == derive_key(["echo", "hello"])

    def test_tuple_and_list_agree(self) -> None:
        assert derive_key(("echo", "hello")) == derive_key(["echo", "hello"])

    def test_stable_across_processes(self) -> None:
        """A fresh interpreter (with its own hash seed) derives the same key."""
        code = "from kep.cache import derive_key; print(derive_key(['echo', 'hello']))"
        keys = {
            subprocess.run(
                [sys.executable, "-c", code],
                capture_output=True,
                text=True,
                check=True,
                env={**os.environ, "PYTHONHASHSEED": seed},
            ).stdout.strip()
            for seed in ("1", "2")
        }
        assert keys == {derive_key(["echo", "hello"])}

    def test_known_value(self) -> None:
        """The framing is part of the on-disk format and must not drift."""
        import hashlib

        expected = hashlib.sha256(
            (2).to_bytes(8, "big")
            + (4).to_bytes(8, "big") + b"echo"
            + (5).to_bytes(8, "big") + b"hello"
        ).hexdigest()
        assert derive_key(["echo", "hello"]) == expected


class TestSensitivity:
    def test_token_boundaries_matter(self) -> None:
        """["echo", "a b"] and ["echo", "a", "b"] join identically but differ."""
        assert derive_key(["echo", "a b"]) != derive_key(["echo", "a", "b"])

    def test_empty_token_matters(self) -> None:
        assert derive_key(["echo"]) != derive_key(["echo", ""])

    def test_concatenation_is_not_confused(self) -> None:
        assert derive_key(["ab", "c"]) != derive_key(["a", "bc"])

    def test_permutations_differ(self) -> None:
        tokens = ["grep", "-r", "foo", "src", "--include=*.py"]
        keys = {derive_key(list(p)) for p in itertools.permutations(tokens)}
        assert len(keys) == 120

    def test_undecodable_argv_bytes(self) -> None:
        """Surrogate-escaped argv from a non-UTF-8 filename still hashes."""
        weird = b"caf\xe9".decode("utf-8", "surrogateescape")
        assert derive_key(["cat", weird]) != derive_key(["cat", "café"])

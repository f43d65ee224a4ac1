"""Unit tests for build status key normalisation."""

import hashlib
import string
from unittest.mock import patch

import pytest

from . import keys
from .keys import compute_api_key


@pytest.fixture(autouse=True)
def _reset_hash_provider():
    keys._sha1.cache_clear()
    yield
    keys._sha1.cache_clear()


def describe_compute_api_key():
    def it_joins_key_and_extension_when_short():
        assert compute_api_key("jenkins", "feature/foo") == "jenkins-feature/foo"

    def it_passes_through_a_candidate_of_exactly_40_characters():
        base = "k" * 20
        ext = "e" * 19
        candidate = f"{base}-{ext}"
        assert len(candidate) == 40

        assert compute_api_key(base, ext) == candidate

    def it_hashes_a_candidate_of_41_characters():
        base = "k" * 20
        ext = "e" * 20
        expected = hashlib.sha1(f"{base}-{ext}".encode("utf-8")).hexdigest()

        assert compute_api_key(base, ext) == expected

    def it_returns_40_lowercase_hex_characters_for_any_long_input():
        for size in (41, 100, 5000):
            result = compute_api_key("jenkins", "x" * size)
            assert len(result) == 40
            assert set(result) <= set(string.hexdigits.lower())

    def it_hashes_the_utf8_bytes():
        ext = "ブランチ" * 10
        expected = hashlib.sha1(f"jenkins-{ext}".encode("utf-8")).hexdigest()

        assert compute_api_key("jenkins", ext) == expected

    def it_is_deterministic():
        long_ext = "release/" + "a" * 60
        first = compute_api_key("jenkins", long_ext)
        assert all(compute_api_key("jenkins", long_ext) == first for _ in range(5))
        assert compute_api_key("jenkins", "main") == compute_api_key("jenkins", "main")

    def it_gives_different_keys_for_different_extensions():
        a = compute_api_key("jenkins", "a" * 50)
        b = compute_api_key("jenkins", "b" * 50)
        assert a != b

    def describe_without_a_hash_provider():
        def it_truncates_to_40_characters(caplog):
            with patch("bitbucket_pr_client.keys.hashlib.new", side_effect=ValueError("unsupported hash type")):
                result = compute_api_key("jenkins", "x" * 60)

            assert result == ("jenkins-" + "x" * 60)[:40]
            assert "Failed to create hash provider" in caplog.text

        def it_still_passes_short_keys_through():
            with patch("bitbucket_pr_client.keys.hashlib.new", side_effect=ValueError("unsupported hash type")):
                assert compute_api_key("jenkins", "main") == "jenkins-main"

    def describe_hash_provider():
        def it_is_resolved_once():
            with patch("bitbucket_pr_client.keys.hashlib.new", wraps=hashlib.new) as mock_new:
                compute_api_key("jenkins", "x" * 60)
                compute_api_key("jenkins", "y" * 60)

            assert mock_new.call_count == 1

        def it_is_not_resolved_for_short_keys():
            with patch("bitbucket_pr_client.keys.hashlib.new", wraps=hashlib.new) as mock_new:
                compute_api_key("jenkins", "main")

            mock_new.assert_not_called()

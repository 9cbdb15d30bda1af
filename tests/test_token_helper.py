"""Unit tests for tfvault/token_helper.py token resolution."""

import pytest

from tfvault.config import VaultConfig
from tfvault.errors import AuthResolutionError
from tfvault.token_helper import (
    resolve_token,
    token_file_path,
    token_from_cache,
    token_from_environment,
)


class TestTokenFromEnvironment:
    """Tests for token_from_environment."""

    def test_returns_token(self):
        """Should return the VAULT_TOKEN captured in the config."""
        assert token_from_environment(VaultConfig(token="s.env")) == "s.env"

    def test_empty_is_none(self):
        """An empty token means the provider has nothing."""
        assert token_from_environment(VaultConfig()) is None


class TestTokenFromCache:
    """Tests for token_from_cache."""

    def test_reads_token_file(self, clean_env):
        """Should read and strip ~/.vault-token."""
        (clean_env / ".vault-token").write_text("s.cached\n")
        assert token_from_cache(VaultConfig()) == "s.cached"

    def test_missing_file(self):
        """A missing token file is not an error."""
        assert token_from_cache(VaultConfig()) is None

    def test_blank_file(self, clean_env):
        """A whitespace-only file yields no token."""
        (clean_env / ".vault-token").write_text("  \n")
        assert token_from_cache(VaultConfig()) is None

    def test_unreadable_file(self, clean_env):
        """I/O errors other than a missing file are fatal."""
        (clean_env / ".vault-token").mkdir()
        with pytest.raises(AuthResolutionError, match="token helper"):
            token_from_cache(VaultConfig())

    def test_path_under_home(self, clean_env):
        """The token file lives in the home directory."""
        assert token_file_path() == clean_env / ".vault-token"


class TestResolveToken:
    """Tests for resolve_token."""

    def test_environment_wins(self, clean_env):
        """The environment token is preferred over the cached one."""
        (clean_env / ".vault-token").write_text("s.cached")
        assert resolve_token(VaultConfig(token="s.env")) == "s.env"

    def test_falls_back_to_cache(self, clean_env):
        """The cached token is used when the environment has none."""
        (clean_env / ".vault-token").write_text("s.cached")
        assert resolve_token(VaultConfig()) == "s.cached"

    def test_no_token_anywhere(self):
        """Should fail when no provider yields a token."""
        with pytest.raises(AuthResolutionError, match="environment or credential helper"):
            resolve_token(VaultConfig())

    def test_stops_at_first_success(self):
        """Later providers are not consulted once a token is found."""
        calls = []

        def first(config):
            calls.append("first")
            return "s.first"

        def second(config):
            calls.append("second")
            return "s.second"

        assert resolve_token(VaultConfig(), providers=(first, second)) == "s.first"
        assert calls == ["first"]

    def test_skips_empty_results(self):
        """Providers returning empty strings are passed over."""

        def empty(config):
            return ""

        def second(config):
            return "s.second"

        assert resolve_token(VaultConfig(), providers=(empty, second)) == "s.second"

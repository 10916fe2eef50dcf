"""Tests for per-backend credential resolution."""

import pytest

from adapters.credentials import TEST_CONTEXT_SECRET, CredentialResolver, load_local_secret
from core.config import AppSettings
from core.domain.backend import Backend
from core.domain.errors import ConfigurationError

from conftest import CENTRAL, LOCAL, BrokenCentralStore, StaticCentralStore, run


def _settings(tmp_path, **overrides) -> AppSettings:
    values = {
        "_env_file": None,
        "zt_addr": LOCAL,
        "zt_secret_file": tmp_path / "authtoken.secret",
    }
    values.update(overrides)
    return AppSettings(**values)


class TestLocalSecret:
    def test_explicit_override_wins_over_file(self, tmp_path):
        (tmp_path / "authtoken.secret").write_text("from-file\n", encoding="utf-8")
        settings = _settings(tmp_path, zt_secret="explicit")

        assert load_local_secret(settings) == "explicit"

    def test_file_is_read_and_stripped(self, tmp_path):
        (tmp_path / "authtoken.secret").write_text("from-file\n", encoding="utf-8")

        assert load_local_secret(_settings(tmp_path)) == "from-file"

    def test_file_wins_over_test_placeholder(self, tmp_path):
        (tmp_path / "authtoken.secret").write_text("from-file", encoding="utf-8")

        assert load_local_secret(_settings(tmp_path, test_context=True)) == "from-file"

    def test_placeholder_only_in_test_context(self, tmp_path):
        assert load_local_secret(_settings(tmp_path, test_context=True)) == TEST_CONTEXT_SECRET
        assert load_local_secret(_settings(tmp_path)) is None

    def test_undecodable_file_is_treated_as_missing(self, tmp_path):
        (tmp_path / "authtoken.secret").write_bytes(b"\xff\xfe\x00bad")

        assert load_local_secret(_settings(tmp_path)) is None
        assert load_local_secret(_settings(tmp_path, test_context=True)) == TEST_CONTEXT_SECRET

    def test_undecodable_file_does_not_break_central(self, tmp_path):
        (tmp_path / "authtoken.secret").write_bytes(b"\xff\xfe\x00bad")
        resolver = CredentialResolver(_settings(tmp_path), StaticCentralStore(api_key="k", api_url=CENTRAL))

        assert run(resolver.resolve(Backend.CENTRAL)).headers["Authorization"] == "token k"
        assert "X-ZT1-Auth" not in run(resolver.resolve(Backend.LOCAL)).headers


class TestResolveLocal:
    def test_auth_header_and_base_url(self, tmp_path):
        resolver = CredentialResolver(_settings(tmp_path, zt_secret="tok"))

        endpoint = run(resolver.resolve(Backend.LOCAL))

        assert endpoint.base_url == LOCAL
        assert endpoint.headers["X-ZT1-Auth"] == "tok"
        assert endpoint.headers["Content-Type"] == "application/json"

    def test_missing_secret_is_not_an_error(self, tmp_path):
        resolver = CredentialResolver(_settings(tmp_path))

        endpoint = run(resolver.resolve(Backend.LOCAL))

        assert "X-ZT1-Auth" not in endpoint.headers

    def test_secret_read_once(self, tmp_path):
        secret_file = tmp_path / "authtoken.secret"
        secret_file.write_text("first", encoding="utf-8")
        resolver = CredentialResolver(_settings(tmp_path))
        secret_file.write_text("second", encoding="utf-8")

        assert run(resolver.resolve(Backend.LOCAL)).headers["X-ZT1-Auth"] == "first"


class TestResolveCentral:
    def test_stored_key_and_url(self, tmp_path):
        resolver = CredentialResolver(_settings(tmp_path), StaticCentralStore(api_key="k", api_url=CENTRAL))

        endpoint = run(resolver.resolve(Backend.CENTRAL))

        assert endpoint.base_url == CENTRAL
        assert endpoint.headers["Authorization"] == "token k"

    def test_default_url_when_none_stored(self, tmp_path):
        settings = _settings(tmp_path, central_default_url="https://default.test/api/v1/")
        resolver = CredentialResolver(settings, StaticCentralStore(api_key="k", api_url=None))

        assert run(resolver.resolve(Backend.CENTRAL)).base_url == "https://default.test/api/v1"

    def test_store_is_consulted_on_every_call(self, tmp_path):
        store = StaticCentralStore()
        resolver = CredentialResolver(_settings(tmp_path), store)

        run(resolver.resolve(Backend.CENTRAL))
        run(resolver.resolve(Backend.CENTRAL))

        assert store.calls == 2

    def test_store_failure_is_configuration_error(self, tmp_path):
        resolver = CredentialResolver(_settings(tmp_path), BrokenCentralStore())

        with pytest.raises(ConfigurationError) as exc_info:
            run(resolver.resolve(Backend.CENTRAL))

        assert isinstance(exc_info.value.cause, RuntimeError)
        assert str(exc_info.value).startswith("[CENTRAL] ")

    def test_no_store_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            run(CredentialResolver(_settings(tmp_path)).resolve(Backend.CENTRAL))

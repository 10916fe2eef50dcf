"""Tests for the Central settings stores and the user .env helpers."""

from adapters.settings_store import API_KEY_VAR, API_URL_VAR, EnvFileCentralStore, SettingsCentralStore
from core.config import AppSettings, parse_env_lines, write_user_env_vars

from conftest import run


class TestEnvFile:
    def test_write_merges_existing_values(self, tmp_path):
        env_path = tmp_path / "cfg" / ".env"
        write_user_env_vars({"A": "1", "B": "2"}, env_path)
        write_user_env_vars({"B": "3"}, env_path)

        assert parse_env_lines(env_path.read_text(encoding="utf-8")) == {"A": "1", "B": "3"}

    def test_parse_skips_comments_and_quotes(self):
        text = '# comment\nKEY="value"\nbroken line\n\nOTHER=\'x\'\n'

        assert parse_env_lines(text) == {"KEY": "value", "OTHER": "x"}


class TestCentralStores:
    def test_env_file_store_round_trip(self, tmp_path):
        store = EnvFileCentralStore(tmp_path / ".env")
        store.save(api_key="secret-key", api_url="https://central.test/api/v1")

        creds = run(store.load())

        assert creds.api_key == "secret-key"
        assert creds.api_url == "https://central.test/api/v1"
        assert API_KEY_VAR in (tmp_path / ".env").read_text(encoding="utf-8")

    def test_env_file_store_without_url(self, tmp_path):
        store = EnvFileCentralStore(tmp_path / ".env")
        store.save(api_key="secret-key")

        creds = run(store.load())

        assert creds.api_url is None
        assert API_URL_VAR not in (tmp_path / ".env").read_text(encoding="utf-8")

    def test_settings_store(self):
        settings = AppSettings(_env_file=None, central_api_key="k", central_api_url=None)

        creds = run(SettingsCentralStore(settings).load())

        assert creds.api_key == "k"
        assert creds.api_url is None

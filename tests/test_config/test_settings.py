"""Testes para settings do serviço e do conector Feishu."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from config.settings import BaseSettings, FeishuSettings, get_base_settings, get_feishu_settings

_ENV_VARS = (
    "ENVIRONMENT",
    "SERVICE_NAME",
    "DEBUG",
    "LOG_LEVEL",
    "FEISHU_APP_ID",
    "FEISHU_APP_SECRET",
    "FEISHU_ENCRYPT_KEY",
    "FEISHU_VERIFICATION_TOKEN",
    "FEISHU_BASE_URL",
    "FEISHU_DEBUG",
    "FEISHU_APP_KIND",
    "FEISHU_WEBHOOK_DRAIN_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_base_settings.cache_clear()
    get_feishu_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_feishu_settings.cache_clear()


class TestFeishuSettings:
    """Testes para FeishuSettings."""

    def test_defaults(self) -> None:
        """Sem env, usa host do Feishu e aplicação custom."""
        settings = get_feishu_settings()
        assert settings.base_url == "https://open.feishu.cn"
        assert settings.app_kind == "custom"
        assert settings.debug is False
        assert settings.webhook_drain_timeout_seconds == 30.0

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Carrega credenciais e ajustes de variáveis de ambiente."""
        monkeypatch.setenv("FEISHU_APP_ID", "cli_a1")
        monkeypatch.setenv("FEISHU_APP_SECRET", "sec")
        monkeypatch.setenv("FEISHU_ENCRYPT_KEY", "enc")
        monkeypatch.setenv("FEISHU_VERIFICATION_TOKEN", "vt")
        monkeypatch.setenv("FEISHU_BASE_URL", "https://open.larksuite.com/")
        monkeypatch.setenv("FEISHU_DEBUG", "yes")
        monkeypatch.setenv("FEISHU_APP_KIND", "STORE")
        monkeypatch.setenv("FEISHU_WEBHOOK_DRAIN_TIMEOUT_SECONDS", "5")

        settings = get_feishu_settings()

        assert settings.app_id == "cli_a1"
        assert settings.encrypt_key == "enc"
        assert settings.base_url == "https://open.larksuite.com"
        assert settings.debug is True
        assert settings.app_kind == "store"
        assert settings.webhook_drain_timeout_seconds == 5.0
        assert settings.validate() == []

    def test_is_cached(self) -> None:
        """Mesma instância entre chamadas."""
        assert get_feishu_settings() is get_feishu_settings()

    def test_validate_reports_missing_credentials(self) -> None:
        """Credenciais ausentes geram erros."""
        errors = FeishuSettings().validate()
        assert "FEISHU_APP_ID não configurado" in errors
        assert "FEISHU_APP_SECRET não configurado" in errors
        assert "FEISHU_VERIFICATION_TOKEN não configurado" in errors

    def test_validate_rejects_bad_values(self) -> None:
        """URL, tipo de app e timeout inválidos."""
        settings = FeishuSettings(
            app_id="a",
            app_secret="b",
            verification_token="c",
            base_url="open.feishu.cn",
            app_kind="isv",
            webhook_drain_timeout_seconds=0,
        )
        assert len(settings.validate()) == 3


class TestBaseSettings:
    """Testes para BaseSettings."""

    def test_debug_defaults_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """DEBUG=true muda o nível padrão para DEBUG."""
        monkeypatch.setenv("DEBUG", "true")
        assert get_base_settings().log_level == "DEBUG"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("STAGE", "staging"), ("qualquer", "development")],
    )
    def test_environment_parsing(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str) -> None:
        """Aliases de ambiente são normalizados."""
        monkeypatch.setenv("ENVIRONMENT", raw)
        assert get_base_settings().environment == expected

    def test_validate_invalid_log_level(self) -> None:
        """LOG_LEVEL fora da lista é reportado."""
        errors = BaseSettings(log_level="VERBOSE").validate()
        assert errors == ["LOG_LEVEL inválido: VERBOSE"]

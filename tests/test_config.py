from pathlib import Path

import pytest

from chatdesk.core.config import ConfigManager, Settings
from chatdesk.utils.exceptions import ConfigError


def test_defaults():
    settings = ConfigManager(settings_path="/nonexistent/settings.yaml", environ={}).load_settings()
    assert settings.server.host == "0.0.0.0"
    assert settings.server.port == 5000
    assert settings.admin.name == "Orhan"
    assert settings.admin.password == "4499"
    assert settings.admin.uses_default_password
    assert settings.auth.require_session is False
    assert settings.auth.atomic_signup is False


def test_yaml_file_with_env_substitution(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "server:\n"
        "  port: 8080\n"
        "admin:\n"
        "  password: ${CHAT_ADMIN_PW:fallback}\n"
        "auth:\n"
        "  require_session: true\n",
        encoding="utf-8",
    )

    settings = ConfigManager(str(path), environ={"CHAT_ADMIN_PW": "s3cret"}).load_settings()
    assert settings.server.port == 8080
    assert settings.admin.password == "s3cret"
    assert not settings.admin.uses_default_password
    assert settings.auth.require_session is True

    settings = ConfigManager(str(path), environ={}).load_settings()
    assert settings.admin.password == "fallback"


def test_env_overrides_yaml(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("server:\n  port: 8080\n", encoding="utf-8")
    environ = {
        "PORT": "9000",
        "ADMIN_NAME": "Root",
        "ATOMIC_SIGNUP": "true",
        "CORS_ORIGINS": "https://a.example, https://b.example",
        "LOG_LEVEL": "",
    }
    settings = ConfigManager(str(path), environ=environ).load_settings()
    assert settings.server.port == 9000
    assert settings.admin.name == "Root"
    assert settings.auth.atomic_signup is True
    assert settings.server.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.logging.level == "INFO"


def test_settings_path_from_environment(tmp_path: Path):
    path = tmp_path / "custom.yaml"
    path.write_text("app:\n  environment: production\n", encoding="utf-8")
    manager = ConfigManager(environ={"CHATDESK_SETTINGS": str(path)})
    assert manager.settings.app.environment == "production"


@pytest.mark.parametrize("environ", [{"PORT": "not-a-port"}, {"PORT": "70000"}, {"SESSION_EXPIRY_HOURS": "0"}])
def test_invalid_values_raise_config_error(environ):
    manager = ConfigManager(settings_path="/nonexistent.yaml", environ=environ)
    with pytest.raises(ConfigError):
        manager.load_settings()


def test_blank_env_values_are_ignored():
    manager = ConfigManager(settings_path="/nonexistent.yaml", environ={"ADMIN_PASSWORD": " "})
    assert manager.load_settings().admin.password == "4499"


def test_non_mapping_yaml_is_rejected(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigManager(str(path), environ={}).load_settings()


def test_settings_model_defaults_match_manager():
    assert Settings() == ConfigManager(settings_path="/nonexistent.yaml", environ={}).load_settings()

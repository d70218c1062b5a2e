"""
Configuration management with schema validation.

Settings are resolved from three layers, later layers winning:
    1. model defaults
    2. optional YAML file (CHATDESK_SETTINGS, default settings.yaml)
    3. environment variables (a .env file is loaded first)
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from ..utils.exceptions import ConfigError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SETTINGS_FILE = "settings.yaml"

# Fixed credential of the seeded admin account; override via ADMIN_PASSWORD.
DEFAULT_ADMIN_NAME = "Orhan"
DEFAULT_ADMIN_PASSWORD = "4499"


class AppSettings(BaseModel):
    name: str = "chatdesk"
    version: str = "1.0.0"
    environment: str = "development"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class AdminSettings(BaseModel):
    """Seed values for the single admin account created at store startup"""
    name: str = DEFAULT_ADMIN_NAME
    password: str = Field(default=DEFAULT_ADMIN_PASSWORD, min_length=1)

    @property
    def uses_default_password(self) -> bool:
        return self.password == DEFAULT_ADMIN_PASSWORD


class AuthSettings(BaseModel):
    require_session: bool = False
    session_expiry_hours: int = Field(default=24, ge=1)
    atomic_signup: bool = False


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"
    file_path: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    admin: AdminSettings = Field(default_factory=AdminSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# env var -> (settings group, field)
ENV_OVERRIDES: Dict[str, Tuple[str, str]] = {
    "ENVIRONMENT": ("app", "environment"),
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "CORS_ORIGINS": ("server", "cors_origins"),
    "ADMIN_NAME": ("admin", "name"),
    "ADMIN_PASSWORD": ("admin", "password"),
    "REQUIRE_SESSION": ("auth", "require_session"),
    "SESSION_EXPIRY_HOURS": ("auth", "session_expiry_hours"),
    "ATOMIC_SIGNUP": ("auth", "atomic_signup"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FORMAT": ("logging", "format"),
    "LOG_FILE": ("logging", "file_path"),
}


class ConfigManager:
    """Loads and validates Settings from YAML and the environment"""

    def __init__(self, settings_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        self.settings_path = Path(
            settings_path or self.environ.get("CHATDESK_SETTINGS", DEFAULT_SETTINGS_FILE)
        )
        self._settings: Optional[Settings] = None

    def _substitute_env_vars(self, value: Any) -> Any:
        """Recursively substitute ${VAR} and ${VAR:default} placeholders"""
        if isinstance(value, str):
            if value.startswith("${") and value.endswith("}"):
                var_expr = value[2:-1]
                if ":" in var_expr:
                    var_name, default = var_expr.split(":", 1)
                    return self.environ.get(var_name.strip(), default.strip())
                return self.environ.get(var_expr, value)
        elif isinstance(value, dict):
            return {k: self._substitute_env_vars(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [self._substitute_env_vars(item) for item in value]
        return value

    def _load_yaml(self) -> Dict[str, Any]:
        if not self.settings_path.exists():
            return {}
        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                raw_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read settings from {self.settings_path}: {e}")
        if not isinstance(raw_data, dict):
            raise ConfigError(f"Settings file {self.settings_path} must contain a mapping")
        return self._substitute_env_vars(raw_data)

    def _apply_env_overrides(self, data: Dict[str, Any]) -> Dict[str, Any]:
        for env_name, (group, field) in ENV_OVERRIDES.items():
            raw = self.environ.get(env_name)
            if raw is None or raw.strip() == "":
                continue
            value: Any = raw.strip()
            if field == "cors_origins":
                value = [origin.strip() for origin in value.split(",") if origin.strip()]
            section = data.setdefault(group, {})
            if not isinstance(section, dict):
                raise ConfigError(f"Settings section '{group}' must be a mapping")
            section[field] = value
        return data

    def load_settings(self) -> Settings:
        """Build Settings from defaults, YAML file and environment"""
        data = self._apply_env_overrides(self._load_yaml())
        try:
            self._settings = Settings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}")
        return self._settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            return self.load_settings()
        return self._settings


def load_settings(settings_path: Optional[str] = None, load_env_file: bool = True) -> Settings:
    """Load .env (unless disabled) and return validated Settings"""
    if load_env_file:
        load_dotenv()
    settings = ConfigManager(settings_path).load_settings()
    if settings.admin.uses_default_password:
        logger.warning(
            "Seeded admin uses the built-in default password; set ADMIN_PASSWORD to change it",
            admin_name=settings.admin.name,
        )
    return settings

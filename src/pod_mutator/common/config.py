import os
from configparser import ConfigParser
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, Final

import pydash as _

_CONFIG_FILE_PATH: Final = "private/config.ini"
_APP_ROOT_PATH: Final = Path(__file__).parent.parent.parent


class Option(Enum):
    """Enum of (section, property_key) options.

    Look up property in `os.environ`, fallback to config file file if missing.
    """

    APP_NAME = ("app", "name")
    APP_DESCRIPTION = ("app", "description")
    APP_VERSION = ("app", "version")
    API_VERSIONS = ("app", "api_versions")
    API_DOCS_PATH = ("app", "api_docs_path")
    SOCKET_ADDRESS = ("app", "socket_address")
    SOCKET_PORT = ("app", "socket_port")

    TLS_ENABLED = ("tls", "enabled")
    TLS_CERT_FILE = ("tls", "cert_file")
    TLS_KEY_FILE = ("tls", "key_file")

    LOG_LEVEL = ("log", "level")
    LOG_RICH_ENABLED = ("log", "rich_enabled")
    LOG_REQUESTS_ENABLED = ("log", "requests_enabled")

    def __str__(self) -> str:
        return f"{self.section}.{self.key}"

    def env_var(self) -> str:
        return str(self).upper().replace(".", "_")

    @property
    def section(self) -> str:
        """Get this option's section"""
        return self.value[0]

    @property
    def key(self) -> str:
        """Get this option's key"""
        return self.value[1]


class Config:
    """Centrally manage application configuration properties"""

    _config_parser: ClassVar[ConfigParser | None] = None
    _overrides: ClassVar[Dict[str, Dict[str, Any]]] = {}

    @staticmethod
    def __new__(cls):
        """Handle a singleton instance of ConfigParser"""
        if cls._config_parser is None:
            cls._config_parser = ConfigParser()
            cls._config_parser.read(_APP_ROOT_PATH / _CONFIG_FILE_PATH, encoding="utf8")
        return super(Config, cls).__new__(cls)

    def set(self, option: Option, value: Any) -> None:
        """Set option value"""
        if option.section not in Config._overrides:
            Config._overrides[option.section] = {}
        Config._overrides[option.section][option.key] = value

    def unset(self, option: Option) -> None:
        """Drop a value set programmatically"""
        _.unset(Config._overrides, str(option))

    def get(self, option: Option, default: Any = None) -> Any:
        """Get option value"""
        # Value set programmatically
        override = _.get(Config._overrides, str(option))
        if override is not None:
            return override
        # Value provided by environment variable
        from_env = _.get(os.environ, option.env_var())
        if from_env is not None:
            return from_env
        # Lookup property in config file
        assert Config._config_parser
        return Config._config_parser.get(option.section, option.key, fallback=default)

    def get_bool(self, option: Option, default: bool = False) -> bool:
        """Get option value as a boolean flag"""
        return str(self.get(option, str(default))).strip().lower() in {"1", "true", "yes", "on"}

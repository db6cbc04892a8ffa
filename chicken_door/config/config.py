"""Service configuration settings."""
import logging
import os
import tomllib
from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_CONFIG_PATH = '.config.toml'

# Grace period after sunset during which it still counts as daylight
DAYLIGHT_GRACE_SECONDS = 1800.0

STATUS_BACKENDS = ('file', 'sql')


class ConfigurationError(Exception):
    """Raised when settings, schedule or status source are missing or malformed."""


@dataclass(frozen=True)
class Settings:
    """Immutable settings record, read once at process start."""
    interval_seconds: int
    access_key: str
    schedule_file: str
    status_file: Optional[str] = None
    hour_offset: int = 0
    status_backend: str = 'file'
    database_url: Optional[str] = None
    daylight_grace_seconds: float = DAYLIGHT_GRACE_SECONDS
    lock_timeout_seconds: float = 10.0
    host: str = '0.0.0.0'
    port: int = 3000
    log_dir: str = './logs'
    log_level: str = 'INFO'

    def resolved_database_url(self) -> str:
        """Database URL for the sql backend, derived from status_file if unset."""
        if self.database_url:
            return self.database_url
        base = self.status_file or 'door_status'
        return f'sqlite:///{os.path.abspath(base)}.db'


# field name -> (environment variable, converter)
_ENV_OVERRIDES = {
    'interval_seconds': ('CHICKEN_DOOR_INTERVAL_SECONDS', int),
    'hour_offset': ('CHICKEN_DOOR_HOUR_OFFSET', int),
    'access_key': ('CHICKEN_DOOR_ACCESS_KEY', str),
    'schedule_file': ('CHICKEN_DOOR_SCHEDULE_FILE', str),
    'status_file': ('CHICKEN_DOOR_STATUS_FILE', str),
    'status_backend': ('CHICKEN_DOOR_STATUS_BACKEND', str),
    'database_url': ('CHICKEN_DOOR_DATABASE_URL', str),
    'daylight_grace_seconds': ('CHICKEN_DOOR_DAYLIGHT_GRACE_SECONDS', float),
    'lock_timeout_seconds': ('CHICKEN_DOOR_LOCK_TIMEOUT_SECONDS', float),
    'host': ('CHICKEN_DOOR_HOST', str),
    'port': ('CHICKEN_DOOR_PORT', int),
    'log_dir': ('CHICKEN_DOOR_LOG_DIR', str),
    'log_level': ('CHICKEN_DOOR_LOG_LEVEL', str),
}

_FIELD_TYPES = {
    'interval_seconds': int,
    'hour_offset': int,
    'access_key': str,
    'schedule_file': str,
    'status_file': str,
    'status_backend': str,
    'database_url': str,
    'daylight_grace_seconds': (int, float),
    'lock_timeout_seconds': (int, float),
    'host': str,
    'port': int,
    'log_dir': str,
    'log_level': str,
}


def _read_config_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, 'rb') as handle:
            return tomllib.load(handle)
    except FileNotFoundError as e:
        raise ConfigurationError(f"No config file found at {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Couldn't parse config file {path}: {e}") from e


def _apply_env_overrides(values: Dict[str, Any], environ) -> None:
    for field_name, (env_name, convert) in _ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or raw == '':
            continue
        try:
            values[field_name] = convert(raw)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {env_name}: {raw!r}") from e


def _validate(values: Dict[str, Any]) -> None:
    for field_name in ('interval_seconds', 'access_key', 'schedule_file'):
        if values.get(field_name) in (None, ''):
            raise ConfigurationError(f"Missing required setting: {field_name}")

    for field_name, value in values.items():
        expected = _FIELD_TYPES[field_name]
        # bool is an int subclass, reject it explicitly
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigurationError(f"Setting {field_name} has wrong type: {value!r}")

    if values['interval_seconds'] <= 0:
        raise ConfigurationError("interval_seconds must be positive")
    if values.get('lock_timeout_seconds', 10.0) <= 0:
        raise ConfigurationError("lock_timeout_seconds must be positive")
    if values.get('daylight_grace_seconds', DAYLIGHT_GRACE_SECONDS) < 0:
        raise ConfigurationError("daylight_grace_seconds must not be negative")
    if not 1 <= values.get('port', 3000) <= 65535:
        raise ConfigurationError(f"port must be between 1 and 65535, got {values['port']}")
    if 'log_level' in values:
        level = values['log_level'].upper()
        if level not in logging.getLevelNamesMapping():
            raise ConfigurationError(f"Unknown log_level: {values['log_level']!r}")
        values['log_level'] = level

    backend = values.get('status_backend', 'file')
    if backend not in STATUS_BACKENDS:
        raise ConfigurationError(
            f"status_backend must be one of {', '.join(STATUS_BACKENDS)}, got {backend!r}"
        )
    if backend == 'file' and not values.get('status_file'):
        raise ConfigurationError("Missing required setting: status_file")


def load_settings(path: Optional[str] = None, environ=None) -> Settings:
    """
    Load settings from a TOML file, with environment variable overrides.
    
    Args:
        path: Config file path (defaults to $CHICKEN_DOOR_CONFIG or .config.toml)
        environ: Mapping used for overrides (defaults to os.environ)
        
    Returns:
        Settings instance
        
    Raises:
        ConfigurationError: If the file is missing or any setting is invalid
    """
    environ = os.environ if environ is None else environ
    path = path or environ.get('CHICKEN_DOOR_CONFIG', DEFAULT_CONFIG_PATH)

    raw = _read_config_file(path)
    values = {key: value for key, value in raw.items() if key in _FIELD_TYPES}
    unknown = sorted(set(raw) - set(_FIELD_TYPES))
    if unknown:
        raise ConfigurationError(f"Unknown settings in {path}: {', '.join(unknown)}")

    _apply_env_overrides(values, environ)
    _validate(values)
    return Settings(**values)

"""Shared configuration contracts and validation helpers for diagdump."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from platformdirs import user_config_dir, user_data_dir

from .collect.flags import CONFIGURATION_FLAGS, FLAGS_BY_KEY
from .errors import CollectError, ConfigError
from .reader import DEFAULT_ENCODINGS, validate_encodings

APP_NAME = "diagdump"
CONFIG_ENV = "DIAGDUMP_CONFIG"
DEFAULT_CONFIG_FILENAME = "config.toml"
DEFAULT_TIME_FORMAT = "%d.%m.%Y %H:%M:%S %Z"
DEFAULT_PASTE_BASE_URL = "https://hastebin.com/"
DEFAULT_PASTE_ENDPOINT = "documents"
DEFAULT_MAX_CHARS = 400_000

DEFAULT_CONFIG_TEMPLATE = """[app]
timezone = "UTC"
time_format = "%d.%m.%Y %H:%M:%S %Z"
debug = false

[host]
name = "Plan"
version = "unknown"
framework = "Abstract Plugin Framework"
framework_version = "unknown"
server_type = "unknown"
server_version = "unknown"
# data_dir = "/path/to/host/data"
# timings_filename = "Timings.txt"

[logs]
errors_filename = "Errors.txt"
debug_filename = "DebugLog.txt"
encodings = ["utf-8", "cp1252", "shift_jis", "gb18030", "euc_kr"]
redact = true

[paste]
base_url = "https://hastebin.com/"
endpoint = "documents"
timeout_seconds = 10
max_chars = 400000
# token_env = "DIAGDUMP_PASTE_TOKEN"

[settings]
webserver_enabled = true
webserver_https = false
refresh_analysis_on_enable = true
analysis_export = false
alternative_server_ip = false
chat_gathering = true
kill_gathering = true
command_gathering = true
combine_aliases = true
unknown_command_logging = true
locale = "default"
database_type = "sqlite"
"""


@dataclass(frozen=True)
class AppConfig:
    timezone: str = "UTC"
    time_format: str = DEFAULT_TIME_FORMAT
    debug: bool = False


@dataclass(frozen=True)
class HostConfig:
    name: str = "Plan"
    version: str = "unknown"
    framework: str = "Abstract Plugin Framework"
    framework_version: str = "unknown"
    server_type: str = "unknown"
    server_version: str = "unknown"
    data_dir: Path = field(default_factory=lambda: Path(user_data_dir(APP_NAME, appauthor=False)))
    timings_filename: str | None = None


@dataclass(frozen=True)
class LogsConfig:
    errors_filename: str = "Errors.txt"
    debug_filename: str = "DebugLog.txt"
    encodings: tuple[str, ...] = DEFAULT_ENCODINGS
    redact: bool = True


@dataclass(frozen=True)
class PasteConfig:
    base_url: str = DEFAULT_PASTE_BASE_URL
    endpoint: str = DEFAULT_PASTE_ENDPOINT
    timeout_seconds: float = 10.0
    max_chars: int = DEFAULT_MAX_CHARS
    token_env: str | None = None


@dataclass(frozen=True)
class RuntimeConfig:
    app: AppConfig = field(default_factory=AppConfig)
    host: HostConfig = field(default_factory=HostConfig)
    logs: LogsConfig = field(default_factory=LogsConfig)
    paste: PasteConfig = field(default_factory=PasteConfig)
    settings: dict[str, bool | str] = field(default_factory=dict)


def default_config() -> RuntimeConfig:
    return RuntimeConfig()


def default_config_toml() -> str:
    return DEFAULT_CONFIG_TEMPLATE


def resolve_config_path(config_path: str | Path | None = None) -> Path:
    if config_path:
        return Path(config_path).expanduser()

    env_value = os.getenv(CONFIG_ENV)
    if env_value:
        return Path(env_value).expanduser()

    config_dir = Path(user_config_dir(APP_NAME, appauthor=False))
    return config_dir / DEFAULT_CONFIG_FILENAME


def init_default_config(config_path: str | Path | None = None, force: bool = False) -> Path:
    path = resolve_config_path(config_path)
    if path.exists() and path.is_dir():
        raise ConfigError(
            f"Config path '{path}' is a directory; expected a TOML file path (for example '{path / DEFAULT_CONFIG_FILENAME}')."
        )
    if path.exists() and not force:
        raise ConfigError(
            f"Config file already exists at '{path}'. Re-run with --force to overwrite."
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(default_config_toml(), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Could not write config file at '{path}': {exc}. "
            "Check path permissions or choose a writable location with `--path`."
        ) from exc
    return path


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    path = resolve_config_path(config_path)
    if not path.exists():
        raise ConfigError(
            f"Config file not found at '{path}'. Run `diagdump config init --path \"{path}\"` to generate defaults."
        )
    if path.is_dir():
        raise ConfigError(
            f"Config path '{path}' is a directory; pass a file path ending in '{DEFAULT_CONFIG_FILENAME}'."
        )

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Could not read config file '{path}': {exc}. "
            "Check file permissions and that the path points to a readable TOML file."
        ) from exc
    raw = _load_toml(text, path)
    return _parse_runtime_config(raw)


def config_to_dict(config: RuntimeConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["host"]["data_dir"] = str(config.host.data_dir)
    payload["logs"]["encodings"] = list(config.logs.encodings)
    return payload


def resolve_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Invalid value for 'app.timezone': unknown time zone '{name}'.") from exc


def _load_toml(text: str, path: Path) -> dict[str, Any]:
    try:
        import tomllib  # Python 3.11+
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore[no-redef]
        except ModuleNotFoundError as exc:
            raise ConfigError(
                "TOML parsing requires Python 3.11+ or `tomli` installed. "
                f"Could not parse config file '{path}'."
            ) from exc

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Config file '{path}' contains invalid TOML: {exc}. "
            "Fix the syntax or regenerate defaults with `diagdump config init --force`."
        ) from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must parse to a TOML table.")
    return data


def _parse_runtime_config(data: dict[str, Any]) -> RuntimeConfig:
    app_raw = _expect_table(data, "app", default={})
    host_raw = _expect_table(data, "host", default={})
    logs_raw = _expect_table(data, "logs", default={})
    paste_raw = _expect_table(data, "paste", default={})
    settings_raw = _expect_table(data, "settings", default={})

    timezone = _expect_non_empty_string(app_raw, "app.timezone", "UTC")
    resolve_timezone(timezone)
    app_config = AppConfig(
        timezone=timezone,
        time_format=_expect_non_empty_string(app_raw, "app.time_format", DEFAULT_TIME_FORMAT),
        debug=_expect_bool(app_raw, "app.debug", default=False),
    )

    defaults = HostConfig()
    data_dir_raw = _expect_optional_string(host_raw, "host.data_dir")
    host_config = HostConfig(
        name=_expect_non_empty_string(host_raw, "host.name", defaults.name),
        version=_expect_non_empty_string(host_raw, "host.version", defaults.version),
        framework=_expect_non_empty_string(host_raw, "host.framework", defaults.framework),
        framework_version=_expect_non_empty_string(
            host_raw, "host.framework_version", defaults.framework_version
        ),
        server_type=_expect_non_empty_string(host_raw, "host.server_type", defaults.server_type),
        server_version=_expect_non_empty_string(host_raw, "host.server_version", defaults.server_version),
        data_dir=Path(data_dir_raw).expanduser() if data_dir_raw else defaults.data_dir,
        timings_filename=_expect_optional_string(host_raw, "host.timings_filename"),
    )

    encodings_raw = logs_raw.get("encodings", list(DEFAULT_ENCODINGS))
    if not isinstance(encodings_raw, list):
        raise ConfigError("Invalid value for 'logs.encodings': expected an array of encoding names.")
    logs_config = LogsConfig(
        errors_filename=_expect_non_empty_string(logs_raw, "logs.errors_filename", "Errors.txt"),
        debug_filename=_expect_non_empty_string(logs_raw, "logs.debug_filename", "DebugLog.txt"),
        encodings=validate_encodings(encodings_raw),
        redact=_expect_bool(logs_raw, "logs.redact", default=True),
    )

    base_url = _expect_non_empty_string(paste_raw, "paste.base_url", DEFAULT_PASTE_BASE_URL)
    if not base_url.startswith(("http://", "https://")):
        raise ConfigError("Invalid value for 'paste.base_url': expected an http(s) URL.")
    paste_config = PasteConfig(
        base_url=base_url if base_url.endswith("/") else f"{base_url}/",
        endpoint=_expect_non_empty_string(paste_raw, "paste.endpoint", DEFAULT_PASTE_ENDPOINT).lstrip("/"),
        timeout_seconds=_expect_positive_number(paste_raw, "paste.timeout_seconds", default=10.0),
        max_chars=_expect_positive_int(paste_raw, "paste.max_chars", default=DEFAULT_MAX_CHARS),
        token_env=_expect_optional_string(paste_raw, "paste.token_env"),
    )

    return RuntimeConfig(
        app=app_config,
        host=host_config,
        logs=logs_config,
        paste=paste_config,
        settings=_parse_settings(settings_raw),
    )


def _parse_settings(settings_raw: dict[str, Any]) -> dict[str, bool | str]:
    unknown = sorted(set(settings_raw) - set(FLAGS_BY_KEY))
    if unknown:
        known = ", ".join(flag.key for flag in CONFIGURATION_FLAGS)
        raise ConfigError(f"Unknown [settings] key(s): {', '.join(unknown)}. Known keys: {known}.")

    settings: dict[str, bool | str] = {}
    for key, value in settings_raw.items():
        try:
            settings[key] = FLAGS_BY_KEY[key].validate(value)
        except CollectError as exc:
            raise ConfigError(f"Invalid value for 'settings.{key}': {exc}") from exc
    return settings


def _expect_table(data: dict[str, Any], key: str, default: dict[str, Any]) -> dict[str, Any]:
    value = data.get(key, default)
    if not isinstance(value, dict):
        raise ConfigError(f"Invalid [{key}] table: expected table, got {type(value).__name__}.")
    return value


def _expect_non_empty_string(
    data: dict[str, Any], key: str, default: str | None
) -> str:
    if key.split(".")[-1] in data:
        value = data[key.split(".")[-1]]
    else:
        if default is None:
            raise ConfigError(f"Missing required value '{key}'.")
        value = default

    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Invalid value for '{key}': expected non-empty string.")
    return value


def _expect_optional_string(data: dict[str, Any], key: str) -> str | None:
    field = key.split(".")[-1]
    if field not in data:
        return None
    return _expect_non_empty_string(data, key, default=None)


def _expect_positive_int(data: dict[str, Any], key: str, default: int) -> int:
    field = key.split(".")[-1]
    value = data.get(field, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"Invalid value for '{key}': expected positive integer.")
    return value


def _expect_positive_number(data: dict[str, Any], key: str, default: float) -> float:
    field = key.split(".")[-1]
    value = data.get(field, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"Invalid value for '{key}': expected positive number.")
    return float(value)


def _expect_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    field = key.split(".")[-1]
    value = data.get(field, default)
    if not isinstance(value, bool):
        raise ConfigError(f"Invalid value for '{key}': expected boolean true/false.")
    return value

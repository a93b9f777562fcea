"""Configuration model, defaults and YAML loading."""

import dataclasses
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

APP_NAME = "spike"


class ConfigError(Exception):
    """Raised when configuration cannot be read, parsed or written."""


def _coerce(owner: str, name: str, expected: type, value: Any) -> Any:
    """Convert a decoded YAML value into the type a field expects."""
    if value is None:
        return expected()
    if dataclasses.is_dataclass(expected):
        if not isinstance(value, Mapping):
            raise ConfigError(f"{owner}.{name}: expected a mapping, got {type(value).__name__}")
        return expected.from_dict(value)
    if expected is bool:
        if isinstance(value, bool):
            return value
        raise ConfigError(f"{owner}.{name}: expected a boolean, got {value!r}")
    if expected is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise ConfigError(f"{owner}.{name}: expected an integer, got {value!r}")
    if expected is str:
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        raise ConfigError(f"{owner}.{name}: expected a string, got {type(value).__name__}")
    raise ConfigError(f"{owner}.{name}: unsupported field type {expected!r}")


def _section_from_dict(cls, data):
    """Build a configuration dataclass from a mapping; missing keys keep zero values."""
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"{cls.__name__}: expected a mapping, got {type(data).__name__}")
    values = {
        f.name: _coerce(cls.__name__, f.name, f.type, data[f.name])
        for f in dataclasses.fields(cls)
        if f.name in data
    }
    return cls(**values)


class _Section:
    """Mixin giving a configuration dataclass dict conversion."""

    @classmethod
    def from_dict(cls, data):
        """Build an instance from a mapping; missing keys keep zero values."""
        return _section_from_dict(cls, data)

    def to_dict(self) -> dict:
        """Return the configuration as plain nested dictionaries."""
        return dataclasses.asdict(self)


@dataclass
class AppConfig(_Section):
    app_dir: str = ""
    default_db_path: str = ""
    default_config_path: str = ""


@dataclass
class HTTPXConfig(_Section):
    threads: int = 0


@dataclass
class SubfinderConfig(_Section):
    threads: int = 0


@dataclass
class KatanaConfig(_Section):
    enabled: bool = False
    threads: int = 0
    crawl_depth: int = 0
    max_crawl_time: str = ""
    parallelism_threads: int = 0
    headless: bool = False
    no_sandbox: bool = False


@dataclass
class GauConfig(_Section):
    enabled: bool = False
    threads: int = 0


@dataclass
class CrawlerConfig(_Section):
    katana: KatanaConfig = field(default_factory=KatanaConfig)
    gau: GauConfig = field(default_factory=GauConfig)


@dataclass
class NucleiTemplatePaths(_Section):
    default: str = ""
    custom: str = ""


@dataclass
class NucleiTemplateSettings(_Section):
    default_enabled: bool = False
    custom_enabled: bool = False
    dast_enabled: bool = False
    headless_enabled: bool = False


@dataclass
class NucleiCustomScanOptions(_Section):
    dom_xss: bool = False


@dataclass
class NucleiCustomScanTemplates(_Section):
    dom_xss: str = ""


@dataclass
class NucleiConfig(_Section):
    enabled: bool = False
    threads: int = 0
    template_paths: NucleiTemplatePaths = field(default_factory=NucleiTemplatePaths)
    template_settings: NucleiTemplateSettings = field(default_factory=NucleiTemplateSettings)
    custom_scan_options: NucleiCustomScanOptions = field(default_factory=NucleiCustomScanOptions)
    custom_scan_templates: NucleiCustomScanTemplates = field(
        default_factory=NucleiCustomScanTemplates
    )


@dataclass
class ToolsConfig(_Section):
    httpx: HTTPXConfig = field(default_factory=HTTPXConfig)
    subfinder: SubfinderConfig = field(default_factory=SubfinderConfig)
    crawler: CrawlerConfig = field(default_factory=CrawlerConfig)
    nuclei: NucleiConfig = field(default_factory=NucleiConfig)


@dataclass
class TelegramConfig(_Section):
    enabled: bool = False
    bot_token: str = ""
    chat_id: str = ""


@dataclass
class ReporterConfig(_Section):
    telegram: TelegramConfig = field(default_factory=TelegramConfig)


@dataclass
class Config(_Section):
    app: AppConfig = field(default_factory=AppConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    reporter: ReporterConfig = field(default_factory=ReporterConfig)

    @classmethod
    def from_dict(cls, data):
        """Build a configuration from a mapping; missing keys keep zero values."""
        return _section_from_dict(cls, data)

    def to_dict(self) -> dict:
        """Return the whole configuration as plain nested dictionaries."""
        return dataclasses.asdict(self)


def default_config(home_dir: Optional[str] = None) -> Config:
    """Return the default configuration rooted at ``home_dir`` (``$HOME`` if omitted)."""
    if home_dir is None:
        home_dir = os.environ.get("HOME", "")
    logger.debug("Using $HOME directory as: %s", home_dir)
    app_dir = os.path.join(home_dir, APP_NAME)
    return Config(
        app=AppConfig(
            app_dir=app_dir,
            default_db_path=os.path.join(app_dir, "spike.db"),
            default_config_path=os.path.join(app_dir, "config.yaml"),
        ),
        tools=ToolsConfig(
            httpx=HTTPXConfig(threads=50),
            subfinder=SubfinderConfig(threads=10),
            crawler=CrawlerConfig(
                katana=KatanaConfig(
                    enabled=True,
                    threads=10,
                    crawl_depth=3,
                    max_crawl_time="10m",
                    parallelism_threads=10,
                    headless=False,
                    no_sandbox=False,
                ),
                gau=GauConfig(enabled=True, threads=10),
            ),
            nuclei=NucleiConfig(
                enabled=True,
                threads=25,
                template_paths=NucleiTemplatePaths(
                    default=os.path.join(home_dir, "nuclei-templates"),
                    custom=os.path.join(home_dir, "custom-nuclei-templates"),
                ),
                template_settings=NucleiTemplateSettings(
                    default_enabled=True,
                    custom_enabled=True,
                    dast_enabled=True,
                    headless_enabled=False,
                ),
                custom_scan_options=NucleiCustomScanOptions(dom_xss=True),
                custom_scan_templates=NucleiCustomScanTemplates(
                    dom_xss=os.path.join(
                        home_dir, "nuclei-templates/dast/vulnerabilities/xss/dom-xss.yaml"
                    ),
                ),
            ),
        ),
        reporter=ReporterConfig(
            telegram=TelegramConfig(enabled=False, bot_token="", chat_id=""),
        ),
    )


def save_default_config(path) -> None:
    """Write the default configuration to ``path`` as YAML."""
    try:
        text = yaml.safe_dump(default_config().to_dict(), sort_keys=False)
    except yaml.YAMLError as exc:
        raise ConfigError(f"failed to marshal default config: {exc}") from exc
    try:
        fd = os.open(os.fspath(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        raise ConfigError(f"failed to write default config: {exc}") from exc


def load_config(path) -> Config:
    """Load configuration from ``path``, creating a default file if it is missing."""
    path = os.fspath(path)
    try:
        os.stat(path)
    except FileNotFoundError:
        logger.info("Config file not found, creating default config at %s", path)
        try:
            save_default_config(path)
        except ConfigError as exc:
            raise ConfigError(f"failed to create default config: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"failed to check config file: {exc}") from exc

    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        raise ConfigError(f"failed to read config: {exc}") from exc

    try:
        data = yaml.safe_load(text)
        return Config.from_dict(data)
    except (yaml.YAMLError, ConfigError) as exc:
        raise ConfigError(f"failed to parse config: {exc}") from exc
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from parley.console import DEFAULT_INVALID_NOTICE, DEFAULT_OPTION_FORMAT

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "demo" / "config" / "defaults.yaml"

@dataclass
class ConsoleCfg:
    option_format: str = DEFAULT_OPTION_FORMAT
    invalid_notice: str = DEFAULT_INVALID_NOTICE

@dataclass
class ChoiceCfg:
    max_attempts: Optional[int] = None      # None = unbounded retries

@dataclass
class BannerCfg:
    start: str = ""                         # Empty string = no banner
    end: str = ""

@dataclass
class LoggingCfg:
    level: str = "WARNING"
    format: str = "%(levelname)s %(name)s: %(message)s"

    @property
    def level_no(self) -> int:
        return logging.getLevelName(self.level)

@dataclass
class AppCfg:
    console: ConsoleCfg = field(default_factory=ConsoleCfg)
    choice: ChoiceCfg = field(default_factory=ChoiceCfg)
    banner: BannerCfg = field(default_factory=BannerCfg)
    logging: LoggingCfg = field(default_factory=LoggingCfg)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur

def _max_attempts(raw: Any, source: Path) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{source}: 'choice.max_attempts' must be an integer or null") from e
    if value < 1:
        raise ValueError(f"{source}: 'choice.max_attempts' must be >= 1 or null")
    return value

def _log_level(raw: Any, source: Path) -> str:
    level = str(raw).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{source}: unknown logging level '{raw}'")
    return level

def _template(raw: Any, key: str, field_name: str, source: Path) -> str:
    fmt = str(raw)
    try:
        fmt.format(**{field_name: ""})
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(f"{source}: '{key}' may only use the {{{field_name}}} field ({e!r})") from e
    return fmt

def load_settings(path: str | Path | None = None) -> AppCfg:
    """
    Load AppCfg from YAML. A missing file gives the built-in defaults;
    missing keys fall back one by one.
    """
    p = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    data = {}
    if p.exists():
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{p}: top level must be a mapping")

    return AppCfg(
        console=ConsoleCfg(
            option_format=_template(_get(data, "console.option_format", DEFAULT_OPTION_FORMAT),
                                    "console.option_format", "label", p),
            invalid_notice=_template(_get(data, "console.invalid_notice", DEFAULT_INVALID_NOTICE),
                                     "console.invalid_notice", "input", p),
        ),
        choice=ChoiceCfg(
            max_attempts=_max_attempts(_get(data, "choice.max_attempts", None), p),
        ),
        banner=BannerCfg(
            start=str(_get(data, "banner.start", "") or ""),
            end=str(_get(data, "banner.end", "") or ""),
        ),
        logging=LoggingCfg(
            level=_log_level(_get(data, "logging.level", "WARNING"), p),
            format=str(_get(data, "logging.format", "%(levelname)s %(name)s: %(message)s")),
        ),
    )

"""Configuration loading for ngmap (.ngmap.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".ngmap.yml"

DEFAULT_SUFFIXES = [".ts"]
DEFAULT_EXCLUDED_SUFFIXES = [".d.ts"]
REPORT_FORMATS = ("markdown", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanConfig:
    """Which files the scanner hands to the classifier."""

    suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_SUFFIXES))
    exclude_suffixes: List[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_SUFFIXES)
    )


@dataclass
class ReportConfig:
    """Report output preferences."""

    format: str = "markdown"
    output: Optional[Path] = None
    sections: List[str] = field(default_factory=list)


@dataclass
class NgMapConfig:
    """Represents the settings defined in .ngmap.yml."""

    root: Path
    scan: ScanConfig = field(default_factory=ScanConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> NgMapConfig:
    """Load configuration from disk, returning defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return NgMapConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        suffixes = _as_str_list(scan_data.get("suffixes"))
        if suffixes:
            scan.suffixes = suffixes
        if "exclude_suffixes" in scan_data:
            scan.exclude_suffixes = _as_str_list(scan_data.get("exclude_suffixes"))

    report = ReportConfig()
    report_data = _as_dict(data.get("report"))
    if report_data:
        fmt = _as_str(report_data.get("format"))
        if fmt:
            fmt = fmt.lower()
            if fmt not in REPORT_FORMATS:
                raise ConfigError(
                    f"Unsupported report format '{fmt}'; expected one of {', '.join(REPORT_FORMATS)}"
                )
            report.format = fmt
        output = _as_str(report_data.get("output"))
        report.output = root / output if output else None
        report.sections = _as_str_list(report_data.get("sections"))

    return NgMapConfig(
        root=root,
        scan=scan,
        report=report,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []

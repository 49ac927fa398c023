"""Configuration parsing from ``.bindcov.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".bindcov.yml"

SOURCE_ROOT_ENV = "SOURCE_DIR"
"""Environment variable consulted when no source root is configured."""

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        else:
            result[key] = value
    return result


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name, {})
    return section if isinstance(section, dict) else {}


@dataclass
class ProjectConfig:
    """Project layout configuration."""

    root: str
    """Project root directory."""

    source_root: str = ""
    """Prefix stripped from declaration paths; files outside it are not reported."""


@dataclass
class ReportConfig:
    """Report document configuration."""

    root_module: str = ""
    """Name given to the report, its session and its group."""

    output_path: str = "coverage.xml"
    """Where the JaCoCo XML document is written, relative to the project root."""


@dataclass
class CoverageConfig:
    """Usage matching configuration."""

    match_signature: bool = False
    """Match usages by full signature instead of the first declaration with that name."""


@dataclass
class BindcovConfig:
    """Complete bindcov configuration from ``.bindcov.yml``."""

    project: ProjectConfig
    report: ReportConfig = field(default_factory=ReportConfig)
    coverage: CoverageConfig = field(default_factory=CoverageConfig)

    @property
    def output_file(self) -> Path:
        """Return the report path resolved against the project root."""
        return Path(self.project.root) / self.report.output_path


def load_config(root: str | Path) -> BindcovConfig:
    """Load and parse the ``.bindcov.yml`` configuration.

    Falls back to defaults and the ``SOURCE_DIR`` environment variable when
    the YAML file is missing or incomplete.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_file.is_file():
        parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)

    project_raw = _section(raw, "project")
    report_raw = _section(raw, "report")
    coverage_raw = _section(raw, "coverage")

    project = ProjectConfig(
        root=str(project_raw.get("root", root_path)),
        source_root=str(project_raw.get("source_root", os.environ.get(SOURCE_ROOT_ENV, ""))),
    )
    report = ReportConfig(
        root_module=str(report_raw.get("root_module", root_path.name)),
        output_path=str(report_raw.get("output_path", "coverage.xml")),
    )
    coverage = CoverageConfig(
        match_signature=coverage_raw.get("match_signature", False) in {True, "true", "1", "yes"},
    )
    return BindcovConfig(project=project, report=report, coverage=coverage)


def validate_config(config: BindcovConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    if not config.project.root:
        errors.append("project.root is required")

    if config.project.source_root and not Path(config.project.source_root).is_dir():
        errors.append(
            f"project.source_root must be an existing directory "
            f"(got: {config.project.source_root})"
        )

    if not config.report.root_module:
        errors.append("report.root_module is required")

    if not config.report.output_path:
        errors.append("report.output_path is required")

    return errors

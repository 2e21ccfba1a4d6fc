"""
Build configuration loading and validation.

Loads a YAML file into dataclasses and validates every section.

Example YAML:

    helix:
      rna:
        twist_deg: 33.0
    export:
      box_scale: 5.0
      out_dir: output
      strategies: [oxdna_topology, oxdna_configuration]
    logging:
      enabled: true
      path: /tmp/polystrand_logs.txt
      level: INFO
"""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from ..core.helix.constants import HELIX_FAMILIES
from ..core.helix.types import HelixParameters
from ..utils.logger.logger import Logger

HELIX_FIELDS = tuple(
    f.name for f in dataclasses.fields(HelixParameters) if f.name != "name"
)
KNOWN_EXPORT_STRATEGIES = (
    "oxdna_topology",
    "oxdna_configuration",
    "json_view",
    "sequence_csv",
    "pair_traps",
)


@dataclass
class HelixConfig:
    """Per-family overrides of the built-in helix constants."""
    dna: dict = field(default_factory=dict)
    rna: dict = field(default_factory=dict)

    def parameters_for(self, family: str) -> HelixParameters:
        """Helix constants for 'DNA' or 'RNA' with overrides applied."""
        family = family.upper()
        if family not in HELIX_FAMILIES:
            raise ValueError(f"No helix constants for family {family!r}")
        overrides = self.dna if family == "DNA" else self.rna
        return dataclasses.replace(HELIX_FAMILIES[family], **overrides)

    def validate(self) -> tuple[bool, Optional[str]]:
        for family, overrides in (("DNA", self.dna), ("RNA", self.rna)):
            if not isinstance(overrides, dict):
                return False, f"{family.lower()} overrides must be a mapping"
            unknown = sorted(set(overrides) - set(HELIX_FIELDS))
            if unknown:
                return False, f"unknown {family.lower()} helix field(s): {', '.join(unknown)}"
            is_valid, error = self.parameters_for(family).validate()
            if not is_valid:
                return False, f"{family.lower()}: {error}"
        return True, None


@dataclass
class ExportConfig:
    """Export defaults."""
    box_scale: float = 5.0
    out_dir: str = "output"
    base_name: str = "output"
    strategies: list[str] = field(
        default_factory=lambda: ["oxdna_topology", "oxdna_configuration"]
    )

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.box_scale <= 0:
            return False, "box_scale must be positive"
        if not self.base_name:
            return False, "base_name must not be empty"
        unknown = [s for s in self.strategies if s not in KNOWN_EXPORT_STRATEGIES]
        if unknown:
            return False, f"unknown export strategy: {unknown[0]}"
        return True, None


@dataclass
class LoggingConfig:
    """Logger setup."""
    enabled: bool = True
    path: Optional[str] = None
    level: str = "DEBUG"

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.level.upper() not in Logger.LogPriority.__members__:
            return False, f"Unknown log level: {self.level}"
        return True, None


@dataclass
class BuildConfig:
    """Complete configuration."""
    helix: HelixConfig = field(default_factory=HelixConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> tuple[bool, Optional[str]]:
        for section_name in ["helix", "export", "logging"]:
            section = getattr(self, section_name)
            is_valid, error = section.validate()
            if not is_valid:
                return False, f"{section_name}: {error}"
        return True, None


def config_from_dict(raw: Optional[dict]) -> BuildConfig:
    """
    Build and validate a BuildConfig from a plain mapping.

    Raises:
        ValueError: If the config is invalid.
    """
    raw = raw or {}

    helix_raw = raw.get("helix", {}) or {}
    helix = HelixConfig(
        dna=helix_raw.get("dna", {}) or {},
        rna=helix_raw.get("rna", {}) or {},
    )

    export_raw = raw.get("export", {}) or {}
    export = ExportConfig(
        box_scale=export_raw.get("box_scale", 5.0),
        out_dir=export_raw.get("out_dir", "output"),
        base_name=export_raw.get("base_name", "output"),
        strategies=list(export_raw.get("strategies", ["oxdna_topology", "oxdna_configuration"])),
    )

    log_raw = raw.get("logging", {}) or {}
    logging = LoggingConfig(
        enabled=log_raw.get("enabled", True),
        path=log_raw.get("path"),
        level=log_raw.get("level", "DEBUG"),
    )

    config = BuildConfig(helix=helix, export=export, logging=logging)

    is_valid, error = config.validate()
    if not is_valid:
        raise ValueError(f"Invalid config: {error}")

    return config


def load_config(path: Path) -> BuildConfig:
    """
    Load and validate configuration from a YAML file.

    Raises:
        ValueError: If config is invalid.
        FileNotFoundError: If file doesn't exist.
    """
    with open(path, 'r') as f:
        raw = yaml.safe_load(f)
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Invalid config: top level of {path} must be a mapping")
    return config_from_dict(raw)


def apply_logging_config(config: LoggingConfig) -> None:
    """Initialize the Logger according to `config`."""
    Logger.set_minimum_priority(config.level)
    if config.enabled:
        Logger.initialize(config.path)
        Logger.enable_logging()
    else:
        Logger.disable_logging()

"""
Configuration management for dircompile
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Dict, List, Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..compilers.selector import MATCH_MODES
from ..exceptions import ConfigurationError

CONFIG_FILENAME = "dircompile.yaml"


class CompileSettings(BaseModel):
    """Validated settings for one dircompile run"""

    model_config = ConfigDict(extra="forbid")

    source_dir: str = "."
    """Directory whose regular files are compiled"""
    build_dir: str = "build"
    """Output directory, relative paths resolve against source_dir"""
    c_compiler: str = "gcc"
    """Command used for C (and every non C++) file"""
    cxx_compiler: str = "g++"
    """Command used for C++ files"""
    optimization: str = "2"
    """Value passed as -O<level>"""
    extra_flags: List[str] = Field(default_factory=list)
    """Flags appended after the optimization flag"""
    cxx_extensions: List[str] = Field(default_factory=lambda: [".cpp"])
    """Extensions that select the C++ compiler"""
    match_mode: str = "suffix"
    """suffix: name ends with an extension; literal: name equals '*<ext>'"""
    exclude: List[str] = Field(default_factory=list)
    """Glob patterns of file names never handed to a compiler"""
    output_suffix: str = ".out"
    """Appended to the source file name to name the executable"""
    log_file: Optional[str] = None
    """Optional log file receiving debug output"""

    @field_validator("c_compiler", "cxx_compiler", "build_dir", "source_dir")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("c_compiler", "cxx_compiler")
    @classmethod
    def _command_line(cls, value: str) -> str:
        # "ccache gcc" is a launcher plus the compiler
        try:
            words = shlex.split(value)
        except ValueError as e:
            raise ValueError(f"cannot split compiler command: {e}") from e
        if not words or not words[0]:
            raise ValueError("must name a compiler")
        return value

    @field_validator("optimization", mode="before")
    @classmethod
    def _optimization_level(cls, value: Any) -> str:
        # YAML reads `optimization: 2` as an int
        value = str(value).strip()
        if value.startswith("-O"):
            value = value[2:]
        if value not in {"0", "1", "2", "3", "s", "z", "fast", "g"}:
            raise ValueError(f"unsupported optimization level: {value!r}")
        return value

    @field_validator("match_mode")
    @classmethod
    def _match_mode(cls, value: str) -> str:
        if value not in MATCH_MODES:
            raise ValueError(f"must be one of {', '.join(MATCH_MODES)}")
        return value

    @field_validator("cxx_extensions")
    @classmethod
    def _extensions(cls, value: List[str]) -> List[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]


DEFAULT_CONFIG: Dict[str, Any] = CompileSettings().model_dump()


class ConfigLoader:
    """Loads and merges dircompile configuration"""

    def __init__(self,
                 config_file: Optional[Path] = None,
                 overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration loader

        Precedence, lowest first: defaults, YAML file, overrides. The
        environment is never consulted, so CC or CXX exported in the shell
        does not change what a plain run does.

        Args:
            config_file: Explicit YAML file; when None, dircompile.yaml in the
                source directory is used if present
            overrides: Values given on the command line (None entries ignored)
        """
        overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

        merged: Dict[str, Any] = dict(DEFAULT_CONFIG)

        source_dir = Path(overrides.get("source_dir", merged["source_dir"]))
        if config_file is None:
            candidate = source_dir / CONFIG_FILENAME
            if candidate.is_file():
                config_file = candidate
        self.config_file = Path(config_file) if config_file is not None else None

        if self.config_file is not None:
            merged.update(self._load_file(self.config_file))

        merged.update(overrides)

        try:
            self.settings = CompileSettings.model_validate(merged)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _load_file(path: Path) -> Dict[str, Any]:
        """Read a YAML configuration file"""
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")

        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value

        Args:
            key: Setting name
            default: Default value if not found

        Returns:
            Setting value
        """
        return getattr(self.settings, key, default)

    def get_flags(self) -> List[str]:
        """Get the flags passed to every compiler invocation"""
        return [f"-O{self.settings.optimization}", *self.settings.extra_flags]

    @property
    def source_dir(self) -> Path:
        return Path(self.settings.source_dir)

    @property
    def build_dir(self) -> Path:
        """Build directory, relative paths resolved against the source directory"""
        return Path(os.path.abspath(self.source_dir.resolve() / self.settings.build_dir))

    def as_dict(self) -> Dict[str, Any]:
        """Get all configuration data"""
        return self.settings.model_dump()


__all__ = ["ConfigLoader", "CompileSettings", "DEFAULT_CONFIG", "CONFIG_FILENAME", "MATCH_MODES"]

"""
Configuration Management Module

Handles loading, validation, and merging of configuration files
with support for presets and user-defined overrides.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, asdict, fields
from copy import deepcopy

from .errors import ConfigError

logger = logging.getLogger(__name__)

PRESETS_DIR = Path(__file__).parent / "presets"

ESCAPED_DELIMITERS = {"\\t": "\t"}


@dataclass
class ScanConfig:
    """Configuration for reading and sampling the input file"""
    delimiter: str = ","
    quotechar: str = '"'
    encoding: str = "utf-8"
    lazy_quotes: bool = True
    trim_leading_space: bool = True
    header_window: int = 5
    sample_row_index: int = 2
    field_size_limit: int = 2 ** 31 - 1


@dataclass
class OutputConfig:
    """Configuration for report rendering"""
    format: str = "json"  # json, yaml
    indent: int = 2
    include_details: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging"""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class combining all sub-configurations"""
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    def merge(self, other: 'Config') -> 'Config':
        """Merge another configuration into this one (other takes precedence)"""
        merged = deepcopy(self)

        for key in SECTIONS:
            other_config = getattr(other, key)
            merged_config = getattr(merged, key)

            # Update non-None values
            for field_name, field_value in asdict(other_config).items():
                if field_value is not None:
                    setattr(merged_config, field_name, field_value)

        return merged


SECTIONS = {
    'scan': ScanConfig,
    'output': OutputConfig,
    'logging': LoggingConfig,
}


class ConfigLoader:
    """Loads and manages configuration from various sources"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the configuration loader

        Args:
            config_dir: Directory containing preset YAML files
        """
        self.config_dir = Path(config_dir) if config_dir is not None else PRESETS_DIR
        self.presets = self._load_presets()

    def _load_presets(self) -> Dict[str, Config]:
        """Load all available preset configurations"""
        presets = {}

        if not self.config_dir.exists():
            logger.warning(f"Config directory not found: {self.config_dir}")
            return presets

        for preset_file in sorted(self.config_dir.glob("*.yaml")):
            preset_name = preset_file.stem
            try:
                presets[preset_name] = self.load_from_file(preset_file)
                logger.debug(f"Loaded preset: {preset_name}")
            except ConfigError as e:
                logger.error(f"Failed to load preset {preset_name}: {e}")

        return presets

    def load_from_file(self, filepath: Union[str, Path]) -> Config:
        """
        Load configuration from a YAML file

        Args:
            filepath: Path to the YAML configuration file

        Returns:
            Config object
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise ConfigError(f"Configuration file not found: {filepath}")

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Configuration file {filepath} is not valid YAML: {e}") from e

        return self._dict_to_config(config_dict or {}, source=str(filepath))

    def load_from_dict(self, config_dict: Dict[str, Any]) -> Config:
        """Load configuration from a dictionary"""
        return self._dict_to_config(config_dict)

    def load_preset(self, preset_name: str) -> Config:
        """
        Load a preset configuration by name

        Args:
            preset_name: Name of the preset (e.g., 'default', 'tsv')

        Returns:
            Config object
        """
        if preset_name not in self.presets:
            available = ", ".join(self.presets.keys())
            raise ConfigError(f"Preset '{preset_name}' not found. Available: {available}")

        return deepcopy(self.presets[preset_name])

    def _dict_to_config(self, config_dict: Dict[str, Any], source: str = "<dict>") -> Config:
        """Convert dictionary to Config object"""
        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration in {source} must be a mapping")

        unknown = set(config_dict) - set(SECTIONS)
        if unknown:
            raise ConfigError(f"Unknown configuration sections {sorted(unknown)} in {source}")

        config = Config()

        for key, config_class in SECTIONS.items():
            if key not in config_dict:
                continue
            section = config_dict[key] or {}
            allowed = {f.name for f in fields(config_class)}
            extra = set(section) - allowed
            if extra:
                raise ConfigError(f"Unknown keys {sorted(extra)} in section '{key}' of {source}")
            setattr(config, key, config_class(**section))

        return config

    def merge_configs(self, base: Config, override: Union[Config, Dict[str, Any], str]) -> Config:
        """
        Merge configurations with override taking precedence

        Args:
            base: Base configuration
            override: Override configuration (Config object, dict, or preset name)

        Returns:
            Merged Config object
        """
        if isinstance(override, str):
            override = self.load_preset(override)
        elif isinstance(override, dict):
            override = self.load_from_dict(override)

        return base.merge(override)

    def save_config(self, config: Config, filepath: Union[str, Path]):
        """Save configuration to a YAML file"""
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to: {filepath}")

    def list_presets(self) -> List[str]:
        """Get list of available preset names"""
        return list(self.presets.keys())


class ConfigValidator:
    """Validates configuration parameters"""

    VALID_FORMATS = ["json", "yaml"]
    VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    @staticmethod
    def validate(config: Config) -> tuple[bool, List[str]]:
        """
        Validate configuration parameters

        Args:
            config: Configuration to validate

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        # Validate scan config
        if not isinstance(config.scan.delimiter, str) or len(config.scan.delimiter) != 1:
            errors.append("scan.delimiter must be a single character")

        if not isinstance(config.scan.quotechar, str) or len(config.scan.quotechar) != 1:
            errors.append("scan.quotechar must be a single character")
        elif config.scan.quotechar == config.scan.delimiter:
            errors.append("scan.quotechar must differ from scan.delimiter")

        if not _is_int(config.scan.header_window) or config.scan.header_window < 1:
            errors.append("scan.header_window must be an integer of at least 1")

        if not _is_int(config.scan.sample_row_index) or config.scan.sample_row_index < 0:
            errors.append("scan.sample_row_index must be a non-negative integer")

        if not _is_int(config.scan.field_size_limit) or config.scan.field_size_limit < 1:
            errors.append("scan.field_size_limit must be a positive integer")

        for name in ("lazy_quotes", "trim_leading_space"):
            if not isinstance(getattr(config.scan, name), bool):
                errors.append(f"scan.{name} must be true or false")

        # Validate output config
        if config.output.format not in ConfigValidator.VALID_FORMATS:
            errors.append(f"output.format must be one of {ConfigValidator.VALID_FORMATS}")

        if not _is_int(config.output.indent) or config.output.indent < 0:
            errors.append("output.indent must be a non-negative integer")

        if not isinstance(config.output.include_details, bool):
            errors.append("output.include_details must be true or false")

        # Validate logging config
        if str(config.logging.level).upper() not in ConfigValidator.VALID_LEVELS:
            errors.append(f"logging.level must be one of {ConfigValidator.VALID_LEVELS}")

        return len(errors) == 0, errors


def _is_int(value: Any) -> bool:
    # bool subclasses int but is never a valid count
    return isinstance(value, int) and not isinstance(value, bool)


def get_default_config() -> Config:
    """Get the default configuration"""
    return Config()


def unescape_delimiter(delimiter: str) -> str:
    """Translate the two-character escape typed on command lines and in URLs"""
    return ESCAPED_DELIMITERS.get(delimiter, delimiter)

"""
LoopWeaver v0.1.0

Configuration schema for LoopWeaver.

Defines all available configuration parameters with defaults and validation.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, Any, Optional, List
from pathlib import Path
import copy
import yaml


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Input
    # ========================================================================
    'input': {
        'format': 'auto',  # 'auto', 'lines', 'fasta', 'fastq'
        'validate_read_lengths': True,  # Fail fast on mixed read lengths
    },

    # ========================================================================
    # Assembly (k+1-mer size sweep)
    # ========================================================================
    'assembly': {
        'min_kplus1_size': 3,  # Smallest k+1-mer size tried
        'max_kplus1_size': None,  # None = read length
        'expected_superstrings': 2,  # Forward + reverse-complement strand
        'min_superstring_length': None,  # None = read length
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'logging': {
            'level': 'WARNING',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,  # Log to stderr only when None
        },
    },
}

VALID_FORMATS = ['auto', 'lines', 'fasta', 'fastq']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config_path is given but missing
        ConfigValidationError: If the file is not valid YAML
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file {config_path}: {e}"
            )

        if user_config:
            # Deep merge user config into defaults
            config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path):
    """
    Save the default configuration to a YAML file.

    Args:
        output_path: Output file path
    """
    with open(output_path, 'w') as f:
        yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Sections that are empty or not mappings (e.g. a bare ``assembly:`` line
    in YAML) are reported before any values are checked.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    for path in ('input', 'assembly', 'output', 'output.logging'):
        section = config
        for key in path.split('.'):
            section = section.get(key) if isinstance(section, dict) else None
        if not isinstance(section, dict):
            errors.append(f"Invalid '{path}' section: expected a mapping, got {section!r}")
    if errors:
        return errors

    # Input
    fmt = config['input'].get('format', 'auto')
    if fmt not in VALID_FORMATS:
        errors.append(f"Invalid input format: {fmt}")

    # k+1-mer range
    assembly = config['assembly']
    min_k = assembly.get('min_kplus1_size', 3)
    max_k = assembly.get('max_kplus1_size')
    if not isinstance(min_k, int) or min_k < 3:
        errors.append(f"Invalid min_kplus1_size: {min_k} (must be an integer >= 3)")
    elif max_k is not None and (not isinstance(max_k, int) or max_k < min_k):
        errors.append(
            f"Invalid max_kplus1_size: {max_k} (must be null or an integer >= min_kplus1_size)"
        )

    expected = assembly.get('expected_superstrings', 2)
    if not isinstance(expected, int) or expected < 1:
        errors.append(f"Invalid expected_superstrings: {expected} (must be >= 1)")

    min_length = assembly.get('min_superstring_length')
    if min_length is not None and (not isinstance(min_length, int) or min_length < 1):
        errors.append(f"Invalid min_superstring_length: {min_length} (must be null or >= 1)")

    # Logging
    level = config['output']['logging'].get('level', 'WARNING')
    if level not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors

"""Configuration utilities for two-hand manipulation.

Defaults come from the dataclasses in ``handlebar.configs.constants.models``;
an optional YAML file may override any of them under a top-level
``manipulation`` section::

    manipulation:
      rotation:
        constraint: y_axis_only
      logging:
        enabled: true
"""
import logging
import os
from dataclasses import asdict
from typing import Any, Optional

import yaml

from handlebar.configs.constants.models import ManipulationConfig, RotationConfig, SessionLoggingConfig

logger = logging.getLogger(__name__)


def load_yaml_config(config_file: str) -> dict:
    """
    Load YAML configuration file with error handling.

    Args:
        config_file: Path to YAML configuration file

    Returns:
        Dictionary of configuration overrides
    """
    if not os.path.exists(config_file):
        logger.warning(f"Config file not found: {config_file} - using defaults")
        return {}

    try:
        with open(config_file, 'r') as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML config {config_file}: {e}")
        return {}
    except OSError as e:
        logger.error(f"Failed to load config {config_file}: {e}")
        return {}

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        logger.error(f"Config {config_file} must contain a mapping, got {type(config_data).__name__}")
        return {}
    logger.info(f"Loaded config overrides from: {config_file}")
    return config_data


def apply_section_override(target: Any, yaml_obj: Optional[dict], section_name: str):
    """
    Apply YAML overrides to a config section.

    Args:
        target: The target config object to modify
        yaml_obj: The YAML overrides dictionary for this section
        section_name: Section name for logging purposes
    """
    overrides = yaml_obj or {}
    if not isinstance(overrides, dict):
        logger.warning(
            f"Config section {section_name} must be a mapping, got {type(overrides).__name__} - ignoring it"
        )
        return

    for key, yaml_value in overrides.items():
        if not hasattr(target, key):
            logger.warning(f"Unknown config key in YAML: {section_name}.{key}")
            continue
        setattr(target, key, yaml_value)
        logger.debug(f"Applied YAML override: {section_name}.{key} = {yaml_value}")


def load_manipulation_config(config_file: Optional[str] = None) -> ManipulationConfig:
    """
    Build the manipulation config from defaults and an optional YAML file.

    Sections are rebuilt after overriding so their validation runs on the
    final values.
    """
    cfg = ManipulationConfig()
    if config_file is None:
        return cfg

    overrides = load_yaml_config(config_file).get('manipulation') or {}
    if not overrides:
        logger.debug("No 'manipulation' section found in YAML config")
        return cfg
    if not isinstance(overrides, dict):
        logger.warning(
            f"Config section manipulation must be a mapping, got {type(overrides).__name__} - using defaults"
        )
        return cfg

    rotation_overrides = overrides.get('rotation')
    if isinstance(rotation_overrides, dict) and 'min_hand_distance_for_pitch_m' in rotation_overrides:
        logger.warning(
            "manipulation.rotation.min_hand_distance_for_pitch_m is not used by the rotation and has no effect"
        )

    apply_section_override(cfg.rotation, rotation_overrides, 'manipulation.rotation')
    apply_section_override(cfg.logging, overrides.get('logging'), 'manipulation.logging')

    return ManipulationConfig(
        rotation=RotationConfig(**asdict(cfg.rotation)),
        logging=SessionLoggingConfig(**asdict(cfg.logging)),
    )

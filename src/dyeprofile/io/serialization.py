"""YAML serialization for ProfileConfig.

Requires pyyaml. Raises ImportError with clear install instructions
if pyyaml is not available.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dyeprofile.core.exceptions import ConfigError
from dyeprofile.core.models import ProfileConfig


def _require_yaml() -> Any:
    """Import and return the yaml module, or raise a helpful error."""
    try:
        import yaml

        return yaml
    except ImportError:
        raise ImportError(
            "pyyaml is required for config serialization. "
            "Install it with: pip install pyyaml"
        ) from None


def config_to_dict(config: ProfileConfig) -> dict[str, Any]:
    """Plain-type mapping of a config, in prompt order."""
    return {
        "identifier": config.identifier,
        "distance_upper": config.distance_upper,
        "distance_lower": config.distance_lower,
        "channel": config.channel.letter,
        "blur_radius": config.blur_radius,
        "input_dir": str(config.input_dir),
        "output_dir": str(config.output_dir),
        "log_dir": str(config.log_dir),
    }


def config_to_yaml(config: ProfileConfig, path: Path) -> None:
    """Serialize a ProfileConfig to a YAML file.

    Args:
        config: The configuration to serialize.
        path: File path to write.
    """
    yaml = _require_yaml()

    with open(path, "w") as f:
        yaml.dump(config_to_dict(config), f, default_flow_style=False, sort_keys=False)


def load_config_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a mapping without validating values.

    Raises:
        FileNotFoundError: If the YAML file doesn't exist.
        ConfigError: If the YAML is not a mapping.
    """
    yaml = _require_yaml()

    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid config YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config YAML: expected a mapping, got {type(data).__name__}")
    return data


def config_from_mapping(data: dict[str, Any]) -> ProfileConfig:
    """Build a validated ProfileConfig from a plain mapping.

    Raises:
        ConfigError: If required keys are missing or values are invalid.
    """
    required = ("identifier", "distance_upper", "distance_lower", "input_dir", "output_dir")
    for key in required:
        if data.get(key) is None:
            raise ConfigError(f"Invalid config: missing required key '{key}'")

    blur_radius = data.get("blur_radius", 0)
    try:
        blur_radius = int(blur_radius)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Blur radius must be an integer, got {blur_radius!r}") from e

    return ProfileConfig(
        identifier=str(data["identifier"]),
        input_dir=Path(data["input_dir"]),
        output_dir=Path(data["output_dir"]),
        distance_upper=data["distance_upper"],
        distance_lower=data["distance_lower"],
        channel=data.get("channel", "R"),
        blur_radius=blur_radius,
        log_dir=Path(data.get("log_dir", "logs")),
    )


def config_from_yaml(path: Path) -> ProfileConfig:
    """Deserialize a ProfileConfig from a YAML file.

    Raises:
        FileNotFoundError: If the YAML file doesn't exist.
        ConfigError: If the YAML is invalid or missing required fields.
    """
    return config_from_mapping(load_config_mapping(path))

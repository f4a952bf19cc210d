"""
YAML tank configuration loader with schema validation.

Loads a tank data pack (bounds, populations, behavior parameters, clock
pacing) from YAML, validates it against a JSON schema and parses it into
the dataclasses in data_types.py. Sections and fields left out of the file
keep their defaults from constants.py.
"""

import yaml
import json
from pathlib import Path
from typing import Optional
import jsonschema

from .data_types import (
    TankConfig, TankBounds, FishConfig, FoodConfig, BubbleConfig,
    DecorationConfig, ClockConfig, default_starfish, default_shells
)

PACKAGE_DIR = Path(__file__).parent
DEFAULT_CONFIG_PATH = PACKAGE_DIR / "data" / "tank.yaml"
DEFAULT_SCHEMA_DIR = PACKAGE_DIR / "schemas"

RANGE_FIELDS = ('x_range', 'y_range', 'size_range', 'speed_range', 'rotation_range', 'random_x_range')


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataLoadError(f"Expected a mapping at the top of {file_path}")
    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    if not schema_path.exists():
        raise DataLoadError(f"Schema not found: {schema_path}")

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(f"Validation error in {data_path}: {e.message}")
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")


def _with_ranges(section: dict, data_path: Path, section_name: str) -> dict:
    """Convert [min, max] lists to tuples, rejecting inverted ranges."""
    parsed = dict(section)
    for key in RANGE_FIELDS:
        if key in parsed:
            low, high = parsed[key]
            if low > high:
                raise DataLoadError(
                    f"Inverted range {section_name}.{key}={[low, high]} in {data_path}"
                )
            parsed[key] = (float(low), float(high))
    return parsed


def _load_decoration(section: Optional[dict], default: DecorationConfig, data_path: Path) -> DecorationConfig:
    if not section:
        return default

    fields = {
        'kind': default.kind,
        'count': default.count,
        'x_range': default.x_range,
        'y_range': default.y_range,
        'size_range': default.size_range,
        'rotation_range': default.rotation_range,
        'colors': default.colors,
    }
    fields.update(_with_ranges(section, data_path, default.kind))
    return DecorationConfig(**fields)


def parse_tank_config(data: dict, data_path: Path = Path("<memory>")) -> TankConfig:
    """
    Build a TankConfig from an already validated dict.

    Raises:
        DataLoadError: On inverted ranges, or a happy duration longer than
                       the hunger interval (a fish would be hungry and
                       happy at once)
    """
    bounds = TankBounds(**data.get('bounds', {}))
    fish = FishConfig(**_with_ranges(data.get('fish', {}), data_path, 'fish'))
    food = FoodConfig(**_with_ranges(data.get('food', {}), data_path, 'food'))
    bubbles = BubbleConfig(**_with_ranges(data.get('bubbles', {}), data_path, 'bubbles'))

    decorations = data.get('decorations', {})
    starfish = _load_decoration(decorations.get('starfish'), default_starfish(), data_path)
    shells = _load_decoration(decorations.get('shells'), default_shells(), data_path)

    clock = ClockConfig(**data.get('clock', {}))

    if fish.happy_duration > fish.hunger_interval:
        raise DataLoadError(
            f"fish.happy_duration ({fish.happy_duration}s) exceeds "
            f"fish.hunger_interval ({fish.hunger_interval}s) in {data_path}"
        )

    if food.feed_max_y >= food.floor_y:
        raise DataLoadError(
            f"food.feed_max_y ({food.feed_max_y}) must be above food.floor_y ({food.floor_y}) in {data_path}"
        )

    return TankConfig(
        name=data.get('name', TankConfig.name),
        seed=data.get('seed'),
        bounds=bounds,
        fish=fish,
        food=food,
        bubbles=bubbles,
        starfish=starfish,
        shells=shells,
        clock=clock,
        description=data.get('description')
    )


def load_tank_config(file_path: Path, schema_dir: Optional[Path] = DEFAULT_SCHEMA_DIR) -> TankConfig:
    """
    Load a tank configuration from YAML.

    Args:
        file_path: Path to the tank YAML file
        schema_dir: Directory holding tank.schema.json (None skips validation)

    Returns:
        Parsed TankConfig
    """
    file_path = Path(file_path)
    data = load_yaml(file_path)

    if schema_dir:
        schema_path = Path(schema_dir) / "tank.schema.json"
        validate_against_schema(data, schema_path, file_path)

    return parse_tank_config(data, file_path)


def load_default_config() -> TankConfig:
    """Load the tank configuration shipped with the package"""
    return load_tank_config(DEFAULT_CONFIG_PATH, DEFAULT_SCHEMA_DIR)

"""Per-strategy configuration records and JSON loading."""
from __future__ import annotations

import json
from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Any, Dict, Optional


class ConfigError(ValueError):
    """Raised for configuration values the generators cannot honour."""


class EvaluationRule(IntEnum):
    BASIC = 0
    EXTENDED = 1


def _check_probability(name: str, value: float):
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{name} must lie between 0 and 1, got {value}")


@dataclass
class CellAutomataConfig:
    wall_probability: float = 0.45
    min_walls: int = 5
    include_self: bool = True
    # When False the outer ring is forced to wall and never simulated
    simulate_borders: bool = False
    rule: EvaluationRule = EvaluationRule.BASIC

    def __post_init__(self):
        if isinstance(self.rule, str):
            # JSON files may name the rule ("basic" / "extended")
            self.rule = EvaluationRule[self.rule.upper()]
        else:
            self.rule = EvaluationRule(self.rule)
        self.validate()

    def validate(self):
        _check_probability("wall_probability", self.wall_probability)
        if self.min_walls < 0:
            raise ConfigError(f"min_walls must be non-negative, got {self.min_walls}")


@dataclass
class DrunkardWalkConfig:
    expected_ratio: float = 0.55

    def __post_init__(self):
        self.validate()

    def validate(self):
        # A ratio of 1.0 needs every cell visited and may never be reached
        if not 0.0 <= self.expected_ratio < 1.0:
            raise ConfigError(f"expected_ratio must lie in [0, 1), got {self.expected_ratio}")


@dataclass
class BSPConfig:
    min_width: int = 40
    min_height: int = 40
    min_room_width: int = 18
    min_room_height: int = 20
    max_room_width: int = 38
    max_room_height: int = 38
    horiz_split_probability: float = 0.5
    # Aspect ratio above 1 + ratio forces the split orientation
    split_h_ratio: float = 0.3
    split_v_ratio: float = 0.5
    empty_room_probability: float = 0.04
    # -1 means split until leaves get too small
    max_depth: int = -1

    def __post_init__(self):
        self.validate()

    def validate(self):
        _check_probability("horiz_split_probability", self.horiz_split_probability)
        _check_probability("empty_room_probability", self.empty_room_probability)
        if self.split_h_ratio < 0 or self.split_v_ratio < 0:
            raise ConfigError("split ratios must be non-negative")
        for axis, min_leaf, min_room, max_room in (
            ("width", self.min_width, self.min_room_width, self.max_room_width),
            ("height", self.min_height, self.min_room_height, self.max_room_height),
        ):
            if min_room < 1:
                raise ConfigError(f"min_room_{axis} must be positive, got {min_room}")
            if min_room > max_room:
                raise ConfigError(f"min_room_{axis} ({min_room}) exceeds max_room_{axis} ({max_room})")
            # Rooms keep a one cell margin inside their leaf
            if max_room > min_leaf - 2:
                raise ConfigError(
                    f"max_room_{axis} ({max_room}) must be at most min_{axis} - 2 ({min_leaf - 2})")
        if self.max_depth < -1:
            raise ConfigError(f"max_depth must be -1 or non-negative, got {self.max_depth}")


SECTION_NAMES = {
    "cellular_automata": CellAutomataConfig,
    "drunkard_walk": DrunkardWalkConfig,
    "bsp": BSPConfig,
}


def build_config(cls, data: Optional[Dict[str, Any]] = None):
    """Instantiates a config dataclass, rejecting keys it does not declare."""
    data = data or {}
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} keys: {', '.join(unknown)}")
    try:
        return cls(**data)
    except ConfigError:
        raise
    except (TypeError, ValueError, KeyError) as exc:
        raise ConfigError(f"Invalid {cls.__name__}: {exc}") from exc


def load_config(path: str) -> Dict[str, Any]:
    """
    Reads a JSON file such as:

        {"seed": 7, "bsp": {"min_width": 12, "max_room_width": 10}}

    Returns {"seed": int|None, "cellular_automata": ..., "drunkard_walk": ..., "bsp": ...}
    with every section present (missing ones get defaults).
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be an object")

    unknown = sorted(set(raw) - set(SECTION_NAMES) - {"seed"})
    if unknown:
        raise ConfigError(f"{path}: unknown sections {', '.join(unknown)}")

    seed = raw.get("seed")
    # bool is an int subclass but never a meaningful seed
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ConfigError(f"{path}: seed must be an integer, got {seed!r}")

    result: Dict[str, Any] = {"seed": seed}
    for name, cls in SECTION_NAMES.items():
        result[name] = build_config(cls, raw.get(name))
    return result

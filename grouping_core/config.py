# grouping_core/config.py
from __future__ import annotations
from typing import Any, Dict, Optional
import textwrap

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import DEFAULT_GROUP_SIZE, DEFAULT_MAX_ATTEMPTS
from .errors import ConfigError
from .models import GroupingOptions

# ===== App defaults =====
DEFAULT_CONFIG = {
    "preferred_group_size": DEFAULT_GROUP_SIZE,
    "balance_gender": False,
    "balance_ability": False,
    "pair_support_partners": False,
    "respect_separations": False,
    "max_attempts": DEFAULT_MAX_ATTEMPTS,
    "random_seed": 42,
}


class GroupingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    preferred_group_size: int = DEFAULT_GROUP_SIZE
    balance_gender: bool = False
    balance_ability: bool = False
    pair_support_partners: bool = False
    respect_separations: bool = False
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    random_seed: Optional[int] = 42

    @field_validator("preferred_group_size")
    @classmethod
    def _positive(cls, v):
        if v < 1:
            raise ValueError("preferred_group_size must be at least 1")
        return v

    def to_options(self) -> GroupingOptions:
        return GroupingOptions(
            balance_gender=self.balance_gender,
            balance_ability=self.balance_ability,
            pair_support_partners=self.pair_support_partners,
            respect_separations=self.respect_separations,
            max_attempts=self.max_attempts,
        )


# ===== Built-in presets (merged over DEFAULT_CONFIG) =====
DEFAULT_CONFIG_YAML = textwrap.dedent("""\
preferred_group_size: 4
max_attempts: 32
random_seed: 42

presets:
  random:
    max_attempts: 1
  balanced:
    balance_gender: true
    balance_ability: true
  supported:
    balance_ability: true
    pair_support_partners: true
  all_rules:
    balance_gender: true
    balance_ability: true
    pair_support_partners: true
    respect_separations: true
""")


def _build(data: Dict[str, Any]) -> GroupingConfig:
    merged = dict(DEFAULT_CONFIG)
    merged.update(data)
    try:
        return GroupingConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid grouping config: {e}") from e


def _parse(text: str) -> Dict[str, Any]:
    try:
        obj = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse grouping config: {e}") from e
    if not isinstance(obj, dict):
        raise ConfigError("Grouping config must be a mapping.")
    presets = obj.get("presets", {}) or {}
    if not isinstance(presets, dict) or any(not isinstance(v, dict) for v in presets.values()):
        raise ConfigError("presets must map a name to a mapping of options.")
    return obj


def load_config_text(text: str, preset_name: Optional[str] = None) -> GroupingConfig:
    obj = _parse(text)
    presets = obj.pop("presets", {}) or {}
    if preset_name is not None:
        if preset_name not in presets:
            raise ConfigError(f"Unknown preset: {preset_name}")
        obj.update(presets[preset_name])
    return _build(obj)


def load_config_yaml(path: str, preset_name: Optional[str] = None) -> GroupingConfig:
    with open(path, "r", encoding="utf-8") as f:
        return load_config_text(f.read(), preset_name)


def preset_names(text: str = DEFAULT_CONFIG_YAML) -> list[str]:
    return list((_parse(text).get("presets") or {}).keys())


def preset(name: str) -> GroupingConfig:
    return load_config_text(DEFAULT_CONFIG_YAML, preset_name=name)

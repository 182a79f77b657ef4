# FILE: grouping_core/models.py
from __future__ import annotations
from enum import Enum
from typing import List, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_MAX_ATTEMPTS, GENDER_UNSPECIFIED, normalize_gender


class StudentRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    gender: str = GENDER_UNSPECIFIED
    needs_help: bool = False
    is_support_partner: bool = False
    separation_ids: Tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("gender", mode="before")
    @classmethod
    def _gender_token(cls, v):
        return normalize_gender(v)

    @field_validator("separation_ids", mode="before")
    @classmethod
    def _ids_as_str(cls, v):
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return tuple(str(x) for x in v)


class GroupingOptions(BaseModel):
    balance_gender: bool = False
    balance_ability: bool = False
    pair_support_partners: bool = False
    respect_separations: bool = False
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    @field_validator("max_attempts", mode="before")
    @classmethod
    def _at_least_one(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("max_attempts must be an integer")
        return max(1, int(v))

    @property
    def uses_advanced_rules(self) -> bool:
        return (self.balance_gender or self.balance_ability
                or self.pair_support_partners or self.respect_separations)


class GroupingStrategy(str, Enum):
    STRICT = "strict"
    RELAXED = "relaxedConstraints"
    FORCED = "forcedPlacement"
    FAILED = "failed"


class GroupingResult(BaseModel):
    groups: List[List[StudentRecord]] = Field(default_factory=list)
    strategy: GroupingStrategy = GroupingStrategy.STRICT
    separation_conflicts: int = 0
    unassigned_count: int = 0

    @property
    def group_count(self) -> int:
        return len(self.groups)

    def group_ids(self) -> List[List[str]]:
        return [[s.id for s in g] for g in self.groups]

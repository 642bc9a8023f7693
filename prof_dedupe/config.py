from __future__ import annotations

import re
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .core.identity import DecisionPlanner, MatchClassifier, Normalizer, Thresholds
from .core.identity.normalizer import DEFAULT_SUFFIX_PATTERN


class MatchingSettings(BaseModel):
    suffix_pattern: str = DEFAULT_SUFFIX_PATTERN
    max_typo_distance: int = Field(default=2, ge=0)
    min_typo_length: int = Field(default=5, ge=0)
    min_partial_tokens: int = Field(default=2, ge=1)

    @field_validator("suffix_pattern")
    @classmethod
    def _compile_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid suffix_pattern: {exc}") from exc
        return value

    def thresholds(self) -> Thresholds:
        return Thresholds(
            max_typo_distance=self.max_typo_distance,
            min_typo_length=self.min_typo_length,
            min_partial_tokens=self.min_partial_tokens,
        )


class PlannerSettings(BaseModel):
    placeholder_patterns: List[str] = Field(default_factory=lambda: ["vacancy"])


class OutputSettings(BaseModel):
    format: Literal["sql", "json"] = "sql"
    table: str = "public.professors"
    merge_function: str = "merge_professors"
    roster_name_key: str = "teacherName"

    @field_validator("table", "merge_function")
    @classmethod
    def _identifier(cls, value: str) -> str:
        if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?", value):
            raise ValueError(f"not a SQL identifier: {value!r}")
        return value


class Settings(BaseModel):
    matching: MatchingSettings = MatchingSettings()
    planner: PlannerSettings = PlannerSettings()
    output: OutputSettings = OutputSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})

    def build_classifier(self) -> MatchClassifier:
        return MatchClassifier(
            normalizer=Normalizer(self.matching.suffix_pattern),
            thresholds=self.matching.thresholds(),
        )

    def build_planner(self) -> DecisionPlanner:
        return DecisionPlanner(
            self.build_classifier(),
            placeholder_patterns=self.planner.placeholder_patterns,
        )


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "config.yaml", cwd / "config.yml"):
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path]) -> Settings:
    path = find_config(explicit_path)
    if path is None:
        return Settings()
    return Settings.load(path)

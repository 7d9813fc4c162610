from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ErrorCheckFailure


class DiscrepancyKind(StrEnum):
    NO_CHECKER = "no_checker"
    MISSING_ERROR = "missing_error"
    UNEXPECTED_LINE = "unexpected_line"
    WRONG_CHECKER = "wrong_checker"
    NO_MATCH = "no_match"
    UNMATCHED_MARKER = "unmatched_marker"
    UNMATCHED_ENTRY = "unmatched_entry"


_UNLOCATED_KINDS: frozenset[DiscrepancyKind] = frozenset(
    {DiscrepancyKind.UNMATCHED_MARKER, DiscrepancyKind.UNMATCHED_ENTRY}
)


@dataclass(frozen=True, slots=True)
class SourceFile:
    full_path: str
    short_name: str

    def __post_init__(self) -> None:
        if not self.short_name:
            raise ValueError("source short_name must be non-empty")

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> SourceFile:
        full_path = os.fspath(path)
        return cls(full_path=full_path, short_name=os.path.basename(full_path))


@dataclass(frozen=True, slots=True)
class ExpectedError:
    pattern: str
    regex: re.Pattern[str] = field(compare=False)
    source_line: int
    auto: bool
    owner_file: str
    checker_name: str

    def __post_init__(self) -> None:
        if self.source_line < 1:
            raise ValueError("expected error source_line must be >= 1")
        if not self.owner_file:
            raise ValueError("expected error owner_file must be non-empty")

    @property
    def match_prefix(self) -> str:
        return f"{self.owner_file}:{self.source_line}"


def _normalize_json(value: object) -> object:
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, list | tuple):
        return [_normalize_json(item) for item in value]
    if isinstance(value, dict):
        raw_dict = cast(dict[object, object], value)
        normalized: dict[str, object] = {}
        for key in sorted(raw_dict, key=str):
            if not isinstance(key, str):
                raise ValueError("witness object keys must be strings")
            normalized[key] = _normalize_json(raw_dict[key])
        return normalized
    raise ValueError("witness must be JSON-serializable")


class Discrepancy(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: DiscrepancyKind
    message: str = Field(min_length=1)
    file: str | None = None
    line: int | None = Field(default=None, ge=1)
    witness: object | None = None

    @field_validator("witness", mode="before")
    @classmethod
    def _validate_and_normalize_witness(cls, witness: object) -> object:
        if witness is None:
            return None
        return _normalize_json(witness)

    @model_validator(mode="after")
    def _validate_location(self) -> Discrepancy:
        located = self.file is not None and self.line is not None
        if self.kind in _UNLOCATED_KINDS:
            if self.file is not None or self.line is not None:
                raise ValueError(f"{self.kind} discrepancies carry no source location")
        elif not located:
            raise ValueError(f"{self.kind} discrepancies require file and line")
        return self


@dataclass(frozen=True, slots=True)
class MatchResult:
    discrepancies: tuple[Discrepancy, ...]
    unmatched: tuple[str, ...]

    @property
    def passed(self) -> bool:
        return not self.discrepancies and not self.unmatched

    def report(self) -> str | None:
        if not self.discrepancies:
            return None
        if len(self.discrepancies) == 1:
            return self.discrepancies[0].message
        return "\n" + "".join(f"{item.message}\n" for item in self.discrepancies)

    def raise_for_failures(self) -> None:
        report = self.report()
        if report is not None:
            raise ErrorCheckFailure(report)

from __future__ import annotations

from pathlib import Path
from typing import cast

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .splitter import DEFAULT_BANNER_PREFIXES, DEFAULT_COMMENT_PREFIXES


class ErrchkConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class ErrchkConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    default_checker: str = ""
    want_auto: bool = False
    banner_prefixes: tuple[str, ...] = DEFAULT_BANNER_PREFIXES
    comment_prefixes: tuple[str, ...] = DEFAULT_COMMENT_PREFIXES

    @field_validator("banner_prefixes", "comment_prefixes")
    @classmethod
    def _validate_prefixes(cls, prefixes: tuple[str, ...]) -> tuple[str, ...]:
        for prefix in prefixes:
            if not prefix:
                raise ValueError("noise line prefixes must be non-empty strings")
        return prefixes


def load_errchk_config(path: str | Path) -> ErrchkConfig:
    target = Path(path)
    raw = _read_yaml_file(target)
    try:
        return ErrchkConfig.model_validate(raw)
    except ValidationError as exc:
        raise ErrchkConfigError(
            "E_CONFIG_INVALID",
            f"invalid errchk config '{target}': {exc.error_count()} validation error(s): "
            + "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            ),
        ) from exc


def _read_yaml_file(path: Path) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ErrchkConfigError(
            "E_CONFIG_READ_FAILED",
            f"unable to read errchk config '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise ErrchkConfigError(
            "E_CONFIG_PARSE_FAILED",
            f"unable to parse errchk config '{path}': {exc}",
        ) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ErrchkConfigError(
            "E_CONFIG_INVALID", f"errchk config root must be a mapping: {path}"
        )
    return cast(dict[str, object], payload)

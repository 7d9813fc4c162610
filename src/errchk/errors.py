from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FixtureErrorCode(StrEnum):
    E_FIXTURE_READ_FAILED = "E_FIXTURE_READ_FAILED"
    E_FIXTURE_LITERAL_INVALID = "E_FIXTURE_LITERAL_INVALID"
    E_FIXTURE_REGEX_INVALID = "E_FIXTURE_REGEX_INVALID"


@dataclass(frozen=True, slots=True)
class FixtureErrorDetail:
    code: str
    message: str
    file: str
    line: int | None = None


class FixtureError(ValueError):
    """A test source file is unreadable or carries a malformed annotation."""

    def __init__(self, detail: FixtureErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


class ErrorCheckFailure(AssertionError):
    def __init__(self, report: str) -> None:
        super().__init__(report)
        self.report = report


def build_fixture_error(
    code: FixtureErrorCode,
    message: str,
    file: str,
    line: int | None = None,
) -> FixtureError:
    return FixtureError(
        FixtureErrorDetail(
            code=code.value,
            message=message,
            file=file,
            line=line,
        )
    )

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Final

from .errors import FixtureErrorCode, build_fixture_error
from .models import ExpectedError
from .quoting import quote, unquote_literal

logger = logging.getLogger(__name__)

DISABLE_MARKER: Final[str] = "////"
_ERROR_PATTERN = re.compile(r"// (?:GC_)?ERROR (.*)")
_ERROR_AUTO_PATTERN = re.compile(r"// (?:GC_)?ERRORAUTO (.*)")
_CHECKER_PREFIX_PATTERN = re.compile(r"^\s*([^\s\"`]+)", flags=re.ASCII)


def parse_expectations(
    full_path: str,
    short_name: str,
    default_checker: str,
) -> tuple[ExpectedError, ...]:
    """Parse the expected errors annotated in the source file at ``full_path``.

    Each line that should produce an error carries a comment of the form
    ``// ERROR "regexp"``, optionally naming the checker that must report it
    (``// ERROR vet "regexp"``). ``ERRORAUTO`` expects an ``<autogenerated>``
    entry instead of one at the annotated line, and a line containing ``////``
    is never treated as an annotation.
    """
    try:
        text = Path(full_path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise build_fixture_error(
            FixtureErrorCode.E_FIXTURE_READ_FAILED,
            f"unable to read source file '{full_path}': {exc}",
            full_path,
        ) from exc
    return parse_expectation_text(
        text,
        short_name,
        default_checker,
        source=full_path,
    )


def parse_expectation_text(
    text: str,
    short_name: str,
    default_checker: str,
    *,
    source: str | None = None,
) -> tuple[ExpectedError, ...]:
    origin = source if source is not None else short_name
    cache: dict[str, re.Pattern[str]] = {}
    expectations: list[ExpectedError] = []
    for line_num, line in enumerate(text.split("\n"), start=1):
        expectation = _parse_line(
            line,
            line_num=line_num,
            short_name=short_name,
            default_checker=default_checker,
            origin=origin,
            cache=cache,
        )
        if expectation is not None:
            expectations.append(expectation)

    logger.debug("parsed %d expectation(s) from %s", len(expectations), origin)
    return tuple(expectations)


def _parse_line(  # noqa: PLR0913
    line: str,
    *,
    line_num: int,
    short_name: str,
    default_checker: str,
    origin: str,
    cache: dict[str, re.Pattern[str]],
) -> ExpectedError | None:
    if DISABLE_MARKER in line:
        return None

    auto = True
    match = _ERROR_AUTO_PATTERN.search(line)
    if match is None:
        auto = False
        match = _ERROR_PATTERN.search(line)
    if match is None:
        return None

    rest = match.group(1)
    checker = default_checker
    checker_match = _CHECKER_PREFIX_PATTERN.match(rest)
    if checker_match is not None:
        checker = checker_match.group(1)
        rest = rest[checker_match.end() :]

    try:
        pattern = unquote_literal(rest.strip())
    except ValueError as exc:
        raise build_fixture_error(
            FixtureErrorCode.E_FIXTURE_LITERAL_INVALID,
            f"{origin}:{line_num}: invalid errchk line: {line.strip()}, {exc}",
            origin,
            line_num,
        ) from exc

    return ExpectedError(
        pattern=pattern,
        regex=_compile_cached(pattern, cache=cache, origin=origin, line_num=line_num),
        source_line=line_num,
        auto=auto,
        owner_file=short_name,
        checker_name=checker,
    )


def _compile_cached(
    pattern: str,
    *,
    cache: dict[str, re.Pattern[str]],
    origin: str,
    line_num: int,
) -> re.Pattern[str]:
    compiled = cache.get(pattern)
    if compiled is not None:
        return compiled
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise build_fixture_error(
            FixtureErrorCode.E_FIXTURE_REGEX_INVALID,
            f"{origin}:{line_num}: invalid regexp {quote(pattern)} in ERROR line: {exc}",
            origin,
            line_num,
        ) from exc
    cache[pattern] = compiled
    return compiled

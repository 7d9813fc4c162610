from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from .config import ErrchkConfig
from .expectations import parse_expectations
from .models import Discrepancy, DiscrepancyKind, ExpectedError, MatchResult, SourceFile
from .prefix import AUTOGENERATED_MARKER, partition_entries
from .quoting import quote, quote_backquoted, quote_list
from .splitter import split_output

logger = logging.getLogger(__name__)

# "file:line: message (checker)"
_ERROR_LINE_PATTERN = re.compile(r"\S+?: (.*)\((\S+?)\)", flags=re.ASCII)


def decompose_entry(entry: str) -> tuple[str, str] | None:
    """Split an output entry into its message text and reporting checker."""
    match = _ERROR_LINE_PATTERN.fullmatch(entry)
    if match is None:
        return None
    return match.group(1), match.group(2)


def error_check(
    output: str,
    want_auto: bool,
    default_checker: str,
    sources: Iterable[SourceFile],
    *,
    config: ErrchkConfig | None = None,
) -> MatchResult:
    """Match the errors in ``output`` against the annotations in ``sources``.

    Raises ``FixtureError`` when a source file cannot be read or carries a
    malformed annotation; every other problem ends up in the result.
    """
    settings = config if config is not None else ErrchkConfig()
    source_files = tuple(sources)
    entries = split_output(
        output,
        want_auto,
        banner_prefixes=settings.banner_prefixes,
        comment_prefixes=settings.comment_prefixes,
    )
    entries = [_shorten_paths(entry, source_files) for entry in entries]
    logger.debug("split output into %d entries", len(entries))

    expectations: list[ExpectedError] = []
    for source in source_files:
        expectations.extend(
            parse_expectations(source.full_path, source.short_name, default_checker)
        )
    return match_expectations(entries, expectations)


def _shorten_paths(entry: str, sources: Sequence[SourceFile]) -> str:
    for source in sources:
        if source.full_path:
            entry = entry.replace(source.full_path, source.short_name)
    return entry


def match_expectations(
    entries: Iterable[str],
    expectations: Iterable[ExpectedError],
) -> MatchResult:
    remaining = list(entries)
    discrepancies: list[Discrepancy] = []
    n_expectations = 0
    for expectation in expectations:
        n_expectations += 1
        remaining = _match_one(expectation, remaining, discrepancies)

    if remaining:
        discrepancies.append(
            Discrepancy(kind=DiscrepancyKind.UNMATCHED_MARKER, message="unmatched errors")
        )
        discrepancies.extend(
            Discrepancy(
                kind=DiscrepancyKind.UNMATCHED_ENTRY,
                message=entry,
                witness={"entry": entry},
            )
            for entry in remaining
        )

    logger.info(
        "checked %d expectations: %d discrepancies, %d unmatched entries",
        n_expectations,
        len(discrepancies),
        len(remaining),
    )
    return MatchResult(discrepancies=tuple(discrepancies), unmatched=tuple(remaining))


def _match_one(
    expectation: ExpectedError,
    entries: list[str],
    discrepancies: list[Discrepancy],
) -> list[str]:
    """Consume the entries satisfying ``expectation``; return what is left."""
    if not expectation.checker_name:
        discrepancies.append(
            _located(
                expectation,
                DiscrepancyKind.NO_CHECKER,
                "no expected linter indicated for test",
            )
        )
        return entries

    prefix = AUTOGENERATED_MARKER if expectation.auto else expectation.match_prefix
    candidates, others = partition_entries(prefix, entries)
    if not candidates:
        discrepancies.append(
            _located(
                expectation,
                DiscrepancyKind.MISSING_ERROR,
                f"missing error {quote(expectation.pattern)}",
                witness={"pattern": expectation.pattern, "prefix": prefix},
            )
        )
        return entries

    survivors: list[str] = []
    attempted: list[str] = []
    matched = False
    for candidate in candidates:
        parts = decompose_entry(candidate)
        if parts is None:
            survivors.append(candidate)
            discrepancies.append(
                _located(
                    expectation,
                    DiscrepancyKind.UNEXPECTED_LINE,
                    f"unexpected error line: {candidate}",
                    witness={"entry": candidate},
                )
            )
            continue

        text, actual_checker = parts
        if expectation.regex.search(text) is not None:
            matched = True
        else:
            survivors.append(candidate)
            attempted.append(text)

        if actual_checker != expectation.checker_name:
            discrepancies.append(
                _located(
                    expectation,
                    DiscrepancyKind.WRONG_CHECKER,
                    f"expected error from {quote(expectation.checker_name)}"
                    f" but got error from {quote(actual_checker)}"
                    f" in:\n\t{_context(others, survivors)}",
                    witness={
                        "entry": candidate,
                        "expected_checker": expectation.checker_name,
                        "actual_checker": actual_checker,
                    },
                )
            )

    remaining = others + survivors
    if not matched:
        discrepancies.append(
            _located(
                expectation,
                DiscrepancyKind.NO_MATCH,
                f"no match for {quote_backquoted(expectation.pattern)}"
                f" vs {quote_list(attempted)}"
                f" in:\n\t{_context(others, survivors)}",
                witness={"pattern": expectation.pattern, "attempted": attempted},
            )
        )
    return remaining


def _context(others: Sequence[str], survivors: Sequence[str]) -> str:
    return "\n\t".join([*others, *survivors])


def _located(
    expectation: ExpectedError,
    kind: DiscrepancyKind,
    detail: str,
    *,
    witness: object | None = None,
) -> Discrepancy:
    return Discrepancy(
        kind=kind,
        file=expectation.owner_file,
        line=expectation.source_line,
        message=f"{expectation.owner_file}:{expectation.source_line}: {detail}",
        witness=witness,
    )

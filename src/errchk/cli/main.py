from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from typing import Final

import typer

from errchk.config import ErrchkConfig, ErrchkConfigError, load_errchk_config
from errchk.errors import FixtureError
from errchk.expectations import parse_expectations
from errchk.logging_config import setup_logging
from errchk.matcher import error_check
from errchk.models import MatchResult, SourceFile

app = typer.Typer(help="Match tool diagnostics against // ERROR annotations")

_OUTPUT_FORMATS: Final[tuple[str, ...]] = ("text", "json")
_CHECK_OUTPUT_SCHEMA_VERSION: Final[int] = 1
_EXIT_PASS: Final[int] = 0
_EXIT_DISCREPANCIES: Final[int] = 1
_EXIT_FIXTURE_ERROR: Final[int] = 2
_SOURCES_ARGUMENT = typer.Argument(
    ...,
    help="Annotated source file as FULL or FULL=SHORT (SHORT defaults to the base name)",
)


@app.command()
def check(  # noqa: PLR0913
    sources: list[str] = _SOURCES_ARGUMENT,
    output: str = typer.Option(
        ...,
        "--output",
        help="File holding the tool output, '-' for stdin",
    ),
    default_checker: str | None = typer.Option(
        None,
        "--default-checker",
        help="Checker expected when an annotation names none",
    ),
    want_auto: bool | None = typer.Option(
        None,
        "--want-auto/--no-want-auto",
        help="Keep <autogenerated> entries for ERRORAUTO annotations",
    ),
    config: str | None = typer.Option(None, "--config", help="YAML errchk config"),
    format: str = typer.Option(
        "text",
        "--format",
        help="Check output format: text|json",
        show_default=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug details to stderr"),
) -> None:
    """Check tool output against the annotated sources."""
    _configure_logging(verbose)
    if format not in _OUTPUT_FORMATS:
        raise typer.BadParameter(f"unsupported --format value '{format}'")

    try:
        settings = _resolve_config(config, default_checker=default_checker, want_auto=want_auto)
        result = error_check(
            _read_output(output),
            settings.want_auto,
            settings.default_checker,
            _parse_sources(sources),
            config=settings,
        )
    except ErrchkConfigError as exc:
        typer.echo(f"config error: {exc}")
        raise typer.Exit(code=_EXIT_FIXTURE_ERROR) from exc
    except FixtureError as exc:
        typer.echo(f"fixture error: {exc}")
        raise typer.Exit(code=_EXIT_FIXTURE_ERROR) from exc
    except OSError as exc:
        typer.echo(f"fixture error: unable to read tool output '{output}': {exc}")
        raise typer.Exit(code=_EXIT_FIXTURE_ERROR) from exc

    exit_code = _derive_check_exit_code(result)
    if format == "json":
        typer.echo(_build_check_json_output(result, exit_code=exit_code))
    else:
        report = result.report()
        if report is not None:
            typer.echo(report.strip("\n"))
    raise typer.Exit(code=exit_code)


@app.command()
def expectations(
    sources: list[str] = _SOURCES_ARGUMENT,
    default_checker: str = typer.Option(
        "",
        "--default-checker",
        help="Checker expected when an annotation names none",
    ),
) -> None:
    """List the expected errors annotated in the sources."""
    try:
        for source in _parse_sources(sources):
            for expected in parse_expectations(
                source.full_path, source.short_name, default_checker
            ):
                typer.echo(
                    "EXPECT"
                    f" file={expected.owner_file}"
                    f" line={expected.source_line}"
                    f" checker={expected.checker_name}"
                    f" auto={str(expected.auto).lower()}"
                    f" pattern={expected.pattern}"
                )
    except FixtureError as exc:
        typer.echo(f"fixture error: {exc}")
        raise typer.Exit(code=_EXIT_FIXTURE_ERROR) from exc


def _configure_logging(verbose: bool) -> None:
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


def _resolve_config(
    path: str | None,
    *,
    default_checker: str | None,
    want_auto: bool | None,
) -> ErrchkConfig:
    settings = load_errchk_config(path) if path is not None else ErrchkConfig()
    overrides: dict[str, object] = {}
    if default_checker is not None:
        overrides["default_checker"] = default_checker
    if want_auto is not None:
        overrides["want_auto"] = want_auto
    if not overrides:
        return settings
    return settings.model_copy(update=overrides)


def _parse_sources(raw_sources: Sequence[str]) -> tuple[SourceFile, ...]:
    sources: list[SourceFile] = []
    for raw in raw_sources:
        full_path, sep, short_name = raw.partition("=")
        if not full_path:
            raise typer.BadParameter(f"source '{raw}' has an empty path")
        if sep and short_name:
            sources.append(SourceFile(full_path=full_path, short_name=short_name))
            continue
        if not os.path.basename(full_path):
            raise typer.BadParameter(f"source '{raw}' has no file name; use FULL=SHORT")
        sources.append(SourceFile.from_path(full_path))
    return tuple(sources)


def _read_output(output: str) -> str:
    if output == "-":
        return typer.get_text_stream("stdin").read()
    with open(os.fspath(output), encoding="utf-8") as handle:
        return handle.read()


def _derive_check_exit_code(result: MatchResult) -> int:
    if result.passed:
        return _EXIT_PASS
    return _EXIT_DISCREPANCIES


def _build_check_json_output(result: MatchResult, *, exit_code: int) -> str:
    payload: dict[str, object] = {
        "schema_version": _CHECK_OUTPUT_SCHEMA_VERSION,
        "status": "pass" if result.passed else "fail",
        "exit_code": exit_code,
        "discrepancies": [
            item.model_dump(mode="json", exclude_none=True) for item in result.discrepancies
        ],
        "unmatched": list(result.unmatched),
    }
    return json.dumps(payload, ensure_ascii=True, separators=(",", ":"))


def main() -> None:
    app()

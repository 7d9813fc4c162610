from __future__ import annotations

from pathlib import Path

import pytest

from errchk import DiscrepancyKind, ErrorCheckFailure, SourceFile, error_check

pytestmark = pytest.mark.conformance


def _write_x_go(tmp_path: Path, fifth_line: str) -> SourceFile:
    source = tmp_path / "x.go"
    source.write_text(
        "package p\n\nimport _ \"fmt\"\n\n" + fifth_line + "\n",
        encoding="utf-8",
    )
    return SourceFile(str(source), "x.go")


def test_matching_error_and_checker_passes(tmp_path: Path) -> None:
    source = _write_x_go(tmp_path, 'var x = 1 // ERROR "undefined: x"')

    result = error_check("x.go:5: undefined: x (typecheck)\n", False, "typecheck", [source])

    assert result.passed
    assert result.unmatched == ()
    result.raise_for_failures()


def test_wrong_checker_is_single_discrepancy(tmp_path: Path) -> None:
    source = _write_x_go(tmp_path, 'var x = 1 // ERROR "undefined: x"')

    result = error_check("x.go:5: undefined: x (vet)\n", False, "typecheck", [source])

    assert [item.kind for item in result.discrepancies] == [DiscrepancyKind.WRONG_CHECKER]
    assert result.report() == (
        'x.go:5: expected error from "typecheck" but got error from "vet" in:\n\t'
    )
    assert result.unmatched == ()


def test_missing_expected_error(tmp_path: Path) -> None:
    source = _write_x_go(tmp_path, 'var x = 1 // ERROR "undefined: x"')

    result = error_check("", False, "typecheck", [source])

    assert result.report() == 'x.go:5: missing error "undefined: x"'
    with pytest.raises(ErrorCheckFailure):
        result.raise_for_failures()


def test_unexpected_output_error_is_unmatched(tmp_path: Path) -> None:
    source = _write_x_go(tmp_path, "var x = 1")

    result = error_check("x.go:9: unused variable y (typecheck)\n", False, "typecheck", [source])

    assert [item.kind for item in result.discrepancies] == [
        DiscrepancyKind.UNMATCHED_MARKER,
        DiscrepancyKind.UNMATCHED_ENTRY,
    ]
    assert result.unmatched == ("x.go:9: unused variable y (typecheck)",)
    assert "unmatched errors\nx.go:9: unused variable y (typecheck)\n" in (result.report() or "")


def test_auto_expectations_consume_autogenerated_entries(tmp_path: Path) -> None:
    source = tmp_path / "auto.go"
    source.write_text(
        "package p\n"
        'type T struct{ a [0]func() } // ERRORAUTO "invalid operation: first"\n'
        'type U struct{ b [0]func() } // GC_ERRORAUTO "invalid operation: second"\n',
        encoding="utf-8",
    )
    output = (
        "# example.com/p\n"
        "<autogenerated>:1: invalid operation: first comparison (typecheck)\n"
        "<autogenerated>:1: invalid operation: second comparison (typecheck)\n"
    )

    result = error_check(output, True, "typecheck", [SourceFile.from_path(source)])

    assert result.passed

from __future__ import annotations

import pytest

from errchk.splitter import split_output

pytestmark = pytest.mark.unit


def test_continuation_lines_fold_into_previous_entry() -> None:
    output = "x.go:1: first\n\tdetail one\n\tdetail two\nx.go:2: second\n"

    assert split_output(output, want_auto=False) == [
        "x.go:1: first\n\tdetail one\n\tdetail two",
        "x.go:2: second",
    ]


def test_windows_line_endings_are_normalized() -> None:
    output = "x.go:1: first (vet)\r\n\tmore\r\nx.go:2: second (vet)\r\n"

    assert split_output(output, want_auto=False) == [
        "x.go:1: first (vet)\n\tmore",
        "x.go:2: second (vet)",
    ]


def test_noise_and_blank_lines_are_dropped() -> None:
    output = (
        "# example.com/pkg\n"
        "go tool compile: exit status 1\n"
        "<autogenerated>:1: cannot attribute (typecheck)\n"
        "   \n"
        "\n"
        "x.go:3: real error (typecheck)\n"
    )

    assert split_output(output, want_auto=False) == ["x.go:3: real error (typecheck)"]


def test_autogenerated_lines_are_kept_when_wanted() -> None:
    output = "<autogenerated>:1: cannot attribute (typecheck)\nx.go:3: real error (typecheck)\n"

    assert split_output(output, want_auto=True) == [
        "<autogenerated>:1: cannot attribute (typecheck)",
        "x.go:3: real error (typecheck)",
    ]


def test_noise_lines_do_not_start_entries_for_continuations() -> None:
    output = "x.go:1: first\n# comment\n\tstill first\n"

    assert split_output(output, want_auto=False) == ["x.go:1: first\n\tstill first"]


def test_leading_continuation_without_entry_starts_new_entry() -> None:
    output = "\tstray detail\nx.go:1: first\n"

    assert split_output(output, want_auto=False) == ["\tstray detail", "x.go:1: first"]


def test_custom_noise_prefixes() -> None:
    output = "golangci-lint: level=info\n# kept\nx.go:1: first\n"

    assert split_output(
        output,
        want_auto=False,
        banner_prefixes=("golangci-lint",),
        comment_prefixes=(),
    ) == ["# kept", "x.go:1: first"]


def test_empty_output_has_no_entries() -> None:
    assert split_output("", want_auto=False) == []
    assert split_output("\n\n\r\n", want_auto=True) == []


def test_all_trailing_carriage_returns_are_stripped() -> None:
    entries = split_output("x.go:1: first\r\r\n\tdetail\r\r\r", want_auto=False)

    assert entries == ["x.go:1: first\n\tdetail"]
    assert split_output("\n".join(entries), want_auto=False) == entries

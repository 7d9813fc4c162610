from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from .prefix import AUTOGENERATED_MARKER

DEFAULT_BANNER_PREFIXES: Final[tuple[str, ...]] = ("go tool",)
DEFAULT_COMMENT_PREFIXES: Final[tuple[str, ...]] = ("#",)


def split_output(
    output: str,
    want_auto: bool,
    *,
    banner_prefixes: Sequence[str] = DEFAULT_BANNER_PREFIXES,
    comment_prefixes: Sequence[str] = DEFAULT_COMMENT_PREFIXES,
) -> list[str]:
    """Split raw tool output into one entry per reported error.

    Messages continue onto additional lines with leading tabs; those lines are
    folded into the previous entry. Banner, comment and (unless ``want_auto``)
    ``<autogenerated>`` lines cannot be matched and are dropped.
    """
    noise = tuple(banner_prefixes) + tuple(comment_prefixes)
    entries: list[str] = []
    for raw_line in output.split("\n"):
        line = raw_line.rstrip("\r")
        if line.startswith("\t") and entries:
            entries[-1] += "\n" + line
            continue
        if line.startswith(noise):
            continue
        if not want_auto and line.startswith(AUTOGENERATED_MARKER):
            continue
        if line.strip():
            # a tab-led line with nothing before it starts its own entry
            entries.append(line)
    return entries

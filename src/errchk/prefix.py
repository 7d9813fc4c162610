from __future__ import annotations

from collections.abc import Iterable

AUTOGENERATED_MARKER = "<autogenerated>"


def match_prefix(entry: str, prefix: str) -> bool:
    """Report whether ``entry`` starts with ``prefix`` followed by ``:``.

    The file part may be preceded by a directory name, which is ignored.
    """
    colon = entry.find(":")
    if colon < 0:
        return False
    slash = entry.rfind("/", 0, colon)
    rest = entry[slash + 1 :]
    if len(rest) <= len(prefix) or not rest.startswith(prefix):
        return False
    return rest[len(prefix)] == ":"


def partition_entries(prefix: str, entries: Iterable[str]) -> tuple[list[str], list[str]]:
    matched: list[str] = []
    unmatched: list[str] = []
    for entry in entries:
        if match_prefix(entry, prefix):
            matched.append(entry)
        else:
            unmatched.append(entry)
    return matched, unmatched

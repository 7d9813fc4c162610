from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from errchk.config import ErrchkConfig, ErrchkConfigError, load_errchk_config

pytestmark = pytest.mark.unit


def test_defaults() -> None:
    config = ErrchkConfig()

    assert config.default_checker == ""
    assert config.want_auto is False
    assert config.banner_prefixes == ("go tool",)
    assert config.comment_prefixes == ("#",)


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "errchk.yaml"
    path.write_text(
        "default_checker: typecheck\n"
        "want_auto: true\n"
        "banner_prefixes:\n"
        "  - go tool\n"
        "  - 'level='\n",
        encoding="utf-8",
    )

    config = load_errchk_config(path)

    assert config.default_checker == "typecheck"
    assert config.want_auto is True
    assert config.banner_prefixes == ("go tool", "level=")
    assert config.comment_prefixes == ("#",)


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "errchk.yaml"
    path.write_text("", encoding="utf-8")

    assert load_errchk_config(path) == ErrchkConfig()


@pytest.mark.parametrize(
    ("payload", "code"),
    [
        ("unknown_key: 1\n", "E_CONFIG_INVALID"),
        ("want_auto: [1, 2]\n", "E_CONFIG_INVALID"),
        ("comment_prefixes: ['']\n", "E_CONFIG_INVALID"),
        ("- just\n- a list\n", "E_CONFIG_INVALID"),
        ("default_checker: [unclosed\n", "E_CONFIG_PARSE_FAILED"),
    ],
)
def test_invalid_config(tmp_path: Path, payload: str, code: str) -> None:
    path = tmp_path / "errchk.yaml"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(ErrchkConfigError) as exc_info:
        load_errchk_config(path)

    assert exc_info.value.code == code


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ErrchkConfigError) as exc_info:
        load_errchk_config(tmp_path / "absent.yaml")

    assert exc_info.value.code == "E_CONFIG_READ_FAILED"


def test_config_is_frozen() -> None:
    config = ErrchkConfig()

    with pytest.raises(ValidationError):
        config.want_auto = True

from .config import ErrchkConfig, ErrchkConfigError, load_errchk_config
from .errors import (
    ErrorCheckFailure,
    FixtureError,
    FixtureErrorCode,
    FixtureErrorDetail,
)
from .expectations import parse_expectation_text, parse_expectations
from .matcher import decompose_entry, error_check, match_expectations
from .models import Discrepancy, DiscrepancyKind, ExpectedError, MatchResult, SourceFile
from .prefix import match_prefix, partition_entries
from .splitter import split_output

__all__ = [
    "Discrepancy",
    "DiscrepancyKind",
    "ErrchkConfig",
    "ErrchkConfigError",
    "ErrorCheckFailure",
    "ExpectedError",
    "FixtureError",
    "FixtureErrorCode",
    "FixtureErrorDetail",
    "MatchResult",
    "SourceFile",
    "decompose_entry",
    "error_check",
    "load_errchk_config",
    "match_expectations",
    "match_prefix",
    "parse_expectation_text",
    "parse_expectations",
    "partition_entries",
    "split_output",
]

"""Runtime settings for history-export, overridable from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from history_export.browser.reader import DEFAULT_MAX_RESULTS, MAX_SQLITE_INTEGER
from history_export.exceptions import ConfigError

DEFAULT_OUTPUT_PATH = Path.home() / "Documents" / "BrowserHistory"

OUTPUT_PATH_ENV = "HISTORY_EXPORT_OUTPUT_PATH"
MAX_RESULTS_ENV = "HISTORY_EXPORT_MAX_RESULTS"


def _parse_max_results(value: object) -> int:
    try:
        max_results = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        raise ConfigError(f"max_results must be an integer, got {value!r}") from None
    if max_results < 1:
        raise ConfigError(f"max_results must be positive, got {max_results}")
    if max_results > MAX_SQLITE_INTEGER:
        raise ConfigError(f"max_results must be at most {MAX_SQLITE_INTEGER}, got {max_results}")
    return max_results


@dataclass
class ExportConfig:
    """Where exports go and how many rows to read per source."""

    output_path: Path = DEFAULT_OUTPUT_PATH
    max_results: int = DEFAULT_MAX_RESULTS

    def __post_init__(self) -> None:
        self.output_path = Path(self.output_path).expanduser()
        self.max_results = _parse_max_results(self.max_results)

    @classmethod
    def from_env(
        cls,
        output_path: str | Path | None = None,
        max_results: int | None = None,
    ) -> ExportConfig:
        """Build from the environment; explicit arguments take precedence."""
        if output_path is None:
            output_path = os.environ.get(OUTPUT_PATH_ENV) or DEFAULT_OUTPUT_PATH
        if max_results is None:
            max_results = os.environ.get(MAX_RESULTS_ENV) or DEFAULT_MAX_RESULTS
        return cls(output_path=Path(output_path), max_results=max_results)

"""Unified exception hierarchy for history-export."""


class HistoryExportError(Exception):
    """Base exception for all history-export errors."""


# Configuration
class ConfigError(HistoryExportError):
    """Invalid configuration value."""


class OutputPathError(HistoryExportError):
    """The output directory cannot be prepared."""


# Sources
class SourceError(HistoryExportError):
    """Base exception for per-source extraction failures."""


class SnapshotError(SourceError):
    """Failed to copy a live history database to a temporary snapshot."""


class QueryError(SourceError):
    """Failed to query a history database snapshot."""

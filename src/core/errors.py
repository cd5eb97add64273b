"""LedgerLens exception hierarchy.

Data-quality findings are returned as data, never raised. These errors
cover the outer boundaries only: configuration, file reading, rules
files, and exports.
"""

from __future__ import annotations


class LedgerLensError(Exception):
    """Base exception for all LedgerLens failures."""


class LedgerLensConfigError(LedgerLensError):
    """Raised for invalid runtime configuration."""


class LedgerLensIngestError(LedgerLensError):
    """Raised when a source extract cannot be read."""


class LedgerLensRulesError(LedgerLensError):
    """Raised for invalid or unreadable verification rules files."""


class LedgerLensExportError(LedgerLensError):
    """Raised when issues or canonical rows cannot be written."""

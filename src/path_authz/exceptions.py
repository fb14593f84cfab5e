"""
Exceptions for path-authz.
"""

from pathlib import Path
from typing import Optional


class PathAuthzError(Exception):
    """Base exception for path-authz errors."""

    pass


class PolicyLoadError(PathAuthzError):
    """Raised when a policy file cannot be read into a document."""

    def __init__(self, source: Path, reason: Optional[str] = None):
        self.source = source
        self.reason = reason

        message = f"Could not load policy from {source}."
        if reason:
            message += f" {reason}"

        super().__init__(message)


class ConfigurationError(PathAuthzError):
    """Raised when the service is asked to run without a usable configuration."""

    pass

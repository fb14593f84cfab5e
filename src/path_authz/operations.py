"""
Maps protocol operations onto the (repository, path, identity, access) checks
the policy engine answers.

Discovery methods need read access, mutating methods need write access and
COPY needs read access to the whole source subtree. MOVE and COPY also need
write access to their destination, and both checks must pass.
"""

from dataclasses import dataclass
from typing import Optional

from path_authz.engine.request import AccessKind, AuthzRequest, Identity
from path_authz.engine.utils import normalize_path
from path_authz.exceptions import PathAuthzError

READ_METHODS = frozenset({"OPTIONS", "GET", "PROPFIND", "REPORT"})
READ_RECURSIVE_METHODS = frozenset({"COPY"})
WRITE_METHODS = frozenset(
    {"MOVE", "MKCOL", "DELETE", "PUT", "PROPPATCH", "CHECKOUT", "MERGE", "MKACTIVITY"}
)
# Methods that carry a second, destination path
TWO_PATH_METHODS = frozenset({"MOVE", "COPY"})
# MERGE request URIs are not reliable, so its path is treated as unknown
PATHLESS_METHODS = frozenset({"MERGE"})


class MissingDestinationError(PathAuthzError):
    """Raised when a MOVE or COPY arrives without a destination."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"{method} request has no destination")


def access_kind_for(method: str) -> AccessKind:
    method = method.upper()
    if method in READ_METHODS:
        return AccessKind.READ
    if method in READ_RECURSIVE_METHODS:
        return AccessKind.READ_RECURSIVE
    # Unknown methods get the strictest check
    return AccessKind.WRITE


@dataclass(frozen=True)
class Location:
    repository: str
    path: Optional[str] = None  # None when the path could not be identified

    def __str__(self) -> str:
        return f"{self.repository}:{self.path if self.path is not None else '(unknown)'}"


@dataclass(frozen=True)
class Operation:
    method: str
    source: Location
    identity: Identity
    destination: Optional[Location] = None

    @property
    def source_path(self) -> Optional[str]:
        if self.method.upper() in PATHLESS_METHODS or self.source.path is None:
            return None
        return normalize_path(self.source.path)

    def requests(self) -> list[AuthzRequest]:
        """Checks that must all pass, source first."""
        method = self.method.upper()
        checks = [
            AuthzRequest(
                repository=self.source.repository,
                path=self.source_path,
                identity=self.identity,
                kind=access_kind_for(method),
            )
        ]
        if method not in TWO_PATH_METHODS:
            return checks

        if self.destination is None:
            raise MissingDestinationError(method)
        dest_path = self.destination.path
        checks.append(
            AuthzRequest(
                repository=self.destination.repository,
                path=normalize_path(dest_path) if dest_path is not None else None,
                identity=self.identity,
                kind=AccessKind.WRITE,
            )
        )
        return checks

    def describe(self) -> str:
        parts = [self.method.upper(), str(self.source)]
        if self.destination is not None:
            parts.append(str(self.destination))
        return " ".join(parts)

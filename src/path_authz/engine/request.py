from dataclasses import dataclass
from enum import IntEnum

from path_authz.spec.access import Access


class AccessKind(IntEnum):
    READ = 1
    WRITE = 2
    # Read access to the path and everything below it
    READ_RECURSIVE = 4

    @property
    def required(self) -> Access:
        if self == AccessKind.WRITE:
            return Access.WRITE
        return Access.READ


@dataclass(frozen=True)
class Identity:
    name: str | None = None  # None for anonymous requests

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    @classmethod
    def named(cls, name: str) -> "Identity":
        return cls(name=name)

    @property
    def is_anonymous(self) -> bool:
        return self.name is None

    def __str__(self) -> str:
        return "(anonymous)" if self.name is None else self.name


@dataclass(frozen=True)
class AuthzRequest:
    repository: str
    path: str | None  # repository-relative absolute path, None if unknown
    identity: Identity
    kind: AccessKind

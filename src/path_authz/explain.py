from __future__ import annotations

from dataclasses import dataclass

from path_authz.engine.decision import PolicyEngine
from path_authz.engine.request import AccessKind, AuthzRequest


@dataclass
class DecisionExplanation:
    repository: str
    path: str | None
    user: str
    kind: AccessKind
    allowed: bool
    deciding_section: str | None
    vetoing_section: str | None
    reason: str

    def __repr__(self) -> str:
        return self.__str__()

    def __str__(self) -> str:
        lines = [
            f"{self.kind.name} on '{self.repository}:{self.path}' (user: {self.user})",
            f"  Allowed: {self.allowed} — {self.reason}",
        ]
        if self.deciding_section:
            lines.append(f"  Deciding section: [{self.deciding_section}]")
        if self.vetoing_section:
            lines.append(f"  Vetoing section: [{self.vetoing_section}]")
        return "\n".join(lines)


def explain(engine: PolicyEngine, request: AuthzRequest) -> DecisionExplanation:
    """Build a DecisionExplanation that agrees with engine.check(request)."""
    if request.path is None:
        return _explanation(
            request, True, "Path unknown, left to path-specific checks"
        )

    access = request.kind.required
    resolution = engine.hierarchy.resolve(
        request.repository, request.path, request.identity, access
    )
    if not resolution.found:
        return _explanation(request, False, "No rule for this path or any parent")
    if not resolution.allowed:
        return _explanation(
            request, False, "Explicitly denied", deciding=resolution.section
        )

    if request.kind == AccessKind.READ_RECURSIVE:
        vetoing = engine.subtree.denying_section(
            request.repository, request.path, request.identity, access
        )
        if vetoing is not None:
            return _explanation(
                request,
                False,
                "Read is denied somewhere below this path",
                deciding=resolution.section,
                vetoing=vetoing,
            )

    return _explanation(
        request, True, "Explicitly allowed", deciding=resolution.section
    )


def _explanation(
    request: AuthzRequest,
    allowed: bool,
    reason: str,
    deciding: str | None = None,
    vetoing: str | None = None,
) -> DecisionExplanation:
    return DecisionExplanation(
        repository=request.repository,
        path=request.path,
        user=str(request.identity),
        kind=request.kind,
        allowed=allowed,
        deciding_section=deciding,
        vetoing_section=vetoing,
        reason=reason,
    )

from path_authz.engine.evaluator import RuleEvaluator
from path_authz.engine.groups import GroupRegistry
from path_authz.engine.hierarchy import HierarchyResolver
from path_authz.engine.request import AccessKind, AuthzRequest, Identity
from path_authz.engine.subtree import SubtreeVeto
from path_authz.spec.document import PolicyDocument


class PolicyEngine:
    """All evaluators bound to one document generation."""

    def __init__(self, document: PolicyDocument):
        self.document = document
        self.groups = GroupRegistry(document)
        self.evaluator = RuleEvaluator(self.groups)
        self.hierarchy = HierarchyResolver(document, self.evaluator)
        self.subtree = SubtreeVeto(document, self.evaluator)

    def decide(
        self,
        repository: str,
        path: str | None,
        identity: Identity,
        kind: AccessKind,
    ) -> bool:
        if path is None:
            return True

        access = kind.required
        allowed = self.hierarchy.resolve(repository, path, identity, access).allowed
        if kind == AccessKind.READ_RECURSIVE and allowed:
            allowed = not self.subtree.any_descendant_denies(
                repository, path, identity, access
            )
        return allowed

    def check(self, request: AuthzRequest) -> bool:
        return self.decide(
            request.repository, request.path, request.identity, request.kind
        )


def decide(
    document: PolicyDocument,
    repository: str,
    path: str | None,
    identity: Identity,
    kind: AccessKind,
) -> bool:
    """Whether `identity` may perform `kind` access on `repository`:`path`.

    A path of None means the operation's path could not be identified; that
    is always allowed and left to path-specific checks elsewhere.
    """
    return PolicyEngine(document).decide(repository, path, identity, kind)

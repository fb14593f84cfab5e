import logging
from typing import NamedTuple

from path_authz.engine.evaluator import RuleEvaluator
from path_authz.engine.request import Identity
from path_authz.engine.utils import normalize_path, parent_path
from path_authz.spec.access import Access
from path_authz.spec.document import PolicyDocument
from path_authz.spec.section import ROOT_PATH, qualified_section_name

logger = logging.getLogger(__name__)


class Resolution(NamedTuple):
    found: bool
    allowed: bool
    section: str | None = None  # name of the deciding section


NOT_FOUND = Resolution(found=False, allowed=False)


class HierarchyResolver:
    """Nearest enclosing explicit rule wins, searched from the leaf up to "/"."""

    def __init__(self, document: PolicyDocument, evaluator: RuleEvaluator):
        self.document = document
        self.evaluator = evaluator

    def resolve_at(
        self, repository: str, path: str, identity: Identity, access: Access
    ) -> Resolution:
        """Check one level: the repository-qualified section first, then the bare one."""
        for name in (qualified_section_name(repository, path), path):
            verdict = self.evaluator.evaluate_section(
                self.document.section(name), identity
            )
            if verdict.has_decision(access):
                return Resolution(True, verdict.decide(access), name)
        return NOT_FOUND

    def resolve(
        self, repository: str, path: str | None, identity: Identity, access: Access
    ) -> Resolution:
        if path is None:
            # Unidentifiable operation path: deferred to path-specific checks elsewhere.
            # This is a known coverage gap, kept as-is.
            return Resolution(found=False, allowed=True)

        path = normalize_path(path)
        current = path
        while True:
            resolution = self.resolve_at(repository, current, identity, access)
            if resolution.found:
                logger.debug(
                    f"{identity} {access.name} {repository}:{path} decided by "
                    f"[{resolution.section}]: {resolution.allowed}"
                )
                return resolution
            if current == ROOT_PATH:
                logger.debug(
                    f"{identity} {access.name} {repository}:{path}: no rule, denying"
                )
                return NOT_FOUND
            current = parent_path(current)

import logging

from path_authz.engine.evaluator import RuleEvaluator
from path_authz.engine.request import Identity
from path_authz.engine.utils import normalize_path
from path_authz.spec.access import Access
from path_authz.spec.document import PolicyDocument
from path_authz.spec.section import qualified_section_name

logger = logging.getLogger(__name__)


class SubtreeVeto:
    """Looks for an explicit denial anywhere below a path.

    Sections are selected by plain string prefix, so a check on "/foo" also
    scans "/foobar". Each section is judged on its own, without an ancestor
    walk, and a section that is silent for the identity never vetoes.
    """

    def __init__(self, document: PolicyDocument, evaluator: RuleEvaluator):
        self.document = document
        self.evaluator = evaluator

    def denying_section(
        self, repository: str, path: str, identity: Identity, access: Access
    ) -> str | None:
        path = normalize_path(path)
        for prefix in (qualified_section_name(repository, path), path):
            for section in self.document.sections_with_prefix(prefix):
                verdict = self.evaluator.evaluate_section(section, identity)
                if not verdict.decide(access):
                    logger.debug(
                        f"{identity} {access.name} below {repository}:{path} "
                        f"vetoed by [{section.name}]"
                    )
                    return section.name
        return None

    def any_descendant_denies(
        self, repository: str, path: str, identity: Identity, access: Access
    ) -> bool:
        return self.denying_section(repository, path, identity, access) is not None

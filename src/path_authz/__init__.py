from path_authz.config import AuthzConfig
from path_authz.engine.decision import PolicyEngine, decide
from path_authz.engine.evaluator import RuleEvaluator, SectionVerdict
from path_authz.engine.groups import GroupRegistry
from path_authz.engine.hierarchy import HierarchyResolver, Resolution
from path_authz.engine.request import AccessKind, AuthzRequest, Identity
from path_authz.engine.service import AuthzService, Outcome
from path_authz.engine.subtree import SubtreeVeto
from path_authz.exceptions import ConfigurationError, PathAuthzError, PolicyLoadError
from path_authz.explain import DecisionExplanation, explain
from path_authz.operations import Location, MissingDestinationError, Operation
from path_authz.spec.access import Access
from path_authz.spec.document import Group, PolicyDocument
from path_authz.spec.loader import load_policy, parse_policy
from path_authz.spec.rule import Principal, PrincipalKind, RuleEntry
from path_authz.spec.section import Section

__all__ = [
    "Access",
    "AccessKind",
    "AuthzConfig",
    "AuthzRequest",
    "AuthzService",
    "ConfigurationError",
    "DecisionExplanation",
    "Group",
    "GroupRegistry",
    "HierarchyResolver",
    "Identity",
    "Location",
    "MissingDestinationError",
    "Operation",
    "Outcome",
    "PathAuthzError",
    "PolicyDocument",
    "PolicyEngine",
    "PolicyLoadError",
    "Principal",
    "PrincipalKind",
    "Resolution",
    "RuleEntry",
    "RuleEvaluator",
    "Section",
    "SectionVerdict",
    "SubtreeVeto",
    "decide",
    "explain",
    "load_policy",
    "parse_policy",
]

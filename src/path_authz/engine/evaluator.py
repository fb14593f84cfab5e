import logging
from dataclasses import dataclass

from path_authz.engine.groups import GroupRegistry
from path_authz.engine.request import Identity
from path_authz.spec.access import Access
from path_authz.spec.rule import PrincipalKind, RuleEntry
from path_authz.spec.section import Section

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionVerdict:
    """Allow/deny bits accumulated over every entry that applies to one identity."""

    allow: Access = Access.NONE
    deny: Access = Access.NONE

    def has_decision(self, access: Access) -> bool:
        return bool((self.allow | self.deny) & access)

    def decide(self, access: Access) -> bool:
        # An allow anywhere in the section outranks a deny from another entry
        return not (self.deny & access) or bool(self.allow & access)


SILENT = SectionVerdict()


class RuleEvaluator:
    def __init__(self, groups: GroupRegistry):
        self.groups = groups

    def applies(self, entry: RuleEntry, identity: Identity) -> bool:
        principal = entry.principal
        if principal.kind == PrincipalKind.ANYONE:
            return True
        if identity.is_anonymous:
            return False
        if principal.kind == PrincipalKind.USER:
            return principal.name == identity.name
        return self.groups.is_member(principal.name, identity)

    def evaluate_section(
        self, section: Section | None, identity: Identity
    ) -> SectionVerdict:
        if section is None:
            return SILENT

        allow = Access.NONE
        deny = Access.NONE
        for entry in section.entries:
            if not self.applies(entry, identity):
                continue
            allow |= entry.grants
            deny |= entry.denies
            logger.debug(
                f"[{section.name}] {entry.principal} = {entry.permissions} "
                f"=> allow = {allow.value}, deny = {deny.value}"
            )
        return SectionVerdict(allow=allow, deny=deny)

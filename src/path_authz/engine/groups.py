from dataclasses import dataclass

from path_authz.engine.request import Identity
from path_authz.spec.document import PolicyDocument


@dataclass(frozen=True)
class GroupRegistry:
    """Resolves group names against a document's [groups] definitions.

    Membership is flat: a member written as "@other" is a literal name, not a
    reference to another group.
    """

    document: PolicyDocument

    def members(self, group_name: str) -> frozenset[str]:
        return self.document.group_members(group_name)

    def is_member(self, group_name: str, identity: Identity) -> bool:
        if identity.is_anonymous:
            return False
        return identity.name in self.members(group_name)

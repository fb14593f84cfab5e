import logging
from dataclasses import dataclass, field
from enum import Enum

from path_authz.config import AuthzConfig
from path_authz.engine.decision import PolicyEngine
from path_authz.engine.request import AuthzRequest
from path_authz.exceptions import ConfigurationError, PolicyLoadError
from path_authz.operations import MissingDestinationError, Operation
from path_authz.spec.document import PolicyDocument
from path_authz.spec.loader import load_policy

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    # Not decided here; another authorization layer may still decide
    DECLINED = "declined"


@dataclass
class AuthzService:
    config: AuthzConfig = field(default_factory=AuthzConfig)
    _engine: PolicyEngine | None = field(default=None, init=False, repr=False)

    @property
    def document(self) -> PolicyDocument | None:
        engine = self._engine
        return engine.document if engine is not None else None

    def publish(self, document: PolicyDocument) -> None:
        """Make `document` the current generation.

        This is a single reference swap: evaluations already running keep the
        engine they started with.
        """
        self._engine = PolicyEngine(document)
        logger.info(f"Published policy with {len(document.sections)} sections")

    def reload(self) -> PolicyDocument:
        if self.config.access_file is None:
            raise ConfigurationError("No access file configured")
        document = load_policy(self.config.access_file)
        self.publish(document)
        return document

    def current_engine(self) -> PolicyEngine:
        engine = self._engine
        if engine is None:
            self.reload()
            engine = self._engine
        return engine

    def can_access(self, request: AuthzRequest) -> bool:
        return self.current_engine().check(request)

    def authorize(self, operation: Operation) -> Outcome:
        if self._engine is None and self.config.access_file is None:
            return Outcome.DECLINED
        if operation.identity.is_anonymous and not self.config.anonymous:
            return Outcome.DECLINED

        try:
            engine = self.current_engine()
        except PolicyLoadError as e:
            logger.error(str(e))
            return self._refuse(operation)

        try:
            requests = operation.requests()
        except MissingDestinationError as e:
            logger.debug(str(e))
            return self._refuse(operation)

        if not all(engine.check(request) for request in requests):
            return self._refuse(operation)

        logger.info(f"Access granted: '{operation.identity}' {operation.describe()}")
        return Outcome.GRANTED

    def _refuse(self, operation: Operation) -> Outcome:
        if not self.config.authoritative:
            return Outcome.DECLINED
        logger.error(f"Access denied: '{operation.identity}' {operation.describe()}")
        return Outcome.DENIED

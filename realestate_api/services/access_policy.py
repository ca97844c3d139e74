"""
Access policy for role-gated resource operations.

Every (resource, operation) pair maps to one rule. Services ask the policy
before touching the store, so a refused operation never writes anything.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple
import logging
import uuid

from realestate_api.config import Settings
from realestate_api.models.user import User, UserRole
from realestate_api.utils.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


class Resource(str, Enum):
    USER = "user"
    REAL_ESTATE = "real_estate"
    FAVORITE = "favorite"
    VISIT = "visit"


class Operation(str, Enum):
    READ = "read"
    CREATE = "create"
    CREATE_ADMIN = "create_admin"
    UPDATE = "update"
    CHANGE_ROLE = "change_role"
    DELETE = "delete"


@dataclass(frozen=True)
class Identity:
    """Who a caller (or a target account) is: id plus role."""

    id: uuid.UUID
    role: Optional[UserRole]

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, role=user.role)

    @classmethod
    def for_id(cls, id: uuid.UUID) -> "Identity":
        """A target known only by id, before it is loaded."""
        return cls(id=id, role=None)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


RuleCheck = Callable[[Optional[Identity], Optional[Identity]], bool]


@dataclass(frozen=True)
class Rule:
    check: RuleCheck
    reason: str
    requires_identity: bool = True


def anyone(caller: Optional[Identity], target: Optional[Identity]) -> bool:
    return True


def authenticated(caller: Optional[Identity], target: Optional[Identity]) -> bool:
    return caller is not None


def admin_only(caller: Optional[Identity], target: Optional[Identity]) -> bool:
    return caller is not None and caller.is_admin


def admin_or_self(caller: Optional[Identity], target: Optional[Identity]) -> bool:
    if caller is None:
        return False
    if caller.is_admin:
        return True
    return target is not None and target.id == caller.id


def admin_on_non_admin(caller: Optional[Identity], target: Optional[Identity]) -> bool:
    # Without a target only the caller's side of the rule can be checked
    if not admin_only(caller, target):
        return False
    return target is None or not target.is_admin


DEFAULT_RULES: Dict[Tuple[Resource, Operation], Rule] = {
    (Resource.USER, Operation.CREATE): Rule(anyone, "Anyone can sign up", requires_identity=False),
    (Resource.USER, Operation.CREATE_ADMIN): Rule(
        admin_only, "Only administrators can create other administrators"
    ),
    (Resource.USER, Operation.UPDATE): Rule(
        admin_or_self, "You are not allowed to update this user's data"
    ),
    (Resource.USER, Operation.CHANGE_ROLE): Rule(
        admin_only, "Only administrators can change user roles"
    ),
    (Resource.USER, Operation.DELETE): Rule(
        admin_on_non_admin, "Only administrators can delete users, and administrators cannot be deleted"
    ),
    (Resource.REAL_ESTATE, Operation.READ): Rule(anyone, "Listings are public", requires_identity=False),
    (Resource.REAL_ESTATE, Operation.CREATE): Rule(admin_only, "Only administrators can create listings"),
    (Resource.REAL_ESTATE, Operation.UPDATE): Rule(admin_only, "Only administrators can update listings"),
    (Resource.REAL_ESTATE, Operation.DELETE): Rule(admin_only, "Only administrators can delete listings"),
    (Resource.FAVORITE, Operation.READ): Rule(authenticated, "Authentication required"),
    (Resource.FAVORITE, Operation.CREATE): Rule(authenticated, "Authentication required"),
    (Resource.FAVORITE, Operation.UPDATE): Rule(authenticated, "Authentication required"),
    (Resource.FAVORITE, Operation.DELETE): Rule(authenticated, "Authentication required"),
    (Resource.VISIT, Operation.READ): Rule(authenticated, "Authentication required"),
    (Resource.VISIT, Operation.CREATE): Rule(authenticated, "Authentication required"),
    (Resource.VISIT, Operation.UPDATE): Rule(authenticated, "Authentication required"),
    (Resource.VISIT, Operation.DELETE): Rule(authenticated, "Authentication required"),
}


class AccessPolicy:
    """
    Rule table evaluated against a caller identity and an optional target.

    Unknown (resource, operation) pairs are refused.
    """

    def __init__(self, rules: Optional[Dict[Tuple[Resource, Operation], Rule]] = None):
        self.rules = dict(DEFAULT_RULES if rules is None else rules)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessPolicy":
        rules = dict(DEFAULT_RULES)
        if not settings.public_real_estate_reads:
            rules[(Resource.REAL_ESTATE, Operation.READ)] = Rule(authenticated, "Authentication required")
        return cls(rules)

    def rule_for(self, resource: Resource, operation: Operation) -> Optional[Rule]:
        return self.rules.get((resource, operation))

    def is_allowed(
        self,
        resource: Resource,
        operation: Operation,
        caller: Optional[Identity],
        target: Optional[Identity] = None
    ) -> bool:
        rule = self.rule_for(resource, operation)
        if rule is None:
            return False
        return rule.check(caller, target)

    def enforce(
        self,
        resource: Resource,
        operation: Operation,
        caller: Optional[Identity],
        target: Optional[Identity] = None
    ) -> None:
        """
        Raise unless the caller may perform the operation.

        Raises:
            UnauthorizedError: If the rule needs an identity and there is none
            ForbiddenError: If the caller is identified but not allowed
        """
        rule = self.rule_for(resource, operation)
        if rule is None:
            logger.warning(f"No access rule for {resource.value}:{operation.value}, refusing")
            raise ForbiddenError(f"Operation {operation.value} is not allowed on {resource.value}")

        if rule.check(caller, target):
            return

        if caller is None and rule.requires_identity:
            raise UnauthorizedError("Authentication token required")

        logger.info(
            f"Access denied: {resource.value}:{operation.value} for "
            f"{caller.id if caller else 'anonymous'} ({caller.role.value if caller else '-'})"
        )
        raise ForbiddenError(rule.reason)

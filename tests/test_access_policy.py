"""
Tests for the declarative access policy.
"""

import pytest
import uuid

from realestate_api.models.user import UserRole
from realestate_api.services.access_policy import (
    AccessPolicy,
    Identity,
    Operation,
    Resource,
    Rule,
    anyone,
)
from realestate_api.utils.exceptions import ForbiddenError, UnauthorizedError
from tests.conftest import make_settings


def identity(role: UserRole = UserRole.USER) -> Identity:
    return Identity(id=uuid.uuid4(), role=role)


class TestUserRules:
    """Rules guarding account operations."""

    def test_signup_open_to_anonymous(self):
        policy = AccessPolicy()
        policy.enforce(Resource.USER, Operation.CREATE, None)

    def test_admin_creation_requires_admin(self):
        policy = AccessPolicy()
        policy.enforce(Resource.USER, Operation.CREATE_ADMIN, identity(UserRole.ADMIN))

        with pytest.raises(ForbiddenError):
            policy.enforce(Resource.USER, Operation.CREATE_ADMIN, identity())

    def test_admin_creation_anonymous_is_unauthorized(self):
        with pytest.raises(UnauthorizedError):
            AccessPolicy().enforce(Resource.USER, Operation.CREATE_ADMIN, None)

    def test_update_self_allowed(self):
        caller = identity()
        assert AccessPolicy().is_allowed(Resource.USER, Operation.UPDATE, caller, caller)

    def test_update_other_user_forbidden(self):
        policy = AccessPolicy()
        with pytest.raises(ForbiddenError, match="not allowed to update"):
            policy.enforce(Resource.USER, Operation.UPDATE, identity(), identity())

    def test_admin_updates_anyone(self):
        policy = AccessPolicy()
        assert policy.is_allowed(Resource.USER, Operation.UPDATE, identity(UserRole.ADMIN), identity())
        assert policy.is_allowed(
            Resource.USER, Operation.UPDATE, identity(UserRole.ADMIN), identity(UserRole.ADMIN)
        )

    def test_only_admin_changes_roles(self):
        policy = AccessPolicy()
        caller = identity()
        assert not policy.is_allowed(Resource.USER, Operation.CHANGE_ROLE, caller, caller)
        assert policy.is_allowed(Resource.USER, Operation.CHANGE_ROLE, identity(UserRole.ADMIN), caller)

    def test_delete_requires_admin_and_non_admin_target(self):
        policy = AccessPolicy()
        admin = identity(UserRole.ADMIN)

        assert policy.is_allowed(Resource.USER, Operation.DELETE, admin, identity())
        assert not policy.is_allowed(Resource.USER, Operation.DELETE, admin, identity(UserRole.ADMIN))
        assert not policy.is_allowed(Resource.USER, Operation.DELETE, identity(), identity())

    def test_delete_without_target_checks_caller_only(self):
        policy = AccessPolicy()
        assert policy.is_allowed(Resource.USER, Operation.DELETE, identity(UserRole.ADMIN))
        assert not policy.is_allowed(Resource.USER, Operation.DELETE, identity())


class TestResourceRules:
    """Rules guarding listings, favorites and visits."""

    @pytest.mark.parametrize("operation", [Operation.CREATE, Operation.UPDATE, Operation.DELETE])
    def test_listing_writes_are_admin_only(self, operation):
        policy = AccessPolicy()
        assert policy.is_allowed(Resource.REAL_ESTATE, operation, identity(UserRole.ADMIN))
        with pytest.raises(ForbiddenError):
            policy.enforce(Resource.REAL_ESTATE, operation, identity())

    def test_listing_reads_are_public_by_default(self):
        policy = AccessPolicy.from_settings(make_settings())
        policy.enforce(Resource.REAL_ESTATE, Operation.READ, None)

    def test_listing_reads_can_require_authentication(self):
        policy = AccessPolicy.from_settings(make_settings(public_real_estate_reads=False))

        with pytest.raises(UnauthorizedError):
            policy.enforce(Resource.REAL_ESTATE, Operation.READ, None)
        policy.enforce(Resource.REAL_ESTATE, Operation.READ, identity())

    @pytest.mark.parametrize("resource", [Resource.FAVORITE, Resource.VISIT])
    @pytest.mark.parametrize("operation", [Operation.READ, Operation.CREATE, Operation.UPDATE, Operation.DELETE])
    def test_favorites_and_visits_need_any_identity(self, resource, operation):
        policy = AccessPolicy()
        policy.enforce(resource, operation, identity())

        with pytest.raises(UnauthorizedError):
            policy.enforce(resource, operation, None)

    def test_unknown_rule_is_refused(self):
        policy = AccessPolicy()
        assert not policy.is_allowed(Resource.FAVORITE, Operation.CHANGE_ROLE, identity(UserRole.ADMIN))
        with pytest.raises(ForbiddenError):
            policy.enforce(Resource.FAVORITE, Operation.CHANGE_ROLE, identity(UserRole.ADMIN))

    def test_custom_rule_table(self):
        policy = AccessPolicy({
            (Resource.VISIT, Operation.READ): Rule(anyone, "Open", requires_identity=False)
        })
        policy.enforce(Resource.VISIT, Operation.READ, None)
        assert policy.rule_for(Resource.VISIT, Operation.CREATE) is None

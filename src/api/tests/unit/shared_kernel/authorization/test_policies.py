"""Unit tests for route policies and their evaluation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from shared_kernel.authorization import (
    Ability,
    Action,
    Grant,
    PolicyEvaluator,
    Subject,
    any_of,
    can,
    can_any_or_own,
)
from shared_kernel.exceptions import ForbiddenError

READ_USER = can_any_or_own(Action.READ_ANY, Action.READ_OWN, Subject.USER)


def ability_of(*pairs: tuple[Action, Subject]) -> Ability:
    return Ability(Grant(action, subject) for action, subject in pairs)


class TestCan:
    """Tests for the plain ability check."""

    def test_passes_when_granted(self, principal_factory, request_factory) -> None:
        policy = can(Action.CREATE, Subject.ORGANIZATION)
        ability = ability_of((Action.CREATE, Subject.ORGANIZATION))

        assert policy(ability, principal_factory(), request_factory())

    def test_fails_when_not_granted(self, principal_factory, request_factory) -> None:
        policy = can(Action.DELETE, Subject.ORGANIZATION)
        ability = ability_of((Action.CREATE, Subject.ORGANIZATION))

        assert not policy(ability, principal_factory(), request_factory())

    def test_has_readable_name(self) -> None:
        assert can(Action.READ_ANY, Subject.ROLE).__name__ == "can(readAny, Role)"


class TestCanAnyOrOwn:
    """Tests for the any-or-own path parameter policy."""

    def test_any_grant_reads_others(self, principal_factory, request_factory) -> None:
        ability = ability_of((Action.READ_ANY, Subject.USER))
        request = request_factory(path_params={"id": "99"})

        assert READ_USER(ability, principal_factory(user_id=7), request)

    def test_own_grant_reads_self(self, principal_factory, request_factory) -> None:
        ability = ability_of((Action.READ_OWN, Subject.USER))
        request = request_factory(path_params={"id": "7"})

        assert READ_USER(ability, principal_factory(user_id=7), request)

    def test_own_grant_denies_others(self, principal_factory, request_factory) -> None:
        ability = ability_of((Action.READ_OWN, Subject.USER))
        request = request_factory(path_params={"id": "8"})

        assert not READ_USER(ability, principal_factory(user_id=7), request)

    def test_own_grant_matches_zero_padded_id(
        self, principal_factory, request_factory
    ) -> None:
        """The route parses "007" as id 7, so the policy must agree."""
        ability = ability_of((Action.READ_OWN, Subject.USER))
        request = request_factory(path_params={"id": "007"})

        assert READ_USER(ability, principal_factory(user_id=7), request)

    def test_own_grant_denies_non_numeric_id(
        self, principal_factory, request_factory
    ) -> None:
        ability = ability_of((Action.READ_OWN, Subject.USER))
        request = request_factory(path_params={"id": "me"})

        assert not READ_USER(ability, principal_factory(user_id=7), request)

    def test_own_grant_denies_without_param(
        self, principal_factory, request_factory
    ) -> None:
        ability = ability_of((Action.READ_OWN, Subject.USER))

        assert not READ_USER(ability, principal_factory(user_id=7), request_factory())

    def test_no_grant_denies_self(self, principal_factory, request_factory) -> None:
        request = request_factory(path_params={"id": "7"})

        assert not READ_USER(Ability(), principal_factory(user_id=7), request)

    def test_custom_param_name(self, principal_factory, request_factory) -> None:
        policy = can_any_or_own(
            Action.UPDATE_ANY, Action.UPDATE_OWN, Subject.USER, param="user_id"
        )
        ability = ability_of((Action.UPDATE_OWN, Subject.USER))
        request = request_factory(path_params={"user_id": "7"})

        assert policy(ability, principal_factory(user_id=7), request)


class TestAnyOf:
    """Tests for disjunction of policies."""

    def test_passes_if_one_passes(self, principal_factory, request_factory) -> None:
        policy = any_of(
            can(Action.READ_ONE, Subject.ORGANIZATION),
            can(Action.READ_ANY, Subject.ORGANIZATION),
        )
        ability = ability_of((Action.READ_ANY, Subject.ORGANIZATION))

        assert policy(ability, principal_factory(), request_factory())

    def test_fails_if_none_pass(self, principal_factory, request_factory) -> None:
        policy = any_of(
            can(Action.READ_ONE, Subject.ORGANIZATION),
            can(Action.READ_ANY, Subject.ORGANIZATION),
        )

        assert not policy(Ability(), principal_factory(), request_factory())


class TestPolicyEvaluator:
    """Tests for ordered, short-circuiting enforcement."""

    def test_empty_policy_list_passes(self, principal_factory, request_factory) -> None:
        probe = MagicMock()
        PolicyEvaluator(probe=probe).enforce(
            [], Ability(), principal_factory(), request_factory()
        )
        probe.policies_granted.assert_called_once()

    def test_all_must_pass(self, principal_factory, request_factory) -> None:
        evaluator = PolicyEvaluator(probe=MagicMock())
        ability = ability_of((Action.READ_ANY, Subject.USER))

        with pytest.raises(ForbiddenError):
            evaluator.enforce(
                [can(Action.READ_ANY, Subject.USER), can(Action.DELETE, Subject.USER)],
                ability,
                principal_factory(),
                request_factory(),
            )

    def test_stops_at_first_denial(self, principal_factory, request_factory) -> None:
        later = MagicMock(return_value=True)
        denying = can(Action.DELETE, Subject.USER)
        evaluator = PolicyEvaluator(probe=MagicMock())

        denied = evaluator.first_denial(
            [denying, later], Ability(), principal_factory(), request_factory()
        )

        assert denied is denying
        later.assert_not_called()

    def test_denial_reports_policy_and_path(
        self, principal_factory, request_factory
    ) -> None:
        probe = MagicMock()

        with pytest.raises(ForbiddenError):
            PolicyEvaluator(probe=probe).enforce(
                [can(Action.DELETE, Subject.USER)],
                Ability(),
                principal_factory(user_id=7),
                request_factory(path="/users/8"),
            )

        probe.policy_denied.assert_called_once_with(7, "can(delete, User)", "/users/8")

    def test_evaluate_returns_verdict(self, principal_factory, request_factory) -> None:
        evaluator = PolicyEvaluator(probe=MagicMock())
        ability = ability_of((Action.READ_ANY, Subject.USER))
        principal = principal_factory()
        request = request_factory()

        assert evaluator.evaluate(
            [can(Action.READ_ANY, Subject.USER)], ability, principal, request
        )
        assert not evaluator.evaluate(
            [can(Action.DELETE, Subject.USER)], ability, principal, request
        )

    def test_evaluate_reports_denial(self, principal_factory, request_factory) -> None:
        probe = MagicMock()

        allowed = PolicyEvaluator(probe=probe).evaluate(
            [can(Action.DELETE, Subject.USER)],
            Ability(),
            principal_factory(user_id=7),
            request_factory(path="/users/8"),
        )

        assert allowed is False
        probe.policy_denied.assert_called_once_with(7, "can(delete, User)", "/users/8")
        probe.policies_granted.assert_not_called()

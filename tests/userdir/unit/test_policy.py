"""Unit tests for validation policies."""

import pytest

from userdir.exceptions import PolicyFailure, PolicyFailureError
from userdir.policy import PermissivePolicy, Policy, enforce_policy


class RecordingPolicy(Policy):
    """Rejects the configured fields and records every check it runs."""

    def __init__(self, reject: set[str] | None = None):
        self.reject = reject or set()
        self.calls: list[str] = []

    def _check(self, field: str) -> bool:
        self.calls.append(field)
        return field not in self.reject

    def check_username(self, username: str) -> bool:
        return self._check("username")

    def check_email(self, email: str) -> bool:
        return self._check("email")

    def check_screen_name(self, screen_name: str) -> bool:
        return self._check("screen_name")

    def check_password(self, password: str) -> bool:
        return self._check("password")


class TestPermissivePolicy:
    @pytest.mark.parametrize("value", ["", "alice", " ", "ünïcode"])
    def test_accepts_everything(self, value):
        policy = PermissivePolicy()

        assert policy.check_username(value)
        assert policy.check_email(value)
        assert policy.check_screen_name(value)
        assert policy.check_password(value)

    def test_policy_is_abstract(self):
        with pytest.raises(TypeError):
            Policy()  # type: ignore[abstract]


class TestEnforcePolicy:
    def test_passes_when_all_checks_pass(self):
        policy = RecordingPolicy()

        enforce_policy(policy, "alice", "a@x.com", "Al", "secret")

        assert policy.calls == ["username", "email", "screen_name", "password"]

    @pytest.mark.parametrize(
        ("reject", "failure", "calls"),
        [
            ({"username"}, PolicyFailure.USERNAME, ["username"]),
            ({"email"}, PolicyFailure.EMAIL, ["username", "email"]),
            (
                {"screen_name"},
                PolicyFailure.SCREEN_NAME,
                ["username", "email", "screen_name"],
            ),
            (
                {"password"},
                PolicyFailure.PASSWORD,
                ["username", "email", "screen_name", "password"],
            ),
            (
                {"email", "password"},
                PolicyFailure.EMAIL,
                ["username", "email"],
            ),
        ],
    )
    def test_stops_at_first_failure(self, reject, failure, calls):
        """Checks run in fixed order and stop at the first rejection."""
        policy = RecordingPolicy(reject)

        with pytest.raises(PolicyFailureError) as exc_info:
            enforce_policy(policy, "alice", "a@x.com", "Al", "secret")

        assert exc_info.value.failure is failure
        assert policy.calls == calls

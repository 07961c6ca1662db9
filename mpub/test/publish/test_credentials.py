"""Tests for mpub.publish.credentials module."""

from __future__ import annotations

import pytest

from mpub.publish.credentials import (
    Credential,
    env_var_name,
    password_key,
    resolve,
    resolve_value,
    username_key,
)


class TestKeys:
    def test_property_keys(self) -> None:
        assert username_key("mavenCentral") == "mavenCentralUsername"
        assert password_key("mavenCentral") == "mavenCentralPassword"

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("mavenCentralUsername", "MAVEN_CENTRAL_USERNAME"),
            ("signingPassword", "SIGNING_PASSWORD"),
            ("ossrh.username", "OSSRH_USERNAME"),
            ("token", "TOKEN"),
        ],
    )
    def test_env_var_name(self, key: str, expected: str) -> None:
        assert env_var_name(key) == expected


class TestResolveValue:
    def test_property_takes_precedence(self) -> None:
        value = resolve_value(
            "mavenCentralUsername",
            properties={"mavenCentralUsername": "from-props"},
            environ={"MAVEN_CENTRAL_USERNAME": "from-env"},
        )
        assert value == "from-props"

    def test_falls_back_to_environment(self) -> None:
        value = resolve_value(
            "mavenCentralUsername",
            properties={},
            environ={"MAVEN_CENTRAL_USERNAME": "from-env"},
        )
        assert value == "from-env"

    def test_blank_property_counts_as_unset(self) -> None:
        value = resolve_value(
            "mavenCentralUsername",
            properties={"mavenCentralUsername": "  "},
            environ={"MAVEN_CENTRAL_USERNAME": "from-env"},
        )
        assert value == "from-env"

    def test_absent(self) -> None:
        assert resolve_value("mavenCentralUsername", properties={}, environ={}) is None


class TestResolve:
    def test_from_properties(self) -> None:
        credential = resolve(
            "mavenCentral",
            properties={"mavenCentralUsername": "alice", "mavenCentralPassword": "s3cret"},
            environ={"MAVEN_CENTRAL_USERNAME": "bob", "MAVEN_CENTRAL_PASSWORD": "other"},
        )
        assert credential == Credential(username="alice", secret="s3cret")

    def test_from_environment(self) -> None:
        credential = resolve(
            "mavenCentral",
            properties={},
            environ={"MAVEN_CENTRAL_USERNAME": "bob", "MAVEN_CENTRAL_PASSWORD": "other"},
        )
        assert credential == Credential(username="bob", secret="other")

    def test_halves_can_come_from_different_sources(self) -> None:
        credential = resolve(
            "mavenCentral",
            properties={"mavenCentralUsername": "alice"},
            environ={"MAVEN_CENTRAL_PASSWORD": "from-env"},
        )
        assert credential == Credential(username="alice", secret="from-env")

    def test_absent_when_neither_source_has_it(self) -> None:
        assert resolve("mavenCentral", properties={}, environ={}) is None

    def test_absent_when_secret_missing(self) -> None:
        credential = resolve(
            "mavenCentral", properties={"mavenCentralUsername": "alice"}, environ={}
        )
        assert credential is None

    def test_idempotent(self) -> None:
        props = {"tokenUsername": "u", "tokenPassword": "p"}
        assert resolve("token", properties=props, environ={}) == resolve(
            "token", properties=props, environ={}
        )

    def test_secret_not_in_repr(self) -> None:
        credential = Credential(username="alice", secret="s3cret")
        assert "s3cret" not in repr(credential)
        assert "alice" in repr(credential)

"""Tests for mpub.core.result module."""

import pytest

from mpub.core.result import Err, Ok, Result, is_err, is_ok


def _parse_port(text: str) -> Result[int, str]:
    if not text.isdigit():
        return Err(f"not a port: {text}")
    return Ok(int(text))


class TestOk:
    def test_unwrap(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(42).unwrap_or(0) == 42

    def test_unwrap_err_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap_err on Ok"):
            Ok(42).unwrap_err()

    def test_map(self) -> None:
        assert Ok(2).map(lambda v: v * 10) == Ok(20)

    def test_map_err_is_noop(self) -> None:
        ok = Ok(1)
        assert ok.map_err(str) is ok


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_err(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")

    def test_frozen(self) -> None:
        err = Err("boom")
        with pytest.raises(AttributeError):
            err.error = "other"  # type: ignore[misc]


class TestTypeGuards:
    def test_is_ok(self) -> None:
        assert is_ok(_parse_port("8080"))
        assert not is_ok(_parse_port("http"))

    def test_is_err(self) -> None:
        assert is_err(_parse_port("http"))

    def test_pattern_matching(self) -> None:
        match _parse_port("http"):
            case Ok(value):
                pytest.fail(f"unexpected {value}")
            case Err(error):
                assert error == "not a port: http"

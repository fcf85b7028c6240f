"""Tests for relkit.core.result module."""

import pytest

from relkit.core.result import Err, Ok, Result


class TestOk:
    """Tests for Ok type."""

    def test_create_ok(self) -> None:
        assert Ok(42).value == 42

    def test_ok_map_err(self) -> None:
        """Ok.map_err() returns self unchanged."""
        assert Ok(42).map_err(lambda e: f"error: {e}") == Ok(42)

    def test_ok_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]


class TestErr:
    """Tests for Err type."""

    def test_create_err(self) -> None:
        assert Err("boom").error == "boom"

    def test_err_map_err(self) -> None:
        """Err.map_err() transforms the error."""
        assert Err("boom").map_err(str.upper) == Err("BOOM")


class TestPatternMatching:
    def test_match_ok_and_err(self) -> None:
        def describe(result: Result[int, str]) -> str:
            match result:
                case Ok(value):
                    return f"value={value}"
                case Err(error):
                    return f"error={error}"

        assert describe(Ok(1)) == "value=1"
        assert describe(Err("x")) == "error=x"


def test_repr() -> None:
    assert repr(Ok("a")) == "Ok('a')"
    assert repr(Err(3)) == "Err(3)"

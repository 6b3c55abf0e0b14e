"""Tests for formality.result — the tri-state Result type."""

from formality.result import ABSENT, Absent, Failed, Present, as_result


class TestPresent:
    def test_map(self) -> None:
        assert Present(2).map(lambda n: n * 10) == Present(20)

    def test_or_else_returns_value(self) -> None:
        assert Present("x").or_else("default") == "x"

    def test_truthy(self) -> None:
        assert Present(0)
        assert Present(0).is_present is True


class TestFailed:
    def test_defaults(self) -> None:
        failed = Failed("Nope")
        assert failed.message == "Nope"
        assert failed.cause is None
        assert failed.errors == ()

    def test_map_is_identity(self) -> None:
        failed = Failed("Nope", errors=("A",))
        assert failed.map(lambda v: v + 1) is failed

    def test_or_else_returns_default(self) -> None:
        assert Failed("Nope").or_else("") == ""

    def test_falsy(self) -> None:
        assert not Failed("Nope")


class TestAbsent:
    def test_singleton_equality(self) -> None:
        assert Absent() == ABSENT

    def test_map_and_or_else(self) -> None:
        assert ABSENT.map(str) is ABSENT
        assert ABSENT.or_else("fallback") == "fallback"

    def test_falsy(self) -> None:
        assert not ABSENT
        assert ABSENT.is_present is False


class TestPatternMatching:
    def _describe(self, result: object) -> str:
        match result:
            case Present(value):
                return f"present:{value}"
            case Failed(message, errors=errors):
                return f"failed:{message}:{','.join(errors)}"
            case Absent():
                return "absent"
        return "other"

    def test_each_state_matches_its_case(self) -> None:
        assert self._describe(Present(1)) == "present:1"
        assert self._describe(Failed("bad", errors=("A", "B"))) == "failed:bad:A,B"
        assert self._describe(ABSENT) == "absent"


class TestAsResult:
    def test_wraps_plain_value(self) -> None:
        assert as_result("Dat value") == Present("Dat value")

    def test_none_is_absent(self) -> None:
        assert as_result(None) is ABSENT

    def test_results_pass_through(self) -> None:
        failed = Failed("x")
        assert as_result(failed) is failed
        assert as_result(ABSENT) is ABSENT

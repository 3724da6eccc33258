#
# PrettyBytes - Tools Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from prettybytes.tools import fmt_choices, fmt_type, fmt_value
from prettybytes.units import UnitSystem


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtType:

    @pytest.mark.parametrize("obj, expected", [
        pytest.param(42, "<type: int>", id="instance"),
        pytest.param(float, "<type: float>", id="type"),
        pytest.param(ValueError("x"), "<type: ValueError>", id="exception"),
    ])
    def test_fmt_type(self, obj, expected):
        assert fmt_type(obj) == expected


class TestFmtValue:

    def test_basic(self):
        assert fmt_value(1024) == "<int: 1024>"
        assert fmt_value("abc") == "<str: 'abc'>"

    def test_truncate_quoted(self):
        assert fmt_value("9" * 100, max_repr=8) == "<str: '9999'...>"

    def test_truncate_unquoted(self):
        assert fmt_value(10 ** 30, max_repr=5) == "<int: 10000...>"

    def test_ascii_escapes_bracket(self):
        assert fmt_value("a>b") == "<str: 'a\\>b'>"

    def test_broken_repr(self):
        class Broken:
            def __repr__(self):
                raise RuntimeError("boom")

        assert "repr failed: RuntimeError" in fmt_value(Broken())


def test_fmt_choices():
    assert fmt_choices(["B", "kB"]) == "'B', 'kB'"
    assert fmt_choices(UnitSystem) == "'decimal', 'binary'"

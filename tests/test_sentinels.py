#
# Vpretty - Sentinels Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import copy
import pickle

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from vpretty.sentinels import MISSING, UNSET, MissingType, UnsetType, ifunset
from vpretty.text import render


# Tests ----------------------------------------------------------------------------------------------------------------

class TestSentinels:
    @pytest.mark.parametrize(
        "sentinel, cls, name",
        [
            pytest.param(UNSET, UnsetType, "<UNSET>", id="unset"),
            pytest.param(MISSING, MissingType, "<MISSING>", id="missing"),
        ],
    )
    def test_singleton(self, sentinel, cls, name):
        """Instantiation, copy and pickling all return the same object."""
        assert cls() is sentinel
        assert copy.copy(sentinel) is sentinel
        assert copy.deepcopy(sentinel) is sentinel
        assert pickle.loads(pickle.dumps(sentinel)) is sentinel
        assert repr(sentinel) == name

    def test_distinct(self):
        assert UNSET is not MISSING
        assert UNSET != MISSING

    def test_falsy(self):
        assert not UNSET
        assert not MISSING

    def test_rendered_by_name(self):
        """Sentinels render through their pretty_print() method."""
        assert render(UNSET) == "<UNSET>"
        assert render([MISSING]) == "[\n\t<MISSING>\n]"


class TestIfUnset:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(UNSET, "default", id="unset"),
            pytest.param(None, None, id="none-is-a-value"),
            pytest.param("", "", id="empty-is-a-value"),
            pytest.param(MISSING, MISSING, id="missing-is-a-value"),
        ],
    )
    def test_ifunset(self, value, expected):
        assert ifunset(value, default="default") == expected

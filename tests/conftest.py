#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from prettybytes.numeric import U64_MAX
from prettybytes.pretty import PrettyConf


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def decimal_conf() -> PrettyConf:
    """Decimal units, 2 digits."""
    return PrettyConf.decimal(2)


@pytest.fixture
def binary_conf() -> PrettyConf:
    """Binary units, 2 digits."""
    return PrettyConf.binary(2)


@pytest.fixture(params=[
    pytest.param(0, id="zero"),
    pytest.param(1, id="one"),
    pytest.param(2 ** 53 - 1, id="float_exact_max"),
    pytest.param(2 ** 53 + 1, id="above_float_exact"),
    pytest.param(2 ** 63, id="2^63"),
    pytest.param(U64_MAX, id="u64_max"),
])
def large_raw(request) -> int:
    """Byte counts around the IEEE-754 exact-integer limit and the top of the 64-bit range."""
    return request.param

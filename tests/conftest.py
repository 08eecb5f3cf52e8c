import pytest

from arns.common import Common


@pytest.fixture(autouse=True)
def reset_common():
    yield
    Common.Configuration = None
    Common._logholder = None
    Common.jqc = {}
    Common.initialized = False


@pytest.fixture
def confdir(tmp_path):
    return tmp_path / "arns"

import sys

import pytest

import chaintable.shared


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_call(item):
    # chaintable.shared binds stderr at import time; point it at the
    # stream installed by the test's capture fixture for the test call.
    saved = chaintable.shared.stderr
    chaintable.shared.stderr = sys.stderr
    try:
        yield
    finally:
        chaintable.shared.stderr = saved

"""Global conftest.py

This conftest is used for unit tests in ``tests/unittests/``.

Any imports that are performed at the top-level here must be installed wherever
any of these tests run: that is to say, they must be listed in
``test-requirements.txt``.
"""
from unittest import mock

import pytest

from firstboot import subp


class UnexpectedSubpError(BaseException):
    """Error thrown when subp.subp is unexpectedly used.

    We inherit from BaseException so it doesn't get silently swallowed
    by other error handlers.
    """


@pytest.fixture(autouse=True)
def disable_subp_usage(request):
    """
    Across all (pytest) tests, ensure that subp.subp is not invoked.

    Provisioning shells out to mount, ifconfig, rcctl and friends; none of
    those may run on the test host. Tests that need a command patch
    ``firstboot.subp.subp`` themselves, which overrides this patch.

    To allow a particular test method or class to use ``subp.subp`` you can
    mark it as such::

        @pytest.mark.allow_all_subp
        def test_whoami(self):
            subp.subp(["whoami"])
    """
    if request.node.get_closest_marker("allow_all_subp") is not None:
        yield
        return

    def side_effect(args, *other_args, **kwargs):
        raise UnexpectedSubpError("Unexpectedly used subp.subp: %s" % args)

    with mock.patch.object(subp, "subp", autospec=True) as m_subp:
        m_subp.side_effect = side_effect
        yield


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "allow_all_subp: allow subp.subp to run real commands"
    )

import os
import pytest

import warren
import unitbroker


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """ Keep site-wide WARREN_AMQP_* settings from leaking into the tests.
    """

    for name in list(os.environ):
        if name.startswith(warren.config.prefix):
            monkeypatch.delenv(name)


@pytest.fixture
def connected():

    transport = unitbroker.ScriptedTransport(unitbroker.session())
    client = warren.Client(transport=transport)
    client.connect()
    transport.clear()

    yield client, transport


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

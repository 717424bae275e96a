import msgspec
import pytest

import warren


def test_defaults():

    params = warren.config.parameters()

    assert params.host == 'localhost'
    assert params.port == 5672
    assert params.vhost == '/'
    assert params.user == 'guest'
    assert params.insist == False
    assert params.logging == False
    assert params.max_redirects == 10


def test_environment(monkeypatch):

    monkeypatch.setenv('WARREN_AMQP_HOST', 'broker.example.com')
    monkeypatch.setenv('WARREN_AMQP_PORT', '5673')
    monkeypatch.setenv('WARREN_AMQP_INSIST', 'true')

    params = warren.config.parameters()

    assert params.host == 'broker.example.com'
    assert params.port == 5673
    assert params.insist == True


def test_explicit_beats_environment(monkeypatch):

    monkeypatch.setenv('WARREN_AMQP_PORT', '5673')

    params = warren.config.parameters(port=5674)
    assert params.port == 5674

    client = warren.Client(port=5675)
    assert client.port == 5675


def test_bad_values(monkeypatch):

    with pytest.raises(TypeError):
        warren.config.parameters(hostname='broker')

    monkeypatch.setenv('WARREN_AMQP_PORT', 'amqp')

    with pytest.raises(msgspec.ValidationError):
        warren.config.parameters()


def test_frozen():

    params = warren.config.parameters(password='sekrit')

    with pytest.raises(AttributeError):
        params.host = 'elsewhere'

    assert 'sekrit' not in repr(params)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

import pytest

import warren
import unitbroker
from amqp import serialization
from warren.handshake import HandshakeState, parse_address
from warren.protocol import methods


def test_redirect():

    first = unitbroker.redirect('broker2:5673')
    second = unitbroker.session()

    transport = unitbroker.ScriptedTransport(first, second)
    client = warren.Client(transport=transport, host='broker1', port=5672)

    assert client.connect() == 'connected'

    assert transport.connects == [('broker1', 5672), ('broker2', 5673)]
    assert transport.closes == 1
    assert client.host == 'broker2'
    assert client.port == 5673
    assert client.handshake.redirects == 1
    assert client.handshake.state == HandshakeState.ACCESS_GRANTED

    # The restarted handshake preserves everything but the address.

    opened = [command for command in transport.methods(1) if isinstance(command, methods.ConnectionOpen)]
    assert len(opened) == 1
    assert opened[0].virtual_host == '/'
    assert bytes(transport.sent[1]).startswith(warren.protocol.fields.PROTOCOL_HEADER)


def test_redirect_insist():

    transport = unitbroker.ScriptedTransport(unitbroker.redirect('broker2:5673'), unitbroker.session())
    client = warren.Client(transport=transport, host='broker1', insist=True)

    with pytest.raises(warren.ConnectionError, match='broker1'):
        client.connect()

    assert transport.connects == [('broker1', 5672)]
    assert client.status == 'not_connected'
    assert client.host == 'broker1'

    opened = [command for command in transport.methods() if isinstance(command, methods.ConnectionOpen)]
    assert opened[0].insist == True


def test_redirect_limit():

    scripts = [unitbroker.redirect('broker%d' % (number)) for number in range(2, 6)]
    transport = unitbroker.ScriptedTransport(*scripts)
    client = warren.Client(transport=transport, host='broker1', max_redirects=2)

    with pytest.raises(warren.ConnectionError, match='gave up after 2 redirects'):
        client.connect()

    assert transport.connects == [('broker1', 5672), ('broker2', 5672), ('broker3', 5672)]
    assert client.status == 'not_connected'


def test_redirect_unlimited():

    scripts = [unitbroker.redirect('broker%d' % (number)) for number in range(2, 15)]
    scripts.append(unitbroker.session())
    transport = unitbroker.ScriptedTransport(*scripts)
    client = warren.Client(transport=transport, max_redirects=None)

    client.connect()

    assert client.host == 'broker14'
    assert client.handshake.redirects == 13


def test_parse_address():

    assert parse_address('broker2:5673') == ('broker2', 5673)
    assert parse_address('broker2') == ('broker2', 5672)

    with pytest.raises(warren.ProtocolError):
        parse_address('broker2:amqp')


def test_start_ok():

    transport = unitbroker.ScriptedTransport(unitbroker.session())
    client = warren.Client(transport=transport, user='alice', password='sekrit', vhost='/test')
    client.connect()

    start_ok, tune_ok, open = transport.methods()[:3]

    assert start_ok.mechanism == 'AMQPLAIN'
    assert start_ok.locale == 'en_US'
    assert start_ok.client_properties['product'] == 'warren'

    # The AMQPLAIN response is a field table without its length prefix.

    response = start_ok.response
    if isinstance(response, str):
        response = response.encode('utf-8', 'surrogatepass')

    prefixed = len(response).to_bytes(4, 'big') + response
    (login,), offset = serialization.loads('F', prefixed, 0)
    assert login == {'LOGIN': 'alice', 'PASSWORD': 'sekrit'}

    assert open.virtual_host == '/test'
    assert open.insist == False


def test_tune_echoes_requested_values():

    script = unitbroker.session()
    script[1] = unitbroker.method(methods.ConnectionTune(channel_max=2047, frame_max=4096, heartbeat=60))

    transport = unitbroker.ScriptedTransport(script)
    client = warren.Client(transport=transport, frame_max=65536, channel_max=16, heartbeat=10)
    client.connect()

    tune_ok = transport.methods()[1]
    assert isinstance(tune_ok, methods.ConnectionTuneOk)
    assert tune_ok.channel_max == 16
    assert tune_ok.frame_max == 65536
    assert tune_ok.heartbeat == 10

    assert client.tune.channel_max == 2047
    assert client.tune.heartbeat == 60


def test_tune_replaced_by_close():

    script = unitbroker.handshake()
    script[1] = unitbroker.method(methods.ConnectionClose(reply_code=403, reply_text='ACCESS_REFUSED'))

    transport = unitbroker.ScriptedTransport(script)
    client = warren.Client(transport=transport, user='alice')

    with pytest.raises(warren.ProtocolError, match='user: alice.*ConnectionClose'):
        client.connect()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

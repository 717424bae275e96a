"""Protocol constants.

Keep these in one place to avoid stringly-typed frame handling.
"""

# AMQP 0-8 protocol header: literal 'AMQP', then class 1, instance 1,
# version major 8, version minor 0.

VERSION_MAJOR = 8
VERSION_MINOR = 0
PROTOCOL_HEADER = b"AMQP" + bytes((1, 1, VERSION_MAJOR, VERSION_MINOR))

PORT = 5672

FRAME_METHOD = 1
FRAME_HEADER = 2
FRAME_BODY = 3
FRAME_HEARTBEAT = 8
FRAME_END = 0xCE

REPLY_SUCCESS = 200

# Session status
CONNECTED = "connected"
NOT_CONNECTED = "not_connected"

# Confirmations returned by synchronous requests
OPEN_OK = "open_ok"
CLOSE_OK = "close_ok"
QOS_OK = "qos_ok"
SELECT_OK = "select_ok"
COMMIT_OK = "commit_ok"
ROLLBACK_OK = "rollback_ok"

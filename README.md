# rrcp

An asyncio client for RRCP, a small request/response protocol a robot uses
to fetch its configuration and per-step actions from a control server.

Each message is a frame: a fixed 28-byte little-endian header (magic
`0x7312`, version, body length, timestamp in milliseconds, content type,
flag) followed by a MessagePack body.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

`RrcpClient.connect(connection, pool_size)` takes an already established
connection object with an async `open_bi()` method returning a
`(send, receive)` pair. The send half must offer `write(data)` and an async
`drain()`; the receive half an async `readexactly(n)`, as asyncio streams do.
The client opens `pool_size` streams up front (10 by default) and takes one
from the pool for each request.

```python
from rrcp.client import RrcpClient
from rrcp.proto import Image, SensorData, ServoStatus

async def run(connection):
    client = await RrcpClient.connect(connection, 10)

    config = await client.get_config()
    wasm = config.get_main_wasm()  # bytes of the first "main" module, or None

    sensor_data = SensorData(
        servos=[ServoStatus(angle=1.0), ServoStatus(angle=2.0)],
        images=[Image(width=3, height=4, data=bytes(12))],
    )
    action = await client.get_action(sensor_data)
    print(action.ts, action.actions)
```

### Stream pool

`rrcp.stream_pool.StreamPool` holds the pre-opened streams. Each call to
`get_bi_stream()` starts a background task that opens one more stream when
fewer than five remain, and then hands out a stream; if the pool is empty it
raises `PoolExhaustedError`.

### Frames and headers

```python
from rrcp.header import Flag, RrcpHeader

header = RrcpHeader.new_with_flag(Flag.GET_CONFIG)
raw = header.to_bytes()
assert RrcpHeader.from_bytes(raw) == header
```

`RrcpHeader.from_bytes` raises `HeaderError` (a `ValueError`) for input
shorter than 28 bytes, a wrong magic number, an unknown content type, or a
flag that is not `GET_CONFIG` or `GET_ACTION`.

`rrcp.client.RrcpFrame` pairs a header with a body, and
`rrcp.client.read_rrcp_frame(reader)` reads one frame from a stream.

### Messages

`rrcp.proto` defines `SensorData`, `ServoStatus`, `Image`, `Action`,
`WasmModule` and `RrcpConfig`. `SensorData`, `Action` and `RrcpConfig` have
`to_msgpack()` and `from_msgpack(data)`; encoding writes MessagePack maps,
and decoding accepts either map or array form. Malformed data raises
`ValueError`.

### TLS

`rrcp.tls.new_tls_client_context(cert_dir)` builds an `ssl.SSLContext`
trusting every file in `cert_dir` (default `/etc/ssl/certs`) whose name ends
in `pem`. `new_insecure_tls_client_context()` returns one that checks neither
the certificate nor the host name; use it for testing only.

## What this package does not do

It does not open network connections itself: there is no transport here, and
the TLS contexts are not wired into any connection. You supply the
connection object. There is no command-line program.
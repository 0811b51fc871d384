"""Packet sources feeding the decoder.

The decoder only needs bytes; these classes are the byte sources:

- **UdpPacketSource**: live datagrams from the game
- **ReplayPacketSource**: recorded packets (tests, offline analysis)

```python
from fhtelemetry import decode_packet
from fhtelemetry.transport import ListenerConfig, UdpPacketSource

with UdpPacketSource(ListenerConfig(port=9999)) as source:
    for datagram in source:
        packet = decode_packet(datagram)
        print(packet.current_engine_rpm)
```
"""

from fhtelemetry.transport.config import ListenerConfig
from fhtelemetry.transport.replay import ReplayPacketSource, load_recording, save_recording
from fhtelemetry.transport.source import PacketSource
from fhtelemetry.transport.udp import UdpPacketSource

__all__ = [
    "PacketSource",
    "ListenerConfig",
    "UdpPacketSource",
    "ReplayPacketSource",
    "load_recording",
    "save_recording",
]

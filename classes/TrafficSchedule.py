"""
TrafficSchedule: Constant-bit-rate sources for the UDP and TCP pairs

Each station runs an always-on OnOff application (on-time covers the whole
run, off-time is zero) towards a packet sink on its access point:

    STA0 --UDP--> AP0:9
    STA1 --TCP--> AP1:9

Both sources start Config.APP_START seconds into the run and keep sending
until the simulator stops.
"""

import re
from dataclasses import dataclass
from typing import List

from Config import Config, ExperimentConfig
from Topology import Topology

# ns-3 DataRate unit suffixes -> bits per second
_RATE_UNITS = {
    "": 1, "bps": 1, "b/s": 1,
    "Bps": 8, "B/s": 8,
    "kbps": 1e3, "kb/s": 1e3, "Kbps": 1e3, "Kb/s": 1e3,
    "kBps": 8e3, "kB/s": 8e3, "KBps": 8e3, "KB/s": 8e3,
    "Kib/s": 1024, "KiB/s": 8 * 1024,
    "Mbps": 1e6, "Mb/s": 1e6, "MBps": 8e6, "MB/s": 8e6,
    "Mib/s": 1024 ** 2, "MiB/s": 8 * 1024 ** 2,
    "Gbps": 1e9, "Gb/s": 1e9, "GBps": 8e9, "GB/s": 8e9,
    "Gib/s": 1024 ** 3, "GiB/s": 8 * 1024 ** 3,
}

_RATE_RE = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)([A-Za-z/]*)$")


def parse_data_rate(rate: str) -> float:
    """
    Convert an ns-3 style rate string to bits per second.

    Args:
        rate: Number followed by an optional unit, e.g. "2Mbps", "11Mb/s",
            "500kbps", "1.5MiB/s". No whitespace, no exponent.

    Returns:
        Rate in bits per second

    Raises:
        ValueError: If the number or the unit is not recognised
    """
    m = _RATE_RE.match(str(rate))
    if not m:
        raise ValueError(f"Invalid data rate: {rate!r}")
    number, unit = m.groups()
    if unit not in _RATE_UNITS:
        raise ValueError(f"Unknown data rate unit {unit!r} in {rate!r}")
    return float(number) * _RATE_UNITS[unit]


@dataclass(frozen=True)
class TrafficSpec:
    """
    One CBR source/sink pair.

    Attributes:
        protocol: "UDP" or "TCP"
        socket_factory: ns-3 socket factory TypeId name
        source_pair: Index of the station that sends (and of its AP)
        target_address: Address of the sink (the paired access point)
        port: Sink port
        payload_size: Application packet size in bytes
        data_rate: Rate string handed to ns-3 DataRate
        start_time: Source start, seconds after simulation start
        on_time / off_time: Random variable strings for the OnOff model
    """
    protocol: str
    socket_factory: str
    source_pair: int
    target_address: str
    port: int
    payload_size: int
    data_rate: str
    start_time: float = Config.APP_START
    sink_start_time: float = Config.SINK_START
    on_time: str = Config.ON_TIME
    off_time: str = Config.OFF_TIME

    @property
    def rate_bps(self) -> float:
        return parse_data_rate(self.data_rate)


def build_schedule(topology: Topology, config: ExperimentConfig) -> List[TrafficSpec]:
    """
    Define the two flows of the experiment.

    Pair 0 carries UDP and pair 1 carries TCP, so both protocols are
    measured concurrently on disjoint endpoints. The payload size is not
    checked against the TCP segment size; segmentation is left to ns-3.

    Raises:
        ValueError: If config.data_rate cannot be parsed
    """
    parse_data_rate(config.data_rate)

    specs = []
    for pair, (protocol, factory) in enumerate((("UDP", Config.UDP_SOCKET_FACTORY),
                                                 ("TCP", Config.TCP_SOCKET_FACTORY))):
        ap, _sta = topology.pair(pair)
        specs.append(TrafficSpec(protocol=protocol,
                                 socket_factory=factory,
                                 source_pair=pair,
                                 target_address=ap.address,
                                 port=Config.SINK_PORT,
                                 payload_size=config.payload_size,
                                 data_rate=config.data_rate))
    return specs

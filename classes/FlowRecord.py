"""
FlowRecord: Frozen per-flow and per-socket statistics of a finished run

The driver converts ns-3 FlowMonitor statistics and PacketSink counters into
these plain records once the simulator has stopped. Everything downstream
(aggregation, reporting, export) works on a RunSnapshot only.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

IP_PROTOCOLS = {6: "TCP", 17: "UDP"}


def protocol_name(number: int) -> str:
    return IP_PROTOCOLS.get(int(number), f"proto-{int(number)}")


@dataclass(frozen=True)
class FlowRecord:
    """
    Statistics of one classified flow.

    Attributes:
        flow_id: Identifier assigned by the flow classifier (1-based)
        source_address / destination_address: Five-tuple addresses
        protocol: "UDP", "TCP" or "proto-<n>"
        source_port / destination_port: Five-tuple ports
        time_first_tx: First transmission, seconds
        time_last_rx: Last reception, seconds (0 when nothing was received)
        tx_packets / tx_bytes: Transmitted totals
        rx_packets / rx_bytes: Received totals
        lost_packets: Packets declared lost by the monitor
        delay_sum: Sum of end-to-end delays of received packets, seconds
    """
    flow_id: int
    source_address: str
    destination_address: str
    protocol: str
    time_first_tx: float
    time_last_rx: float
    tx_packets: int = 0
    tx_bytes: int = 0
    rx_packets: int = 0
    rx_bytes: int = 0
    lost_packets: int = 0
    delay_sum: float = 0.0
    source_port: int = 0
    destination_port: int = 0

    @property
    def duration(self) -> float:
        return self.time_last_rx - self.time_first_tx


@dataclass(frozen=True)
class SocketCounters:
    """Total bytes received by the two packet sinks."""
    udp_rx_bytes: int = 0
    tcp_rx_bytes: int = 0


@dataclass(frozen=True)
class RunSnapshot:
    """
    Read-only view of a completed run.

    Attributes:
        flows: FlowId -> FlowRecord
        sockets: Sink receive totals
        simulation_time: Configured measurement window T (seconds)
        stop_time: Time at which the simulator was stopped
    """
    flows: Mapping[int, FlowRecord]
    sockets: SocketCounters
    simulation_time: float
    stop_time: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "flows", MappingProxyType(dict(self.flows)))


def flow_record_from_stats(flow_id, stats, five_tuple) -> FlowRecord:
    """
    Build a FlowRecord from ns-3 FlowMonitor objects.

    Args:
        flow_id: FlowId key of FlowMonitor.GetFlowStats()
        stats: FlowMonitor::FlowStats (times expose GetSeconds())
        five_tuple: Ipv4FlowClassifier::FiveTuple of the flow

    Returns:
        FlowRecord with plain Python values
    """
    return FlowRecord(
        flow_id=int(flow_id),
        source_address=str(five_tuple.sourceAddress),
        destination_address=str(five_tuple.destinationAddress),
        protocol=protocol_name(five_tuple.protocol),
        source_port=int(five_tuple.sourcePort),
        destination_port=int(five_tuple.destinationPort),
        time_first_tx=stats.timeFirstTxPacket.GetSeconds(),
        time_last_rx=stats.timeLastRxPacket.GetSeconds(),
        tx_packets=int(stats.txPackets),
        tx_bytes=int(stats.txBytes),
        rx_packets=int(stats.rxPackets),
        rx_bytes=int(stats.rxBytes),
        lost_packets=int(stats.lostPackets),
        delay_sum=stats.delaySum.GetSeconds(),
    )

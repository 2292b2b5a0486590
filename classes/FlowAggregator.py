"""
FlowAggregator: Throughput figures from a finished run

Turns a RunSnapshot into per-flow diagnostics and the two headline averages.

Two denominators are used on purpose:
    - per flow:   observed activity window (last Rx - first Tx)
    - aggregates: configured simulation time T, regardless of flow timing

Zero or negative windows never divide: the affected figures are None and the
report shows them as "undefined".

Copyright (c) 2025 COEX-11B Research Team
Licensed under the MIT License
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from FlowRecord import FlowRecord, RunSnapshot

# Classifier ids start at 1; anything below is not a traffic flow
MIN_REPORTED_FLOW_ID = 1


@dataclass(frozen=True)
class FlowReport:
    """
    Per-flow throughput figures.

    Attributes:
        offered_mbps: tx_bytes * 8 / duration / 1e6, None if duration <= 0
        achieved_mbps: rx_bytes * 8 / duration / 1e6, None if duration <= 0
        loss_ratio: lost_packets / tx_packets, None if nothing was sent
        mean_delay: delay_sum / rx_packets in seconds, None if nothing arrived
    """
    flow_id: int
    source_address: str
    destination_address: str
    protocol: str
    tx_packets: int
    tx_bytes: int
    rx_packets: int
    rx_bytes: int
    duration: float
    offered_mbps: Optional[float]
    achieved_mbps: Optional[float]
    lost_packets: int = 0
    loss_ratio: Optional[float] = None
    mean_delay: Optional[float] = None

    @property
    def defined(self) -> bool:
        return self.achieved_mbps is not None


@dataclass(frozen=True)
class AggregateReport:
    flows: Tuple[FlowReport, ...]
    udp_average_mbps: Optional[float]
    tcp_average_mbps: Optional[float]
    simulation_time: float

    @property
    def undefined_flows(self) -> List[int]:
        return [f.flow_id for f in self.flows if not f.defined]


def rate_mbps(nbytes: int, seconds: float) -> Optional[float]:
    """Bytes over a window in Mbit/s; None when the window is not positive."""
    if seconds <= 0:
        return None
    return nbytes * 8 / seconds / 1e6


def average_throughput_mbps(total_rx_bytes: int, simulation_time: float) -> Optional[float]:
    """
    Average sink throughput over the configured window.

    Args:
        total_rx_bytes: Bytes received by the sink over the whole run
        simulation_time: Configured simulation time T (not a flow duration)

    Returns:
        total_rx_bytes * 8 / (1e6 * T) in Mbit/s, None when T <= 0
    """
    if simulation_time <= 0:
        return None
    return total_rx_bytes * 8 / (1e6 * simulation_time)


def report_flow(record: FlowRecord) -> FlowReport:
    duration = record.duration
    loss_ratio = None
    if record.tx_packets > 0:
        loss_ratio = record.lost_packets / record.tx_packets
    mean_delay = None
    if record.rx_packets > 0:
        mean_delay = record.delay_sum / record.rx_packets

    return FlowReport(
        flow_id=record.flow_id,
        source_address=record.source_address,
        destination_address=record.destination_address,
        protocol=record.protocol,
        tx_packets=record.tx_packets,
        tx_bytes=record.tx_bytes,
        rx_packets=record.rx_packets,
        rx_bytes=record.rx_bytes,
        duration=duration,
        offered_mbps=rate_mbps(record.tx_bytes, duration),
        achieved_mbps=rate_mbps(record.rx_bytes, duration),
        lost_packets=record.lost_packets,
        loss_ratio=loss_ratio,
        mean_delay=mean_delay,
    )


def aggregate(snapshot: RunSnapshot) -> AggregateReport:
    """
    Compute per-flow reports and the UDP/TCP averages.

    Args:
        snapshot: Frozen statistics of a completed run

    Returns:
        AggregateReport with flows ordered by ascending flow id. Flows with
        an id below MIN_REPORTED_FLOW_ID are left out.
    """
    flows = [report_flow(snapshot.flows[flow_id])
             for flow_id in sorted(snapshot.flows)
             if flow_id >= MIN_REPORTED_FLOW_ID]

    T = snapshot.simulation_time
    return AggregateReport(
        flows=tuple(flows),
        udp_average_mbps=average_throughput_mbps(snapshot.sockets.udp_rx_bytes, T),
        tcp_average_mbps=average_throughput_mbps(snapshot.sockets.tcp_rx_bytes, T),
        simulation_time=T,
    )

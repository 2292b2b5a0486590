"""
ReportEmitter: Console rendering of an AggregateReport
"""

from typing import List, Optional

from FlowAggregator import AggregateReport, FlowReport

UNDEFINED = "undefined"


def format_number(value: Optional[float]) -> str:
    # %g keeps six significant digits, like a default C++ ostream
    if value is None:
        return UNDEFINED
    return f"{value:g}"


def format_flow(flow: FlowReport) -> List[str]:
    return [
        f"Flow {flow.flow_id} ({flow.source_address} -> {flow.destination_address})",
        f"  Tx Packets: {flow.tx_packets}",
        f"  Tx Bytes:   {flow.tx_bytes}",
        f"  TxOffered:  {_with_unit(flow.offered_mbps, 'Mbps')}",
        f"  Rx Packets: {flow.rx_packets}",
        f"  Rx Bytes:   {flow.rx_bytes}",
        f"  Throughput: {_with_unit(flow.achieved_mbps, 'Mbps')}",
    ]


def _with_unit(value: Optional[float], unit: str) -> str:
    if value is None:
        return UNDEFINED
    return f"{format_number(value)} {unit}"


def format_report(report: AggregateReport) -> List[str]:
    """
    Render every flow block followed by the two average throughput lines.

    Args:
        report: Output of FlowAggregator.aggregate()

    Returns:
        Lines without trailing newlines
    """
    lines = []
    for flow in report.flows:
        lines.extend(format_flow(flow))
    lines.append("")
    lines.append(f"UDP Average throughput: {_with_unit(report.udp_average_mbps, 'Mbit/s')}")
    lines.append("")
    lines.append(f"TCP Average throughput: {_with_unit(report.tcp_average_mbps, 'Mbit/s')}")
    return lines


def emit_report(report: AggregateReport, out=None) -> None:
    """Print the formatted report (stdout unless out is given)."""
    for line in format_report(report):
        print(line, file=out)

"""
Unit tests for console report rendering
"""

import io
import unittest

from FlowAggregator import aggregate
from FlowRecord import FlowRecord, RunSnapshot, SocketCounters
from ReportEmitter import UNDEFINED, emit_report, format_number, format_report


class TestReportEmitter(unittest.TestCase):

    def setUp(self):
        flows = {
            1: FlowRecord(flow_id=1, source_address="10.0.0.3", destination_address="10.0.0.1",
                          protocol="UDP", time_first_tx=1.0, time_last_rx=11.0,
                          tx_packets=1699, tx_bytes=2551898, rx_packets=1690, rx_bytes=2538380),
            2: FlowRecord(flow_id=2, source_address="10.0.0.4", destination_address="10.0.0.2",
                          protocol="TCP", time_first_tx=1.0, time_last_rx=1.0,
                          tx_packets=3, tx_bytes=180),
        }
        snapshot = RunSnapshot(flows=flows,
                               sockets=SocketCounters(udp_rx_bytes=2500000, tcp_rx_bytes=0),
                               simulation_time=10.0)
        self.report = aggregate(snapshot)
        self.lines = format_report(self.report)

    def test_flow_block(self):
        self.assertEqual(self.lines[0], "Flow 1 (10.0.0.3 -> 10.0.0.1)")
        self.assertEqual(self.lines[1], "  Tx Packets: 1699")
        self.assertEqual(self.lines[2], "  Tx Bytes:   2551898")
        self.assertEqual(self.lines[3], "  TxOffered:  2.04152 Mbps")
        self.assertEqual(self.lines[4], "  Rx Packets: 1690")
        self.assertEqual(self.lines[5], "  Rx Bytes:   2538380")
        self.assertEqual(self.lines[6], "  Throughput: 2.0307 Mbps")

    def test_undefined_flow(self):
        self.assertEqual(self.lines[7], "Flow 2 (10.0.0.4 -> 10.0.0.2)")
        self.assertEqual(self.lines[10], f"  TxOffered:  {UNDEFINED}")
        self.assertEqual(self.lines[13], f"  Throughput: {UNDEFINED}")
        self.assertNotIn("inf", "\n".join(self.lines))
        self.assertNotIn("nan", "\n".join(self.lines))

    def test_averages(self):
        self.assertEqual(self.lines[-4:], ["",
                                           "UDP Average throughput: 2 Mbit/s",
                                           "",
                                           "TCP Average throughput: 0 Mbit/s"])

    def test_format_number(self):
        self.assertEqual(format_number(None), UNDEFINED)
        self.assertEqual(format_number(1.97213456), "1.97213")
        self.assertEqual(format_number(0.0), "0")

    def test_emit_report(self):
        out = io.StringIO()
        emit_report(self.report, out=out)
        self.assertEqual(out.getvalue(), "\n".join(self.lines) + "\n")


if __name__ == '__main__':
    unittest.main()

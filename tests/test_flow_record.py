"""
Unit tests for FlowMonitor conversion and snapshot immutability
"""

import unittest
from types import SimpleNamespace

from FlowRecord import (FlowRecord, RunSnapshot, SocketCounters, flow_record_from_stats,
                        protocol_name)


class FakeTime:
    def __init__(self, seconds):
        self.seconds = seconds

    def GetSeconds(self):
        return self.seconds


class TestFlowRecord(unittest.TestCase):

    def setUp(self):
        self.stats = SimpleNamespace(timeFirstTxPacket=FakeTime(1.0012),
                                     timeLastRxPacket=FakeTime(10.9981),
                                     txPackets=1700, txBytes=2553400,
                                     rxPackets=1695, rxBytes=2545890,
                                     lostPackets=5, delaySum=FakeTime(8.475))
        self.five_tuple = SimpleNamespace(sourceAddress="10.0.0.3", destinationAddress="10.0.0.1",
                                          protocol=17, sourcePort=49153, destinationPort=9)

    def test_from_stats(self):
        record = flow_record_from_stats(1, self.stats, self.five_tuple)
        self.assertEqual(record.flow_id, 1)
        self.assertEqual(record.protocol, "UDP")
        self.assertEqual(record.source_address, "10.0.0.3")
        self.assertEqual(record.destination_port, 9)
        self.assertEqual(record.tx_bytes, 2553400)
        self.assertEqual(record.rx_packets, 1695)
        self.assertEqual(record.lost_packets, 5)
        self.assertAlmostEqual(record.duration, 10.9981 - 1.0012)
        self.assertAlmostEqual(record.delay_sum, 8.475)

    def test_protocol_name(self):
        self.assertEqual(protocol_name(6), "TCP")
        self.assertEqual(protocol_name(17), "UDP")
        self.assertEqual(protocol_name(1), "proto-1")

    def test_snapshot_is_read_only(self):
        flows = {1: flow_record_from_stats(1, self.stats, self.five_tuple)}
        snapshot = RunSnapshot(flows=flows, sockets=SocketCounters(), simulation_time=10.0)
        flows[2] = flows[1]
        self.assertEqual(list(snapshot.flows), [1])
        with self.assertRaises(TypeError):
            snapshot.flows[3] = flows[1]
        with self.assertRaises(AttributeError):
            snapshot.simulation_time = 5.0

    def test_record_defaults(self):
        record = FlowRecord(flow_id=3, source_address="a", destination_address="b",
                            protocol="TCP", time_first_tx=1.0, time_last_rx=0.0)
        self.assertEqual(record.rx_bytes, 0)
        self.assertEqual(record.duration, -1.0)


if __name__ == '__main__':
    unittest.main()

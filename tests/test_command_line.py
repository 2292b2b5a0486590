"""
Unit tests for argument parsing and the experiment configuration
"""

import argparse
import unittest
from dataclasses import FrozenInstanceError, replace

from CommandLine import parse_args, str2bool
from Config import Config, ExperimentConfig


class TestCommandLine(unittest.TestCase):

    def test_defaults(self):
        config, args = parse_args([])
        self.assertEqual(config, ExperimentConfig())
        self.assertEqual(config.dist, 50)
        self.assertEqual(config.tries, 1)
        self.assertFalse(config.enable_rts_cts)
        self.assertEqual(config.payload_size, 1472)
        self.assertEqual(config.data_rate, "2Mbps")
        self.assertEqual(config.phy_rate, "DsssRate2Mbps")
        self.assertEqual(config.simulation_time, 10)
        self.assertFalse(config.pcap)
        self.assertIsNone(args.output)

    def test_ns3_style_flags(self):
        config, _ = parse_args(["--dist=120", "--enableRtsCts=true", "--payloadSize=1000",
                                "--dataRate=5Mbps", "--phyRate=DsssRate11Mbps",
                                "--simulationTime=20", "--pcap=1", "--tcpVariant=TcpWestwood"])
        self.assertEqual(config.dist, 120)
        self.assertTrue(config.enable_rts_cts)
        self.assertEqual(config.payload_size, 1000)
        self.assertEqual(config.data_rate, "5Mbps")
        self.assertEqual(config.phy_rate, "DsssRate11Mbps")
        self.assertEqual(config.simulation_time, 20)
        self.assertTrue(config.pcap)
        self.assertEqual(config.tcp_type_id, "ns3::TcpWestwood")

    def test_bare_boolean_flag(self):
        config, _ = parse_args(["--pcap", "--enableRtsCts"])
        self.assertTrue(config.pcap)
        self.assertTrue(config.enable_rts_cts)

    def test_str2bool(self):
        for text in ("1", "true", "True", "yes", "on"):
            self.assertTrue(str2bool(text))
        for text in ("0", "false", "FALSE", "no", "off"):
            self.assertFalse(str2bool(text))
        with self.assertRaises(argparse.ArgumentTypeError):
            str2bool("maybe")

    def test_rng_and_output_flags(self):
        _, args = parse_args(["--seed=7", "--run=3", "--output=out"])
        self.assertEqual((args.seed, args.run, args.output), (7, 3, "out"))


class TestExperimentConfig(unittest.TestCase):

    def test_rts_cts_threshold(self):
        self.assertEqual(ExperimentConfig().rts_cts_threshold, 2200)
        self.assertEqual(ExperimentConfig(enable_rts_cts=True).rts_cts_threshold, 10)

    def test_rts_cts_changes_nothing_else(self):
        base = ExperimentConfig()
        rts = replace(base, enable_rts_cts=True)
        diff = {k for k, v in base.as_dict().items() if rts.as_dict()[k] != v}
        self.assertEqual(diff, {"enable_rts_cts", "rts_cts_threshold"})

    def test_stop_time(self):
        self.assertEqual(ExperimentConfig(simulation_time=10).stop_time, 11)
        self.assertEqual(ExperimentConfig(simulation_time=0).stop_time, Config.STOP_MARGIN)

    def test_immutable(self):
        config = ExperimentConfig()
        with self.assertRaises(FrozenInstanceError):
            config.dist = 10


if __name__ == '__main__':
    unittest.main()

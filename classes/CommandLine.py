"""
CommandLine: Argument parsing for COEX-11B runs

Flag names follow the ns-3 CommandLine spelling so existing invocations keep
working, e.g.:

    python main.py --dist=100 --enableRtsCts=true --dataRate=5Mbps
"""

import argparse

from Config import Config, ExperimentConfig

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


def str2bool(value) -> bool:
    """Parse an ns-3 style boolean flag value."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {value!r}")


def build_parser():
    defaults = ExperimentConfig()
    p = argparse.ArgumentParser(description="Dual-BSS 802.11b UDP/TCP throughput experiment")
    p.add_argument("--dist", type=float, default=defaults.dist,
                   help="Distance between the station and the AP (m)")
    p.add_argument("--tries", type=int, default=defaults.tries, help="Number of tries")
    p.add_argument("--enableRtsCts", type=str2bool, nargs="?", const=True,
                   default=defaults.enable_rts_cts, help="RTS/CTS enabled")
    p.add_argument("--payloadSize", type=int, default=defaults.payload_size,
                   help="Payload size in bytes")
    p.add_argument("--dataRate", type=str, default=defaults.data_rate,
                   help="Application data rate")
    p.add_argument("--tcpVariant", type=str, default=defaults.tcp_variant,
                   help="TCP congestion control class (without ns3:: prefix)")
    p.add_argument("--phyRate", type=str, default=defaults.phy_rate,
                   help="Physical layer bitrate")
    p.add_argument("--simulationTime", type=float, default=defaults.simulation_time,
                   help="Simulation time in seconds")
    p.add_argument("--pcap", type=str2bool, nargs="?", const=True, default=defaults.pcap,
                   help="Enable/disable PCAP Tracing")
    p.add_argument("--seed", type=int, default=1, help="RNG seed")
    p.add_argument("--run", type=int, default=0, help="RNG run number")
    p.add_argument("--output", type=str, default=None,
                   help=f"Export flows/summary to this directory (e.g. {Config.DATA_OUTPUT_DIR})")
    return p


def config_from_args(args) -> ExperimentConfig:
    return ExperimentConfig(dist=args.dist,
                            tries=args.tries,
                            enable_rts_cts=args.enableRtsCts,
                            payload_size=args.payloadSize,
                            data_rate=args.dataRate,
                            tcp_variant=args.tcpVariant,
                            phy_rate=args.phyRate,
                            simulation_time=args.simulationTime,
                            pcap=args.pcap)


def parse_args(argv=None):
    """
    Parse command-line arguments.

    Returns:
        (ExperimentConfig, Namespace) - the immutable run options and the raw
        namespace for the RNG/output flags
    """
    args = build_parser().parse_args(argv)
    return config_from_args(args), args

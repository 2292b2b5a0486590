"""
COEX-11B: Dual-BSS 802.11b UDP/TCP Throughput Experiment

This is the main entry point. It provides:
- Command-line argument parsing (ns-3 style flag names)
- RNG seeding for reproducibility
- Simulation orchestration and the console report

Usage:
    python main.py [OPTIONS]

Options:
    --dist METERS           Station/AP distance (default: 50)
    --tries INT             Number of tries (default: 1, unused)
    --enableRtsCts BOOL     RTS/CTS threshold 10 instead of 2200 (default: false)
    --payloadSize BYTES     Application payload (default: 1472)
    --dataRate RATE         Application rate (default: 2Mbps)
    --tcpVariant NAME       TCP variant (default: TcpNewReno)
    --phyRate MODE          802.11b data mode (default: DsssRate2Mbps)
    --simulationTime SEC    Measurement window (default: 10)
    --pcap BOOL             PCAP tracing (default: false)
    --seed INT / --run INT  ns-3 RNG seed and run number
    --output DIR            Export flows CSV and summary JSON
"""

from ns import ns
import time

from CommandLine import parse_args
from ReportEmitter import emit_report
from WifiExperiment import WifiExperiment


def run_simulation(argv=None):
    """
    Execute a single run with the parsed configuration.

    This function:
    1. Parses command-line arguments into an immutable ExperimentConfig
    2. Seeds the ns-3 RNG (seed + run number)
    3. Creates and runs the experiment
    4. Prints the per-flow and average throughput report
    """
    config, args = parse_args(argv)

    print(f"🔧 Configuration: dist={config.dist}m, dataRate={config.data_rate}, "
          f"phyRate={config.phy_rate}, tcpVariant={config.tcp_variant}, "
          f"RtsCtsThreshold={config.rts_cts_threshold}, simulationTime={config.simulation_time}s")

    ns.RngSeedManager.SetSeed(args.seed)
    ns.RngSeedManager.SetRun(args.run)

    run_id = f"{time.strftime('%Y%m%d_%H%M%S')}_seed{args.seed}_run{args.run}"
    sim = WifiExperiment(config, output_dir=args.output, run_id=run_id)

    try:
        report = sim.run()
    except Exception as e:
        print(f"❌ Simulation failed: {e}")
        raise

    emit_report(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(run_simulation())

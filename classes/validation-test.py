"""
COEX-11B Validation Test Script

This script runs short end-to-end checks against a real ns-3 build:
- Default scenario produces one UDP and one TCP flow with traffic
- A zero simulation time reports undefined averages instead of crashing
- Enabling RTS/CTS only changes the threshold handed to ns-3

Used for pre-flight checks before collecting results.

Copyright (c) 2025 COEX-11B Research Team
"""

from dataclasses import replace

from ns import ns
from Config import ExperimentConfig
from ReportEmitter import emit_report
from WifiExperiment import WifiExperiment


def _run(config, seed=42):
    ns.RngSeedManager.SetSeed(seed)
    ns.RngSeedManager.SetRun(0)
    report = WifiExperiment(config, run_id="validation_test").run()
    emit_report(report)
    return report


def validate_default_scenario():
    """
    dist=50, dataRate=2Mbps, simulationTime=10.

    Returns:
        True if both protocols show a flow with positive Tx/Rx bytes
    """
    print("🧪 Scenario 1: default configuration")
    report = _run(ExperimentConfig(dist=50, data_rate="2Mbps", simulation_time=10))

    protocols = {f.protocol for f in report.flows if f.tx_bytes > 0 and f.rx_bytes > 0}
    print(f"   Flows reported: {len(report.flows)}, protocols with traffic: {sorted(protocols)}")
    return {"UDP", "TCP"} <= protocols and report.udp_average_mbps > 0


def validate_zero_time():
    print("🧪 Scenario 2: simulationTime=0")
    report = _run(ExperimentConfig(simulation_time=0))
    return report.udp_average_mbps is None and report.tcp_average_mbps is None


def validate_rts_cts():
    print("🧪 Scenario 3: enableRtsCts=true")
    base = ExperimentConfig(simulation_time=3)
    rts = replace(base, enable_rts_cts=True)
    report = _run(rts)
    return (rts.rts_cts_threshold == 10 and base.rts_cts_threshold == 2200
            and len(report.flows) > 0)


if __name__ == "__main__":
    results = {
        "default": validate_default_scenario(),
        "zero_time": validate_zero_time(),
        "rts_cts": validate_rts_cts(),
    }
    for name, ok in results.items():
        print(f"   {name}: {'✅' if ok else '❌'}")

    if all(results.values()):
        print("🎉 VALIDATION PASSED")
    else:
        print("🚨 VALIDATION FAILED - Check configuration")

"""
DataCollector: Dataset export for COEX-11B runs

Writes the per-flow throughput figures of a run to CSV and a JSON summary
(configuration, UDP/TCP averages, timing) next to it, so several runs can be
compared offline.

Copyright (c) 2025 COEX-11B Research Team
Licensed under the MIT License
"""

import csv
import json
from pathlib import Path
import time as time_module
import numpy as np

from Config import ExperimentConfig
from FlowAggregator import AggregateReport, FlowReport


class DataCollector:
    """
    Collects flow reports of one run and exports them.

    Rows are kept in memory and appended to disk as they are recorded.
    """
    FLOW_HEADERS = [
        'flow_id', 'protocol', 'source_ip', 'dest_ip',
        'tx_packets', 'tx_bytes', 'rx_packets', 'rx_bytes',
        'lost_packets', 'loss_ratio', 'duration_s', 'mean_delay_s',
        'offered_mbps', 'throughput_mbps', 'defined'
    ]

    def __init__(self):
        self.flow_data = []

        self.simulation_start_time = None
        self.sim_time_end_seconds = 0.0
        self.wall_clock_seconds = 0.0

    def init_data_files(self, run_id, output_dir="dataset"):
        """
        Initialize output files with headers for a new run.

        Args:
            run_id: Unique identifier for this run
            output_dir: Directory path for dataset output

        Creates:
        - flows_{run_id}.csv: One row per reported flow
        The summary file is written by generate_summary_report().
        """
        self.run_id = run_id
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.flow_file = self.output_dir / f"flows_{run_id}.csv"
        with open(self.flow_file, 'w', newline='') as f:
            csv.writer(f).writerow(self.FLOW_HEADERS)

        self.summary_file = self.output_dir / f"summary_{run_id}.json"
        self.simulation_start_time = time_module.time()

    def record_flow(self, flow: FlowReport):
        """Record one per-flow report; undefined rates are left empty."""
        row = {
            'flow_id': flow.flow_id,
            'protocol': flow.protocol,
            'source_ip': flow.source_address,
            'dest_ip': flow.destination_address,
            'tx_packets': flow.tx_packets,
            'tx_bytes': flow.tx_bytes,
            'rx_packets': flow.rx_packets,
            'rx_bytes': flow.rx_bytes,
            'lost_packets': flow.lost_packets,
            'loss_ratio': _blank_if_none(flow.loss_ratio),
            'duration_s': flow.duration,
            'mean_delay_s': _blank_if_none(flow.mean_delay),
            'offered_mbps': _blank_if_none(flow.offered_mbps),
            'throughput_mbps': _blank_if_none(flow.achieved_mbps),
            'defined': flow.defined,
        }

        self.flow_data.append(row)
        self._append_to_csv(self.flow_file, row)

    def _append_to_csv(self, filename, row_dict):
        try:
            with open(filename, 'a', newline='') as f:
                dw = csv.DictWriter(f, fieldnames=self.FLOW_HEADERS)
                dw.writerow({k: row_dict.get(k, "") for k in self.FLOW_HEADERS})
        except Exception as e:
            print(f"Error writing to {filename}: {e}")

    def generate_summary_report(self, report: AggregateReport, config: ExperimentConfig):
        """
        Write the JSON summary of the run.

        Contains:
        - Run configuration
        - UDP/TCP average throughput over the configured window
        - Flow counts and totals over the reported flows
        - ns-3 stop time vs wall-clock time

        Returns:
            Dictionary that was written
        """
        self.wall_clock_seconds = time_module.time() - (self.simulation_start_time or time_module.time())

        achieved = np.array([f.achieved_mbps for f in report.flows if f.defined], dtype=float)
        rx_bytes = np.array([f.rx_bytes for f in report.flows], dtype=np.int64)

        summary = {
            'run_id': self.run_id,
            'config': config.as_dict(),
            'udp_average_throughput_mbps': report.udp_average_mbps,
            'tcp_average_throughput_mbps': report.tcp_average_mbps,
            'total_flows': len(report.flows),
            'undefined_flows': report.undefined_flows,
            'total_rx_bytes': int(rx_bytes.sum()),
            'mean_flow_throughput_mbps': float(achieved.mean()) if achieved.size else None,
            'sim_time_seconds': self.sim_time_end_seconds,
            'wall_clock_seconds': self.wall_clock_seconds,
            'data_files': {
                'flows': str(self.flow_file),
                'summary': str(self.summary_file),
            }
        }

        with open(self.summary_file, 'w') as f:
            json.dump(summary, f, indent=2)

        return summary


def _blank_if_none(value):
    return "" if value is None else value

"""
COEX-11B Configuration Parameters

This module defines the parameters of the dual-BSS 802.11b throughput
experiment: two access points, two stations, one UDP flow and one TCP flow
measured side by side.

Parameter categories:
- Fixed topology constants (AP placement, address block, SSID)
- Wi-Fi channel, PHY and remote station manager settings
- Application timing (sink/source start, on/off pattern)
- Per-run experiment options (ExperimentConfig, built once from the CLI)

Copyright (c) 2025 COEX-11B Research Team
Licensed under the MIT License
"""

from dataclasses import dataclass


class Config:
    """Fixed constants shared by every run of the experiment"""

    # ============================================================================
    # Topology
    # ============================================================================
    AP_POSITIONS = ((0.0, 0.0, 0.0), (10000.0, 0.0, 0.0))
    N_PAIRS = len(AP_POSITIONS)
    ADDRESS_BASE = "10.0.0.0"
    ADDRESS_MASK = "255.255.255.0"
    ADDRESS_PREFIX = 24
    SSID = "network"

    # ============================================================================
    # Wi-Fi Channel / PHY
    # ============================================================================
    CONTROL_MODE = "DsssRate1Mbps"
    LOSS_REFERENCE_DISTANCE = 1.0
    LOSS_EXPONENT = 1.6
    LOSS_REFERENCE_LOSS = 46.7
    ENERGY_DETECTION_THRESHOLD = -78.1  # ~550 m
    TX_GAIN = 0.281838
    RX_GAIN = 3.65262e-10

    # ============================================================================
    # RTS/CTS
    # ============================================================================
    RTS_CTS_THRESHOLD_ENABLED = 10
    RTS_CTS_THRESHOLD_DISABLED = 2200

    # ============================================================================
    # Applications
    # ============================================================================
    SINK_PORT = 9
    SINK_START = 0.0
    APP_START = 1.0
    ON_TIME = "ns3::ConstantRandomVariable[Constant=1]"
    OFF_TIME = "ns3::ConstantRandomVariable[Constant=0]"
    UDP_SOCKET_FACTORY = "ns3::UdpSocketFactory"
    TCP_SOCKET_FACTORY = "ns3::TcpSocketFactory"

    # Simulator keeps running this long past the configured simulation time
    STOP_MARGIN = 1.0

    # ============================================================================
    # Tracing / Output
    # ============================================================================
    PCAP_AP_PREFIX = "AccessPoint"
    PCAP_STA_PREFIX = "Station"
    DATA_OUTPUT_DIR = "coex_dataset"


@dataclass(frozen=True)
class ExperimentConfig:
    """
    Immutable per-run options.

    Attributes:
        dist: Distance in meters between each station and its access point
        tries: Number of tries (accepted for compatibility, not used)
        enable_rts_cts: Lower the RTS/CTS threshold so every frame uses it
        payload_size: Transport layer payload size in bytes
        data_rate: Application data rate with unit suffix (e.g. "2Mbps")
        tcp_variant: ns-3 TCP congestion control class name
        phy_rate: 802.11b data mode of the constant rate manager
        simulation_time: Measurement window in seconds
        pcap: Write pcap traces for AP and station devices
    """
    dist: float = 50
    tries: int = 1
    enable_rts_cts: bool = False
    payload_size: int = 1472
    data_rate: str = "2Mbps"
    tcp_variant: str = "TcpNewReno"
    phy_rate: str = "DsssRate2Mbps"
    simulation_time: float = 10.0
    pcap: bool = False

    @property
    def rts_cts_threshold(self) -> int:
        if self.enable_rts_cts:
            return Config.RTS_CTS_THRESHOLD_ENABLED
        return Config.RTS_CTS_THRESHOLD_DISABLED

    @property
    def stop_time(self) -> float:
        """Simulator stop time: the measurement window plus the start margin."""
        return self.simulation_time + Config.STOP_MARGIN

    @property
    def tcp_type_id(self) -> str:
        return "ns3::" + self.tcp_variant

    def as_dict(self) -> dict:
        """Flat view of the options, used for dataset summaries."""
        return {
            'dist': self.dist,
            'tries': self.tries,
            'enable_rts_cts': self.enable_rts_cts,
            'payload_size': self.payload_size,
            'data_rate': self.data_rate,
            'tcp_variant': self.tcp_variant,
            'phy_rate': self.phy_rate,
            'simulation_time': self.simulation_time,
            'pcap': self.pcap,
            'rts_cts_threshold': self.rts_cts_threshold,
            'stop_time': self.stop_time,
        }

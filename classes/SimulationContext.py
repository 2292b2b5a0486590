"""
SimulationContext: Handles of one ns-3 run

Every install step receives the context explicitly and stores what it
creates here, instead of reaching for module-level globals. The driver owns
the context for exactly one run.
"""

from typing import Any, Dict, Optional

from Config import ExperimentConfig
from Topology import Topology


class SimulationContext:
    """
    Container for ns-3 objects created while setting up a run.

    Attributes:
        config: Options of this run
        topology: Planned nodes (positions/addresses)
        all_nodes: NodeContainer with every node, in Topology order
        ap_nodes / sta_nodes: NodeContainers split by role
        ap_devices / sta_devices: Installed Wi-Fi NetDeviceContainers
        ap_interfaces / sta_interfaces: Ipv4InterfaceContainers
        wifi_phy: Phy helper (needed again for pcap tracing)
        sinks: protocol -> PacketSink application
        sources: protocol -> ApplicationContainer of the OnOff source
        flowmon_helper / monitor: FlowMonitor objects
        completed: Set once the simulator returned from Run()
    """
    def __init__(self, config: ExperimentConfig, topology: Optional[Topology] = None):
        self.config = config
        self.topology = topology

        self.all_nodes = None
        self.ap_nodes = None
        self.sta_nodes = None
        self.ap_devices = None
        self.sta_devices = None
        self.ap_interfaces = None
        self.sta_interfaces = None
        self.wifi_phy = None

        self.sinks: Dict[str, Any] = {}
        self.sources: Dict[str, Any] = {}

        self.flowmon_helper = None
        self.monitor = None

        self.completed = False
        self.sim_end = 0.0

    def sink(self, protocol: str):
        try:
            return self.sinks[protocol]
        except KeyError:
            raise KeyError(f"No {protocol} sink installed in this run") from None

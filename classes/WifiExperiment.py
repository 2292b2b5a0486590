"""
COEX-11B: Dual-BSS 802.11b UDP/TCP Throughput Experiment

This module implements the simulation driver of the experiment on top of
the ns-3 Python bindings.

Key Responsibilities:
    - Simulator Defaults: RTS/CTS threshold, TCP congestion control variant,
      TCP segment size
    - Network Infrastructure: Two 802.11b BSSs (one AP + one STA each) on a
      shared YANS channel with log-distance propagation loss
    - Traffic: Always-on OnOff sources (UDP on pair 0, TCP on pair 1) towards
      packet sinks on the access points
    - Measurement: FlowMonitor on every node, packet sink byte counters
    - Snapshot: Frozen RunSnapshot handed to the FlowAggregator once the
      simulator has stopped

Network Topology:
    - Wi-Fi subnet 10.0.0.0/24 shared by both BSSs
    - AP0 (0,0,0) <- STA0 (d,0,0)             UDP, port 9
    - AP1 (10000,0,0) <- STA1 (10000+d,0,0)   TCP, port 9

Copyright (c) 2025 COEX-11B Research Team
Licensed under the MIT License
"""

from ns import ns
import time as time_module
from typing import List, Optional

from Config import Config, ExperimentConfig
from DataCollector import DataCollector
from FlowAggregator import AggregateReport, aggregate
from FlowRecord import RunSnapshot, SocketCounters, flow_record_from_stats
from SimulationContext import SimulationContext
from Topology import Topology, plan_topology
from TrafficSchedule import TrafficSpec, build_schedule


def configure_defaults(config: ExperimentConfig) -> None:
    """
    Set the attribute defaults that must be in place before any object exists.

    Only the RTS/CTS threshold depends on enable_rts_cts; nothing else in the
    run changes with it.
    """
    ns.Config.SetDefault("ns3::WifiRemoteStationManager::RtsCtsThreshold",
                         ns.UintegerValue(config.rts_cts_threshold))
    ns.Config.SetDefault("ns3::TcpL4Protocol::SocketType",
                         ns.TypeIdValue(ns.TypeId.LookupByName(config.tcp_type_id)))
    ns.Config.SetDefault("ns3::TcpSocket::SegmentSize",
                         ns.UintegerValue(config.payload_size))


def install_topology(context: SimulationContext) -> None:
    """
    Create the nodes of context.topology and wire the Wi-Fi network.

    Network Configuration:
        - Standard: 802.11b, ConstantRateWifiManager (data = phy_rate,
          control = DsssRate1Mbps)
        - Channel: constant-speed delay, log-distance loss
          (d0 = 1 m, n = 1.6, L0 = 46.7 dB)
        - MAC: one SSID, ApWifiMac on APs, StaWifiMac on stations
        - Mobility: constant positions from the plan
        - IPv4: single /24, AP devices addressed before station devices

    Args:
        context: Run context; its topology must be planned already
    """
    topology = context.topology
    config = context.config

    context.all_nodes = ns.NodeContainer()
    context.all_nodes.Create(len(topology))
    context.ap_nodes = ns.NodeContainer()
    context.sta_nodes = ns.NodeContainer()
    for node in topology:
        target = context.ap_nodes if node.is_access_point else context.sta_nodes
        target.Add(context.all_nodes.Get(node.node_id))

    # ---------------- Wi-Fi: channel/phy/mac/devices ----------------
    wifi = ns.WifiHelper()
    wifi.SetStandard(ns.WIFI_STANDARD_80211b)

    channel = ns.YansWifiChannelHelper()
    channel.SetPropagationDelay("ns3::ConstantSpeedPropagationDelayModel")
    channel.AddPropagationLoss("ns3::LogDistancePropagationLossModel",
                               "ReferenceDistance", ns.DoubleValue(Config.LOSS_REFERENCE_DISTANCE),
                               "Exponent", ns.DoubleValue(Config.LOSS_EXPONENT),
                               "ReferenceLoss", ns.DoubleValue(Config.LOSS_REFERENCE_LOSS))

    phy = ns.YansWifiPhyHelper()
    phy.SetChannel(channel.Create())
    phy.SetErrorRateModel("ns3::YansErrorRateModel")
    wifi.SetRemoteStationManager("ns3::ConstantRateWifiManager",
                                 "DataMode", ns.StringValue(config.phy_rate),
                                 "ControlMode", ns.StringValue(Config.CONTROL_MODE))
    phy.Set("RxSensitivity", ns.DoubleValue(Config.ENERGY_DETECTION_THRESHOLD))
    phy.Set("TxGain", ns.DoubleValue(Config.TX_GAIN))
    phy.Set("RxGain", ns.DoubleValue(Config.RX_GAIN))
    context.wifi_phy = phy

    ssid = ns.Ssid(Config.SSID)
    mac = ns.WifiMacHelper()

    mac.SetType("ns3::ApWifiMac", "Ssid", ns.SsidValue(ssid))
    context.ap_devices = wifi.Install(phy, mac, context.ap_nodes)

    mac.SetType("ns3::StaWifiMac", "Ssid", ns.SsidValue(ssid))
    context.sta_devices = wifi.Install(phy, mac, context.sta_nodes)

    # ---------------- Mobility ---------------
    mobility = ns.MobilityHelper()
    positions = ns.ListPositionAllocator()
    for node in topology:
        positions.Add(ns.Vector(*node.position))
    mobility.SetPositionAllocator(positions)
    mobility.SetMobilityModel("ns3::ConstantPositionMobilityModel")
    mobility.Install(context.all_nodes)

    # ---------------- Internet stack ---------------
    internet = ns.InternetStackHelper()
    internet.Install(context.all_nodes)

    address = ns.Ipv4AddressHelper()
    address.SetBase(ns.Ipv4Address(Config.ADDRESS_BASE), ns.Ipv4Mask(Config.ADDRESS_MASK))
    context.ap_interfaces = address.Assign(context.ap_devices)
    context.sta_interfaces = address.Assign(context.sta_devices)

    ns.Ipv4GlobalRoutingHelper.PopulateRoutingTables()

    for i, (ap, sta) in enumerate(zip(topology.access_points, topology.stations)):
        assigned = (str(context.ap_interfaces.GetAddress(i)), str(context.sta_interfaces.GetAddress(i)))
        if assigned != (ap.address, sta.address):
            print(f"[WARN] pair {i}: planned {ap.address}/{sta.address}, "
                  f"assigned {assigned[0]}/{assigned[1]}")

    print(f"✅ Topology installed: {len(topology.access_points)} APs, "
          f"{len(topology.stations)} stations, dist={topology.dist}m")


def _packet_sink(app):
    """Downcast an Application pointer to PacketSink for GetTotalRx()."""
    return ns.DynamicCast[ns.PacketSink](app)


def install_schedule(context: SimulationContext, specs: List[TrafficSpec]) -> None:
    """
    Install one PacketSink and one OnOff source per TrafficSpec.

    Sinks listen on any address at spec.port on the paired access point and
    start at spec.sink_start_time; sources start at spec.start_time and are
    never stopped before the simulator halts.
    """
    for spec in specs:
        ap_node = context.ap_nodes.Get(spec.source_pair)
        sta_node = context.sta_nodes.Get(spec.source_pair)

        sink_helper = ns.PacketSinkHelper(
            spec.socket_factory,
            ns.InetSocketAddress(ns.Ipv4Address.GetAny(), spec.port).ConvertTo())
        sink_apps = sink_helper.Install(ap_node)
        sink_apps.Start(ns.Seconds(spec.sink_start_time))
        context.sinks[spec.protocol] = _packet_sink(sink_apps.Get(0))

        source = ns.OnOffHelper(
            spec.socket_factory,
            ns.InetSocketAddress(ns.Ipv4Address(spec.target_address), spec.port).ConvertTo())
        source.SetAttribute("PacketSize", ns.UintegerValue(spec.payload_size))
        source.SetAttribute("OnTime", ns.StringValue(spec.on_time))
        source.SetAttribute("OffTime", ns.StringValue(spec.off_time))
        source.SetAttribute("DataRate", ns.DataRateValue(ns.DataRate(spec.data_rate)))
        source_apps = source.Install(sta_node)
        source_apps.Start(ns.Seconds(spec.start_time))
        context.sources[spec.protocol] = source_apps

        print(f"✅ {spec.protocol} flow: pair {spec.source_pair} -> "
              f"{spec.target_address}:{spec.port} at {spec.data_rate} from t={spec.start_time}s")


def enable_pcap(context: SimulationContext) -> None:
    phy = context.wifi_phy
    phy.SetPcapDataLinkType(ns.WifiPhyHelper.DLT_IEEE802_11_RADIO)
    phy.EnablePcap(Config.PCAP_AP_PREFIX, context.ap_devices)
    phy.EnablePcap(Config.PCAP_STA_PREFIX, context.sta_devices)
    print(f"ℹ️  PCAP tracing enabled ({Config.PCAP_AP_PREFIX}-*, {Config.PCAP_STA_PREFIX}-*)")


def install_flow_monitor(context: SimulationContext) -> None:
    context.flowmon_helper = ns.FlowMonitorHelper()
    context.monitor = context.flowmon_helper.InstallAll()


def collect_snapshot(context: SimulationContext) -> RunSnapshot:
    """
    Freeze flow statistics and sink counters of a completed run.

    Must be called after Simulator.Run() returned and before
    Simulator.Destroy(); reading the monitor mid-run would see in-flight
    counters.

    Raises:
        RuntimeError: If the simulator has not completed yet
    """
    if not context.completed:
        raise RuntimeError("Flow statistics are only available after the simulation completed")

    context.monitor.CheckForLostPackets()
    classifier = ns.DynamicCast[ns.Ipv4FlowClassifier](context.flowmon_helper.GetClassifier())

    flows = {}
    for flow_id, stats in context.monitor.GetFlowStats():
        flows[int(flow_id)] = flow_record_from_stats(flow_id, stats, classifier.FindFlow(flow_id))

    sockets = SocketCounters(udp_rx_bytes=int(context.sink("UDP").GetTotalRx()),
                             tcp_rx_bytes=int(context.sink("TCP").GetTotalRx()))

    return RunSnapshot(flows=flows,
                       sockets=sockets,
                       simulation_time=context.config.simulation_time,
                       stop_time=context.sim_end)


class WifiExperiment:
    def __init__(self, config: ExperimentConfig, output_dir: Optional[str] = None,
                 run_id: Optional[str] = None):
        """
        Prepare a run of the experiment.

        Args:
            config: Immutable options of this run
            output_dir: Directory for the flow CSV / summary JSON, None to skip
            run_id: Name used in exported file names (timestamp if omitted)
        """
        self.config = config
        self.topology: Topology = plan_topology(config.dist)
        self.schedule: List[TrafficSpec] = build_schedule(self.topology, config)
        self.context = SimulationContext(config, self.topology)

        self.run_id = run_id or time_module.strftime('%Y%m%d_%H%M%S')
        self.output_dir = output_dir
        self.data_collector = DataCollector() if output_dir else None

        self._snapshot: Optional[RunSnapshot] = None
        self._is_setup = False

    def setup(self) -> None:
        """Apply defaults, install topology, traffic, tracing and the monitor."""
        configure_defaults(self.config)
        install_topology(self.context)
        install_schedule(self.context, self.schedule)
        if self.config.pcap:
            enable_pcap(self.context)
        install_flow_monitor(self.context)
        self._is_setup = True

    def run(self) -> AggregateReport:
        """
        Execute the run and aggregate its statistics.

        Execution Flow:
            1. Set up the network if setup() was not called yet
            2. Stop the simulator at simulation_time + 1 s and run it
            3. Freeze the RunSnapshot (flow stats + sink counters)
            4. Destroy the simulator (always, in finally)
            5. Aggregate and, if enabled, export the dataset

        Returns:
            AggregateReport of the run
        """
        if self.data_collector is not None:
            self.data_collector.init_data_files(self.run_id, output_dir=self.output_dir)

        try:
            if not self._is_setup:
                self.setup()

            ns.Simulator.Stop(ns.Seconds(self.config.stop_time))

            print(f"Starting simulator run (stop time: {self.config.stop_time}s)...")
            ns.Simulator.Run()

            self.context.sim_end = ns.Simulator.Now().GetSeconds()
            self.context.completed = True
            print(f"Simulator finished at {self.context.sim_end}s")

            self._snapshot = collect_snapshot(self.context)

        except Exception as e:
            print(f"Error during simulation execution: {e}")
            raise
        finally:
            try:
                ns.Simulator.Destroy()
            except Exception as e:
                print(f"Warning during simulator destruction: {e}")

        report = aggregate(self._snapshot)

        if self.data_collector is not None:
            self.data_collector.sim_time_end_seconds = float(self.context.sim_end)
            for flow in report.flows:
                self.data_collector.record_flow(flow)
            summary = self.data_collector.generate_summary_report(report, self.config)
            print(f"ℹ️  Dataset written: {summary['data_files']['flows']}")

        return report

    def snapshot(self) -> RunSnapshot:
        if self._snapshot is None:
            raise RuntimeError("Simulation has not completed; no snapshot available")
        return self._snapshot

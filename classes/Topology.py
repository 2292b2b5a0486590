"""
Topology: Deterministic placement and addressing of the experiment nodes

Network topology (positions along the x axis, meters):

    AP0 (0)        STA0 (d)                AP1 (10000)      STA1 (10000 + d)
     *---------------*                       *------------------*
          BSS 0                                    BSS 1

Station i associates with access point i. The two pairs are 10 km apart so
the UDP pair and the TCP pair do not hear each other.

Copyright (c) 2025 COEX-11B Research Team
Licensed under the MIT License
"""

import ipaddress
from typing import List, Tuple

from Config import Config
from NetworkNode import Node, NodeRole


class Topology:
    """
    Planned set of access points and stations.

    Nodes are kept in ns-3 creation order (AP0, STA0, AP1, STA1) so that
    node_id matches the index of the ns-3 node created for it.
    """
    def __init__(self, dist: float, nodes: List[Node]):
        self.dist = dist
        self.nodes = list(nodes)

    @property
    def access_points(self) -> List[Node]:
        return [n for n in self.nodes if n.role is NodeRole.ACCESS_POINT]

    @property
    def stations(self) -> List[Node]:
        return [n for n in self.nodes if n.role is NodeRole.STATION]

    def pair(self, index: int) -> Tuple[Node, Node]:
        """Return (access_point, station) of the given pair."""
        return self.access_points[index], self.stations[index]

    def positions(self) -> List[Tuple[float, float, float]]:
        return [n.position for n in self.nodes]

    def node(self, node_id: int) -> Node:
        for n in self.nodes:
            if n.node_id == node_id:
                return n
        raise KeyError(node_id)

    def __len__(self):
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)


def plan_topology(dist: float) -> Topology:
    """
    Place 2 access points and 2 stations and assign their addresses.

    Args:
        dist: Separation between each station and its access point (meters).
            Not validated: negative or oversized values simply produce an
            odd-looking layout.

    Returns:
        Topology with nodes in creation order AP0, STA0, AP1, STA1

    Addressing:
        One /24 block (Config.ADDRESS_BASE). Addresses are handed out the way
        Ipv4AddressHelper does it in the driver: AP devices first, then
        station devices, so AP0=.1, AP1=.2, STA0=.3, STA1=.4.
    """
    network = ipaddress.IPv4Network(f"{Config.ADDRESS_BASE}/{Config.ADDRESS_PREFIX}")
    hosts = network.hosts()
    ap_addresses = [str(next(hosts)) for _ in range(Config.N_PAIRS)]
    sta_addresses = [str(next(hosts)) for _ in range(Config.N_PAIRS)]

    nodes = []
    for i, (ap_x, ap_y, ap_z) in enumerate(Config.AP_POSITIONS):
        nodes.append(Node(node_id=2 * i,
                          role=NodeRole.ACCESS_POINT,
                          pair=i,
                          position=(ap_x, ap_y, ap_z),
                          address=ap_addresses[i],
                          prefix_len=network.prefixlen))
        nodes.append(Node(node_id=2 * i + 1,
                          role=NodeRole.STATION,
                          pair=i,
                          position=(ap_x + dist, ap_y, ap_z),
                          address=sta_addresses[i],
                          prefix_len=network.prefixlen))
    return Topology(dist, nodes)


def same_subnet(a: Node, b: Node) -> bool:
    """True when both nodes' interfaces live in the same IPv4 subnet."""
    return (ipaddress.IPv4Interface(a.interface).network ==
            ipaddress.IPv4Interface(b.interface).network)

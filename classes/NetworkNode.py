"""
NetworkNode: Fixed-role wireless node descriptor

A lightweight, immutable description of one node in the experiment topology.
The ns-3 node it stands for is created by the driver from this descriptor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class NodeRole(Enum):
    ACCESS_POINT = "AccessPoint"
    STATION = "Station"


@dataclass(frozen=True)
class Node:
    """
    One access point or station.

    Attributes:
        node_id: ns-3 node index (creation order)
        role: AccessPoint or Station
        pair: Index of the AP/STA pair this node belongs to
        position: Fixed (x, y, z) coordinates in meters
        address: IPv4 address assigned to the Wi-Fi interface
        prefix_len: Prefix length of the subnet the address belongs to
    """
    node_id: int
    role: NodeRole
    pair: int
    position: Tuple[float, float, float]
    address: str
    prefix_len: int = 24

    @property
    def is_access_point(self) -> bool:
        return self.role is NodeRole.ACCESS_POINT

    @property
    def interface(self) -> str:
        """Address in CIDR notation, e.g. 10.0.0.1/24"""
        return f"{self.address}/{self.prefix_len}"

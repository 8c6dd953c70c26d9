# This file is part of firstboot. See LICENSE file for license information.

"""Network: Write hostname.if(5) and mygate(5) for the resolved interface

IPv4 is taken from what DHCP already bound to the interface and from the
live routing table, since the metadata never carries static IPv4 details.
IPv6 address and gateway come from the metadata.
"""

import logging
from typing import List, Optional

from firstboot import atomic_helper, net, settings
from firstboot.cloud import Cloud
from firstboot.config import Config

LOG = logging.getLogger(__name__)


def render_interface(
    ipv4_address: Optional[str],
    ipv4_netmask: Optional[str],
    ipv6_address: Optional[str],
    ipv6_prefixlen: int,
) -> str:
    lines = []
    if ipv4_address and ipv4_netmask:
        lines.append("inet %s %s" % (ipv4_address, ipv4_netmask))
    if ipv6_address:
        lines.append("inet6 %s/%d" % (ipv6_address, ipv6_prefixlen))
    return "\n".join(lines)


def render_gateways(gateways: List[str]) -> str:
    return "\n".join(gateways)


def configure_interface(cloud: Cloud, prefixlen: int):
    ifname = cloud.interface
    address, netmask = net.get_interface_ipv4(ifname, cloud.distro.net_ops)
    ipv6_address = cloud.network_metadata.ipv6_address
    if not (address and netmask):
        LOG.warning("No live IPv4 configuration on %s", ifname)
    if not ipv6_address:
        LOG.info("No IPv6 address in metadata for %s", ifname)

    # Written even when empty; netstart expects the file to exist.
    content = render_interface(address, netmask, ipv6_address, prefixlen)
    atomic_helper.write_file(
        cloud.target_path(settings.HOSTNAME_IF_TPL % ifname), content
    )


def configure_gateways(cloud: Cloud):
    ifname = cloud.interface
    gateways = []
    gateway4 = net.get_default_gateway4(ifname, cloud.distro.net_ops)
    if gateway4:
        gateways.append(gateway4)
    gateway6 = cloud.network_metadata.gateway
    if gateway6:
        gateways.append(net.scoped_gateway6(gateway6, ifname))

    if not gateways:
        LOG.warning("No default gateway found, not writing mygate")
        return
    atomic_helper.write_file(
        cloud.target_path(settings.MYGATE_FN), render_gateways(gateways)
    )


def handle(name: str, cfg: Config, cloud: Cloud, args: list) -> None:
    prefixlen = int(cloud.get_cfg_by_path("network/ipv6_prefixlen", 64))
    configure_interface(cloud, prefixlen)
    configure_gateways(cloud)

# This file is part of firstboot. See LICENSE file for license information.

import ipaddress
import logging
from typing import Optional, Tuple, Type

from firstboot.net.netops import NetOps

LOG = logging.getLogger(__name__)

DEFAULT_ROUTE_DESTINATIONS = ("default", "0.0.0.0", "0.0.0.0/0")


def normalize_mac(mac: str) -> str:
    return mac.strip().lower()


def find_interface_by_mac(
    mac: str, net_ops: Type[NetOps], default: str
) -> str:
    """Return the interface whose hardware address is mac.

    Falls back to default when mac is empty or no live interface carries
    it; this never raises for a missing match.
    """
    if not mac:
        LOG.info("No hardware address in metadata, using %s", default)
        return default
    wanted = normalize_mac(mac)
    for name, dev in net_ops.get_interfaces().items():
        if normalize_mac(dev.get("hwaddr") or "") == wanted:
            LOG.info("Resolved hardware address %s to %s", mac, name)
            return name
    LOG.warning(
        "No interface with hardware address %s found, using %s", mac, default
    )
    return default


def get_interface_ipv4(
    ifname: str, net_ops: Type[NetOps]
) -> Tuple[Optional[str], Optional[str]]:
    """Return (address, netmask) currently bound to ifname."""
    dev = net_ops.get_interfaces().get(ifname)
    if not dev:
        LOG.warning("Interface %s not present", ifname)
        return None, None
    for addr in dev.get("ipv4", []):
        if addr.get("ip") and addr.get("mask"):
            return addr["ip"], addr["mask"]
    LOG.debug("No IPv4 address bound to %s", ifname)
    return None, None


def get_default_gateway4(ifname: str, net_ops: Type[NetOps]) -> Optional[str]:
    """Return the gateway of the IPv4 default route leaving through ifname."""
    for route in net_ops.get_routes().get("ipv4", []):
        if (
            route.get("destination") in DEFAULT_ROUTE_DESTINATIONS
            and route.get("iface") == ifname
        ):
            return route.get("gateway")
    LOG.debug("No IPv4 default route via %s", ifname)
    return None


def is_ipv6_link_local(address: str) -> bool:
    try:
        return ipaddress.IPv6Address(address.split("%")[0]).is_link_local
    except ValueError:
        return address.lower().startswith("fe80:")


def scoped_gateway6(gateway: str, ifname: str) -> str:
    """Qualify a link-local gateway with the zone it is reachable on."""
    if "%" not in gateway and is_ipv6_link_local(gateway):
        return "%s%%%s" % (gateway, ifname)
    return gateway

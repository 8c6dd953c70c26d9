# This file is part of firstboot. See LICENSE file for license information.
"""Parsers for the BSD ifconfig and netstat output used on first boot."""

import logging
import re
from copy import deepcopy

from firstboot import subp

LOG = logging.getLogger(__name__)

DEFAULT_NETDEV_INFO = {"ipv4": [], "ipv6": [], "hwaddr": "", "up": False}

ROUTE_SECTIONS = {"Internet:": "ipv4", "Internet6:": "ipv6"}


def _netdev_info_ifconfig(ifconfig_data):
    """Parse 'ifconfig -a' output into a dict keyed by device name.

    Each device maps to a copy of DEFAULT_NETDEV_INFO; ipv4 entries carry
    'ip', 'mask' and optionally 'bcast', ipv6 entries 'ip' and optionally
    'scope6'.
    """
    devs = {}
    curdev = None
    for line in ifconfig_data.splitlines():
        if len(line) == 0:
            continue
        if line[0] not in ("\t", " "):
            curdev = line.split()[0]
            # current ifconfig pops a ':' on the end of the device
            if curdev.endswith(":"):
                curdev = curdev[:-1]
            if curdev not in devs:
                devs[curdev] = deepcopy(DEFAULT_NETDEV_INFO)
        if curdev is None:
            continue
        toks = line.lower().strip().split()
        if len(toks) > 1 and re.search(r"flags=[x\da-f]+<up[,>]", toks[1]):
            devs[curdev]["up"] = True

        for i in range(len(toks) - 1):
            if toks[i] == "inet":  # Create new ipv4 addr entry
                devs[curdev]["ipv4"].append({"ip": toks[i + 1]})
            elif toks[i] == "netmask" and devs[curdev]["ipv4"]:
                devs[curdev]["ipv4"][-1]["mask"] = toks[i + 1]
            elif toks[i] == "broadcast" and devs[curdev]["ipv4"]:
                devs[curdev]["ipv4"][-1]["bcast"] = toks[i + 1]
            elif toks[i] in ("lladdr", "ether", "address:"):
                devs[curdev]["hwaddr"] = toks[i + 1]
            elif toks[i] == "inet6":
                devs[curdev]["ipv6"].append({"ip": toks[i + 1]})
            elif toks[i] == "prefixlen" and devs[curdev]["ipv6"]:
                # Add prefix to current ipv6 value
                addr6 = devs[curdev]["ipv6"][-1]["ip"] + "/" + toks[i + 1]
                devs[curdev]["ipv6"][-1]["ip"] = addr6
            elif toks[i] == "scopeid" and devs[curdev]["ipv6"]:
                devs[curdev]["ipv6"][-1]["scope6"] = toks[i + 1]

    return devs


def _netdev_route_info_netstat(route_data):
    """Parse 'netstat -rn' output into {'ipv4': [...], 'ipv6': [...]}.

    Columns are taken from each section's header line, so the entries carry
    lower-cased header names (destination, gateway, flags, ..., iface).
    """
    routes = {"ipv4": [], "ipv6": []}
    family = None
    header = None
    for line in route_data.splitlines():
        toks = line.split()
        if not toks:
            continue
        if toks[0] in ROUTE_SECTIONS:
            family = ROUTE_SECTIONS[toks[0]]
            header = None
            continue
        if family is None:
            continue
        if toks[0] == "Destination":
            header = [t.lower() for t in toks]
            continue
        if header is None or len(toks) != len(header):
            LOG.debug("Skipping unparsable route line: %s", line)
            continue
        routes[family].append(dict(zip(header, toks)))
    return routes


def netdev_info():
    (ifcfg_out, _err) = subp.subp(["ifconfig", "-a"], rcs=[0, 1])
    return _netdev_info_ifconfig(ifcfg_out)


def route_info():
    (route_out, _err) = subp.subp(["netstat", "-rn"], rcs=[0, 1])
    return _netdev_route_info_netstat(route_out)

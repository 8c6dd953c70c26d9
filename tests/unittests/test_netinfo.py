# This file is part of firstboot. See LICENSE file for license information.

"""Tests for firstboot.netinfo"""

from firstboot import netinfo, subp
from tests.unittests.helpers import MAC, readResource

SAMPLE_IFCONFIG_OUT = readResource("netinfo/openbsd-ifconfig-output")
SAMPLE_NETSTAT_OUT = readResource("netinfo/openbsd-netstat-output")


class TestNetdevInfo:
    def test_parses_openbsd_ifconfig(self):
        devs = netinfo._netdev_info_ifconfig(SAMPLE_IFCONFIG_OUT)
        assert ["enc0", "lo0", "pflog0", "vio0", "vio1"] == sorted(devs)
        assert {
            "hwaddr": MAC,
            "ipv4": [
                {
                    "ip": "203.0.113.8",
                    "mask": "0xffffff00",
                    "bcast": "203.0.113.255",
                }
            ],
            "ipv6": [],
            "up": True,
        } == devs["vio0"]

    def test_loopback_ipv6_prefix_and_scope(self):
        lo0 = netinfo._netdev_info_ifconfig(SAMPLE_IFCONFIG_OUT)["lo0"]
        assert [
            {"ip": "::1/128"},
            {"ip": "fe80::1%lo0/64", "scope6": "0x3"},
        ] == lo0["ipv6"]
        assert [{"ip": "127.0.0.1", "mask": "0xff000000"}] == lo0["ipv4"]

    def test_up_flag(self):
        devs = netinfo._netdev_info_ifconfig(SAMPLE_IFCONFIG_OUT)
        assert devs["pflog0"]["up"]
        assert not devs["vio1"]["up"]
        assert not devs["enc0"]["up"]
        assert "5a:00:04:6a:7b:2d" == devs["vio1"]["hwaddr"]

    def test_empty_output(self):
        assert {} == netinfo._netdev_info_ifconfig("")

    def test_netdev_info_runs_ifconfig(self, mocker):
        m_subp = mocker.patch(
            "firstboot.subp.subp",
            return_value=subp.SubpResult(SAMPLE_IFCONFIG_OUT, ""),
        )
        assert "vio0" in netinfo.netdev_info()
        m_subp.assert_called_once_with(["ifconfig", "-a"], rcs=[0, 1])


class TestRouteInfo:
    def test_parses_openbsd_netstat(self):
        routes = netinfo._netdev_route_info_netstat(SAMPLE_NETSTAT_OUT)
        assert 7 == len(routes["ipv4"])
        assert 4 == len(routes["ipv6"])
        default = routes["ipv4"][0]
        assert "default" == default["destination"]
        assert "203.0.113.1" == default["gateway"]
        assert "UGS" == default["flags"]
        assert "vio0" == default["iface"]
        assert "fe80::1%lo0" == routes["ipv6"][2]["gateway"]

    def test_lines_outside_sections_ignored(self):
        out = "Routing tables\ngarbage line here\n"
        assert {"ipv4": [], "ipv6": []} == (
            netinfo._netdev_route_info_netstat(out)
        )

    def test_short_lines_skipped(self):
        out = (
            "Internet:\n"
            "Destination Gateway Flags Iface\n"
            "default 192.0.2.1 UGS vio0\n"
            "truncated 192.0.2.9\n"
        )
        routes = netinfo._netdev_route_info_netstat(out)
        assert [
            {
                "destination": "default",
                "gateway": "192.0.2.1",
                "flags": "UGS",
                "iface": "vio0",
            }
        ] == routes["ipv4"]

    def test_route_info_runs_netstat(self, mocker):
        m_subp = mocker.patch(
            "firstboot.subp.subp",
            return_value=subp.SubpResult(SAMPLE_NETSTAT_OUT, ""),
        )
        assert netinfo.route_info()["ipv4"]
        m_subp.assert_called_once_with(["netstat", "-rn"], rcs=[0, 1])

# This file is part of firstboot. See LICENSE file for license information.

import pytest

from firstboot import sources
from firstboot.config import cc_resolv_conf

EXPECTED_RESOLV_CONF = """\
search example.com
nameserver 198.51.100.101
nameserver 198.51.100.102
nameserver 2001:db8:f::101
nameserver 2001:db8:f::102
lookup file bind
"""


class TestSearchDomain:
    @pytest.mark.parametrize(
        "hostname,expected",
        [
            ("server.example.com", "example.com"),
            ("a.b.example.org", "b.example.org"),
            ("server", None),
            ("server.", None),
            ("", None),
            (None, None),
        ],
    )
    def test_search_domain(self, hostname, expected):
        assert expected == cc_resolv_conf.search_domain(hostname)


class TestGenerateResolvConf:
    def test_without_domain(self):
        assert (
            "nameserver 198.51.100.101\nlookup file bind\n"
            == cc_resolv_conf.generate_resolv_conf(["198.51.100.101"])
        )

    def test_lookup_line_is_last(self):
        content = cc_resolv_conf.generate_resolv_conf(
            ["198.51.100.101", "2001:db8:f::101"], "example.com"
        )
        assert "lookup file bind" == content.splitlines()[-1]
        assert content.startswith("search example.com\n")


class TestHandle:
    def test_writes_resolv_conf(self, cfg, cloud, distro, tmpdir):
        distro.write_hostname("server.example.com")
        cc_resolv_conf.handle("resolv_conf", cfg, cloud, [])
        assert EXPECTED_RESOLV_CONF == tmpdir.join("etc", "resolv.conf").read()

    def test_duplicate_nameservers_written_once(
        self, cfg, cloud, distro, tmpdir
    ):
        distro.write_hostname("server.example.com")
        md = cloud.network_metadata
        cloud.datasource.network_metadata = md._replace(
            dns_services=md.dns_services + md.dns_services[:1]
        )
        cc_resolv_conf.handle("resolv_conf", cfg, cloud, [])
        assert EXPECTED_RESOLV_CONF == tmpdir.join("etc", "resolv.conf").read()

    def test_no_persisted_hostname_means_no_search(self, cfg, cloud, tmpdir):
        cc_resolv_conf.handle("resolv_conf", cfg, cloud, [])
        content = tmpdir.join("etc", "resolv.conf").read()
        assert "search" not in content
        assert content.startswith("nameserver 198.51.100.101\n")

    def test_no_dns_leaves_file_untouched(self, cfg, cloud, tmpdir):
        resolv_conf = tmpdir.join("etc", "resolv.conf")
        resolv_conf.write("nameserver 192.0.2.53\n", ensure=True)
        cloud.datasource.network_metadata = sources.NetworkMetadata()
        cc_resolv_conf.handle("resolv_conf", cfg, cloud, [])
        assert "nameserver 192.0.2.53\n" == resolv_conf.read()

# This file is part of firstboot. See LICENSE file for license information.

"""Resolv Conf: Write resolv.conf(5) from the metadata DNS services"""

import logging
from typing import List, Optional

from firstboot import atomic_helper, settings
from firstboot.cloud import Cloud
from firstboot.config import Config

LOG = logging.getLogger(__name__)

LOOKUP_LINE = "lookup file bind"


def search_domain(hostname: Optional[str]) -> Optional[str]:
    """Return hostname minus its first label, or None if it has no domain."""
    if not hostname:
        return None
    _host, _sep, domain = hostname.partition(".")
    return domain or None


def generate_resolv_conf(
    nameservers: List[str], domain: Optional[str] = None
) -> str:
    lines = []
    if domain:
        lines.append("search %s" % domain)
    for server in nameservers:
        lines.append("nameserver %s" % server)
    lines.append(LOOKUP_LINE)
    return "\n".join(lines) + "\n"


def handle(name: str, cfg: Config, cloud: Cloud, args: list) -> None:
    nameservers = cloud.network_metadata.dns_addresses
    if not nameservers:
        LOG.info(
            "No DNS servers in metadata, leaving %s untouched",
            settings.RESOLV_CONF_FN,
        )
        return

    domain = search_domain(cloud.get_hostname())
    atomic_helper.write_file(
        cloud.target_path(settings.RESOLV_CONF_FN),
        generate_resolv_conf(nameservers, domain),
    )

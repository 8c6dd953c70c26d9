# This file is part of firstboot. See LICENSE file for license information.

"""Reconcile Services: Restart what depends on the files just written

Every step is best effort. By the time this runs the configuration files
are in place, so a failing service command is logged and the remaining
steps still run.
"""

import logging

from firstboot import subp, util
from firstboot.cloud import Cloud
from firstboot.config import Config

LOG = logging.getLogger(__name__)

_ERRORS = (subp.ProcessExecutionError, OSError)


def disable_resolver_daemon(cloud: Cloud, service: str):
    # resolvd would otherwise rewrite resolv.conf behind our back.
    for action in ("stop", "disable"):
        try:
            cloud.distro.manage_service(action, service)
        except _ERRORS:
            util.logexc(LOG, "Failed to %s %s", action, service)


def reapply_network(cloud: Cloud):
    try:
        cloud.distro.reapply_network()
    except _ERRORS:
        util.logexc(LOG, "Failed to reapply network configuration")


def restart_services(cloud: Cloud, services):
    for service in services:
        try:
            cloud.distro.manage_service("restart", service)
        except _ERRORS:
            util.logexc(LOG, "Failed to restart %s", service)


def handle(name: str, cfg: Config, cloud: Cloud, args: list) -> None:
    cloud.datasource.unmount()
    if "no-reconcile" in args:
        LOG.info("Service reconciliation disabled, skipping module %s", name)
        return
    disable_resolver_daemon(cloud, cfg["resolver_daemon"])
    reapply_network(cloud)
    restart_services(
        cloud, util.get_cfg_option_list(cfg, "hostname_services", [])
    )

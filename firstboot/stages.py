# This file is part of firstboot. See LICENSE file for license information.

import logging
import os
import time
from typing import List, Optional

from firstboot import config, distros, net, settings, subp, util
from firstboot.cloud import Cloud
from firstboot.sources.DataSourceConfigDrive import DataSourceConfigDrive

LOG = logging.getLogger(__name__)

# Emitted before anything else so the platform can capture the host keys
# even when provisioning later fails.
PRE_MODULES = ["keys_to_console"]

# Order matters: resolv_conf derives its search domain from the hostname
# that set_hostname persisted.
CONFIG_MODULES = [
    "set_hostname",
    "network",
    "resolv_conf",
    "admin_access",
    "reconcile_services",
]


def read_runtime_config(fname: Optional[str] = None) -> dict:
    """Merge the on-disk config (if any) over the builtin defaults."""
    if not fname:
        fname = os.environ.get(
            settings.CFG_ENV_NAME, settings.FIRSTBOOT_CONFIG
        )
    file_cfg = util.read_conf(fname)
    if file_cfg:
        LOG.debug("Read config overrides from %s", fname)
    return util.mergemanydict([file_cfg, settings.CFG_BUILTIN])


class Init:
    def __init__(
        self,
        cfg: dict,
        distro: Optional[distros.Distro] = None,
        datasource: Optional[DataSourceConfigDrive] = None,
    ):
        self.cfg = cfg
        if distro is None:
            distro = distros.fetch("openbsd")("openbsd", cfg)
        self.distro = distro
        if datasource is None:
            datasource = DataSourceConfigDrive(cfg["configdrive"])
        self.datasource = datasource
        self.cloud: Optional[Cloud] = None

    @property
    def semaphore(self):
        return subp.target_path(self.cfg.get("target"), self.cfg["semaphore"])

    def already_ran(self) -> bool:
        return os.path.exists(self.semaphore)

    def mark_done(self):
        util.write_file(self.semaphore, "%s\n" % time.time())

    def run_module(self, name, cloud, args=None):
        mod = config.fetch_module(name)
        LOG.debug("Running module %s (%s)", name, mod.__name__)
        mod.handle(name, self.cfg, cloud, args or [])

    def fetch(self) -> Cloud:
        """Load the config drive and resolve the interface to configure."""
        self.datasource.get_data()
        interface = net.find_interface_by_mac(
            self.datasource.network_metadata.mac_address,
            self.distro.net_ops,
            util.get_cfg_by_path(self.cfg, "network/default_interface"),
        )
        self.cloud = Cloud(self.datasource, self.cfg, self.distro, interface)
        return self.cloud

    def run(self, args: Optional[List[str]] = None, force=False) -> bool:
        """Run the whole provisioning pipeline.

        Returns False if a previous run completed and force is not set.
        Fatal errors (unmountable drive, missing network metadata, failed
        writes) propagate to the caller and stop the run.
        """
        if self.already_ran() and not force:
            LOG.info(
                "Provisioning already completed (%s exists), not running",
                self.semaphore,
            )
            return False

        for name in PRE_MODULES:
            self.run_module(name, None)

        cloud = self.fetch()
        for name in CONFIG_MODULES:
            self.run_module(name, cloud, args)

        self.mark_done()
        LOG.info("Provisioning of %s completed", cloud.interface)
        return True

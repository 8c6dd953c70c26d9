# This file is part of firstboot. See LICENSE file for license information.

import copy
import logging
from typing import Optional

from firstboot import sources, util
from firstboot.distros import Distro
from firstboot.sources.DataSourceConfigDrive import DataSourceConfigDrive

LOG = logging.getLogger(__name__)

# This class is the per-run context handed to every config module: the
# merged configuration, the OS collaborator, the loaded metadata and the
# interface resolved from it. Modules get everything they need from here
# rather than from module level state.


class Cloud:
    def __init__(
        self,
        datasource: DataSourceConfigDrive,
        cfg: dict,
        distro: Distro,
        interface: str,
    ):
        self.datasource = datasource
        self.distro = distro
        self.interface = interface
        self._cfg = cfg

    @property
    def cfg(self):
        # Ensure that cfg is not indirectly modified
        return copy.deepcopy(self._cfg)

    @property
    def network_metadata(self) -> sources.NetworkMetadata:
        return self.datasource.network_metadata

    @property
    def user_metadata(self) -> sources.UserMetadata:
        return self.datasource.user_metadata

    @property
    def admin_user(self) -> str:
        return self._cfg["admin_user"]

    def get_cfg_by_path(self, keyp, default=None):
        return util.get_cfg_by_path(self._cfg, keyp, default)

    def target_path(self, path):
        return self.distro.target_path(path)

    def get_hostname(self) -> Optional[str]:
        """Hostname as persisted by the identity stage, read back from disk."""
        return self.distro.read_hostname()

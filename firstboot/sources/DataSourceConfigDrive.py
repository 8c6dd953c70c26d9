# This file is part of firstboot. See LICENSE file for license information.

import logging
import os
from typing import Optional

from firstboot import sources, subp, util
from firstboot.log.log_util import logexc

LOG = logging.getLogger(__name__)


class DataSourceConfigDrive:
    """Metadata held on the read-only config drive attached at first boot.

    The drive stays mounted from get_data() until unmount() so later
    stages could re-read it; nothing here writes to it.
    """

    dsname = "ConfigDrive"

    def __init__(self, ds_cfg: dict):
        self.device = ds_cfg["device"]
        self.mountpoint = ds_cfg["mountpoint"]
        self.fstype = ds_cfg.get("fstype")
        self.network_data_path = ds_cfg["network_data"]
        self.user_data_path = ds_cfg["user_data"]
        self.network_data_raw: Optional[str] = None
        self.user_data_raw: Optional[str] = None
        self.network_metadata = sources.NetworkMetadata()
        self.user_metadata = sources.UserMetadata()

    def __str__(self):
        return "%s [dev=%s]" % (self.dsname, self.device)

    def _path(self, relpath):
        return subp.target_path(self.mountpoint, relpath)

    def get_data(self):
        """Mount the drive and load both documents.

        :raises util.MountFailedError: the drive could not be mounted.
        :raises sources.MetadataNotFoundError: network_data is missing.
        :raises ValueError: network_data is not a JSON object.
        """
        util.mount(self.device, self.mountpoint, self.fstype)

        network_fn = self._path(self.network_data_path)
        try:
            self.network_data_raw = util.load_text_file(network_fn)
        except FileNotFoundError as e:
            raise sources.MetadataNotFoundError(
                "No network metadata found at %s" % network_fn
            ) from e
        self.network_metadata = sources.parse_network_data(
            self.network_data_raw
        )

        user_fn = self._path(self.user_data_path)
        if os.path.isfile(user_fn):
            try:
                self.user_data_raw = util.load_text_file(user_fn)
            except UnicodeDecodeError as e:
                LOG.warning(
                    "Ignoring user data at %s, it is not UTF-8 text: %s",
                    user_fn,
                    e,
                )
        else:
            LOG.info("No user data found at %s", user_fn)
        self.user_metadata = sources.parse_user_data(self.user_data_raw)
        LOG.debug(
            "Loaded metadata from %s: %s %s",
            self,
            self.network_metadata,
            self.user_metadata,
        )

    def unmount(self):
        try:
            util.unmount(self.mountpoint)
        except (subp.ProcessExecutionError, OSError):
            logexc(LOG, "Failed to unmount %s", self.mountpoint)
        else:
            LOG.debug("Unmounted %s", self.mountpoint)

# This file is part of firstboot. See LICENSE file for license information.

import abc
import importlib
import logging
from typing import Type

from firstboot import settings, subp, util
from firstboot.net.netops import NetOps

LOG = logging.getLogger(__name__)


class Distro(metaclass=abc.ABCMeta):
    hostname_conf_fn = settings.HOSTNAME_CONF_FN
    net_ops: Type[NetOps]

    def __init__(self, name, cfg):
        self.name = name
        self._cfg = cfg
        self.target = cfg.get("target") or "/"

    def target_path(self, path):
        return subp.target_path(self.target, path)

    def read_hostname(self):
        """Return the persisted hostname, or None if there is none."""
        try:
            content = util.load_text_file(
                self.target_path(self.hostname_conf_fn)
            )
        except FileNotFoundError:
            return None
        return content.strip() or None

    @abc.abstractmethod
    def write_hostname(self, hostname):
        raise NotImplementedError()

    def apply_hostname(self, hostname):
        # This really only sets the hostname
        # temporarily (until reboot so it should
        # not be depended on). Use the write
        # hostname functions for 'permanent' adjustments.
        LOG.debug(
            "Non-persistently setting the system hostname to %s", hostname
        )
        try:
            subp.subp(["hostname", hostname])
        except subp.ProcessExecutionError:
            util.logexc(
                LOG,
                "Failed to non-persistently adjust the system hostname to %s",
                hostname,
            )

    @classmethod
    @abc.abstractmethod
    def manage_service(cls, action: str, service: str, *extra_args, rcs=None):
        raise NotImplementedError()

    @abc.abstractmethod
    def reapply_network(self):
        raise NotImplementedError()


def fetch(name) -> Type[Distro]:
    mod = importlib.import_module("firstboot.distros.%s" % name)
    return getattr(mod, "Distro")

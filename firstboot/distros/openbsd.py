# This file is part of firstboot. See LICENSE file for license information.

import logging

from firstboot import atomic_helper, distros, subp
from firstboot.net.netops.openbsd_netops import OpenBsdNetOps

LOG = logging.getLogger(__name__)


class Distro(distros.Distro):
    init_cmd = ["rcctl"]
    netstart_cmd = ["sh", "/etc/netstart"]
    net_ops = OpenBsdNetOps

    def write_hostname(self, hostname):
        content = hostname + "\n"
        atomic_helper.write_file(
            self.target_path(self.hostname_conf_fn), content
        )

    @classmethod
    def manage_service(cls, action: str, service: str, *extra_args, rcs=None):
        """
        Perform the requested action on a service. This handles OpenBSD's
        'rcctl'.
        May raise ProcessExecutionError
        """
        init_cmd = cls.init_cmd
        cmds = {
            "stop": ["stop", service],
            "start": ["start", service],
            "enable": ["enable", service],
            "disable": ["disable", service],
            "restart": ["restart", service],
            "reload": ["reload", service],
            "status": ["check", service],
        }
        cmd = list(init_cmd) + list(cmds[action]) + list(extra_args)
        return subp.subp(cmd, capture=True, rcs=rcs)

    def reapply_network(self):
        """Rerun netstart so the hostname.if and mygate files take effect.

        Connectivity drops briefly while the interfaces are reconfigured.
        """
        return subp.subp(list(self.netstart_cmd), capture=True)

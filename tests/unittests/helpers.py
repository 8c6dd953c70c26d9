# This file is part of firstboot. See LICENSE file for license information.

import copy
import os
import shutil
from unittest import mock  # noqa: F401

from firstboot import settings, util
from firstboot.net.netops import NetOps
from tests.helpers import firstboot_project_dir

MAC = "56:00:04:6a:7b:2c"

example_netdev = {
    "lo0": {
        "hwaddr": "",
        "ipv4": [{"ip": "127.0.0.1", "mask": "0xff000000"}],
        "ipv6": [{"ip": "::1/128"}],
        "up": True,
    },
    "vio0": {
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
    },
}

example_routes = {
    "ipv4": [
        {
            "destination": "default",
            "gateway": "203.0.113.1",
            "flags": "UGS",
            "iface": "vio0",
        },
        {
            "destination": "127/8",
            "gateway": "127.0.0.1",
            "flags": "UGRS",
            "iface": "lo0",
        },
    ],
    "ipv6": [],
}


def resourceLocation(subname=None):
    path = firstboot_project_dir("tests/data")
    if not subname:
        return path
    return os.path.join(path, subname)


def readResource(name, mode="r"):
    with open(resourceLocation(name), mode) as fh:
        return fh.read()


def fake_net_ops(interfaces=None, routes=None):
    """Return a NetOps class answering from the given fixtures."""
    if interfaces is None:
        interfaces = example_netdev
    if routes is None:
        routes = example_routes

    class FakeNetOps(NetOps):
        @staticmethod
        def get_interfaces():
            return copy.deepcopy(interfaces)

        @staticmethod
        def get_routes():
            return copy.deepcopy(routes)

    return FakeNetOps


def build_cfg(tmpdir, **overrides):
    """Builtin config retargeted under tmpdir."""
    cfg = util.mergemanydict(
        [
            overrides,
            {
                "target": str(tmpdir),
                "def_log_file": os.path.join(str(tmpdir), "firstboot.log"),
                "configdrive": {
                    "mountpoint": os.path.join(str(tmpdir), "mnt"),
                },
            },
            settings.CFG_BUILTIN,
        ]
    )
    return cfg


def populate_configdrive(mountpoint, network_data=True, user_data=True):
    """Copy the sample config drive documents into mountpoint.

    network_data and user_data may be True (copy the sample), False (leave
    the document out) or a string (write that content instead).
    """
    latest = os.path.join(mountpoint, "openstack", "latest")
    util.ensure_dir(latest)
    for fname, content in (
        ("network_data.json", network_data),
        ("user_data", user_data),
    ):
        dest = os.path.join(latest, fname)
        if content is True:
            shutil.copy(
                resourceLocation("configdrive/openstack/latest/" + fname),
                dest,
            )
        elif content:
            util.write_file(dest, content)

# This file is part of firstboot. See LICENSE file for license information.

import logging

import pytest

from firstboot import distros
from firstboot.cloud import Cloud
from firstboot.sources.DataSourceConfigDrive import DataSourceConfigDrive
from tests.unittests.helpers import (
    build_cfg,
    fake_net_ops,
    populate_configdrive,
)


@pytest.fixture
def cfg(tmpdir):
    return build_cfg(tmpdir)


@pytest.fixture
def distro(cfg):
    """An OpenBSD distro writing under tmpdir and reading fake net state."""
    dist = distros.fetch("openbsd")("openbsd", cfg)
    dist.net_ops = fake_net_ops()
    return dist


@pytest.fixture
def configdrive(cfg):
    """The sample config drive, copied to the configured mount point."""
    populate_configdrive(cfg["configdrive"]["mountpoint"])
    return cfg["configdrive"]["mountpoint"]


@pytest.fixture
def datasource(cfg, configdrive, mocker):
    mocker.patch("firstboot.util.mount")
    ds = DataSourceConfigDrive(cfg["configdrive"])
    ds.get_data()
    return ds


@pytest.fixture
def cloud(cfg, distro, datasource):
    return Cloud(datasource, cfg, distro, "vio0")


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo root logger changes made by logging setup under test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        # pytest's own capture handlers are subclasses; leave those alone.
        if handler not in handlers and type(handler) in (
            logging.StreamHandler,
            logging.FileHandler,
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

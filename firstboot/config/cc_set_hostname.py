# This file is part of firstboot. See LICENSE file for license information.

"""Set Hostname: Persist and apply the FQDN from the user document"""

import logging

from firstboot.cloud import Cloud
from firstboot.config import Config

LOG = logging.getLogger(__name__)


def handle(name: str, cfg: Config, cloud: Cloud, args: list) -> None:
    fqdn = cloud.user_metadata.fqdn
    if not fqdn:
        LOG.info(
            "No fqdn in user data, keeping the image hostname in module %s",
            name,
        )
        return

    # The value is written through untouched; a malformed name shows up
    # later as resolver or mail trouble, not here.
    LOG.info("Setting hostname to %s", fqdn)
    cloud.distro.write_hostname(fqdn)
    cloud.distro.apply_hostname(fqdn)

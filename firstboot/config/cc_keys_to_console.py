# This file is part of firstboot. See LICENSE file for license information.

"""Keys to Console: Write the SSH host public keys to the console"""

import glob
import logging
from typing import Optional

from firstboot import settings, subp, util
from firstboot.cloud import Cloud
from firstboot.config import Config
from firstboot.log.log_util import multi_log

LOG = logging.getLogger(__name__)


def format_host_keys(key_files) -> str:
    lines = [settings.HOST_KEYS_BEGIN]
    for key_file in key_files:
        try:
            lines.append(util.load_text_file(key_file).strip())
        except OSError:
            util.logexc(LOG, "Failed to read host key %s", key_file)
    lines.append(settings.HOST_KEYS_END)
    return "\n".join(lines) + "\n"


def handle(
    name: str, cfg: Config, cloud: Optional[Cloud], args: list
) -> None:
    # Runs before the config drive is read, so cloud may be None.
    if util.is_false(cfg.get("emit_keys_to_console", True)):
        LOG.debug(
            "Skipping module named %s, logging of SSH host keys disabled", name
        )
        return

    key_glob = subp.target_path(cfg.get("target"), cfg["host_key_glob"])
    key_files = sorted(glob.glob(key_glob))
    if not key_files:
        LOG.warning("No SSH host keys found to write to the console")
    multi_log(format_host_keys(key_files), stderr=False, console=True)

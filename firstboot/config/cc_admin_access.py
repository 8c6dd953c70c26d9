# This file is part of firstboot. See LICENSE file for license information.

"""Admin Access: Install SSH keys and a doas rule for the admin account

Only applies to #cloud-config user data. Keys are appended to the
existing authorized_keys so keys baked into the image survive; running
this twice therefore duplicates the new keys.
"""

import logging
import os

from firstboot import atomic_helper, settings, util
from firstboot.cloud import Cloud
from firstboot.config import Config

LOG = logging.getLogger(__name__)

DOAS_RULE_TPL = "permit nopass %s as root\n"


def append_authorized_keys(keys, username, keys_fn):
    ssh_dir = os.path.dirname(keys_fn)
    if not os.path.isdir(ssh_dir):
        util.ensure_dir(ssh_dir, mode=0o700)
        try:
            util.chownbyname(ssh_dir, username)
        except OSError:
            util.logexc(LOG, "Failed to set ownership of %s", ssh_dir)
    existed = os.path.exists(keys_fn)
    content = "".join("%s\n" % key for key in keys)
    if existed:
        current = util.load_text_file(keys_fn)
        if current and not current.endswith("\n"):
            content = "\n" + content
    util.append_file(keys_fn, content)
    if not existed:
        util.chmod(keys_fn, 0o600)
        try:
            util.chownbyname(keys_fn, username)
        except OSError:
            util.logexc(LOG, "Failed to set ownership of %s", keys_fn)
    LOG.info("Added %d ssh key(s) for %s", len(keys), username)


def write_doas_rule(username, doas_fn):
    atomic_helper.write_file(doas_fn, DOAS_RULE_TPL % username, mode=0o600)


def handle(name: str, cfg: Config, cloud: Cloud, args: list) -> None:
    user_md = cloud.user_metadata
    if not user_md.is_cloud_config:
        LOG.debug(
            "User data is not %s, skipping module %s",
            settings.CLOUD_CONFIG_TAG,
            name,
        )
        return

    username = cloud.admin_user
    if user_md.ssh_authorized_keys:
        append_authorized_keys(
            user_md.ssh_authorized_keys,
            username,
            cloud.target_path(settings.AUTHORIZED_KEYS_TPL % username),
        )
    else:
        LOG.info("No ssh keys in user data")

    write_doas_rule(username, cloud.target_path(settings.DOAS_CONF_FN))

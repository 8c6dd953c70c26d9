# This file is part of firstboot. See LICENSE file for license information.

# Set and read for determining the config file location
CFG_ENV_NAME = "FIRSTBOOT_CFG"

# This is expected to be a yaml formatted file
FIRSTBOOT_CONFIG = "/etc/firstboot.cfg"

# Tag that marks the user document as a configuration document
CLOUD_CONFIG_TAG = "#cloud-config"

# Host public keys are emitted between these lines for the platform's
# console scraper.
HOST_KEYS_BEGIN = "-----BEGIN SSH HOST KEY KEYS-----"
HOST_KEYS_END = "-----END SSH HOST KEY KEYS-----"

# What u get if no config is provided
CFG_BUILTIN = {
    "configdrive": {
        "device": "/dev/cd0c",
        "mountpoint": "/mnt/configdrive",
        "fstype": "cd9660",
        "network_data": "openstack/latest/network_data.json",
        "user_data": "openstack/latest/user_data",
    },
    "network": {
        # The platform attaches exactly one virtio NIC, which OpenBSD
        # always names vio0.
        "default_interface": "vio0",
        # Every IPv6 assignment on the platform is a /64; the metadata
        # does not carry the prefix length.
        "ipv6_prefixlen": 64,
    },
    "admin_user": "openbsd",
    "resolver_daemon": "resolvd",
    "hostname_services": ["smtpd", "syslogd"],
    "emit_keys_to_console": True,
    "host_key_glob": "/etc/ssh/ssh_host_*_key.pub",
    "def_log_file": "/var/log/firstboot.log",
    "log_cfgs": [],
    "target": "/",
    "semaphore": "/var/db/firstboot/done",
}

# Artifact locations, relative to the configured target
HOSTNAME_CONF_FN = "/etc/myname"
HOSTNAME_IF_TPL = "/etc/hostname.%s"
MYGATE_FN = "/etc/mygate"
RESOLV_CONF_FN = "/etc/resolv.conf"
DOAS_CONF_FN = "/etc/doas.conf"
AUTHORIZED_KEYS_TPL = "/home/%s/.ssh/authorized_keys"

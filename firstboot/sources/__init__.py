# This file is part of firstboot. See LICENSE file for license information.
"""Typed views of the two config drive documents.

network_data.json follows the OpenStack config drive layout::

    {"links": [{"ethernet_mac_address": "..."}],
     "networks": [{"type": "ipv6", "ip_address": "...",
                   "routes": [{"network": "::", "gateway": "fe80::1"}]}],
     "services": [{"type": "dns", "address": "..."}]}

user_data is free form unless its first line is the #cloud-config tag, in
which case it is parsed as YAML.
"""

import logging
import re
from typing import List, NamedTuple, Optional, Tuple

import jsonschema

from firstboot import settings, util

LOG = logging.getLogger(__name__)

DEFAULT_ROUTE_NETWORKS = ("0.0.0.0", "::")
STATIC_TYPES = ("ipv4", "ipv6")

# Only the shape of the fields we consume is enforced; everything is
# optional because missing fields are legitimate.
NETWORK_DATA_SCHEMA = {
    "type": "object",
    "properties": {
        "links": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"ethernet_mac_address": {"type": "string"}},
            },
        },
        "networks": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "type": {"type": "string"},
                    "ip_address": {"type": "string"},
                    "gateway": {"type": "string"},
                    "routes": {"type": "array", "items": {"type": "object"}},
                    "services": {"$ref": "#/definitions/services"},
                },
            },
        },
        "services": {"$ref": "#/definitions/services"},
    },
    "definitions": {
        "services": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "type": {"type": "string"},
                    "address": {"type": "string"},
                },
            },
        },
    },
}

_FQDN_LINE_RE = re.compile(
    r"^fqdn:[ \t]*(?P<fqdn>[^\s#]+)[ \t]*(?:#.*)?$", re.MULTILINE
)


class MetadataNotFoundError(IOError):
    """A required config drive document is missing."""


class DnsService(NamedTuple):
    address: str


class NetworkMetadata(NamedTuple):
    mac_address: str = ""
    address_type: Optional[str] = None
    ipv6_address: Optional[str] = None
    gateway: Optional[str] = None
    dns_services: Tuple[DnsService, ...] = ()

    @property
    def dns_addresses(self) -> List[str]:
        """Unique DNS addresses in the order they were declared."""
        return util.uniq_list([svc.address for svc in self.dns_services])


class UserMetadata(NamedTuple):
    fqdn: Optional[str] = None
    is_cloud_config: bool = False
    ssh_authorized_keys: Tuple[str, ...] = ()


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _str_or_none(value) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _dns_services(services) -> List[DnsService]:
    found = []
    for service in _as_list(services):
        service = _as_dict(service)
        address = _str_or_none(service.get("address"))
        if service.get("type") == "dns" and address:
            found.append(DnsService(address))
    return found


def _network_gateway(network: dict) -> Optional[str]:
    gateway = _str_or_none(network.get("gateway"))
    if gateway:
        return gateway
    for route in _as_list(network.get("routes")):
        route = _as_dict(route)
        if route.get("network") in DEFAULT_ROUTE_NETWORKS:
            gateway = _str_or_none(route.get("gateway"))
            if gateway:
                return gateway
    return None


def parse_network_data(blob) -> NetworkMetadata:
    """Parse network_data.json into NetworkMetadata.

    :raises ValueError: when blob is not a JSON object.
    """
    try:
        data = util.load_json(blob)
    except (ValueError, TypeError) as e:
        raise ValueError("Invalid network_data.json: %s" % e) from e
    try:
        jsonschema.validate(data, NETWORK_DATA_SCHEMA)
    except jsonschema.ValidationError as e:
        LOG.warning(
            "network_data.json does not match the expected layout at %s: %s",
            "/".join(str(p) for p in e.absolute_path) or "<root>",
            e.message,
        )

    mac_address = ""
    for link in _as_list(data.get("links")):
        mac_address = _str_or_none(
            _as_dict(link).get("ethernet_mac_address")
        )
        if mac_address:
            break

    dns = _dns_services(data.get("services"))
    networks = [_as_dict(n) for n in _as_list(data.get("networks"))]
    for network in networks:
        dns.extend(_dns_services(network.get("services")))

    address_type = ipv6_address = gateway = None
    static = [n for n in networks if n.get("type") in STATIC_TYPES]
    if len(static) > 1:
        LOG.warning(
            "Found %d static network entries, only the first is used",
            len(static),
        )
    if static:
        network = static[0]
        address_type = network["type"]
        if address_type == "ipv6":
            ipv6_address = _str_or_none(network.get("ip_address"))
            gateway = _network_gateway(network)

    return NetworkMetadata(
        mac_address=mac_address or "",
        address_type=address_type,
        ipv6_address=ipv6_address,
        gateway=gateway,
        dns_services=tuple(dns),
    )


def is_cloud_config(blob) -> bool:
    text = util.decode_binary(blob)
    return text.splitlines()[0:1] == [settings.CLOUD_CONFIG_TAG]


def parse_user_data(blob) -> UserMetadata:
    """Parse the user document into UserMetadata.

    Untagged documents are opaque: only a top level ``fqdn:`` line is
    honoured and no ssh keys are ever returned.
    """
    if blob is None:
        return UserMetadata()
    text = util.decode_binary(blob)
    if not is_cloud_config(text):
        m = _FQDN_LINE_RE.search(text)
        return UserMetadata(fqdn=m.group("fqdn") if m else None)

    cfg = util.load_yaml(text, default={})
    if not isinstance(cfg, dict):
        cfg = {}
    keys = util.get_cfg_option_list(cfg, "ssh_authorized_keys", []) or []
    return UserMetadata(
        fqdn=_str_or_none(cfg.get("fqdn")),
        is_cloud_config=True,
        ssh_authorized_keys=tuple(
            str(k).strip() for k in keys if k and str(k).strip()
        ),
    )

from abc import abstractmethod
from typing import Dict, List


class NetOps:
    """Read-only queries against the live network stack."""

    @staticmethod
    @abstractmethod
    def get_interfaces() -> Dict[str, dict]:
        """Return netinfo style device dicts keyed by interface name."""

    @staticmethod
    @abstractmethod
    def get_routes() -> Dict[str, List[dict]]:
        """Return {'ipv4': [...], 'ipv6': [...]} routing table entries."""

from typing import Dict, List

import firstboot.net.netops as netops
from firstboot import netinfo


class OpenBsdNetOps(netops.NetOps):
    @staticmethod
    def get_interfaces() -> Dict[str, dict]:
        return netinfo.netdev_info()

    @staticmethod
    def get_routes() -> Dict[str, List[dict]]:
        return netinfo.route_info()

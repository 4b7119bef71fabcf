# dhcp_leases/parsers/__init__.py
from .registry import register_parser, get_parser, registered_parsers
from .isc_dhcp import IscDhcpLeasesParser  # ← импорт выполняет register_parser внутри модуля
from .oui import OuiRegistryParser

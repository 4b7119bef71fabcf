import string
from typing import Iterable, Iterator

from dhcp_leases.models.vendor import VendorEntry
from .base_parser import BaseParser
from .registry import register_parser

MIN_LINE_LENGTH = 23
ORGANIZATION_COLUMN = 22

HEX_DIGITS = set(string.hexdigits)


def normalize_oui(prefix: str) -> str:
    """0050C2 → 00:50:c2"""
    prefix = prefix.lower()
    return ":".join(prefix[i:i + 2] for i in range(0, 6, 2))


class OuiRegistryParser(BaseParser):
    @classmethod
    def parse(cls, lines: Iterable[str]) -> Iterator[VendorEntry]:
        """
        Разбор oui.txt в формате IEEE с фиксированными колонками:
        0050C2     (base 16)\t\tIEEE REGISTRATION AUTHORITY
        Префикс в колонках 0-5, организация с колонки 22.
        Заголовки, комментарии и строки вида 00-50-C2 (hex) пропускаются.
        """
        line_number = 0
        entries = 0

        for raw_line in lines:
            line_number += 1
            line = raw_line.strip()

            if len(line) < MIN_LINE_LENGTH:
                continue

            prefix = line[0:6]
            if not all(c in HEX_DIGITS for c in prefix):
                continue

            entries += 1
            yield VendorEntry(prefix=normalize_oui(prefix), organization=line[ORGANIZATION_COLUMN:])

        print(f"[OUI] Прочитано строк: {line_number}, записей производителей: {entries}")


register_parser("ieee", "oui", OuiRegistryParser.parse)

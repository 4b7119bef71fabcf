import ipaddress
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Tuple

from dhcp_leases.errors import LeaseParseError
from dhcp_leases.models.lease import LeaseRecord
from .base_parser import BaseParser
from .registry import register_parser

# Формат времени в dhcpd.leases: "starts 4 2024/01/01 00:00:00;"
LEASE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S;"

MAC_PATTERN = re.compile(r"^[0-9a-fA-F]{2}([:-])(?:[0-9a-fA-F]{2}\1){4}[0-9a-fA-F]{2}$")
MAC_DOTTED_PATTERN = re.compile(r"^[0-9a-fA-F]{4}\.[0-9a-fA-F]{4}\.[0-9a-fA-F]{4}$")
# В файле поля всегда с ведущими нулями, strptime сам этого не проверяет
LEASE_TIME_PATTERN = re.compile(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2};")


class ParserState(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


def parse_lease_time(line: str) -> datetime:
    """
    Достаёт дату и время из строки starts/ends/cltt.
    Токен дня недели необязателен. Время в файле хранится в UTC.
    """
    tokens = line.split(" ")
    if len(tokens) >= 4:
        time_string = tokens[2] + " " + tokens[3]
    elif len(tokens) == 3:
        time_string = tokens[1] + " " + tokens[2]
    else:
        raise ValueError(f"нет даты и времени в '{line}'")

    if not LEASE_TIME_PATTERN.fullmatch(time_string):
        raise ValueError(f"время '{time_string}' не в формате YYYY/MM/DD HH:MM:SS;")

    parsed = datetime.strptime(time_string, LEASE_TIME_FORMAT)
    return parsed.replace(tzinfo=timezone.utc)


def parse_mac(value: str) -> str:
    if MAC_PATTERN.match(value):
        return value.replace("-", ":").lower()
    if MAC_DOTTED_PATTERN.match(value):
        mac_clean = value.replace(".", "").lower()
        return ":".join(mac_clean[i:i + 2] for i in range(0, 12, 2))
    raise ValueError(f"некорректный MAC '{value}'")


def _time_handler(field: str) -> Callable[[Dict[str, Any], str, int], None]:
    def handler(entry: Dict[str, Any], line: str, line_number: int) -> None:
        try:
            entry[field] = parse_lease_time(line)
        except ValueError as e:
            raise LeaseParseError(f"не удалось разобрать время {field}: {e}", line_number, line) from e

    return handler


def _hardware_handler(entry: Dict[str, Any], line: str, line_number: int) -> None:
    mac_raw = line[len("hardware ethernet "):].split(";")[0].strip()
    try:
        entry["mac_address"] = parse_mac(mac_raw)
    except ValueError as e:
        raise LeaseParseError(str(e), line_number, line) from e


def _hostname_handler(entry: Dict[str, Any], line: str, line_number: int) -> None:
    parts = line.split('"')
    entry["hostname"] = parts[1] if len(parts) > 2 else ""


def _abandoned_handler(entry: Dict[str, Any], line: str, line_number: int) -> None:
    entry["abandoned"] = True


# Порядок важен: срабатывает первый подошедший префикс
DIRECTIVES: List[Tuple[str, Callable[[Dict[str, Any], str, int], None]]] = [
    ("starts", _time_handler("start_time")),
    ("ends", _time_handler("end_time")),
    ("cltt", _time_handler("cltt_time")),
    ("hardware ethernet ", _hardware_handler),
    ("client-hostname ", _hostname_handler),
    ("abandoned;", _abandoned_handler),
    ("binding state abandoned;", _abandoned_handler),
]


class IscDhcpLeasesParser(BaseParser):
    @classmethod
    def parse(cls, lines: Iterable[str]) -> Iterator[LeaseRecord]:
        state = ParserState.OUTSIDE
        current_entry: Dict[str, Any] = {}
        line_number = 0
        emitted = 0

        for raw_line in lines:
            line_number += 1
            line = raw_line.strip()

            if state is ParserState.OUTSIDE:
                if line.startswith("lease ") and line.endswith(" {"):
                    current_entry = {"ip_address": cls._parse_ip(line, line_number), "count": 1}
                    state = ParserState.INSIDE
                continue

            if line.startswith("}"):
                yield LeaseRecord(**current_entry)
                emitted += 1
                current_entry = {}
                state = ParserState.OUTSIDE
                continue

            for prefix, handler in DIRECTIVES:
                if line.startswith(prefix):
                    handler(current_entry, line, line_number)
                    break

        # Незакрытый блок в конце файла просто отбрасываем
        if state is ParserState.INSIDE:
            print(f"[DHCP PARSER] Незавершённый блок lease в конце файла пропущен (строка {line_number})")

        print(f"[DHCP PARSER] Прочитано строк: {line_number}, блоков lease: {emitted}")

    @staticmethod
    def _parse_ip(line: str, line_number: int):
        ip_raw = line.split(" ")[1]
        try:
            return ipaddress.ip_address(ip_raw)
        except ValueError as e:
            raise LeaseParseError(f"некорректный IP '{ip_raw}'", line_number, line) from e


# Регистрация (должна быть в конце файла)
register_parser("isc", "dhcp_leases", IscDhcpLeasesParser.parse)

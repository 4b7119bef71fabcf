from pathlib import Path
from typing import Iterator

from dhcp_leases.errors import InputReadError


def read_lines(path: str | Path, tag: str = "FILE") -> Iterator[str]:
    """
    Построчно читает текстовый файл (UTF-8).
    Ошибка открытия/чтения (OSError) пробрасывается наверх и прерывает запуск,
    битая кодировка превращается в InputReadError с номером строки.
    """
    path = Path(path)
    print(f"[{tag}] Читаем {path}")

    line_number = 0
    with open(path, "r", encoding="utf-8") as f:
        try:
            for line in f:
                line_number += 1
                yield line.rstrip("\n")
        except UnicodeDecodeError as e:
            raise InputReadError(
                f"{path}: не UTF-8 после строки {line_number} (байт 0x{e.object[e.start]:02x}): {e.reason}"
            ) from e

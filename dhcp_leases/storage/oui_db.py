import sqlite3
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dhcp_leases.errors import OuiStoreError
from dhcp_leases.models.vendor import VendorEntry

UNKNOWN_VENDOR = "UNKNOWN"
DEFAULT_BATCH_SIZE = 1000


def _flush(conn: sqlite3.Connection, batch: List[Tuple[str, str]], clear: bool = False) -> None:
    # Одна пачка = одна транзакция; очистка при пересборке идёт в транзакции первой пачки
    with conn:
        if clear:
            conn.execute("DELETE FROM oui")
        conn.executemany("INSERT OR REPLACE INTO oui (oui, organization) VALUES (?, ?)", batch)
    print(f"[OUI DB] Записана пачка: {len(batch)}")


def build_oui_db(
    entries: Iterable[VendorEntry],
    db_path: str | Path,
    batch_size: int = DEFAULT_BATCH_SIZE,
    rebuild: bool = True,
) -> int:
    """
    Создаёт (или пересоздаёт) SQLite-справочник OUI → организация.
    Записи пишутся пачками по batch_size; повторный префикс перезаписывает предыдущий.
    Возвращает количество записанных строк.
    """
    if batch_size < 1:
        raise ValueError("batch_size должен быть >= 1")

    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    try:
        conn = sqlite3.connect(str(db_path))
    except sqlite3.Error as e:
        raise OuiStoreError(f"не удалось открыть {db_path}: {e}") from e

    try:
        with conn:
            conn.execute("CREATE TABLE IF NOT EXISTS oui (oui TEXT PRIMARY KEY, organization TEXT)")

        # Пока источник не отдал первую пачку, старый справочник не трогаем
        pending_clear = rebuild
        batch: List[Tuple[str, str]] = []
        for entry in entries:
            batch.append((entry.prefix, entry.organization))
            if len(batch) >= batch_size:
                _flush(conn, batch, clear=pending_clear)
                pending_clear = False
                written += len(batch)
                batch = []

        if batch or pending_clear:
            _flush(conn, batch, clear=pending_clear)
            written += len(batch)
    except sqlite3.Error as e:
        raise OuiStoreError(f"ошибка записи в {db_path}: {e}") from e
    finally:
        conn.close()

    print(f"[OUI DB] Справочник обновлён: {db_path} (записей: {written})")
    return written


class VendorDirectory:
    """Справочник производителей только для чтения."""

    def __init__(self, conn: Optional[sqlite3.Connection] = None):
        self._conn = conn

    @classmethod
    def open(cls, db_path: str | Path) -> "VendorDirectory":
        db_path = Path(db_path)
        if not db_path.exists():
            print(f"[OUI DB] {db_path} не найден — производители будут {UNKNOWN_VENDOR}")
            return cls()

        conn = None
        try:
            # check_same_thread=False: открываем в рабочем потоке, читаем в основном после join
            conn = sqlite3.connect(f"{db_path.resolve().as_uri()}?mode=ro", uri=True, check_same_thread=False)
            row = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'oui'").fetchone()
        except sqlite3.Error as e:
            if conn is not None:
                conn.close()
            raise OuiStoreError(f"не удалось открыть {db_path}: {e}") from e

        if row is None:
            print(f"[OUI DB] В {db_path} нет таблицы oui — производители будут {UNKNOWN_VENDOR}")
            conn.close()
            return cls()

        return cls(conn)

    @property
    def is_empty(self) -> bool:
        return self._conn is None

    def lookup(self, prefix: Optional[str]) -> str:
        if self._conn is None or not prefix:
            return UNKNOWN_VENDOR

        try:
            row = self._conn.execute("SELECT organization FROM oui WHERE oui = ?", (prefix.lower(),)).fetchone()
        except sqlite3.Error as e:
            raise OuiStoreError(f"ошибка запроса {prefix}: {e}") from e

        return row[0] if row else UNKNOWN_VENDOR

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "VendorDirectory":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

import concurrent.futures
import sys
import time
from datetime import datetime, timezone
from typing import Dict, List

from dhcp_leases.collectors.file_collector import read_lines
from dhcp_leases.config import Settings, load_settings
from dhcp_leases.errors import DhcpLeasesError
from dhcp_leases.merge.leases_merge import merge_leases
from dhcp_leases.models.lease import LeaseRecord
from dhcp_leases.normalizer.report import ReportNormalizer
from dhcp_leases.output.table import render_table
from dhcp_leases.parsers import get_parser
from dhcp_leases.storage.oui_db import VendorDirectory, build_oui_db

CREATEDB_FLAG = "-createdb"


def read_leases(settings: Settings) -> Dict[str, LeaseRecord]:
    parser = get_parser("isc", "dhcp_leases")
    return merge_leases(parser(read_lines(settings.leases_file, tag="DHCP")))


def create_oui_db(settings: Settings) -> int:
    parser = get_parser("ieee", "oui")
    return build_oui_db(
        parser(read_lines(settings.oui_file, tag="OUI")),
        settings.oui_db,
        batch_size=settings.oui_batch_size,
        rebuild=settings.oui_rebuild,
    )


def build_report(settings: Settings, now: datetime | None = None) -> str:
    # Один момент времени на весь отчёт
    if now is None:
        now = datetime.now(timezone.utc)

    # Параллельно: разбор leases и открытие справочника OUI, отчёт после обоих
    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
        leases_future = executor.submit(read_leases, settings)
        directory_future = executor.submit(VendorDirectory.open, settings.oui_db)
        concurrent.futures.wait([leases_future, directory_future])

    directory = directory_future.result()
    try:
        leases = leases_future.result()
        report = ReportNormalizer.normalize(leases, directory, now)
    finally:
        directory.close()

    return render_table(report)


def main(argv: List[str] | None = None) -> int:
    start_time = time.time()
    argv = sys.argv[1:] if argv is None else argv

    try:
        settings = load_settings()

        if len(argv) == 1 and argv[0] == CREATEDB_FLAG:
            print("Режим createdb")
            create_oui_db(settings)
        else:
            table = build_report(settings)
            print()
            print(table)
    except (DhcpLeasesError, OSError) as e:
        print(f"Ошибка: {e}", file=sys.stderr)
        return 1

    print(f"\nГотово за {time.time() - start_time:.2f} секунд")
    return 0


if __name__ == "__main__":
    sys.exit(main())

from datetime import datetime, timezone

from dhcp_leases.merge.leases_merge import merge_leases
from dhcp_leases.models.lease import LeaseRecord, LeaseState
from dhcp_leases.models.vendor import VendorEntry
from dhcp_leases.normalizer.report import ReportNormalizer, format_time
from dhcp_leases.output.table import render_table
from dhcp_leases.storage.oui_db import UNKNOWN_VENDOR, VendorDirectory, build_oui_db

NOW = datetime(2024, 1, 2, 0, 30, tzinfo=timezone.utc)


def make_lease(ip: str, mac: str | None = None, day: int = 2, abandoned: bool = False) -> LeaseRecord:
    return LeaseRecord(
        ip_address=ip,
        mac_address=mac,
        start_time=datetime(2024, 1, day, 0, 0, tzinfo=timezone.utc),
        end_time=datetime(2024, 1, day, 1, 0, tzinfo=timezone.utc),
        abandoned=abandoned,
    )


def build_directory(tmp_path) -> VendorDirectory:
    db_path = tmp_path / "oui.db"
    build_oui_db([VendorEntry(prefix="00:50:c2", organization="IEEE REGISTRATION AUTHORITY")], db_path)
    return VendorDirectory.open(db_path)


def test_report_sorts_by_numeric_ip(tmp_path):
    leases = merge_leases([
        make_lease("10.0.0.10"),
        make_lease("2001:db8::1"),
        make_lease("10.0.0.9"),
        make_lease("9.0.0.1"),
    ])

    with build_directory(tmp_path) as directory:
        report = ReportNormalizer.normalize(leases, directory, NOW)

    assert [row.ip for row in report.rows] == ["9.0.0.1", "10.0.0.9", "10.0.0.10", "2001:db8::1"]


def test_report_resolves_vendor_and_state(tmp_path):
    leases = merge_leases([
        make_lease("10.0.0.1", mac="00:50:c2:01:02:03"),
        make_lease("10.0.0.2", mac="aa:bb:cc:01:02:03", day=1),
        make_lease("10.0.0.3", day=3),
        make_lease("10.0.0.4", mac="00:50:c2:aa:aa:aa", abandoned=True),
    ])

    with build_directory(tmp_path) as directory:
        report = ReportNormalizer.normalize(leases, directory, NOW)

    rows = {row.ip: row for row in report.rows}
    assert rows["10.0.0.1"].organization == "IEEE REGISTRATION AUTHORITY"
    assert rows["10.0.0.1"].state == LeaseState.CURRENT
    assert rows["10.0.0.2"].organization == UNKNOWN_VENDOR
    assert rows["10.0.0.2"].state == LeaseState.PAST
    assert rows["10.0.0.3"].organization == UNKNOWN_VENDOR
    assert rows["10.0.0.3"].mac == ""
    assert rows["10.0.0.3"].state == LeaseState.FUTURE
    assert rows["10.0.0.4"].state == LeaseState.ABANDONED
    assert report.summary == {
        LeaseState.ABANDONED: 1,
        LeaseState.FUTURE: 1,
        LeaseState.CURRENT: 1,
        LeaseState.PAST: 1,
    }


def test_report_end_to_end_example(tmp_path):
    leases = merge_leases([make_lease("10.0.0.5", day=1), make_lease("10.0.0.5", day=2)])

    with VendorDirectory.open(tmp_path / "missing.db") as directory:
        report = ReportNormalizer.normalize(leases, directory, NOW)

    assert report.total == 1
    row = report.rows[0]
    assert row.count == 2
    assert row.state == LeaseState.CURRENT
    assert row.end_time == format_time(datetime(2024, 1, 2, 1, 0, tzinfo=timezone.utc))


def test_format_time_uses_local_zone():
    value = datetime(2024, 1, 2, 1, 0, tzinfo=timezone.utc)

    assert format_time(value) == value.astimezone().strftime("%Y/%m/%d %H:%M:%S %z")
    assert format_time(None) == ""


def test_render_table_header_rows_and_summary(tmp_path):
    leases = merge_leases([
        make_lease("10.0.0.1", mac="00:50:c2:01:02:03"),
        make_lease("10.0.0.2", day=1),
    ])

    with build_directory(tmp_path) as directory:
        table = render_table(ReportNormalizer.normalize(leases, directory, NOW))

    lines = table.splitlines()
    assert lines[0].split() == ["IP", "MAC", "Count", "Hostname", "State", "End", "Time", "Last",
                                "Transaction", "Time", "Organization"]
    assert set(lines[1]) == {"#"}
    assert lines[2].startswith("10.0.0.1         00:50:c2:01:02:03  1     ")
    assert "Current" in lines[2]
    assert lines[2].endswith("IEEE REGISTRATION AUTHORITY")
    assert lines[3].startswith("10.0.0.2 ")
    assert lines[-1] == "Total leases: 2 (Abandoned: 0, Future: 0, Current: 1, Past: 1)"


def test_render_table_widens_columns_for_long_values(tmp_path):
    leases = merge_leases([make_lease("2001:db8:1234:5678:9abc:def0:1234:5678")])

    with VendorDirectory.open(tmp_path / "missing.db") as directory:
        table = render_table(ReportNormalizer.normalize(leases, directory, NOW))

    header, _, row = table.splitlines()[:3]
    assert header.index("MAC") == row.index(" ") + 1

from typing import List

from dhcp_leases.models.report import Report
from dhcp_leases.normalizer.lease_state import STATE_ORDER

# (заголовок, минимальная ширина колонки)
COLUMNS = [
    ("IP", 17),
    ("MAC", 19),
    ("Count", 6),
    ("Hostname", 22),
    ("State", 11),
    ("End Time", 27),
    ("Last Transaction Time", 27),
    ("Organization", 24),
]


def _format_line(values: List[str], widths: List[int]) -> str:
    cells = [f"{value:<{width}}" for value, width in zip(values, widths)]
    return "".join(cells).rstrip()


def render_table(report: Report) -> str:
    body = [
        [
            row.ip,
            row.mac,
            str(row.count),
            row.hostname,
            row.state.value,
            row.end_time,
            row.cltt_time,
            row.organization,
        ]
        for row in report.rows
    ]

    # Колонка расширяется под самое длинное значение (IPv6, длинные hostname)
    widths = [
        max([min_width] + [len(values[i]) + 1 for values in body])
        for i, (_, min_width) in enumerate(COLUMNS)
    ]

    lines = [
        _format_line([title for title, _ in COLUMNS], widths),
        "#" * sum(widths),
    ]
    lines.extend(_format_line(values, widths) for values in body)

    breakdown = ", ".join(f"{state.value}: {report.summary.get(state, 0)}" for state in STATE_ORDER)
    lines.append("")
    lines.append(f"Total leases: {report.total} ({breakdown})")

    return "\n".join(lines)

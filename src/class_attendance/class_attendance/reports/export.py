"""CSV renderings of reports (UTF-8 with BOM so spreadsheets detect the encoding)."""

from __future__ import annotations

import csv
import io

from .model import DateWisePivot, PersonHistory


def _to_bytes(out: io.StringIO) -> bytes:
    return out.getvalue().encode("utf-8-sig")


def date_wise_csv(pivot: DateWisePivot) -> bytes:
    slot_columns = [
        f"{s.label} ({pivot.class_names[s.slot_id]})" if pivot.class_names.get(s.slot_id) else s.label
        for s in pivot.slots
    ]
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(["employee_id", "category", "sub_category", *slot_columns])
    for row in pivot.matrix():
        p = row["personnel"]
        writer.writerow([p["employee_id"], p["category"], p["sub_category"] or "", *row["cells"]])
    return _to_bytes(out)


def person_history_csv(history: PersonHistory) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=["class_date", "slot_label", "class_name", "status"])
    writer.writeheader()
    for r in history.rows:
        writer.writerow(
            {
                "class_date": r.class_date,
                "slot_label": r.slot_label,
                "class_name": r.class_name,
                "status": r.status.value,
            }
        )
    return _to_bytes(out)

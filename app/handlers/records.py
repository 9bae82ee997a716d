"""Record processing and aggregate statistics for CRM data.

Both functions are pure: no I/O, no shared state. Non-mapping records raise
`TypeError`, which the HTTP adapter reports as HTTP 500.
"""

TOP_REGION = "North America"


def process_records(records: list) -> list[dict]:
    """Return copies of `records` stamped with `processed: True`."""
    return [{**record, "processed": True} for record in records]


def analyze_records(records: list) -> dict:
    """Sum `Amount` across records; missing or null amounts count as zero."""
    total = 0
    for record in records:
        total += record.get("Amount") or 0

    return {
        "totalSales": total,
        "topRegion": TOP_REGION,
    }

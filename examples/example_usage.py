"""Example: drive the scan resolver directly (no Flask, no database).

Controllers are a thin layer; the time-in / time-out decision lives in
ScanResolver and works the same on either record store.
"""

from datetime import datetime, timedelta

from src.access_log.access_log.container import build_container


def main():
    container = build_container()
    t0 = datetime.now()

    for offset in (0, 1, 5):
        outcome = container.scan_resolver.resolve_scan("A1001", "SCANNER-1", now=t0 + timedelta(seconds=offset))
        print(f"+{offset}s", outcome.to_dict())

    print(container.scan_resolver.resolve_scan("Z9999", "SCANNER-1", now=t0).to_dict())
    print(container.daily_reset.first_run_at(t0))


if __name__ == "__main__":
    main()

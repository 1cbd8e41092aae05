import unittest
from datetime import datetime, timedelta, timezone

from healthchecker.checks.results import CheckResult
from healthchecker.reporting import (
    build_report,
    compute_overall_status,
    serialize_ts,
    service_entry,
)
from healthchecker.state import StatusStore

TS = datetime(2026, 2, 23, 22, 37, 21, 123456, tzinfo=timezone.utc)


class OverallStatusTests(unittest.TestCase):
    def test_compute_overall_status_rules(self) -> None:
        up = CheckResult(url="http://a.local", up=True, status_code=200, last_checked=TS)
        down = CheckResult(url="http://b.local", up=False, status_code=503, last_checked=TS)
        failed = CheckResult(url="http://c.local", up=False, error="timeout", last_checked=TS)

        cases = [
            ([], "DOWN"),
            ([up], "UP"),
            ([up, up], "UP"),
            ([up, down], "DOWN"),
            ([failed], "DOWN"),
            ([down, up, failed], "DOWN"),
        ]

        for results, expected in cases:
            with self.subTest(results=[r.url for r in results]):
                self.assertEqual(compute_overall_status(results), expected)

    def test_accepts_a_generator(self) -> None:
        up = CheckResult(url="http://a.local", up=True, status_code=200, last_checked=TS)
        self.assertEqual(compute_overall_status(r for r in [up]), "UP")


class ServiceEntryTests(unittest.TestCase):
    def test_successful_entry_has_no_error_key(self) -> None:
        entry = service_entry(CheckResult(url="http://a.local", up=True, status_code=200, last_checked=TS))

        self.assertEqual(
            entry,
            {
                "url": "http://a.local",
                "status": "UP",
                "code": 200,
                "lastChecked": "2026-02-23T22:37:21.123456Z",
            },
        )

    def test_failed_entry_carries_error_and_zero_code(self) -> None:
        entry = service_entry(CheckResult(url="http://a.local", up=False, error="timeout", last_checked=TS))

        self.assertEqual(entry["status"], "DOWN")
        self.assertEqual(entry["code"], 0)
        self.assertEqual(entry["error"], "timeout")

    def test_serialize_ts_normalizes_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        local = datetime(2026, 1, 1, 14, 0, 0, tzinfo=plus_two)
        self.assertEqual(serialize_ts(local), "2026-01-01T12:00:00.000000Z")
        self.assertEqual(serialize_ts(datetime(2026, 1, 1)), "2026-01-01T00:00:00.000000Z")


class BuildReportTests(unittest.TestCase):
    def test_empty_store_is_down(self) -> None:
        self.assertEqual(build_report(StatusStore()), {"status": "DOWN", "services": []})

    def test_mixed_codes(self) -> None:
        store = StatusStore()
        store.put(CheckResult(url="http://ok.local", up=True, status_code=200, last_checked=TS))
        store.put(CheckResult(url="http://busy.local", up=False, status_code=503, last_checked=TS))

        report = build_report(store)

        self.assertEqual(report["status"], "DOWN")
        by_url = {s["url"]: s for s in report["services"]}
        self.assertEqual(by_url["http://ok.local"]["code"], 200)
        self.assertEqual(by_url["http://ok.local"]["status"], "UP")
        self.assertEqual(by_url["http://busy.local"]["code"], 503)
        self.assertEqual(by_url["http://busy.local"]["status"], "DOWN")
        self.assertNotIn("error", by_url["http://busy.local"])

    def test_all_up(self) -> None:
        store = StatusStore()
        store.put(CheckResult(url="http://a.local", up=True, status_code=200, last_checked=TS))
        store.put(CheckResult(url="http://b.local", up=True, status_code=200, last_checked=TS))

        report = build_report(store)

        self.assertEqual(report["status"], "UP")
        self.assertEqual(len(report["services"]), 2)


if __name__ == "__main__":
    unittest.main()

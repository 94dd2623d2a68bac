import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from deploy_check.checks.http_check import PageResponse, Probe
from deploy_check.checks.results import Found, LoadedUnknown, NotFound, TransportError
from deploy_check.models import CheckTarget
from deploy_check.runner import check_deploy, sweep

TARGET = CheckTarget(
    hostname="kupiy-proday-jwpo.vercel.app",
    path="/goodbye",
    headers={"User-Agent": "Mozilla/5.0"},
)


def _targets(*hostnames: str) -> dict[str, dict]:
    return {
        h: {
            "hostname": h,
            "path": "/",
            "timeout_s": 5,
            "headers": {"User-Agent": "Mozilla/5.0"},
            "markers": ["goodbye"],
        }
        for h in hostnames
    }


class CheckDeployTests(unittest.TestCase):
    def _run(self, probe: Probe) -> tuple[object, str]:
        buf = io.StringIO()
        with patch("deploy_check.runner.probe_http", return_value=probe), redirect_stdout(buf):
            result = check_deploy(TARGET, timeout_s=10)
        return result, buf.getvalue()

    def test_found_prints_status_headers_and_verdict(self) -> None:
        page = PageResponse(status_code=200, headers={"Age": "3"}, body="GoodbyePage")
        result, out = self._run(Probe(target=TARGET, result=Found(), page=page))

        self.assertEqual(result, Found())
        self.assertIn("Status Code: 200", out)
        self.assertIn("Headers: {'Age': '3'}", out)
        self.assertIn("✅", out)

    def test_loaded_unknown_prints_prefix(self) -> None:
        page = PageResponse(status_code=200, body="<html>old</html>")
        result, out = self._run(
            Probe(target=TARGET, result=LoadedUnknown(body_prefix="<html>old</html>"), page=page)
        )

        self.assertIsInstance(result, LoadedUnknown)
        self.assertIn("First 500 characters: <html>old</html>", out)

    def test_not_found_prints_status(self) -> None:
        page = PageResponse(status_code=404, body="nope")
        _, out = self._run(Probe(target=TARGET, result=NotFound(status_code=404), page=page))

        self.assertIn("Status Code: 404", out)
        self.assertIn("Page not found (HTTP 404)", out)

    def test_transport_error_is_reported_not_raised(self) -> None:
        result, out = self._run(
            Probe(target=TARGET, result=TransportError(message="getaddrinfo ENOTFOUND"))
        )

        self.assertEqual(result.message, "getaddrinfo ENOTFOUND")
        self.assertNotIn("Status Code", out)
        self.assertIn("❌ Error: getaddrinfo ENOTFOUND", out)

    def test_passes_timeout_and_default_markers(self) -> None:
        with patch(
            "deploy_check.runner.probe_http",
            return_value=Probe(target=TARGET, result=TransportError(message="x")),
        ) as probe_mock, redirect_stdout(io.StringIO()):
            check_deploy(TARGET, timeout_s=None)

        self.assertIsNone(probe_mock.call_args.kwargs["timeout_s"])
        self.assertIn("GoodbyePage", probe_mock.call_args.kwargs["markers"])


class SweepTests(unittest.TestCase):
    def test_sleeps_between_targets_only(self) -> None:
        targets = _targets("a.vercel.app", "b.vercel.app", "c.vercel.app")

        def fake_probe(target, timeout_s, markers):
            return Probe(target=target, result=TransportError(message="refused"))

        with patch("deploy_check.runner.probe_http", side_effect=fake_probe), patch(
            "deploy_check.runner.time.sleep"
        ) as sleep_mock, redirect_stdout(io.StringIO()):
            probes = sweep(targets, delay_s=1.0)

        self.assertEqual([p.target.hostname for p in probes], list(targets))
        self.assertEqual(sleep_mock.call_count, 2)
        sleep_mock.assert_called_with(1.0)

    def test_flags_current_hosts_and_reports_cache_headers(self) -> None:
        targets = _targets("old.vercel.app", "new.vercel.app", "gone.vercel.app")
        probes = {
            "old.vercel.app": (LoadedUnknown(body_prefix="old"), PageResponse(200, {}, "old")),
            "new.vercel.app": (
                Found(),
                PageResponse(
                    200,
                    {"age": "12", "Last-Modified": "Mon, 20 Oct 2025 10:00:00 GMT"},
                    "goodbye",
                ),
            ),
            "gone.vercel.app": (TransportError(message="timed out", timed_out=True), None),
        }

        def fake_probe(target, timeout_s, markers):
            result, page = probes[target.hostname]
            return Probe(target=target, result=result, page=page)

        buf = io.StringIO()
        with patch("deploy_check.runner.probe_http", side_effect=fake_probe), patch(
            "deploy_check.runner.time.sleep"
        ), redirect_stdout(buf):
            sweep(targets, delay_s=0.5)

        out = buf.getvalue()
        self.assertIn("📍 new.vercel.app", out)
        self.assertIn("Cache Age: 12s", out)
        self.assertIn("Modified: Mon, 20 Oct 2025 10:00:00 GMT", out)
        self.assertIn("Cache Age: N/As", out)
        self.assertIn("Status: TIMEOUT", out)
        self.assertEqual(out.count("🎯"), 1)
        self.assertIn("Current build is served by: new.vercel.app", out)

    def test_hint_redeploy_when_nothing_is_current(self) -> None:
        targets = _targets("a.vercel.app")

        def fake_probe(target, timeout_s, markers):
            return Probe(target=target, result=NotFound(status_code=404), page=PageResponse(404))

        buf = io.StringIO()
        with patch("deploy_check.runner.probe_http", side_effect=fake_probe), redirect_stdout(buf):
            sweep(targets, delay_s=0)

        self.assertIn("Status: 404", buf.getvalue())
        self.assertIn("redeploy is needed", buf.getvalue())

    def test_non_200_hosts_skip_detail_lines(self) -> None:
        targets = _targets("moved.vercel.app")

        def fake_probe(target, timeout_s, markers):
            page = PageResponse(308, {"Age": "5", "Location": "/new"}, "Redirecting")
            return Probe(target=target, result=NotFound(status_code=308), page=page)

        buf = io.StringIO()
        with patch("deploy_check.runner.probe_http", side_effect=fake_probe), redirect_stdout(buf):
            sweep(targets, delay_s=0)

        out = buf.getvalue()
        self.assertIn("Status: 308", out)
        self.assertNotIn("Markers:", out)
        self.assertNotIn("Cache Age:", out)

    def test_uses_per_target_timeout_and_markers(self) -> None:
        targets = _targets("a.vercel.app")
        targets["a.vercel.app"]["timeout_s"] = 2.5
        targets["a.vercel.app"]["markers"] = ["Берлога"]

        with patch(
            "deploy_check.runner.probe_http",
            return_value=Probe(target=TARGET, result=TransportError(message="x")),
        ) as probe_mock, redirect_stdout(io.StringIO()):
            sweep(targets, delay_s=0)

        kwargs = probe_mock.call_args.kwargs
        self.assertEqual(kwargs["timeout_s"], 2.5)
        self.assertEqual(kwargs["markers"], ["Берлога"])
        self.assertEqual(probe_mock.call_args.args[0].url, "https://a.vercel.app/")


if __name__ == "__main__":
    unittest.main()

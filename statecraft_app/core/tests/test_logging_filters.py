import logging

from django.test import SimpleTestCase

from config.logging_filters import HealthEndpointFilter


def _record(message: str, *, name: str = "gunicorn.access") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class HealthEndpointFilterTests(SimpleTestCase):
    def setUp(self) -> None:
        self.filt = HealthEndpointFilter()

    def test_successful_probes_are_dropped(self) -> None:
        for message in (
            '- - - [19/Jan/2027:10:49:08 +0000] "GET /readyz HTTP/1.1" 200 37 3ms "kube-probe/1.30"',
            '- - - [19/Jan/2027:10:49:08 +0000] "GET /healthz/ HTTP/1.1" 200 15 1ms "kube-probe/1.30"',
        ):
            with self.subTest(message=message):
                self.assertFalse(self.filt.filter(_record(message)))

    def test_runserver_format_is_understood(self) -> None:
        record = _record('"GET /healthz/ HTTP/1.1" 200 15', name="django.server")

        self.assertFalse(self.filt.filter(record))

    def test_failed_probe_is_kept(self) -> None:
        record = _record('- - - [19/Jan/2027:10:49:08 +0000] "GET /readyz/ HTTP/1.1" 503 61 2ms "kube-probe/1.30"')

        self.assertTrue(self.filt.filter(record))

    def test_election_jobs_are_always_logged(self) -> None:
        record = _record(
            '10.0.0.4 - - [19/Jan/2027:00:00:01 +0000] "POST /api/cron/elections/congress/terminate/ HTTP/1.1" '
            '200 33 412ms "curl/8.5.0"'
        )

        self.assertTrue(self.filt.filter(record))

    def test_probe_path_inside_another_path_is_not_dropped(self) -> None:
        record = _record('"GET /api/readyz-report HTTP/1.1" 200 10', name="django.server")

        self.assertTrue(self.filt.filter(record))

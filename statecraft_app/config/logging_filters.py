import logging
import re

# Matches the status code that follows the quoted request line in both the
# Django runserver and gunicorn access log formats.
_STATUS_AFTER_REQUEST = re.compile(r'HTTP/[\d.]+" (?P<status>\d{3}) ')


class HealthEndpointFilter(logging.Filter):
    """Drop successful probe lines from the access log; failures stay visible."""

    probe_paths: tuple[str, ...] = ("/healthz", "/readyz")

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if not any(f" {path} " in message or f" {path}/ " in message for path in self.probe_paths):
            return True

        match = _STATUS_AFTER_REQUEST.search(message)
        return match is None or match.group("status") != "200"

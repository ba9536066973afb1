"""
Forward error log records to Airbrake as notices.
"""

import json
import logging
import platform
import traceback
import urllib.error
import urllib.request
from typing import Any

from diskmon import __version__

NOTIFIER = {
    "name": "diskmon",
    "version": __version__,
    "url": "https://pypi.org/project/diskmon/",
}


class AirbrakeHandler(logging.Handler):
    """
    Logging handler that posts ERROR and above to the Airbrake v3 notice API.

    Check events attached to a record (extra={"diskmon_event": ...}) are sent
    as notice params, so alarms can be told apart from monitoring failures.
    """

    def __init__(
        self,
        host: str,
        project_id: str,
        project_key: str,
        environment: str | None = None,
        timeout: float = 5.0,
        level: int = logging.ERROR,
    ) -> None:
        super().__init__(level)
        self.host = host.rstrip("/")
        self.project_id = project_id
        self.project_key = project_key
        self.environment = environment
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.host}/api/v3/projects/{self.project_id}/notices"

    def build_notice(self, record: logging.LogRecord) -> dict[str, Any]:
        error_type = record.levelname
        backtrace = []
        if record.exc_info and record.exc_info[0] is not None:
            error_type = record.exc_info[0].__name__
            for frame in traceback.extract_tb(record.exc_info[2]):
                backtrace.append(
                    {"file": frame.filename, "line": frame.lineno, "function": frame.name}
                )
        if not backtrace:
            backtrace.append(
                {"file": record.pathname, "line": record.lineno, "function": record.funcName}
            )

        context: dict[str, Any] = {
            "notifier": NOTIFIER,
            "severity": record.levelname.lower(),
            "component": record.name,
            "hostname": platform.node(),
        }
        if self.environment:
            context["environment"] = self.environment

        notice: dict[str, Any] = {
            "errors": [
                {
                    "type": error_type,
                    "message": record.getMessage(),
                    "backtrace": backtrace,
                }
            ],
            "context": context,
        }
        event = getattr(record, "diskmon_event", None)
        if event:
            notice["params"] = dict(event)
        return notice

    def emit(self, record: logging.LogRecord) -> None:
        try:
            body = json.dumps(self.build_notice(record)).encode("utf-8")
            req = urllib.request.Request(
                self.url,
                data=body,
                method="POST",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.project_key}",
                },
            )
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                response.read()
        except (urllib.error.URLError, OSError, ValueError):
            self.handleError(record)

# raven_exporter/services/metrics_server.py

from __future__ import annotations

import logging
import threading
from wsgiref.simple_server import WSGIRequestHandler, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app
from prometheus_client.exposition import ThreadingWSGIServer

from raven_exporter.config import HttpConfig


class _LoggingHandler(WSGIRequestHandler):
    """Send access lines to the raven.http logger instead of stderr."""

    def log_message(self, format, *args):
        logging.getLogger("raven.http").debug(
            "%s %s", self.address_string(), format % args
        )


def build_app(registry: CollectorRegistry, path: str):
    """WSGI app serving the registry on `path` only."""
    metrics_app = make_wsgi_app(registry)

    def app(environ, start_response):
        if environ.get("PATH_INFO", "") != path:
            start_response("404 Not Found", [("Content-Type", "text/plain")])
            return [b"Not Found\n"]
        return metrics_app(environ, start_response)

    return app


class MetricsServer:
    """Scrape endpoint running on a daemon thread."""

    def __init__(self, cfg: HttpConfig, registry: CollectorRegistry, log):
        self.cfg = cfg
        self.registry = registry
        self.log = log
        self._httpd = None
        self._thread: threading.Thread | None = None

    @property
    def port(self) -> int:
        """Bound port; differs from cfg.port when configured as 0."""
        if self._httpd is None:
            return self.cfg.port
        return self._httpd.server_port

    def start(self) -> None:
        self._httpd = make_server(
            self.cfg.host,
            self.cfg.port,
            build_app(self.registry, self.cfg.path),
            server_class=ThreadingWSGIServer,
            handler_class=_LoggingHandler,
        )
        self._thread = threading.Thread(
            target=self._httpd.serve_forever,
            name="raven-metrics-http",
            daemon=True,
        )
        self._thread.start()
        self.log.info(
            "Starting metrics server at %s:%d%s",
            self.cfg.host,
            self.port,
            self.cfg.path,
        )

    def stop(self) -> None:
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        self._httpd = None

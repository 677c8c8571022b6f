# raven_exporter/main.py

from contextlib import closing
import sys

from .cli import build_parser
from .config import AppConfig, Config
from .errors import RavenError
from .logging import ConsoleLog

from .services.dispatch_loop import DispatchLoop
from .services.metrics_server import MetricsServer
from .services.metrics_state import MetricsState
from .services.serial_transport import open_serial_port
from .services.stream_scanner import StreamScanner


def load_config(args) -> AppConfig:
    app_cfg = Config.load(args.config) if args.config else AppConfig.defaults()
    app_cfg.apply_overrides(
        serial_port=args.serial_port,
        http_host=args.http_host,
        http_port=args.http_port,
        metrics_path=args.metrics_path,
    )
    if not app_cfg.serial.port:
        raise ValueError("No serial port configured (use --serial-port or [serial] port)")
    return app_cfg


def run_exporter(app_cfg: AppConfig, log) -> int:
    metrics = MetricsState()
    server = MetricsServer(app_cfg.http, metrics.registry, log)
    try:
        server.start()
    except OSError as exc:
        log.error("Error starting metrics server: %s", exc)
        return 1
    log.info("Server started")

    try:
        with closing(open_serial_port(app_cfg.serial, log)) as port:
            scanner = StreamScanner(port)
            loop = DispatchLoop(scanner, metrics)
            loop.run()
    except RavenError as exc:
        log.error("Fatal: %s", exc)
        return 1
    except KeyboardInterrupt:
        log.info("Interrupted; shutting down")
    finally:
        server.stop()

    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_cfg = load_config(args)
    except (FileNotFoundError, ValueError) as exc:
        # Logging is configured from this same config, so report directly.
        print(f"{parser.prog}: config error: {exc}", file=sys.stderr)
        return 1

    console_logger = ConsoleLog(
        level="DEBUG" if args.debug else app_cfg.logging.console_level,
        quiet=args.quiet or app_cfg.logging.console_quiet,
        debug_modules=app_cfg.logging.debug_modules,
    )
    log = console_logger.setup()
    log.info("Raven exporter exporting metrics from %s", app_cfg.serial.port)

    return run_exporter(app_cfg, log)


if __name__ == "__main__":
    sys.exit(main())

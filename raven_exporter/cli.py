# raven_exporter/cli.py
import argparse

def build_parser():
    parser = argparse.ArgumentParser(
        prog="raven-exporter",
        description="Prometheus exporter for Rainforest RAVEn power meter readings"
    )

    parser.add_argument(
        "--config",
        help="Path to configuration file (optional)"
    )

    parser.add_argument(
        "--serial-port",
        help="Serial port to use, e.g. COM4 or /dev/ttyUSB0"
    )

    parser.add_argument(
        "--http-host",
        help="Host to bind metrics exporter, e.g. localhost (default: localhost)"
    )

    parser.add_argument(
        "--http-port",
        type=int,
        help="Port to bind metrics exporter, e.g. 2112 (default: 2112)"
    )

    parser.add_argument(
        "--metrics-path",
        help="Path for the metrics endpoint, e.g. /metrics (default: /metrics)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress stdout output"
    )

    return parser

# raven_exporter/config.py
from dataclasses import dataclass, field
from pathlib import Path
import configparser


@dataclass
class SerialConfig:
    port: str | None = None
    baudrate: int = 115200


@dataclass
class HttpConfig:
    host: str = "localhost"
    port: int = 2112
    path: str = "/metrics"


@dataclass
class LoggingConfig:
    console_level: str = "INFO"
    console_quiet: bool = False
    debug_modules: list[str] = field(default_factory=list)


@dataclass
class AppConfig:
    serial: SerialConfig
    http: HttpConfig
    logging: LoggingConfig

    @classmethod
    def defaults(cls) -> "AppConfig":
        return cls(serial=SerialConfig(), http=HttpConfig(), logging=LoggingConfig())

    def apply_overrides(
        self,
        *,
        serial_port: str | None = None,
        http_host: str | None = None,
        http_port: int | None = None,
        metrics_path: str | None = None,
    ) -> "AppConfig":
        """Command-line values win over the config file."""
        if serial_port:
            self.serial.port = serial_port
        if http_host:
            self.http.host = http_host
        if http_port is not None:
            self.http.port = _check_port(http_port)
        if metrics_path:
            self.http.path = _check_path(metrics_path)
        return self


def _check_port(port: int) -> int:
    if not 0 <= port <= 65535:
        raise ValueError(f"HTTP port out of range: {port}")
    return port


def _check_path(path: str) -> str:
    path = path.strip()
    if not path.startswith("/"):
        raise ValueError(f"Metrics path must start with '/': {path!r}")
    return path


class Config:
    def __init__(self, path: str):
        self.path = Path(path)
        self.parser = configparser.ConfigParser(inline_comment_prefixes=("#",))
        read = self.parser.read(self.path)
        if not read:
            raise FileNotFoundError(f"Config file not found: {self.path}")

    @classmethod
    def load(cls, path: str) -> AppConfig:
        cfg = cls(path)

        p = cfg.parser

        def _as_bool(value: str) -> bool:
            return value.strip().lower() == "true"

        def _as_int(section: str, key: str, raw: str) -> int:
            try:
                return int(raw.strip())
            except ValueError:
                raise ValueError(f"[{section}] {key} must be an integer, got {raw!r}") from None

        # --- Serial ---
        serial_kwargs = {}
        if "serial" in p:
            serial_sec = p["serial"]
            if (port := serial_sec.get("port", "").strip()):
                serial_kwargs["port"] = port
            if "baudrate" in serial_sec:
                serial_kwargs["baudrate"] = _as_int("serial", "baudrate", serial_sec["baudrate"])
        serial_cfg = SerialConfig(**serial_kwargs)

        # --- HTTP ---
        http_kwargs = {}
        if "http" in p:
            http_sec = p["http"]
            if "host" in http_sec:
                http_kwargs["host"] = http_sec["host"].strip()
            if "port" in http_sec:
                http_kwargs["port"] = _check_port(_as_int("http", "port", http_sec["port"]))
            if "path" in http_sec:
                http_kwargs["path"] = _check_path(http_sec["path"])
        http_cfg = HttpConfig(**http_kwargs)

        # --- Logging ---
        logging_kwargs = {}
        if "logging" in p:
            logging_sec = p["logging"]
            if "console_level" in logging_sec:
                logging_kwargs["console_level"] = logging_sec["console_level"]
            if "console_quiet" in logging_sec:
                logging_kwargs["console_quiet"] = _as_bool(logging_sec["console_quiet"])
            if "debug_modules" in logging_sec:
                raw = logging_sec["debug_modules"]
                logging_kwargs["debug_modules"] = [x.strip() for x in raw.split(",") if x.strip()]
        logging_cfg = LoggingConfig(**logging_kwargs)

        return AppConfig(
            serial=serial_cfg,
            http=http_cfg,
            logging=logging_cfg,
        )

"""``voirdrama`` console entrypoint: load config, wire logging, serve."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from voirdrama.infrastructure.config import load_config
from voirdrama.infrastructure.logging.setup import configure_logging
from voirdrama.interfaces.app import create_app

log = structlog.get_logger(__name__)

DEFAULT_PORT = 7000

# argparse dest -> flat config key passed as a CLI override.
_OVERRIDE_FLAGS = {
    "cache_dir": "cache_dir",
    "cache_backend": "cache_backend",
    "log_level": "log_level",
    "log_format": "log_format",
    "no_cinemeta": "cinemeta_enabled",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voirdrama",
        description="Serve the VoirDrama Stremio addon.",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", help="Bind host (default: $HOST or 0.0.0.0).")
    server.add_argument(
        "--port", type=int, help=f"Bind port (default: $PORT or {DEFAULT_PORT})."
    )
    server.add_argument("--certfile", help="TLS certificate (PEM), used with --keyfile.")
    server.add_argument("--keyfile", help="TLS private key (PEM).")

    cfg = parser.add_argument_group("configuration")
    cfg.add_argument("--config", type=Path, help="YAML config file.")
    cfg.add_argument("--dotenv", type=Path, help=".env file loaded before VOIRDRAMA_* lookup.")
    cfg.add_argument("--cache-dir", help="Durable cache directory.")
    cfg.add_argument("--cache-backend", choices=["files", "diskcache"])
    cfg.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    cfg.add_argument("--log-format", choices=["json", "console"])
    cfg.add_argument(
        "--no-cinemeta",
        action="store_const",
        const=False,
        help="Disable Cinemeta artwork/ID enrichment.",
    )
    return parser


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        key: getattr(args, dest)
        for dest, key in _OVERRIDE_FLAGS.items()
        if getattr(args, dest) is not None
    }


def _tls_files(args: argparse.Namespace) -> tuple[str | None, str | None]:
    """Flags win over CERT_PATH/KEY_PATH. Serve plain HTTP unless both files exist."""
    certfile = args.certfile or os.getenv("CERT_PATH")
    keyfile = args.keyfile or os.getenv("KEY_PATH")
    if not certfile or not keyfile:
        return None, None
    if not (Path(certfile).is_file() and Path(keyfile).is_file()):
        log.warning("tls_files_missing", certfile=certfile, keyfile=keyfile)
        return None, None
    return certfile, keyfile


def start(argv: Iterable[str] | None = None) -> None:
    """Process entrypoint. Configuration is loaded exactly once, here."""
    args = _build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))

    config = load_config(
        config_path=args.config,
        dotenv_path=args.dotenv,
        cli_overrides=_cli_overrides(args),
    )
    log_config = configure_logging(config)

    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = args.port or int(os.getenv("PORT", str(DEFAULT_PORT)))
    certfile, keyfile = _tls_files(args)

    scheme = "https" if certfile else "http"
    log.info("addon_starting", manifest_url=f"{scheme}://{host}:{port}/manifest.json")

    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_config=log_config,
        ssl_certfile=certfile,
        ssl_keyfile=keyfile,
    )


if __name__ == "__main__":
    start()

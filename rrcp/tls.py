"""TLS client contexts for the server connection."""

from __future__ import annotations

import os
import ssl
from pathlib import Path

DEFAULT_CERT_DIR = "/etc/ssl/certs"


def new_tls_client_context(cert_dir: str | os.PathLike = DEFAULT_CERT_DIR) -> ssl.SSLContext:
    """Client context trusting every ``*pem`` file found in ``cert_dir``."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    for path in sorted(Path(cert_dir).iterdir()):
        if str(path).endswith("pem"):
            context.load_verify_locations(cafile=str(path))
    return context


def new_insecure_tls_client_context() -> ssl.SSLContext:
    """Client context that accepts any server certificate."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context
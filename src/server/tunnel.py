from __future__ import annotations
import logging
from typing import Optional

from pyngrok import conf, ngrok
from pyngrok.exception import PyngrokError

from product_upload.errors import TunnelError


log = logging.getLogger(__name__)


def open_tunnel(port: int, auth_token: Optional[str] = None) -> str:
    """Expose the local server on a public https url. Single attempt, no retry."""
    if auth_token:
        conf.get_default().auth_token = auth_token
    try:
        tunnel = ngrok.connect(str(port), "http")
    except PyngrokError as e:
        raise TunnelError(f"Unable to open ngrok tunnel on port {port}: {e}") from e
    public_url = tunnel.public_url or ""
    if not public_url:
        raise TunnelError(f"ngrok returned no public url for port {port}")
    if public_url.startswith("http://"):
        public_url = "https://" + public_url[len("http://") :]
    log.info(f"Connected ngrok proxy at {public_url}")
    return public_url


def close_tunnels() -> None:
    ngrok.kill()

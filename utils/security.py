import hashlib
import hmac
import logging
from typing import Mapping

from core.config import settings
from core.errors import NonPermissibleOrigin

logger = logging.getLogger("autorepo_worker.security")

SIGNATURE_HEADER = "x-hub-signature-256"
SIGNATURE_PREFIX = "sha256="
REQUIRED_HEADERS = ("user-agent", "x-github-delivery", "x-github-event", SIGNATURE_HEADER)


def verify_signature(secret: str, signature_header: str | None, payload: bytes) -> bool:
    """Check an `X-Hub-Signature-256` value against one candidate secret."""
    if not signature_header or not signature_header.startswith(SIGNATURE_PREFIX):
        return False

    try:
        signature = bytes.fromhex(signature_header[len(SIGNATURE_PREFIX):])
    except ValueError:
        return False

    expected = hmac.new(secret.encode("utf-8"), msg=payload, digestmod=hashlib.sha256).digest()
    return hmac.compare_digest(expected, signature)


def verify_origin(headers: Mapping[str, str], url: str):
    """Reject anything that is not a GitHub webhook delivery aimed at a trigger URL."""
    headers = {key.lower(): value for key, value in headers.items()}

    missing = [name for name in REQUIRED_HEADERS if not headers.get(name)]
    if missing:
        logger.warning(f"Rejected request missing headers: {', '.join(missing)}")
        raise NonPermissibleOrigin()

    if not headers["user-agent"].startswith(settings.WEBHOOK_USER_AGENT_PREFIX):
        logger.warning(f"Rejected request from user agent '{headers['user-agent']}'")
        raise NonPermissibleOrigin()

    if not headers[SIGNATURE_HEADER].startswith(SIGNATURE_PREFIX):
        logger.warning("Rejected request with a non sha256 signature")
        raise NonPermissibleOrigin()

    if "trigger" not in url:
        logger.warning(f"Rejected request to a non-trigger URL: {url}")
        raise NonPermissibleOrigin()

import json
import logging
from typing import Dict, Mapping

from core.errors import NonPermissibleTrigger, UnexpectedRequestBody
from core.models import TriggerRecord
from services.auth_service import authorize, resolve_identity
from services.key_store import fetch_credentials
from services.notifier import notify
from services.trigger_service import build_trigger
from utils.path_parser import parse_targets
from utils.security import SIGNATURE_HEADER, verify_origin

logger = logging.getLogger("autorepo_worker.webhook_service")

async def handle_trigger_request(
    headers: Mapping[str, str],
    url: str,
    path: str,
    query_params: Dict[str, str],
    raw_body: bytes,
) -> TriggerRecord:
    """Authenticate, authorize and translate one webhook, then post its trigger."""
    headers = {key.lower(): value for key, value in headers.items()}
    logger.info(
        f"Handling delivery '{headers.get('x-github-delivery')}' "
        f"(event '{headers.get('x-github-event')}') for {path}"
    )

    verify_origin(headers, url)

    credentials = await fetch_credentials()
    identity = resolve_identity(credentials, headers.get(SIGNATURE_HEADER), raw_body)

    targets = parse_targets(path)
    authorize(targets, identity, credentials)
    if not targets:
        raise NonPermissibleTrigger()

    try:
        body = json.loads(raw_body)
    except ValueError as e:
        raise UnexpectedRequestBody("payload is not valid JSON") from e

    trigger = build_trigger(identity, targets, query_params, body)

    comment_url = await notify(trigger)
    return trigger.model_copy(update={"github_comment_made": comment_url})

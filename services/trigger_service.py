import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from core.config import settings
from core.errors import NoBranchProvided, NonPermissibleTrigger, UnexpectedRequestBody
from core.models import TriggerDirectives, TriggerRecord, WebhookPayload

logger = logging.getLogger("autorepo_worker.trigger_service")

def resolve_branch(payload: WebhookPayload, directives: TriggerDirectives) -> str:
    """Branch named by the pushed ref, else by the `main`/`test` directives."""
    if payload.ref is not None:
        return payload.ref.rsplit("/", 1)[-1]

    if directives.main_and_test_not_set:
        raise NoBranchProvided()
    if directives.main is not None:
        return directives.main
    return directives.test

def build_trigger(identity: str, targets: List[str], query_params: Dict[str, str], body: Any) -> TriggerRecord:
    """Translate a verified webhook and its URL directives into a trigger record."""
    if not targets:
        raise NonPermissibleTrigger()

    directives = TriggerDirectives(**{key: value for key, value in query_params.items() if key in TriggerDirectives.model_fields})

    if not isinstance(body, dict):
        raise UnexpectedRequestBody("payload is not a JSON object")
    try:
        payload = WebhookPayload.model_validate(body)
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in e.errors())
        raise UnexpectedRequestBody(f"malformed payload: {fields}") from e
    if payload.repository is None:
        raise UnexpectedRequestBody("payload has no repository")
    repository = payload.repository

    branch = resolve_branch(payload, directives)

    target_name = directives.target_name
    if target_name is None:
        target_name = repository.name or repository.full_name.rsplit("/", 1)[-1]

    branch_main = directives.main
    if directives.main_and_test_not_set:
        branch_main = branch

    # Only the main branch is compared; a test branch still gets the suffix
    if branch_main != branch or directives.main_and_test_not_set:
        target_name = f"{target_name} ({branch})"

    trigger = TriggerRecord(
        worker_version=settings.WORKER_VERSION,
        key_owner=identity,
        target_repo=",".join(targets),
        target_name=target_name,
        branch_main=branch_main,
        branch_test=directives.test,
        code_repo=repository.full_name,
        code_private=repository.private,
        code_owner=repository.owner.login,
        code_url=repository.html_url,
        code_branch=branch,
        main_build=directives.main_build,
        test_build=directives.test_build,
        icon=directives.icon,
    )
    logger.info(f"Built trigger for {trigger.code_repo}:{trigger.code_branch} -> {trigger.target_repo}")
    return trigger

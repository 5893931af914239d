import logging
from typing import List

from core.acl import key_owner, parse_allowed_repos, resolve_user_allowances
from core.errors import (
    NonPermissibleKey,
    NonPermissibleRepository,
    NonPermissibleRepositoryForKey,
    NoPermissibleRepositories,
)
from core.models import AclKind, CredentialSet
from utils.security import verify_signature

logger = logging.getLogger("autorepo_worker.auth_service")

def resolve_identity(credentials: CredentialSet, signature_header: str | None, payload: bytes) -> str:
    """Find the key that signed the payload and return its lower-cased name."""
    for credential in credentials.credentials():
        # First verified key wins; later keys are never tried
        if verify_signature(credential.secret, signature_header, payload):
            logger.info(f"Request signed with key '{credential.identity}'")
            return credential.identity

    logger.warning("No key matched the request signature.")
    raise NonPermissibleKey()

def authorize(targets: List[str], identity: str, credentials: CredentialSet):
    """Check the requested targets against the global and the per-owner allow-lists."""
    allowed_repos = parse_allowed_repos(credentials.acl_text(AclKind.ALLOWED_REPOS))
    if not allowed_repos:
        logger.error("ALLOWED_REPOS is empty; nothing can be triggered.")
        raise NoPermissibleRepositories()

    if not all(target in allowed_repos for target in targets):
        logger.warning(f"Targets {targets} are not all in the global allow-list.")
        raise NonPermissibleRepository({"repos": ", ".join(targets)})

    owner = key_owner(identity)
    allowed_for_owner = resolve_user_allowances(
        credentials.acl_text(AclKind.ALLOWED_REPOS_FOR_USERS), owner, allowed_repos
    )
    if not all(target in allowed_for_owner for target in targets):
        logger.warning(f"Key '{identity}' may not trigger {targets}.")
        raise NonPermissibleRepositoryForKey({"key": identity, "repos": ", ".join(targets)})

    logger.info(f"Key '{identity}' authorized for {targets}")

import logging

import httpx

from core.config import settings
from core.errors import BrokenCredentialStore, BrokenNotifier, UpstreamTimeout

logger = logging.getLogger("autorepo_worker.github_service")

VARIABLES_PAGE_SIZE = 30

def _headers(token: str | None) -> dict:
    return {
        "User-Agent": settings.USER_AGENT,
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": settings.GITHUB_API_VERSION,
    }

async def list_repository_variables() -> list[dict]:
    """Get the Repository Variables holding the keys and allow-lists."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(
                settings.KEYS_URL,
                headers=_headers(settings.READ_KEYS),
                params={"per_page": VARIABLES_PAGE_SIZE},
                timeout=settings.REQUEST_TIMEOUT,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Timed out reading repository variables: {e}")
            raise UpstreamTimeout("repository variables") from e
        except httpx.HTTPError as e:
            logger.error(f"Could not reach repository variables: {e}")
            raise BrokenCredentialStore(str(e)) from e

    if response.status_code != 200:
        logger.error(f"Repository variables returned {response.status_code}")
        raise BrokenCredentialStore(response.text)

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Repository variables returned a body that is not JSON")
        raise BrokenCredentialStore(response.text) from e

    variables = data.get("variables", []) if isinstance(data, dict) else None
    if not isinstance(variables, list):
        logger.error("Repository variables returned an unexpected document")
        raise BrokenCredentialStore(response.text)

    return variables

async def create_issue_comment(body: str) -> dict:
    """Create a comment on the issue watched by the build workflow."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.post(
                settings.COMMENT_URL,
                headers=_headers(settings.ISSUE_COMMENT),
                json={"body": body},
                timeout=settings.REQUEST_TIMEOUT,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Timed out creating issue comment: {e}")
            raise UpstreamTimeout("issue comment") from e
        except httpx.HTTPError as e:
            logger.error(f"Could not reach issue comments: {e}")
            raise BrokenNotifier(str(e)) from e

    if response.status_code != 201:
        logger.error(f"Issue comment creation returned {response.status_code}")
        raise BrokenNotifier(response.text)

    try:
        comment = response.json()
    except ValueError as e:
        logger.error("Issue comment creation returned a body that is not JSON")
        raise BrokenNotifier(response.text) from e

    if not isinstance(comment, dict):
        logger.error("Issue comment creation returned an unexpected document")
        raise BrokenNotifier(response.text)

    return comment

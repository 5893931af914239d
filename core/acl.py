import logging
from typing import List

logger = logging.getLogger("autorepo_worker.acl")

ALLOW_ALL = "*"
ALLOW_NONE = "-"
OWNER_SEPARATOR = "__"


def parse_allowed_repos(text: str) -> List[str]:
    """Parse the comma-separated global list of repository labels."""
    labels = [part.replace("\r", "").replace("\n", "").strip() for part in text.lower().split(",")]
    return [label for label in labels if label]


def key_owner(identity: str) -> str:
    """Strip the sub-key part from a key name (`owner__subkey` -> `owner`)."""
    return identity.lower().split(OWNER_SEPARATOR)[0]


def resolve_user_allowances(text: str, owner: str, allowed_repos: List[str]) -> List[str]:
    """Resolve the repositories one owner may trigger.

    Every line is `owner: spec` where spec is `*` for the whole global list,
    `-` for nothing, or a comma-separated list of labels. When an owner
    appears on several lines the last one wins. An owner without a line gets
    nothing.
    """
    allowances: List[str] = []
    for line in text.split("\n"):
        parts = line.lower().split(":")
        if parts[0].strip() != owner:
            continue

        spec = parts[1].strip() if len(parts) > 1 else ""
        if spec == ALLOW_NONE:
            allowances = []
        elif spec == ALLOW_ALL:
            allowances = list(allowed_repos)
        else:
            allowances = [part.strip() for part in spec.split(",")]

    logger.debug(f"Owner '{owner}' may trigger: {allowances}")
    return allowances

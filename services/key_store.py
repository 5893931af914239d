import logging

from core.errors import BrokenCredentialStore, EmptyCredentialSet
from core.models import AclBlob, AclKind, Credential, CredentialSet
from services.github_service import list_repository_variables

logger = logging.getLogger("autorepo_worker.key_store")

def normalize_name(name: str) -> str:
    """`ZBEE__LAPTOP` -> `Zbee__laptop`"""
    return name[:1].upper() + name[1:].lower()

async def fetch_credentials() -> CredentialSet:
    """Read every key and allow-list from the key store, fresh for this request."""
    variables = await list_repository_variables()

    values: dict[str, str] = {}
    for index, variable in enumerate(variables):
        if not isinstance(variable, dict) or not isinstance(variable.get("name"), str) or not isinstance(variable.get("value"), str):
            logger.error(f"Key store variable #{index} has no usable name or value.")
            raise BrokenCredentialStore(f"variable #{index} is missing a name or value")
        values[normalize_name(variable["name"])] = variable["value"]

    if not values:
        logger.error("Key store returned no variables.")
        raise EmptyCredentialSet()

    entries = []
    for name, value in values.items():
        kind = AclKind.from_name(name)
        if kind is None:
            entries.append(Credential(name=name, secret=value))
        else:
            entries.append(AclBlob(kind=kind, text=value))

    credentials = CredentialSet(entries=tuple(entries))
    logger.info(f"Loaded {len(credentials.credentials())} keys from the key store.")
    return credentials

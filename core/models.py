from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr


class AclKind(str, Enum):
    ALLOWED_REPOS = "ALLOWED_REPOS"
    ALLOWED_REPOS_FOR_USERS = "ALLOWED_REPOS_FOR_USERS"

    @classmethod
    def from_name(cls, name: str) -> Optional["AclKind"]:
        """Return the ACL kind a variable name refers to, if any."""
        try:
            return cls(name.upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class Credential:
    name: str
    secret: str = field(repr=False)

    @property
    def identity(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class AclBlob:
    kind: AclKind
    text: str


ConfigEntry = Union[Credential, AclBlob]


@dataclass(frozen=True)
class CredentialSet:
    """Keys and ACL blobs read from the key store for a single request."""

    entries: tuple[ConfigEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def credentials(self) -> list[Credential]:
        return [entry for entry in self.entries if isinstance(entry, Credential)]

    def acl_text(self, kind: AclKind) -> str:
        for entry in self.entries:
            if isinstance(entry, AclBlob) and entry.kind is kind:
                return entry.text
        return ""


class RepositoryOwner(BaseModel):
    login: StrictStr


class WebhookRepository(BaseModel):
    name: Optional[StrictStr] = None
    full_name: StrictStr
    private: StrictBool
    owner: RepositoryOwner
    html_url: StrictStr


class WebhookPayload(BaseModel):
    repository: Optional[WebhookRepository] = None
    ref: Optional[StrictStr] = None


class TriggerDirectives(BaseModel):
    """Build directives passed as query parameters on the webhook URL."""

    target_name: Optional[str] = None
    main: Optional[str] = None
    test: Optional[str] = None
    main_build: Optional[str] = None
    test_build: Optional[str] = None
    icon: Optional[str] = None

    @property
    def main_and_test_not_set(self) -> bool:
        return self.main is None and self.test is None


# Only serialized once they carry a value
OPTIONAL_TRIGGER_FIELDS = ("main_build", "test_build", "icon", "github_comment_made")


class TriggerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    worker_version: str
    key_owner: str
    target_repo: str
    target_name: str
    branch_main: Optional[str] = None
    branch_test: Optional[str] = None
    code_repo: str
    code_private: bool
    code_owner: str
    code_url: str
    code_branch: str
    main_build: Optional[str] = None
    test_build: Optional[str] = None
    icon: Optional[str] = None
    github_comment_made: Optional[str] = None

    def to_dict(self) -> dict:
        data = self.model_dump()
        for name in OPTIONAL_TRIGGER_FIELDS:
            if data[name] is None:
                del data[name]
        return data

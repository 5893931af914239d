import hashlib
import hmac
import json
import os

import pytest

# main.py validates settings on import, before any fixture runs
os.environ.setdefault("READ_KEYS", "test_read_keys_token")
os.environ.setdefault("ISSUE_COMMENT", "test_issue_comment_token")

from core.models import AclBlob, AclKind, Credential, CredentialSet


def _sign(secret: str, body: bytes) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


@pytest.fixture
def sign():
    return _sign


@pytest.fixture(scope="session", autouse=True)
def set_test_environment():
    os.environ["READ_KEYS"] = "test_read_keys_token"
    os.environ["ISSUE_COMMENT"] = "test_issue_comment_token"


@pytest.fixture
def push_payload():
    return {
        "ref": "refs/heads/main",
        "repository": {
            "name": "plugin",
            "full_name": "alice/plugin",
            "private": False,
            "owner": {"login": "alice"},
            "html_url": "https://github.com/alice/plugin",
        },
    }


@pytest.fixture
def push_body(push_payload):
    return json.dumps(push_payload).encode()


@pytest.fixture
def credentials():
    return CredentialSet(entries=(
        AclBlob(kind=AclKind.ALLOWED_REPOS, text="jsp, zbee,\nindividual"),
        Credential(name="Alice", secret="alice-secret"),
        Credential(name="Zbee__laptop", secret="zbee-secret"),
        AclBlob(kind=AclKind.ALLOWED_REPOS_FOR_USERS, text="alice: jsp\nzbee: *\nbob: -"),
    ))

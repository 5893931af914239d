import pytest
from unittest.mock import AsyncMock, patch

from core.errors import BrokenCredentialStore, EmptyCredentialSet
from core.models import AclBlob, AclKind, Credential
from services.key_store import fetch_credentials, normalize_name

def test_normalize_name():
    assert normalize_name("ZBEE__LAPTOP") == "Zbee__laptop"
    assert normalize_name("alice") == "Alice"
    assert normalize_name("") == ""

@pytest.mark.asyncio
async def test_fetch_credentials_classifies_entries_in_order():
    variables = [
        {"name": "ZBEE", "value": "zbee-secret"},
        {"name": "ALLOWED_REPOS", "value": "jsp,zbee"},
        {"name": "ALICE__WORK", "value": "alice-secret"},
        {"name": "ALLOWED_REPOS_FOR_USERS", "value": "zbee: *"},
    ]
    with patch("services.key_store.list_repository_variables", new_callable=AsyncMock) as mock_list:
        mock_list.return_value = variables

        credentials = await fetch_credentials()

        assert credentials.entries == (
            Credential(name="Zbee", secret="zbee-secret"),
            AclBlob(kind=AclKind.ALLOWED_REPOS, text="jsp,zbee"),
            Credential(name="Alice__work", secret="alice-secret"),
            AclBlob(kind=AclKind.ALLOWED_REPOS_FOR_USERS, text="zbee: *"),
        )
        assert [c.identity for c in credentials.credentials()] == ["zbee", "alice__work"]
        assert credentials.acl_text(AclKind.ALLOWED_REPOS) == "jsp,zbee"

@pytest.mark.asyncio
async def test_fetch_credentials_duplicate_names_collapse():
    variables = [
        {"name": "ALICE", "value": "old"},
        {"name": "BOB", "value": "bob"},
        {"name": "Alice", "value": "new"},
    ]
    with patch("services.key_store.list_repository_variables", new_callable=AsyncMock) as mock_list:
        mock_list.return_value = variables

        credentials = await fetch_credentials()

        assert credentials.entries == (
            Credential(name="Alice", secret="new"),
            Credential(name="Bob", secret="bob"),
        )

@pytest.mark.asyncio
async def test_fetch_credentials_empty():
    with patch("services.key_store.list_repository_variables", new_callable=AsyncMock) as mock_list:
        mock_list.return_value = []

        with pytest.raises(EmptyCredentialSet):
            await fetch_credentials()

@pytest.mark.asyncio
async def test_fetch_credentials_store_failure_propagates():
    with patch("services.key_store.list_repository_variables", new_callable=AsyncMock) as mock_list:
        mock_list.side_effect = BrokenCredentialStore("Bad credentials")

        with pytest.raises(BrokenCredentialStore):
            await fetch_credentials()

@pytest.mark.asyncio
@pytest.mark.parametrize("variable", [{"name": "ALICE"}, {"value": "secret"}, {"name": "ALICE", "value": None}, "ALICE"])
async def test_fetch_credentials_malformed_variable(variable):
    with patch("services.key_store.list_repository_variables", new_callable=AsyncMock) as mock_list:
        mock_list.return_value = [{"name": "BOB", "value": "bob"}, variable]

        with pytest.raises(BrokenCredentialStore) as exc_info:
            await fetch_credentials()

        assert exc_info.value.details == "variable #1 is missing a name or value"

"""Unit tests for AuthorityResolver."""

import pytest

from rolekeeper.core.config import Settings
from rolekeeper.domain.exceptions import InvalidAuthority
from rolekeeper.domain.services.authority_resolver import AuthorityResolver
from tests.authorities import Account, ApiClient, User


@pytest.fixture
def resolver(settings):
    return AuthorityResolver(settings)


def test_type_tag_defaults_to_class_path(resolver):
    assert resolver.type_tag(User(id=1)) == "tests.authorities.User"
    assert resolver.type_tag(User) == "tests.authorities.User"


def test_type_tag_uses_class_attribute(resolver):
    assert resolver.type_tag(ApiClient(id=1)) == "api_client"


def test_type_tag_prefers_morph_map():
    resolver = AuthorityResolver(
        Settings(_env_file=None, morph_map={"tests.authorities.ApiClient": "client"})
    )

    assert resolver.type_tag(ApiClient(id=1)) == "client"


def test_type_tag_passes_strings_through(resolver):
    assert resolver.type_tag("user") == "user"


def test_single_instance(resolver):
    target = resolver.extract_model_and_keys(User(id=4))

    assert target.type_tag == "tests.authorities.User"
    assert target.keys == [4]


def test_collection_of_instances(resolver):
    target = resolver.extract_model_and_keys([User(id=4), User(id=9)])

    assert target.type_tag == "tests.authorities.User"
    assert target.keys == [4, 9]


def test_explicit_keys_override_instance_key(resolver):
    target = resolver.extract_model_and_keys(User(id=4), keys=[10, 11])

    assert target.keys == [10, 11]


def test_explicit_keys_with_class_or_tag(resolver):
    assert resolver.extract_model_and_keys(ApiClient, keys=[1]).type_tag == "api_client"
    assert resolver.extract_model_and_keys("team", keys=(2, 3)).keys == [2, 3]


def test_class_without_keys_raises(resolver):
    with pytest.raises(InvalidAuthority, match="Keys are required"):
        resolver.extract_model_and_keys(User)


def test_empty_collection_raises(resolver):
    with pytest.raises(InvalidAuthority, match="empty"):
        resolver.extract_model_and_keys([])


def test_mixed_collection_raises(resolver):
    with pytest.raises(InvalidAuthority, match="mixes types"):
        resolver.extract_model_and_keys([User(id=1), ApiClient(id=2)])


def test_unsaved_instance_raises(resolver):
    with pytest.raises(InvalidAuthority, match="not been persisted"):
        resolver.extract_model_and_keys(User(id=None))


def test_custom_key_attribute():
    resolver = AuthorityResolver(
        Settings(_env_file=None, authority_key_attribute="account_id")
    )

    assert resolver.extract_model_and_keys(Account(account_id=12)).keys == [12]

    with pytest.raises(InvalidAuthority, match="no 'account_id' attribute"):
        resolver.extract_model_and_keys(User(id=1))

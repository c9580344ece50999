"""Canonical string enums."""
import pytest

from tenet.core.enums import ApplicationType, EncryptionMode, RoleType, StorageType
from tenet.core.exceptions import ParseError


@pytest.mark.parametrize("enum_cls", [ApplicationType, StorageType, RoleType, EncryptionMode])
def test_canonical_round_trip(enum_cls):
    for member in enum_cls:
        assert enum_cls.parse(str(member)) is member


def test_canonical_strings():
    assert str(ApplicationType.SHOP) == "Shop"
    assert str(StorageType.POSTGRESQL_TABLE_PREFIX) == "PostgreSqlTablePrefix"
    assert str(RoleType.ADMINISTRATOR) == "Administrator"
    assert str(EncryptionMode.ARGON2) == "Argon2"


@pytest.mark.parametrize("enum_cls,value", [
    (ApplicationType, ""),
    (ApplicationType, "shop"),
    (RoleType, "Admin"),
    (EncryptionMode, "Bcrypt"),
])
def test_parse_unknown_value(enum_cls, value):
    with pytest.raises(ParseError) as exc_info:
        enum_cls.parse(value)

    assert exc_info.value.value == value
    assert exc_info.value.enum_name == enum_cls.__name__


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        StorageType.parse("Mongo")


def test_role_ordering():
    assert RoleType.ADMINISTRATOR > RoleType.USER
    assert RoleType.USER < RoleType.ADMINISTRATOR
    assert RoleType.USER <= RoleType.USER
    assert sorted([RoleType.ADMINISTRATOR, RoleType.USER]) == [RoleType.USER, RoleType.ADMINISTRATOR]


def test_file_backed_storage_types():
    assert StorageType.JSON_FILE.is_file_backed
    assert StorageType.SQLITE_DATABASE.is_file_backed
    assert not StorageType.POSTGRESQL_SCHEMA.is_file_backed

import pytest
from pydantic import ValidationError

from negocio_api.config import Settings


@pytest.mark.parametrize("overrides", [
    {"SUPER_ADMIN_KEY": "", "SECRET_KEY": "a-long-enough-signing-key"},
    {"SUPER_ADMIN_KEY": "super-admin-key", "SECRET_KEY": ""},
    {"SUPER_ADMIN_KEY": "short", "SECRET_KEY": "a-long-enough-signing-key"},
])
def test_blank_or_short_secrets_refuse_to_load(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_secrets_load():
    settings = Settings(SUPER_ADMIN_KEY="super-admin-key", SECRET_KEY="a-long-enough-signing-key")
    assert settings.SECRET_KEY == "a-long-enough-signing-key"

"""Tests for settings parsing and server configuration lookups."""

from profile_service.config import ConfigKey, PersonType, Settings
from profile_service.services.server_config import SettingsServerConfiguration


class TestServerConfigParsing:
    """Tests for the SERVER_CONFIG field."""

    def test_comma_separated_pairs(self) -> None:
        config = Settings(SERVER_CONFIG="profile.showSearch=false, separateIdEid@x = true")
        assert config.SERVER_CONFIG == {"profile.showSearch": "false", "separateIdEid@x": "true"}

    def test_value_may_contain_equals(self) -> None:
        config = Settings(SERVER_CONFIG="banner=a=b")
        assert config.SERVER_CONFIG == {"banner": "a=b"}

    def test_dict_passes_through(self) -> None:
        config = Settings(SERVER_CONFIG={"profile.showSearch": "true"})
        assert config.SERVER_CONFIG == {"profile.showSearch": "true"}

    def test_reserved_identity_defaults(self) -> None:
        config = Settings()
        assert config.ADMIN_USER_ID == "admin"
        assert config.ANONYMOUS_USER_ID == "Anonymous"


class TestSettingsServerConfiguration:
    """Tests for get_string."""

    def test_configured_value(self) -> None:
        config = SettingsServerConfiguration(
            Settings(SERVER_CONFIG={ConfigKey.SHOW_SEARCH: "false"})
        )
        assert config.get_string(ConfigKey.SHOW_SEARCH, "true") == "false"

    def test_default_when_unset(self) -> None:
        config = SettingsServerConfiguration(Settings(SERVER_CONFIG={}))
        assert config.get_string(ConfigKey.SHOW_SEARCH, "true") == "true"
        assert config.get_string(ConfigKey.SEPARATE_ID_EID) == ""


class TestPersonType:
    """Tests for PersonType constants."""

    def test_types_distinct(self) -> None:
        assert PersonType.USER_MUTABLE != PersonType.SYSTEM_MUTABLE

"""Server configuration properties backed by the service settings."""

from profile_service.config import Settings, settings


class SettingsServerConfiguration:
    """Named string properties read from Settings.SERVER_CONFIG."""

    def __init__(self, config: Settings | None = None):
        self.config = config or settings

    def get_string(self, key: str, default: str = "") -> str:
        """Return the property value, or default when it is unset."""
        properties = self.config.SERVER_CONFIG
        assert isinstance(properties, dict)
        return properties.get(key, default)

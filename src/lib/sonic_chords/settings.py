"""
Settings store protocol.
An abstract key-value interface that each host must implement
(browser local storage, a config file, a database row...).

Values are always strings; callers parse them.
"""


class SettingsStore:
    """Abstract interface for persisting simple key-value settings."""

    def get(self, key, default=None):
        """
        Read a stored value.

        Args:
            key: Setting name

        Returns:
            The stored string, or default if the key was never set
        """
        raise NotImplementedError

    def set(self, key, value):
        """
        Store a value.

        Args:
            key: Setting name
            value: String value
        """
        raise NotImplementedError


class MemorySettings(SettingsStore):
    """Settings kept in a dict for the lifetime of the object."""

    def __init__(self, initial=None):
        self._values = dict(initial or {})

    def get(self, key, default=None):
        return self._values.get(key, default)

    def set(self, key, value):
        self._values[key] = str(value)

    def as_dict(self):
        """Return a copy of everything stored."""
        return dict(self._values)

"""
Namespaced parameter store.

Serves slash-separated keys ("frontiers/minimum_size") out of a nested
mapping, usually loaded from a YAML parameter file.
"""
import os
from typing import Any, Dict, Optional

import yaml

from frontier_exploration.errors import ConfigurationError


_MISSING = object()


class ParameterStore:
    """Read-only view over nested parameters."""

    SEPARATOR = '/'

    def __init__(self, params: Optional[Dict] = None, namespace: str = ''):
        """
        Initialize parameter store.

        Args:
            params: Nested parameter mapping
            namespace: Prefix prepended to every lookup
        """
        if params is not None and not isinstance(params, dict):
            raise ConfigurationError(
                f"Parameters must be a mapping, got {type(params).__name__}"
            )
        self.params: Dict = params or {}
        self.prefix = namespace.strip(self.SEPARATOR)

    @classmethod
    def from_yaml(cls, path: str, namespace: str = '') -> 'ParameterStore':
        """
        Load parameters from a YAML file.

        Args:
            path: Path to the parameter file
            namespace: Prefix prepended to every lookup

        Returns:
            ParameterStore over the file contents
        """
        if not os.path.exists(path):
            raise ConfigurationError(f"Parameter file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                params = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to read {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse {path}: {e}") from e

        return cls(params or {}, namespace)

    def namespace(self, ns: str) -> 'ParameterStore':
        """Sub-store whose lookups are relative to ns."""
        return ParameterStore(self.params, self._full_key(ns))

    def has(self, key: str) -> bool:
        """Check whether key resolves to a value."""
        return self._lookup(self._full_key(key)) is not _MISSING

    def get(self, key: str, default: Any = _MISSING) -> Any:
        """
        Get a parameter value.

        Args:
            key: Slash-separated key relative to this store's namespace
            default: Returned when the key is absent

        Returns:
            Stored value or default
        """
        full_key = self._full_key(key)
        value = self._lookup(full_key)
        if value is _MISSING:
            if default is _MISSING:
                raise ConfigurationError(f"Missing required parameter '{full_key}'")
            return default
        return value

    def _full_key(self, key: str) -> str:
        key = key.strip(self.SEPARATOR)
        if not self.prefix:
            return key
        if not key:
            return self.prefix
        return f"{self.prefix}{self.SEPARATOR}{key}"

    def _lookup(self, full_key: str) -> Any:
        node: Any = self.params
        for part in filter(None, full_key.split(self.SEPARATOR)):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

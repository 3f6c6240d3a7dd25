"""Configuration for the convention set. Immutable value objects created by Infrastructure."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from webtest_conventions.domain import constants as c


@dataclass(frozen=True)
class ConventionConfig:
    """
    Every class, attribute and literal name the rules compare against.

    Defaults target Symfony / EasyAdmin test suites analyzed from an exported
    tree. Python projects override the names with dotted paths.
    """

    covers_attributes: tuple[str, ...] = (c.COVERS_CLASS_ATTRIBUTE,)
    run_in_separate_process_attribute: str = c.RUN_IN_SEPARATE_PROCESS_ATTRIBUTE
    web_test_base: str = c.WEB_TEST_BASE
    easyadmin_controller_test_base: str = c.EASYADMIN_CONTROLLER_TEST_BASE
    menu_test_base: str = c.MENU_TEST_BASE
    menu_provider_interface: str = c.MENU_PROVIDER_INTERFACE
    controller_bases: tuple[str, ...] = c.DEFAULT_CONTROLLER_BASES
    controller_traits: tuple[str, ...] = (c.CONTROLLER_TRAIT,)
    invokable_controller_bases: tuple[str, ...] = (c.ABSTRACT_CONTROLLER, c.LEGACY_CONTROLLER)
    response_class: str = c.RESPONSE_CLASS
    crud_controller_base: str = c.ABSTRACT_CRUD_CONTROLLER
    admin_action_attribute: str = c.ADMIN_ACTION_ATTRIBUTE
    admin_crud_attribute: str = c.ADMIN_CRUD_ATTRIBUTE
    route_attribute: str = c.ROUTE_ATTRIBUTE
    admin_action_required_arguments: tuple[str, ...] = c.ADMIN_ACTION_REQUIRED_ARGUMENTS
    flash_method: str = c.FLASH_METHOD
    flash_receivers: tuple[str, ...] = c.FLASH_RECEIVERS
    flash_controller_bases: tuple[str, ...] = (c.ABSTRACT_CONTROLLER, c.ABSTRACT_CRUD_CONTROLLER)
    allowed_flash_types: tuple[str, ...] = c.ALLOWED_FLASH_TYPES
    # (blocked value, replacement) pairs
    blocked_flash_types: tuple[tuple[str, str], ...] = c.BLOCKED_FLASH_TYPES
    invokable_methods: tuple[str, ...] = c.INVOKABLE_METHODS
    test_suffix: str = c.TEST_SUFFIX
    controller_suffix: str = c.CONTROLLER_SUFFIX
    test_namespace_segments: tuple[str, ...] = ("Tests", "Test")
    disabled_rules: frozenset[str] = frozenset()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> ConventionConfig:
        """
        Build a config from a [tool.webtest-conventions] table.

        Keys may be kebab-case. Unknown keys and values of the wrong shape are
        reported with logging.warning and left at their defaults.
        """
        fields = {f.name: f for f in dataclasses.fields(cls)}
        defaults = cls()
        overrides: dict[str, object] = {}
        for key, value in raw.items():
            name = str(key).replace("-", "_")
            if name not in fields:
                logging.warning(
                    "Configuration Warning: unknown webtest-conventions key '%s' ignored.", key)
                continue
            current = getattr(defaults, name)
            coerced = cls._coerce(current, value)
            if coerced is None:
                logging.warning(
                    "Configuration Warning: '%s' has an unexpected value %r; using default.", key, value)
                continue
            overrides[name] = coerced
        return dataclasses.replace(defaults, **overrides)

    @staticmethod
    def _coerce(current: object, value: object) -> object | None:
        if isinstance(current, str):
            return value if isinstance(value, str) else None
        if isinstance(current, tuple) and current and isinstance(current[0], tuple):
            if isinstance(value, Mapping) and all(
                isinstance(k, str) and isinstance(v, str) for k, v in value.items()
            ):
                return tuple(value.items())
            return None
        if isinstance(current, (tuple, frozenset)):
            if isinstance(value, str):
                items = [value]
            elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
                items = list(value)
            else:
                return None
            return frozenset(items) if isinstance(current, frozenset) else tuple(items)
        return None

    def blocked_replacement(self, flash_type: str) -> str | None:
        """Replacement for a blocked flash type, or None when flash_type is not blocked."""
        return dict(self.blocked_flash_types).get(flash_type)

    def is_disabled(self, *names: str) -> bool:
        """True when any of names (code, symbol or identifier) is disabled."""
        return any(n in self.disabled_rules for n in names)


class ConfigurationLoader:
    """
    Immutable configuration for the plugin and the CLI.

    Created by Infrastructure from (config_dict, tool_section). Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict, tool_section) at composition root.
    """

    def __init__(
        self,
        config_dict: dict[str, object] | None = None,
        tool_section: dict[str, object] | None = None,
    ) -> None:
        self._config: dict[str, object] = dict(config_dict or {})
        self._tool_section: dict[str, object] = dict(tool_section or {})
        conventions_raw = {
            k: v for k, v in self._config.items() if k not in self.HOST_KEYS
        }
        self._conventions = ConventionConfig.from_mapping(conventions_raw)
        if self._config:
            self.validate_config(self._config)

    # Keys consumed by the hosts rather than by ConventionConfig.
    HOST_KEYS: frozenset[str] = frozenset({"exclude_paths", "exclude-paths"})

    def validate_config(self, config: dict[str, object]) -> None:
        """Validate host-level configuration values."""
        raw = config.get("exclude_paths", config.get("exclude-paths"))
        if raw is not None and not isinstance(raw, list):
            logging.warning(
                "Configuration Warning: 'exclude_paths' must be a list of path fragments.")

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def tool_section(self) -> dict[str, object]:
        return self._tool_section

    @property
    def conventions(self) -> ConventionConfig:
        """Return the immutable convention configuration."""
        return self._conventions

    @property
    def exclude_paths(self) -> list[str]:
        """Path fragments the check command passes to pylint as --ignore-paths."""
        raw = self._config.get("exclude_paths", self._config.get("exclude-paths", []))
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return []

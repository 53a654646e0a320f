"""
KubeScan - Config File Resolution

Finds which of each component's candidate config files exists.
"""

import logging
import os
from typing import Any, Callable, Iterable, Optional, TYPE_CHECKING

from .catalog import Component
from .errors import ConfigLookupError

if TYPE_CHECKING:
    from ..output.reporter import Reporter

logger = logging.getLogger(__name__)

StatFunc = Callable[[str], Any]


class ConfigResolver:
    """Resolves the config file for every component in a catalog.

    Missing files are expected and fall back to the component's default
    config name or, failing that, the component name itself. Any other
    filesystem error is fatal.
    """

    def __init__(
        self,
        reporter: Optional["Reporter"] = None,
        stat: Optional[StatFunc] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            reporter: Receives the missing-config warnings
            stat: Existence check, raises OSError (defaults to os.stat)
        """
        self._reporter = reporter
        self._stat = stat or os.stat

    def find_config_file(self, candidates: Iterable[str]) -> str:
        """Find the first candidate path that exists.

        Args:
            candidates: Ordered candidate paths

        Returns:
            The first existing path, or "" if none exist

        Raises:
            ConfigLookupError: If a path cannot be checked for a reason
                other than not existing
        """
        for candidate in candidates:
            try:
                self._stat(candidate)
            except FileNotFoundError:
                continue
            except OSError as e:
                raise ConfigLookupError(candidate, e) from e
            return candidate

        return ""

    def resolve(self, component: Component) -> str:
        """Resolve the config file for a single component."""
        conf = self.find_config_file(component.confs)
        if conf:
            logger.debug("Component %s uses config file '%s'", component.name, conf)
            return conf

        if component.default_conf is not None:
            logger.debug(
                "Using default config file name '%s' for component %s",
                component.default_conf,
                component.name,
            )
            return component.default_conf

        self._warn(f"Missing config file for {component.name}")
        return component.name

    def resolve_all(self, components: Iterable[Component]) -> dict[str, str]:
        """Resolve config files for all components that declare any.

        Components with neither candidate paths nor a default are skipped.

        Returns:
            Mapping of component name to config path or placeholder name

        Raises:
            ConfigLookupError: On the first non-absence filesystem error
        """
        configs: dict[str, str] = {}
        for component in components:
            if not component.confs and component.default_conf is None:
                continue
            configs[component.name] = self.resolve(component)
        return configs

    def _warn(self, message: str) -> None:
        if self._reporter is not None:
            self._reporter.warn(message)
        else:
            logger.warning(message)

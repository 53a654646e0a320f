"""
KubeScan - Placeholder Substitution

Injects resolved binaries and config files into check command templates.
A placeholder is ``$`` + component name + suffix, e.g. ``$apiserverbin``
or ``$kubeletconf``.
"""

import logging
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

BIN_SUFFIX = "bin"
CONF_SUFFIX = "conf"


def placeholder(key: str, suffix: str) -> str:
    """Build the placeholder token for a key."""
    return f"${key}{suffix}"


def multi_word_replace(template: str, token: str, value: str) -> str:
    """Replace every occurrence of token, quoting multi-word values.

    ``/usr/bin/my comp`` becomes ``'/usr/bin/my comp'`` so it is kept as
    one argument when the command is split.
    """
    if len(value.split()) > 1:
        value = f"'{value}'"
    return template.replace(token, value)


def make_substitutions(template: str, suffix: str, values: Mapping[str, str]) -> str:
    """Substitute every resolved value into a template.

    Empty values are skipped and their placeholder left in place.

    Args:
        template: Command template
        suffix: Placeholder suffix ("bin", "conf")
        values: Component name to resolved value

    Returns:
        The template with placeholders replaced
    """
    for key, value in values.items():
        token = placeholder(key, suffix)
        if value == "":
            logger.debug("No substitution for '%s'", token)
            continue
        logger.info("Substituting %s with '%s'", token, value)
        template = multi_word_replace(template, token, value)

    return template


class SubstitutionEngine:
    """Renders check command templates from the resolved maps.

    Example:
        engine = SubstitutionEngine(binaries, configs)
        engine.render("ps -ef | grep $apiserverbin")
    """

    def __init__(
        self,
        binaries: Optional[Mapping[str, str]] = None,
        configs: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.binaries = dict(binaries or {})
        self.configs = dict(configs or {})

    @staticmethod
    def apply(template: str, values: Mapping[str, str], suffix: str) -> str:
        """Substitute one resolved map into a template."""
        return make_substitutions(template, suffix, values)

    def render(self, template: str) -> str:
        """Substitute both binaries and config files into a template."""
        rendered = self.apply(template, self.binaries, BIN_SUFFIX)
        return self.apply(rendered, self.configs, CONF_SUFFIX)

"""Argument resolver.

Decides the effective value of every argument placeholder:
the supplied value if present (an empty string counts), else the
declared default, else the empty string.
"""

from collections.abc import Iterable, Mapping

from snippetbox.strategies.template_engine.models import ArgumentSpec


class ArgumentResolver:
    """Maps argument names to the values that will be substituted."""

    def resolve(
        self,
        specs: Iterable[ArgumentSpec],
        supplied_values: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Resolve a value for each distinct argument name.

        Names in ``supplied_values`` that no spec declares are ignored.
        When a name occurs more than once, the first occurrence's
        default applies to all of them. Supplied values are not checked
        against ``options``.

        Args:
            specs: Argument specs in order of appearance.
            supplied_values: Values chosen by the user, keyed by name.

        Returns:
            Mapping of every distinct argument name to its value.
        """
        supplied_values = supplied_values or {}
        resolved: dict[str, str] = {}

        for spec in specs:
            if spec.name in resolved:
                continue
            if spec.name in supplied_values:
                resolved[spec.name] = supplied_values[spec.name]
            elif spec.default is not None:
                resolved[spec.name] = spec.default
            else:
                resolved[spec.name] = ""

        return resolved


def resolve(
    specs: Iterable[ArgumentSpec],
    supplied_values: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Module-level shortcut for ``ArgumentResolver().resolve``."""
    return ArgumentResolver().resolve(specs, supplied_values)

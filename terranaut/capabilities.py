"""
Capabilities: version and variant specific command behavior.

Overview
- Capability: immutable strategy value describing one command variant for one
  family of releases:
  • defaults: every flag the variant accepts, mapped to its baseline value
    (the value the binary uses when the flag is omitted).
  • switches: presence-only flags, rendered without a value ("-no-color").
  • subcommand: the subcommand token ("plan", "apply", ...), empty for the base command.

- Registry
  • register(variant, revision, ...): declare a capability under (revision, variant),
    or generically under the variant alone when no revision is given.
  • lookup(revision, variant): exact entry first, generic entry second.
  • select_revision(version, object): bind the capability matching an object's
    variant (its class name) and a binary version.

Binding is a plain value handed to one command instance; classes and other
instances are never touched, so two Plan commands built against different
releases can accept different flags.

Quick example:
    >>> register("Import", defaults={"config": None}, switches=("no-color",))
    capability(subcommand='import', defaults={'config': None, 'no-color': False}, switches={'no-color'})
    >>> register("Import", "Rev012", defaults={"config": None, "provider": None})
    capability(subcommand='import', defaults={'config': None, 'provider': None}, switches=set())
"""
import functools
import logging
import operator
import re
from collections.abc import Iterable, Mapping

from .faults import UnsupportedVariantError, FaultCode, trigger
from .revisions import revision, declare
from .utils import *

logger = logging.getLogger(__name__)

# (revision, variant) -> Capability; generic entries use None as revision.
_registry = {}


class Capability:
    """
    Behavior bundle for one command variant.

    Every switch belongs to the accepted vocabulary: switches missing from
    `defaults` get the baseline False, appended after the explicit defaults.
    """

    __introspectable__ = ("subcommand", "defaults", "switches")

    subcommand = mirror("subcommand")
    defaults = mirror("defaults")
    switches = mirror("switches")

    def __init__(self, defaults=Unset, switches=Unset, subcommand=Unset):
        if not isinstance(defaults := coalesce(defaults, {}), Mapping):
            raise TypeError("capability 'defaults' must be a mapping")
        if not isinstance(switches := coalesce(switches, ()), Iterable) or isinstance(switches, str):
            raise TypeError("capability 'switches' must be an iterable of strings")
        switches = tuple(switches)
        if not isinstance(subcommand := coalesce(subcommand, ""), str):
            raise TypeError("capability 'subcommand' must be a string")

        for name in (*defaults, *switches):
            if not isinstance(name, str):
                raise TypeError("capability flag names must be strings")
            elif not re.fullmatch(r"[^\W\d_][^\W_]*(?:-[^\W_]+)*", name):
                raise ValueError(f"capability flag name {name!r} must be a hyphenated word")

        self._subcommand = subcommand.strip()
        self._switches = frozenset(switches)
        self._defaults = dict(defaults) | {
            switch: False for switch in switches if switch not in defaults
        }

    def __eq__(self, other, /):
        if not isinstance(other, Capability):
            return NotImplemented
        return (self._subcommand, self._defaults, self._switches) == (
            other._subcommand, other._defaults, other._switches
        )

    def __hash__(self):
        return hash((self._subcommand, self._switches, tuple(self._defaults)))

    def __repr__(self):
        return f"capability({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


def register(variant, revision=Unset, /, defaults=Unset, switches=Unset, subcommand=Unset):
    """
    Register a capability for a variant, optionally pinned to a revision tag.

    Parameters
    - variant: str
      Class name of the command variant (e.g., "Plan").
    - revision: Unset | str
      Revision tag (e.g., "Rev012"). When Unset, the capability is the generic,
      version-agnostic behavior of the variant.
    - defaults, switches: see Capability.
    - subcommand: Unset | str
      Defaults to the lowercased variant name.

    Returns
    - the registered Capability.

    Raises
    - TypeError/ValueError on malformed input or when the key is already registered.
    """
    if not isinstance(variant, str) or not variant.isidentifier():
        raise TypeError("register() variant must be an identifier string")
    if not isinstance(revision, str | Unset):
        raise TypeError("register() revision must be a string")
    if revision is not Unset:
        declare(revision)

    key = (coalesce(revision), variant)
    if key in _registry:
        raise ValueError(f"capability for {variant!r} is already registered under {coalesce(revision, 'generic')!r}")

    capability = _registry[key] = Capability(defaults, switches, coalesce(subcommand, variant.lower()))
    return capability


def unregister(variant, revision=Unset, /):
    """
    Remove a registered capability (the revision tag stays declared).
    """
    try:
        return _registry.pop((coalesce(revision), variant))
    except KeyError:
        raise LookupError(f"no capability for {variant!r} under {coalesce(revision, 'generic')!r}") from None


def lookup(revision, variant, /):
    """
    Return the capability for (revision, variant), falling back to the generic
    capability of the variant; Unset when neither exists.
    """
    for key in ((revision, variant), (None, variant)):
        if key in _registry:
            return _registry[key]
    return Unset


def select_revision(version, object, /):
    """
    Select the capability for an object's variant under a binary version.

    The base Command binds the empty capability. Raises UnsupportedVariantError
    when the variant has neither a versioned nor a generic capability.
    """
    variant = type(object).__name__
    if variant == "Command":
        return Capability()

    tag = revision(version)
    if (capability := lookup(tag, variant)) is Unset:
        trigger(UnsupportedVariantError(
            f"no capability is registered for {variant!r} (revision {tag!r})",
        ),
            title="unsupported variant",
            code=FaultCode.UNSUPPORTED_VARIANT,
            hint="register a generic capability for the variant",
            variant=variant,
            revision=tag,
        )

    logger.debug(
        "bound %s capability for %s (%s)",
        "versioned" if tag is not None and (tag, variant) in _registry else "generic", variant, tag,
    )
    return capability


__all__ = (
    "Capability",
    "register",
    "unregister",
    "lookup",
    "select_revision",
)

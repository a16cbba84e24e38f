"""
Command options: settings plus pass-through flags in one read-only mapping.

Three names are settings with baseline values declared in Options.defaults:
- environment: extra environment variables for the process. Values are
  stringified; None removes the variable from the process environment.
- echo: print the assembled command line before running it.
- quiet: do not forward the process standard output in stream mode.

Every other key is a flag for the binary; python-style names are accepted and
rewritten to the binary's hyphenated spelling at compile time (see
terranaut.arguments.compute_arguments).

    >>> options = Options({"out": "plan.bin"}, echo=True, detailed_exitcode=True)
    >>> options.echo, options["detailed_exitcode"]
    (True, True)
"""
from collections.abc import Mapping
from types import MappingProxyType

from .utils import *


def _sanitize_settings(cls, metadata, /):
    """
    Internal: validate and normalize the settings entries of an options mapping.

    Raises
    - TypeError: when a key is not a string, environment is not a mapping of
      string keys, or echo/quiet are not booleans.
    - ValueError: when a key or an environment name is empty.

    Side effects
    - Mutates the provided metadata dict in place (environment values other than
      None are stringified).
    """
    for name in metadata:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__name__.lower()} keys must be strings")
        elif not name.strip():
            raise ValueError(f"{cls.__name__.lower()} keys cannot be empty-strings")

    if "environment" in metadata:
        if not isinstance(environment := metadata["environment"], Mapping):
            raise TypeError(f"{cls.__name__.lower()} 'environment' must be a mapping")
        sanitized = {}
        for name, value in environment.items():
            if not isinstance(name, str):
                raise TypeError(f"{cls.__name__.lower()} 'environment' names must be strings")
            elif not name.strip():
                raise ValueError(f"{cls.__name__.lower()} 'environment' names cannot be empty-strings")
            sanitized[name] = None if value is None else str(value)
        metadata["environment"] = MappingProxyType(sanitized)

    for name in ("echo", "quiet"):
        if name in metadata and not isinstance(metadata[name], bool):
            raise TypeError(f"{cls.__name__.lower()} {name!r} must be a boolean")


class Options(Mapping):
    """
    Read-only mapping of command settings and flags.

    Construction
    - Options(mapping, **overrides): keyword overrides win over mapping entries.
    - Options(): no flags, default settings.

    Settings are readable as attributes (environment, echo, quiet) and fall back
    to Options.defaults; flags are only readable as items.
    """

    defaults = MappingProxyType({
        "environment": MappingProxyType({}),
        "echo": False,
        "quiet": False,
    })

    def __init__(self, mapping=Unset, /, **overrides):
        if not isinstance(mapping := coalesce(mapping, {}), Mapping):
            raise TypeError("options argument must be a mapping")
        metadata = dict(mapping) | overrides
        _sanitize_settings(type(self), metadata)
        self._data = metadata

    def __getitem__(self, name, /):
        return self._data[name]

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __or__(self, other, /):
        if not isinstance(other, Mapping):
            return NotImplemented
        return type(self)(self._data | dict(other))

    def __repr__(self):
        return f"options({', '.join('%s=%r' % item for item in self._data.items())})"

    @property
    def environment(self):
        return dict(self._data.get("environment", self.defaults["environment"]))

    @property
    def echo(self):
        return self._data.get("echo", self.defaults["echo"])

    @property
    def quiet(self):
        return self._data.get("quiet", self.defaults["quiet"])


__all__ = (
    "Options",
)

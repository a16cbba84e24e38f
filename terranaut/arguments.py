r"""
Argument compilation: from options to the binary's argument vector.

Pipeline
- compute_arguments(options)
  • options entries that are not settings of the options object become flags;
    python-style underscores are rewritten to hyphens.
- compile_arguments(defaults, arguments)
  • defaults merged with the computed arguments (arguments win), minus every entry
    still equal to its default: redundant flags never reach the command line.
- validate_arguments(compiled, defaults)
  • Validation(arguments, invalid): keys outside the declared vocabulary are
    reported, not raised, so callers can inspect the compiled set either way.
- render_arguments(compiled, switches)
  • switches render as "-name"; everything else as "-name=value".
- assemble_command(binary, subcommand, flags, target)
  • flat argument vector, empty or missing tokens dropped.

Quick example:
    >>> defaults = {"out": "plan.bin", "detailed-exitcode": False}
    >>> compiled = compile_arguments(defaults, {"out": "x.bin", "detailed-exitcode": True})
    >>> compiled
    {'out': 'x.bin', 'detailed-exitcode': True}
    >>> assemble_command("/usr/bin/tool", "plan", render_arguments(compiled, {"detailed-exitcode"}), "/work")
    ['/usr/bin/tool', 'plan', '-out=x.bin', '-detailed-exitcode', '/work']
"""
import os
from collections.abc import Mapping
from typing import NamedTuple

from .utils import Unset


class Validation(NamedTuple):
    """
    Outcome of validating compiled arguments against a flag vocabulary.
    """
    arguments: dict
    invalid: tuple

    @property
    def valid(self):
        return not self.invalid


def compute_arguments(options, /):
    settings = getattr(options, "defaults", {})
    return {
        str(name).replace("_", "-"): value
        for name, value in options.items()
        if name not in settings
    }


def compile_arguments(defaults, arguments, /):
    merged = dict(defaults) | dict(arguments)
    return {name: value for name, value in merged.items() if defaults.get(name) != value}


def validate_arguments(compiled, defaults, /):
    return Validation(dict(compiled), tuple(name for name in compiled if name not in defaults))


def _render_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)


def render_arguments(compiled, switches, /):
    """
    Render compiled arguments as flag tokens.

    - switches: "-name" (presence only; the value is not rendered).
    - booleans: "-name=true" / "-name=false".
    - lists and tuples: one "-name=item" token per item (repeatable flags).
    - anything else: "-name=value".
    """
    if not isinstance(compiled, Mapping):
        raise TypeError("render_arguments() first argument must be a mapping")

    tokens = []
    for name, value in compiled.items():
        if name in switches:
            tokens.append(f"-{name}")
        elif isinstance(value, list | tuple):
            tokens.extend(f"-{name}={_render_value(item)}" for item in value)
        else:
            tokens.append(f"-{name}={_render_value(value)}")
    return tokens


def assemble_command(binary, subcommand, flags, target=Unset, /):
    tokens = [binary, subcommand, *flags, target]
    return [
        os.fspath(token) if isinstance(token, os.PathLike) else str(token)
        for token in tokens
        if token is not None and token is not Unset and str(token) != ""
    ]


__all__ = (
    "Validation",
    "compute_arguments",
    "compile_arguments",
    "validate_arguments",
    "render_arguments",
    "assemble_command",
)

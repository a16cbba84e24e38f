"""
Terranaut faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the package raises.
  Codes are grouped by layer (revisions, capabilities, arguments, processes) so
  logs and searches stay predictable.
- CommandException: base type carrying a message + options; renders itself with rich
  in a short, lowercased and actionable way.
- trigger(): central entry point to raise any fault with extra context attached.

Integration
- Library code builds a fault and calls trigger(fault, **context).
- Host applications that want pretty output catch CommandException and hand it to a
  rich console (console.print(fault)); __prog__, __codes__ and __styles__ in __main__
  customize the rendering.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by layer)
    - revisions (211xx)
      • MALFORMED_VERSION
    - capabilities (212xx)
      • UNSUPPORTED_VARIANT
    - arguments (213xx)
      • INVALID_ARGUMENTS
    - processes (214xx)
      • LAUNCH_FAILURE
    """
    # --- revision errors (211xx) ---
    MALFORMED_VERSION           = 21101

    # --- capability errors (212xx) ---
    UNSUPPORTED_VARIANT         = 21201

    # --- argument errors (213xx) ---
    INVALID_ARGUMENTS           = 21301

    # --- process errors (214xx) ---
    LAUNCH_FAILURE              = 21401

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(sys.modules["__main__"], "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | UnsetType):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        main = sys.modules["__main__"]

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", "terranaut"), "prog-name"),
            " — ",
            text(self.options["code"].normalize() if "code" in self.options else "", "code"),
            " | ",
            text(self.options.get("title", "fault").title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint"), "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self):
        raise self

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MalformedVersionError(CommandException, ValueError): ...
class UnsupportedVariantError(CommandException, LookupError): ...
class InvalidArgumentsError(CommandException, ValueError): ...
class LaunchError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into a copy of the fault via __replace__(**options) before triggering.
    - when called while handling another exception, the original stays chained as __context__.

    typical options
    - title, code, hint, and any context the reporter may want to keep
      (e.g., command, invalid, arguments, tokens).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "MalformedVersionError",
    "UnsupportedVariantError",
    "InvalidArgumentsError",
    "LaunchError",
    "FaultCode",
    "trigger",
)

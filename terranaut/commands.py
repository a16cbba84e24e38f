"""
Terranaut command layer: build and run invocations of a versioned binary.

What this module provides
- Command: the base command (no subcommand). Construction binds everything that
  depends on the binary release and the target:
  • the revision tag of the binary version,
  • the capability (accepted flags, defaults, switches, subcommand) of the variant,
  • the environment map the process will run with.
  Invocation compiles and validates the options, assembles the argument vector
  and runs it in capture or stream mode.

- Variants: Init, Plan, Apply, Refresh, Destroy, Validate, Fmt, Show, Version.
  The variant is the class name; its capability comes from terranaut.capabilities.

- execute(variant, ...): one-shot convenience runner.

Quick start
    from terranaut import Plan, Options

    plan = Plan("./stacks/network", Options(out="network.plan", echo=True),
                binary="/opt/terraform/terraform-1.2.0")
    exitcode = plan.execute()             # streams output, returns the exit code
    result = plan.execute(capture=True)   # Capture(stdout, stderr, exitstatus)

Lifecycle
- Constructed -> assembled -> (echoed) -> running -> captured/streamed.
- Argument validation runs before anything is spawned; the environment map is
  computed at construction and only used by the spawned process.
"""
import functools
import operator
import os
import re

from . import runner
from . import subcommands  # NOQA: F-401 registers the built-in catalog
from .arguments import *
from .capabilities import Capability, select_revision
from .environment import inject
from .faults import InvalidArgumentsError, FaultCode, trigger
from .options import Options
from .revisions import revision, detect_version
from .utils import *


class CommandType(type):
    """
    Metaclass giving commands stable, readable introspection.

    Responsibilities
    - __typename__ derived from the class name (camel-case split with hyphens).
    - Read-only properties for every name listed in __introspectable__ (via mirror()).
    - Compact __repr__/__rich_repr__ driven by __displayable__ (or __introspectable__).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - plan(target='./stack', revision='Rev1_02', ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_path(cls, name, value, /, *, required=False):
    """
    Internal: normalize a path-like constructor argument into a string.

    Unset becomes "" unless the argument is required.
    """
    if value is Unset and not required:
        return ""
    if not isinstance(value, str | os.PathLike):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string or a path-like object")
    if not (value := os.fspath(value).strip()) and required:
        raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
    return value


class Command(metaclass=CommandType):
    """
    Base command: one invocation of a versioned binary.

    Responsibilities
    - Introspection: exposes target, binary, version, revision, capability, options and
      environment as read-only properties.
    - Binding: selects the capability for the variant and version at construction.
    - Compilation: merges capability defaults with options, drops redundant flags and
      validates the result against the capability vocabulary.
    - Execution: hands the argument vector to terranaut.runner.

    Notes
    - Subclasses are variants; the class name selects the capability.
    - The base command has no subcommand and accepts no flags.
    """

    __introspectable__ = (
        "target",
        "binary",
        "version",
        "revision",
        "capability",
        "options",
        "environment",
    )

    __displayable__ = (
        "target",
        "binary",
        "revision",
        "capability",
    )

    def __init__(self, target=Unset, /, options=Unset, *, binary, version=Unset, capability=Unset):
        """
        Parameters
        - target: Unset | str | PathLike
          Directory or plan file the command runs against.
        - options: Unset | Options | Mapping
          Settings and flags; a plain mapping is wrapped into Options.
        - binary: str | PathLike
          Path of the binary to run.
        - version: Unset | str
          Binary version. When Unset, it is derived from the binary file name and,
          failing that, the latest known revision applies.
        - capability: Unset | Capability
          Explicit capability; skips the registry lookup.
        """
        cls = type(self)
        self._target = _sanitize_path(cls, "target", target)
        self._binary = _sanitize_path(cls, "binary", binary, required=True)

        if isinstance(options := coalesce(options, Options()), Options):
            self._options = options
        else:
            self._options = Options(options)

        if not isinstance(version, str | Unset):
            raise TypeError(f"{cls.__typename__} 'version' must be a string")
        self._version = coalesce(version, detect_version(self._binary))
        self._revision = revision(self._version)

        if capability is Unset:
            capability = select_revision(self._version, self)
        elif not isinstance(capability, Capability):
            raise TypeError(f"{cls.__typename__} 'capability' must be a capability")
        self._capability = capability

        self._environment = inject(self._target, self._options.environment)

    @property
    def subcommand(self):
        return self._capability.subcommand

    @property
    def defaults(self):
        return self._capability.defaults

    @property
    def switches(self):
        return self._capability.switches

    @property
    def arguments(self):
        """
        Pass-through flags from the options, in the binary's spelling.
        """
        return compute_arguments(self._options)

    def compile(self):
        return compile_arguments(self._capability.defaults, self.arguments)

    def validate(self):
        """
        Validate the compiled arguments against the capability vocabulary.

        Returns a Validation; use assemble() for a raising variant.
        """
        return validate_arguments(self.compile(), self._capability.defaults)

    def assemble(self):
        """
        Build the argument vector: binary, subcommand, flags, target.

        Raises
        - InvalidArgumentsError: when the compiled flags contain names the variant
          does not accept (every offending name is listed).
        """
        validation = self.validate()
        if not validation.valid:
            trigger(InvalidArgumentsError(
                f"{type(self).__typename__} does not accept {', '.join(map(repr, validation.invalid))}",
            ),
                title="invalid arguments",
                code=FaultCode.INVALID_ARGUMENTS,
                hint="remove the flags or pick a binary version that supports them",
                invalid=validation.invalid,
                arguments=validation.arguments,
                revision=self._revision,
            )

        return assemble_command(
            self._binary,
            self._capability.subcommand,
            render_arguments(validation.arguments, self._capability.switches),
            self._target,
        )

    def execute(self, *, capture=False):
        """
        Run the command.

        Returns
        - capture=True: runner.Capture(stdout, stderr, exitstatus).
        - capture=False: the exit code, after streaming the output live.
        """
        tokens = self.assemble()
        if self._options.echo:
            runner.echo(tokens)
        if capture:
            return runner.capture(tokens, self._environment)
        return runner.stream(tokens, self._environment, quiet=self._options.quiet)


class Init(Command): ...
class Plan(Command): ...
class Apply(Command): ...
class Refresh(Command): ...
class Destroy(Command): ...
class Validate(Command): ...
class Fmt(Command): ...
class Show(Command): ...
class Version(Command): ...


variants = {
    variant.__name__: variant for variant in (Init, Plan, Apply, Refresh, Destroy, Validate, Fmt, Show, Version)
}


def execute(variant, target=Unset, /, options=Unset, *, binary, version=Unset, capture=False):
    """
    Construct a command and run it once.

    Parameters
    - variant: type[Command] | str
      Command class or variant name (case-insensitive, e.g. "plan").
    - target, options, binary, version: forwarded to the command.
    - capture: see Command.execute().

    Raises
    - LookupError: when a variant name is unknown.
    """
    if isinstance(variant, str):
        try:
            variant = variants[variant.strip().capitalize()]
        except KeyError:
            raise LookupError(f"execute() unknown variant {variant!r}") from None
    elif not isinstance(variant, type) or not issubclass(variant, Command):
        raise TypeError("execute() first argument must be a command class or a variant name")

    return variant(target, options, binary=binary, version=version).execute(capture=capture)


__all__ = (
    "Command",
    "Init",
    "Plan",
    "Apply",
    "Refresh",
    "Destroy",
    "Validate",
    "Fmt",
    "Show",
    "Version",
    "variants",
    "execute",
)

del CommandType

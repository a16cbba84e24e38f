"""
Process environment for the binary.

The binary keeps its private state (providers, modules, backend metadata) in a
data directory next to the configuration it runs against. inject() builds the
environment map handed to the process:

1. TF_DATA_DIR points at the data directory of the target.
2. Caller overrides are applied (they may replace TF_DATA_DIR); a None value
   removes the variable.
3. Path-valued variables are expanded to absolute paths, including any the
   caller just supplied.

The map is a copy; os.environ is never modified.
"""
import logging
import os
import os.path

from .utils import Unset, coalesce

logger = logging.getLogger(__name__)

DATA_DIR = ".terraform"
DATA_DIR_VARIABLE = "TF_DATA_DIR"

# Variables holding paths that the binary resolves against its own working directory.
EXPANDABLE_VARIABLES = (
    "TF_CLI_CONFIG_FILE",
    "TF_LOG_PATH",
    "TF_PLUGIN_CACHE_DIR",
)


def data_dir(target, /):
    """
    Return the absolute data directory for a target directory or plan file.

    A target that is not an existing directory (a plan file, or a path that does
    not exist yet) resolves against its parent directory.
    """
    target = os.fspath(target)
    directory = target if os.path.isdir(target) else os.path.dirname(target)
    return os.path.abspath(os.path.join(directory or os.curdir, DATA_DIR))


def expand(path, /):
    return os.path.abspath(os.path.expanduser(path))


def inject(target, overrides=Unset, /, base=Unset):
    """
    Build the environment map for a command against target.

    Parameters
    - target: str | PathLike
      Directory or plan file the command runs against ("" for none).
    - overrides: Unset | Mapping[str, str | None]
      Caller-supplied variables; applied after the data directory. A None
      value removes the variable.
    - base: Unset | Mapping[str, str]
      Environment to start from; defaults to os.environ.

    Returns
    - dict[str, str]: a fresh environment map.
    """
    environment = dict(coalesce(base, os.environ))
    environment[DATA_DIR_VARIABLE] = data_dir(target)
    for name, value in coalesce(overrides, {}).items():
        if value is None:
            environment.pop(name, None)
        else:
            environment[name] = value

    for variable in EXPANDABLE_VARIABLES:
        if variable in environment:
            environment[variable] = expand(environment[variable])

    logger.debug("%s=%s", DATA_DIR_VARIABLE, environment.get(DATA_DIR_VARIABLE))
    return environment


__all__ = (
    "DATA_DIR",
    "DATA_DIR_VARIABLE",
    "EXPANDABLE_VARIABLES",
    "data_dir",
    "expand",
    "inject",
)

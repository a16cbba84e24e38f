"""
Built-in capability catalog.

Generic entries describe the current flag vocabulary of each subcommand; revision
entries pin the vocabulary of older release lines where it differs. Baseline values
are the binary's own defaults, so flags left at their default never reach the
command line.

Importing this module registers the catalog (terranaut.commands does so).
"""
from .capabilities import register

# Flags shared by the state-changing subcommands.
_operation = {
    "input": True,
    "lock": True,
    "lock-timeout": "0s",
    "parallelism": 10,
    "refresh": True,
    "state": None,
    "target": None,
    "var": None,
    "var-file": None,
}

# --- generic (current) -----------------------------------------------------

register("Init", defaults={
    "backend": True,
    "backend-config": None,
    "from-module": None,
    "get": True,
    "input": True,
    "lock": True,
    "lock-timeout": "0s",
    "lockfile": None,
    "plugin-dir": None,
    "upgrade": False,
}, switches=("force-copy", "migrate-state", "no-color", "reconfigure"))

register("Plan", defaults=_operation | {
    "out": None,
    "replace": None,
}, switches=("compact-warnings", "destroy", "detailed-exitcode", "no-color", "refresh-only"))

register("Apply", defaults=_operation | {
    "backup": None,
    "replace": None,
    "state-out": None,
}, switches=("auto-approve", "compact-warnings", "destroy", "no-color", "refresh-only"))

register("Refresh", defaults=_operation | {
    "backup": None,
    "state-out": None,
}, switches=("compact-warnings", "no-color"))

register("Destroy", defaults=_operation | {
    "backup": None,
    "state-out": None,
}, switches=("auto-approve", "compact-warnings", "no-color"))

register("Validate", switches=("json", "no-color"))

register("Fmt", defaults={
    "list": True,
    "write": True,
}, switches=("check", "diff", "no-color", "recursive"))

register("Show", switches=("json", "no-color"))

register("Version", switches=("json",))

# --- legacy release lines ----------------------------------------------------

_legacy_init = {
    "backend": True,
    "backend-config": None,
    "from-module": None,
    "get": True,
    "get-plugins": True,
    "input": True,
    "lock": True,
    "lock-timeout": "0s",
    "plugin-dir": None,
    "upgrade": False,
    "verify-plugins": True,
}

register("Init", "Rev011", defaults=_legacy_init, switches=("force-copy", "no-color", "reconfigure"))
register("Plan", "Rev011", defaults=_operation | {
    "module-depth": -1,
    "out": None,
}, switches=("destroy", "detailed-exitcode", "no-color"))
register("Apply", "Rev011", defaults=_operation | {
    "backup": None,
    "state-out": None,
}, switches=("auto-approve", "no-color"))
register("Validate", "Rev011", defaults={
    "check-variables": True,
    "var": None,
    "var-file": None,
}, switches=("no-color",))

register("Init", "Rev012", defaults=_legacy_init, switches=("force-copy", "no-color", "reconfigure"))
register("Plan", "Rev012", defaults=_operation | {
    "out": None,
}, switches=("compact-warnings", "destroy", "detailed-exitcode", "no-color"))
register("Apply", "Rev012", defaults=_operation | {
    "backup": None,
    "state-out": None,
}, switches=("auto-approve", "compact-warnings", "no-color"))
register("Validate", "Rev012", defaults={
    "var": None,
    "var-file": None,
}, switches=("json", "no-color"))

for _revision in ("Rev013", "Rev014"):
    register("Init", _revision, defaults=_legacy_init, switches=("force-copy", "no-color", "reconfigure"))
    register("Plan", _revision, defaults=_operation | {
        "out": None,
    }, switches=("compact-warnings", "destroy", "detailed-exitcode", "no-color"))
    register("Apply", _revision, defaults=_operation | {
        "backup": None,
        "state-out": None,
    }, switches=("auto-approve", "compact-warnings", "no-color"))

register("Init", "Rev015", defaults={
    "backend": True,
    "backend-config": None,
    "from-module": None,
    "get": True,
    "input": True,
    "lock": True,
    "lock-timeout": "0s",
    "plugin-dir": None,
    "upgrade": False,
}, switches=("force-copy", "migrate-state", "no-color", "reconfigure"))

del _revision

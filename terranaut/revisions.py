"""
Revision tags: canonical identifiers derived from binary versions.

A revision tag names the flag vocabulary of a family of releases. The tag keeps
only major and minor components, so every patch release of a minor line shares
the same tag:

    >>> calc_revision("0.15.5")
    'Rev015'
    >>> calc_revision("1.2.0")
    'Rev1_02'

Major zero is kept literally while any other major gets an underscore suffix.
Minor is padded to two digits, so tags of the same major sort in release order.

Known tags are the ones declared by the capability registry (see
terranaut.capabilities.register); revision() without a version answers the
latest known tag.
"""
import functools
import os.path
import re

from .faults import MalformedVersionError, FaultCode, trigger
from .utils import Unset

_known = set()


@functools.cache
def calc_revision(version, /):
    if not isinstance(version, str):
        raise TypeError("calc_revision() argument must be a string")

    major, minor = (re.split(r"\.|-", version.strip()) + ["", ""])[:2]

    if not (re.fullmatch(r"[0-9]+", major) and re.fullmatch(r"[0-9]+", minor)):
        trigger(MalformedVersionError(
            f"version {version!r} does not start with a numeric major and minor",
        ),
            title="malformed version",
            code=FaultCode.MALFORMED_VERSION,
            hint="pass a release version such as '1.2.0' or '0.15.5'",
            version=version,
        )

    major = major if int(major) == 0 else major + "_"
    minor = minor.rjust(2, "0")  # pad a single digit
    return "".join(("Rev", major, minor))


def revision(version=Unset, /):
    """
    Resolve the revision tag for a version, or the latest known tag without one.

    Returns None when no version is given and no tag has been declared yet.
    """
    if version is not Unset and version is not None:
        return calc_revision(version)
    return max(_known, default=None)


def known_revisions():
    """
    Return every declared revision tag in ascending order.
    """
    return tuple(sorted(_known))


def declare(tag, /):
    """
    Record a revision tag as known. Declaring an existing tag is a no-op.
    """
    if not isinstance(tag, str):
        raise TypeError("declare() argument must be a string")
    if not re.fullmatch(r"Rev(0|[1-9][0-9]*_)[0-9]{2,}", tag):
        raise ValueError(f"declare() argument must be a revision tag, not {tag!r}")
    _known.add(tag)
    return tag


def detect_version(binary, /):
    """
    Derive a version from a versioned binary file name.

    Version managers install binaries side by side as "<tool>-<version>", e.g.
    "terraform-1.2.0" or "terraform-0.15.5.exe". Returns Unset when the file name
    does not carry a version.
    """
    name = os.path.basename(os.fspath(binary))
    if name.lower().endswith(".exe"):
        name = name[:-4]
    if match := re.search(r"-([0-9]+\.[0-9]+(?:[.\-][0-9A-Za-z.\-]*)?)$", name):
        return match.group(1)
    return Unset


__all__ = (
    "calc_revision",
    "revision",
    "known_revisions",
    "declare",
    "detect_version",
)

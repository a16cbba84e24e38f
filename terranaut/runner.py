"""
Process execution in two modes.

- capture(tokens, environment): run to completion and return a Capture record
  holding the whole standard output, standard error and exit status.
- stream(tokens, environment, quiet): forward output live, line by line, and
  return the exit code. Standard input is closed right away; standard output and
  standard error are drained by one thread each so neither pipe can fill up while
  the other is being read. Lines reach the console files verbatim. A failure to
  write a line stops the forwarding but not the draining, and is raised once the
  process has exited.

A non-zero exit status is data for the caller. A binary that cannot be started
raises LaunchError, chained to the underlying OSError.
"""
import logging
import shlex
import subprocess
import threading
from typing import NamedTuple

from rich.console import Console
from rich.text import Text

from .faults import LaunchError, FaultCode, trigger
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)

console = Console(highlight=False)
errors = Console(stderr=True, highlight=False)


class Capture(NamedTuple):
    """
    Result of a captured execution.
    """
    stdout: str
    stderr: str
    exitstatus: int


def echo(tokens, /):
    """
    Print the command line about to be executed.
    """
    console.print(Text.assemble(("Executing: ", "bold"), shlex.join(tokens)), soft_wrap=True)


def _spawn(factory, tokens, /, **options):
    logger.debug("launching %s", shlex.join(tokens))
    try:
        return factory(tokens, **options)
    except OSError as exception:
        trigger(LaunchError(
            f"unable to start {tokens[0]!r}: {exception.strerror or exception}",
        ),
            title="launch failure",
            code=FaultCode.LAUNCH_FAILURE,
            hint="check that the binary exists and is executable",
            tokens=tuple(tokens),
            errno=exception.errno,
        )


def capture(tokens, environment=Unset, /):
    completed = _spawn(
        subprocess.run,
        tokens,
        env=coalesce(environment),
        stdin=subprocess.DEVNULL,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
    )
    logger.debug("%s exited with %d", tokens[0], completed.returncode)
    return Capture(completed.stdout, completed.stderr, completed.returncode)


def _drain(stream, sink, quiet, lock, failures, /):
    # Drain to EOF even after a write failure.
    for line in stream:
        if quiet or failures:
            continue
        try:
            with lock:
                sink.file.write(line)
                sink.file.flush()
        except (OSError, ValueError) as exception:
            logger.debug("stopped forwarding %s: %s", threading.current_thread().name, exception)
            failures.append(exception)


def stream(tokens, environment=Unset, /, quiet=False):
    with _spawn(
        subprocess.Popen,
        tokens,
        env=coalesce(environment),
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        encoding="utf-8",
        errors="replace",
        bufsize=1,
    ) as process:
        process.stdin.close()

        lock = threading.Lock()
        failures = []
        drains = (
            threading.Thread(
                target=_drain,
                args=(process.stdout, console, quiet, lock, failures),
                name="terranaut-stdout",
                daemon=True,
            ),
            threading.Thread(
                target=_drain,
                args=(process.stderr, errors, False, lock, failures),
                name="terranaut-stderr",
                daemon=True,
            ),
        )
        for drain in drains:
            drain.start()
        for drain in drains:
            drain.join()

        exitstatus = process.wait()

    logger.debug("%s exited with %d", tokens[0], exitstatus)
    if failures:
        raise failures[0]
    return exitstatus


__all__ = (
    "Capture",
    "echo",
    "capture",
    "stream",
)

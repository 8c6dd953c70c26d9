# This file is part of firstboot. See LICENSE file for license information.
"""Common utility functions for interacting with subprocess."""

import collections
import logging
import os
import subprocess
from errno import ENOEXEC
from typing import List, Union

LOG = logging.getLogger(__name__)

SubpResult = collections.namedtuple("SubpResult", ["stdout", "stderr"])


class ProcessExecutionError(IOError):
    MESSAGE_TMPL = (
        "%(description)s\n"
        "Command: %(cmd)s\n"
        "Exit code: %(exit_code)s\n"
        "Reason: %(reason)s\n"
        "Stdout: %(stdout)s\n"
        "Stderr: %(stderr)s"
    )
    empty_attr = "-"

    def __init__(
        self,
        stdout=None,
        stderr=None,
        exit_code=None,
        cmd=None,
        description=None,
        reason=None,
        errno=None,
    ):
        self.cmd = cmd or self.empty_attr

        if description:
            self.description = description
        elif not exit_code and errno == ENOEXEC:
            self.description = "Exec format error. Missing #! in script?"
        else:
            self.description = "Unexpected error while running command."

        self.exit_code = (
            exit_code if isinstance(exit_code, int) else self.empty_attr
        )
        self.stderr = self._indent_text(stderr) if stderr else (
            self.empty_attr if stderr is None else stderr
        )
        self.stdout = self._indent_text(stdout) if stdout else (
            self.empty_attr if stdout is None else stdout
        )
        self.reason = reason or self.empty_attr
        if errno:
            self.errno = errno

        message = self.MESSAGE_TMPL % {
            "description": self.description,
            "cmd": self.cmd,
            "exit_code": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "reason": self.reason,
        }
        IOError.__init__(self, message)

    def _indent_text(self, text: str, indent_level=8) -> str:
        """
        indent text on all but the first line, allowing for easy to read output
        """
        return text.rstrip("\n").replace("\n", "\n" + " " * indent_level)


def subp(
    args: List[str],
    *,
    data=None,
    rcs=None,
    capture=True,
    update_env=None,
) -> SubpResult:
    """Run a subprocess.

    :param args: command to run in a list. [cmd, arg1, arg2...]
    :param data: input to the command, made available on its stdin.
    :param rcs:
        a list of allowed return codes.  If subprocess exits with a value not
        in this list, a ProcessExecutionError will be raised.
    :param capture:
        boolean indicating if output should be captured.  If True, then stderr
        and stdout will be returned as strings.  If False, they will not be
        redirected and (None, None) is returned.
    :param update_env:
        update the environment for this command with this dictionary.
        this will not affect the current processes os.environ.
    """
    if rcs is None:
        rcs = [0]

    env = os.environ.copy()
    if update_env:
        env.update(update_env)

    LOG.debug(
        "Running command %s with allowed return codes %s (capture=%s)",
        args,
        rcs,
        capture,
    )

    stdout = stderr = None
    if capture:
        stdout = stderr = subprocess.PIPE
    if data is None:
        # using devnull assures any reads get null, rather
        # than possibly waiting on input.
        stdin: Union[int, None] = subprocess.DEVNULL
    else:
        stdin = subprocess.PIPE
        if not isinstance(data, bytes):
            data = data.encode()

    try:
        sp = subprocess.Popen(
            args, stdout=stdout, stderr=stderr, stdin=stdin, env=env
        )
        out, err = sp.communicate(data)
    except OSError as e:
        raise ProcessExecutionError(
            cmd=args, reason=e, errno=e.errno, stdout="-", stderr="-"
        ) from e

    if isinstance(out, bytes):
        out = out.decode("utf-8", "replace")
    if isinstance(err, bytes):
        err = err.decode("utf-8", "replace")

    rc = sp.returncode
    if rc not in rcs:
        raise ProcessExecutionError(
            stdout=out, stderr=err, exit_code=rc, cmd=args
        )
    return SubpResult(out, err)


def target_path(target=None, path=None):
    # return 'path' inside target, accepting target as None
    if target in (None, ""):
        target = "/"
    elif not isinstance(target, str):
        raise ValueError(f"Unexpected input for target: {target}")
    else:
        target = os.path.abspath(target)
        # abspath("//") returns "//" specifically for 2 slashes.
        if target.startswith("//"):
            target = target[1:]

    if not path:
        return target

    # os.path.join("/etc", "/foo") returns "/foo". Chomp all leading /.
    while len(path) and path[0] == "/":
        path = path[1:]
    return os.path.join(target, path)

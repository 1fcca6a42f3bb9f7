#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#

import io
import os
import subprocess
import tempfile

from oslo_log import log as logging

from mayday import exception

LOG = logging.getLogger(__name__)


class CommandResult(object):
    """Outcome of a collected command.

    ``output`` is a file object holding whatever the process wrote before it
    exited or was killed, rewound to its start. Bytes are accepted and
    wrapped. ``returncode`` is None when the process timed out.
    """

    def __init__(self, args, output, returncode, timed_out):
        if isinstance(output, bytes):
            output = io.BytesIO(output)
        self.args = args
        self.output = output
        self.returncode = returncode
        self.timed_out = timed_out
        output.seek(0, os.SEEK_END)
        self.size = output.tell()
        output.seek(0)

    @property
    def succeeded(self):
        return self.returncode == 0 and not self.timed_out

    def read(self):
        self.output.seek(0)
        return self.output.read()

    def close(self):
        self.output.close()


class CommandRunner(object):
    """Run external commands, spooling their output to a temporary file.

    :param timeout: seconds to wait for a command, None or 0 to wait forever
    :param capture_stderr: merge stderr into the captured output
    """

    def __init__(self, timeout=None, capture_stderr=True):
        self.timeout = timeout or None
        self.capture_stderr = capture_stderr

    def run(self, args):
        args = list(args)
        LOG.debug("Running: %s", " ".join(args))
        stderr = subprocess.STDOUT if self.capture_stderr else subprocess.DEVNULL
        output = tempfile.TemporaryFile()
        try:
            proc = subprocess.run(args,
                                  stdin=subprocess.DEVNULL,
                                  stdout=output,
                                  stderr=stderr,
                                  timeout=self.timeout)
        except subprocess.TimeoutExpired:
            LOG.warning("Command %s killed after %s seconds",
                        " ".join(args), self.timeout)
            return CommandResult(args, output, None, True)
        except (OSError, ValueError) as e:
            output.close()
            raise exception.CommandSpawnError(cmd=" ".join(args), reason=e)

        if proc.returncode != 0:
            LOG.warning("Command %s exited with status %d",
                        " ".join(args), proc.returncode)
        return CommandResult(args, output, proc.returncode, False)

#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#

""" Sources of data that can be written into a mayday archive

Every source is a Tarable: it has an archive entry name, an optional
symlink target, and when it is not a link it produces a Payload with the
bytes and the header metadata of the entry. Commands only run when their
payload is requested.
"""

import abc
import collections
import io
import json
import os
import posixpath
import shutil
import stat
import tempfile
import time

from oslo_log import log as logging

from mayday.command import CommandRunner
from mayday.common import constants
from mayday import exception

LOG = logging.getLogger(__name__)


Payload = collections.namedtuple('Payload', 'fileobj size mode mtime')


def check_name(name):
    """Return the normalized entry name, refusing empty or escaping ones."""
    if not name or not isinstance(name, str):
        raise exception.InvalidArchiveName(name=name)
    normalized = posixpath.normpath(name)
    if normalized in (".", "/") or ".." in name.split("/"):
        raise exception.InvalidArchiveName(name=name)
    return normalized


def _bytes_payload(data, mode=constants.FILE_MODE):
    return Payload(io.BytesIO(data), len(data), mode, time.time())


class Tarable(object, metaclass=abc.ABCMeta):
    """Base class for anything the collector can archive."""

    def __init__(self, name, link=None):
        self.name = check_name(name)
        self.link = link or None

    @property
    def is_link(self):
        return self.link is not None

    @abc.abstractmethod
    def content(self):
        """Produce the entry body.

        :returns: Payload whose fileobj yields exactly ``size`` bytes
        """

    def close(self):
        """Release anything held by the unit."""

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self.name)


class FileUnit(Tarable):
    """A host file, opened and stat'd when the unit is built.

    The stat size is not trusted for the header: sysfs reports a page for
    every attribute, procfs reports nothing, and logs change under us. The
    content is spooled first and the header uses the bytes actually read.
    """

    def __init__(self, name, link=None):
        super(FileUnit, self).__init__(name, link)
        self.path = name
        self._handle = None
        self._spool = None
        try:
            self._handle = open(name, "rb")
            self.stat = os.fstat(self._handle.fileno())
        except (IOError, OSError) as e:
            self.close()
            raise exception.FileCollectionError(name=name,
                                                reason=e.strerror or e)

    def content(self):
        if self._handle is None:
            raise exception.FileCollectionError(name=self.path,
                                                reason="file already closed")
        spool = tempfile.SpooledTemporaryFile(
            max_size=constants.SPOOL_MAX_SIZE)
        try:
            shutil.copyfileobj(self._handle, spool)
        except (IOError, OSError) as e:
            spool.close()
            raise exception.FileCollectionError(name=self.path,
                                                reason=e.strerror or e)
        size = spool.tell()
        spool.seek(0)
        if size != self.stat.st_size:
            LOG.debug("%s: read %d bytes, stat reported %d",
                      self.path, size, self.stat.st_size)
        self._spool = spool
        return Payload(spool, size, stat.S_IMODE(self.stat.st_mode),
                       self.stat.st_mtime)

    def close(self):
        if self._spool is not None:
            self._spool.close()
            self._spool = None
        if self._handle is not None:
            self._handle.close()
            self._handle = None


def command_entry_name(args):
    return posixpath.join(constants.COMMANDS_DIR,
                          "_".join(args).replace("/", "_"))


class CommandUnit(Tarable):
    """Output of a command, run when the payload is requested."""

    def __init__(self, args, name=None, link=None, runner=None):
        self.args = tuple(args)
        if not self.args:
            raise exception.InvalidArchiveName(name=name)
        super(CommandUnit, self).__init__(
            name or command_entry_name(self.args), link)
        self.runner = runner or CommandRunner()
        self.result = None

    def content(self):
        if self.result is None:
            self.result = self.runner.run(self.args)
        self.result.output.seek(0)
        return Payload(self.result.output, self.result.size,
                       constants.FILE_MODE, time.time())

    def close(self):
        if self.result is not None:
            self.result.close()


class JournalUnit(CommandUnit):
    """The journal of a single systemd unit."""

    def __init__(self, unit, runner=None):
        self.unit = unit
        super(JournalUnit, self).__init__(
            [constants.JOURNALCTL, "--no-pager", "-u", unit],
            name=posixpath.join(constants.JOURNALS_DIR, unit + ".log"),
            runner=runner)


class PodLogUnit(CommandUnit):
    """Journal of a running rkt pod, read through its machine name."""

    def __init__(self, pod_id, runner=None):
        self.pod_id = pod_id
        super(PodLogUnit, self).__init__(
            [constants.JOURNALCTL, "-M", "rkt-" + pod_id],
            name=posixpath.join(constants.RKT_DIR, pod_id + ".log"),
            runner=runner)


class PodUnit(Tarable):
    """The record the container runtime reports for a pod."""

    def __init__(self, pod):
        self.pod = pod
        super(PodUnit, self).__init__(
            posixpath.join(constants.RKT_DIR, pod.id + ".json"))

    def content(self):
        record = self.pod.record or {"name": self.pod.id,
                                     "state": self.pod.state}
        data = json.dumps(record, indent=2, sort_keys=True) + "\n"
        return _bytes_payload(data.encode("utf-8"))

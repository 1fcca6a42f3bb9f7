#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#

import tarfile
import time

from oslo_log import log as logging

from mayday.common import constants
from mayday import exception

LOG = logging.getLogger(__name__)


class ArchiveWriter(object):
    """Stream Tarables into a gzip compressed tar file.

    The writer owns the destination file object and closes it together with
    the tar and gzip layers. Entries are written one after the other, the
    body of an entry is fully copied before the call returns.
    """

    def __init__(self, fileobj, path=None):
        self.path = path or getattr(fileobj, "name", "<stream>")
        self._fileobj = fileobj
        self._tar = tarfile.open(fileobj=fileobj, mode="w|gz")
        self.closed = False
        self.entries = 0

    @classmethod
    def create(cls, path):
        fileobj = open(path, "wb")
        try:
            return cls(fileobj, path)
        except Exception:
            fileobj.close()
            raise

    def _check_open(self):
        if self.closed:
            raise exception.ArchiveClosed(path=self.path)

    def add(self, tarable):
        if tarable.is_link:
            self.add_symlink(tarable)
        else:
            self.add_file(tarable)

    def add_file(self, tarable):
        self._check_open()
        payload = tarable.content()
        info = tarfile.TarInfo(tarable.name)
        info.type = tarfile.REGTYPE
        info.size = payload.size
        info.mode = payload.mode
        info.mtime = int(payload.mtime)
        self._tar.addfile(info, payload.fileobj)
        self.entries += 1
        LOG.debug("Added %s (%d bytes)", tarable.name, payload.size)

    def add_symlink(self, tarable):
        self._check_open()
        info = tarfile.TarInfo(tarable.name)
        info.type = tarfile.SYMTYPE
        info.linkname = tarable.link
        info.mode = constants.LINK_MODE
        info.mtime = int(time.time())
        self._tar.addfile(info)
        self.entries += 1
        LOG.debug("Added link %s -> %s", tarable.name, tarable.link)

    def close(self):
        self._check_open()
        self.closed = True
        try:
            self._tar.close()
        finally:
            self._fileobj.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not self.closed:
            self.close()

################################################################################
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import io
import os
import tarfile

from mayday.archive import ArchiveWriter
from mayday import exception
from mayday import tarable
from mayday.tests.base import BaseTestCase
from mayday.tests.base import FakeRunner


class KeepOpenBuffer(io.BytesIO):
    def close(self):
        pass


class TestArchiveWriter(BaseTestCase):

    def setUp(self):
        super(TestArchiveWriter, self).setUp()
        self.path = os.path.join(self.tempdir, "dump.tar.gz")

    def read_back(self):
        contents = {}
        with tarfile.open(self.path, "r:gz") as tar:
            for member in tar.getmembers():
                if member.issym():
                    contents[member.name] = ("link", member.linkname)
                else:
                    data = tar.extractfile(member).read()
                    contents[member.name] = (member.size, data)
        return contents

    def test_add_file(self):
        data = os.urandom(70000)
        path = self.make_file("blob", data)
        unit = tarable.FileUnit(path)

        with ArchiveWriter.create(self.path) as writer:
            writer.add(unit)
        unit.close()

        self.assertEqual({path: (70000, data)}, self.read_back())
        self.assertEqual(1, writer.entries)

    def test_add_command(self):
        runner = FakeRunner({("echo", "hi"): b"hi\n"})

        with ArchiveWriter.create(self.path) as writer:
            writer.add(tarable.CommandUnit(["echo", "hi"], runner=runner))
            writer.add(tarable.CommandUnit(["true"], runner=runner))

        self.assertEqual({"/mayday_commands/echo_hi": (3, b"hi\n"),
                          "/mayday_commands/true": (0, b"")},
                         self.read_back())

    def test_add_symlink_does_not_read_content(self):
        path = self.make_file("os-release", b"NAME=StarlingX\n")
        unit = tarable.FileUnit(path, link="os-release")
        self.addCleanup(unit.close)
        before = unit._handle.tell()

        with ArchiveWriter.create(self.path) as writer:
            writer.add(unit)

        self.assertEqual(before, unit._handle.tell())
        with tarfile.open(self.path, "r:gz") as tar:
            member = tar.getmember(path)
            self.assertTrue(member.issym())
            self.assertEqual(0, member.size)
            self.assertEqual("os-release", member.linkname)

    def test_close_closes_destination(self):
        fileobj = open(self.path, "wb")
        writer = ArchiveWriter(fileobj)

        writer.close()

        self.assertTrue(writer.closed)
        self.assertTrue(fileobj.closed)
        self.assertEqual({}, self.read_back())

    def test_close_twice(self):
        writer = ArchiveWriter.create(self.path)
        writer.close()

        self.assertRaises(exception.ArchiveClosed, writer.close)

    def test_add_after_close(self):
        writer = ArchiveWriter.create(self.path)
        writer.close()
        unit = tarable.CommandUnit(["true"], runner=FakeRunner())

        self.assertRaises(exception.ArchiveClosed, writer.add, unit)
        self.assertRaises(exception.ArchiveClosed, writer.add_symlink,
                          tarable.CommandUnit(["true"], link="t"))

    def test_context_manager_closes_on_error(self):
        def write():
            with ArchiveWriter.create(self.path) as writer:
                writer.add(tarable.CommandUnit(["true"], runner=FakeRunner()))
                raise RuntimeError("boom")
            return writer

        self.assertRaises(RuntimeError, write)
        self.assertEqual(["/mayday_commands/true"],
                         list(self.read_back().keys()))

    def test_stream_destination(self):
        buf = KeepOpenBuffer()
        writer = ArchiveWriter(buf)

        writer.add(tarable.CommandUnit(["echo", "hi"],
                                       runner=FakeRunner(default=b"hi\n")))
        writer.close()

        buf.seek(0)
        with tarfile.open(fileobj=buf, mode="r:gz") as tar:
            self.assertEqual(["/mayday_commands/echo_hi"], tar.getnames())
            self.assertEqual("<stream>", writer.path)

    def test_create_in_missing_directory(self):
        self.assertRaises(IOError, ArchiveWriter.create,
                          os.path.join(self.tempdir, "missing", "dump.tar.gz"))

#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#

""" Build the ordered list of Tarables and drive them into an archive

The run goes INIT -> COLLECTING -> FINALIZING -> DONE, or ABORTED when a
unit fails in a way the failure policy treats as fatal. The archive writer
is closed in every case.
"""

import collections
import tarfile

from oslo_log import log as logging

from mayday import exception
from mayday.tarable import CommandUnit
from mayday.tarable import FileUnit
from mayday.tarable import PodLogUnit
from mayday.tarable import PodUnit

LOG = logging.getLogger(__name__)

STATE_INIT = "init"
STATE_COLLECTING = "collecting"
STATE_FINALIZING = "finalizing"
STATE_DONE = "done"
STATE_ABORTED = "aborted"

Summary = collections.namedtuple('Summary', 'written skipped')


def release(units):
    for unit in units:
        unit.close()


def pod_log_units(pods, runner=None):
    """Log units for the running pods only."""
    return [PodLogUnit(pod.id, runner=runner) for pod in pods if pod.running]


def build_units(configuration, journals=(), pods=(), danger=False,
                runner=None):
    """Turn the configuration and the discovered sources into Tarables.

    Parameters
    ----------
    configuration : mayday.config.Configuration
        Files and commands requested by the operator.
    journals : list
        JournalUnit objects from mayday.journal.list_journals.
    pods : list
        mayday.rkt.Pod records.
    danger : bool
        Add the logs of the running pods, they may hold private data.
    runner : mayday.command.CommandRunner
        Used by every command based unit.

    Returns
    -------
    list
        Pod logs (danger mode only), files, commands, journals then pods,
        each group in the order it was given.
    """
    units = []
    try:
        if danger:
            LOG.warning("Danger mode activated. Dump will include rkt pod "
                        "logs, which may contain sensitive information.")
            units.extend(pod_log_units(pods, runner))
        for spec in configuration.files:
            units.append(FileUnit(spec.name, spec.link))
        for spec in configuration.commands:
            units.append(CommandUnit(spec.args, link=spec.link, runner=runner))
        units.extend(journals)
        units.extend(PodUnit(pod) for pod in pods)

        seen = set()
        for unit in units:
            if unit.name in seen:
                raise exception.DuplicateArchiveName(name=unit.name)
            seen.add(unit.name)
    except Exception:
        release(units)
        raise
    return units


class Collector(object):
    """Write Tarables one at a time, isolating failures per unit.

    A file that cannot be read is skipped, so is a command that cannot be
    started unless ``abort_on_command_error`` is set. A failure while
    writing the archive itself aborts the run.
    """

    def __init__(self, writer, abort_on_command_error=False):
        self.writer = writer
        self.abort_on_command_error = abort_on_command_error
        self.state = STATE_INIT
        self.written = []
        self.skipped = []

    def _collect(self, unit):
        try:
            self.writer.add(unit)
        except exception.CommandSpawnError as e:
            if self.abort_on_command_error:
                raise exception.CollectionAborted(name=unit.name, reason=e,
                                                  cause=e)
            LOG.error("Skipping %s: %s", unit.name, e)
            self.skipped.append(unit.name)
            return
        except exception.FileCollectionError as e:
            # nothing reached the archive yet, the rest of the dump is kept
            LOG.error("Skipping %s: %s", unit.name, e)
            self.skipped.append(unit.name)
            return
        except (tarfile.TarError, OSError) as e:
            raise exception.CollectionAborted(name=unit.name, reason=e,
                                              cause=e)
        finally:
            unit.close()
        self.written.append(unit.name)

    def _finalize(self):
        self.state = STATE_FINALIZING
        if self.writer.closed:
            return
        try:
            self.writer.close()
        except (tarfile.TarError, OSError) as e:
            LOG.error("Failed to close archive %s: %s", self.writer.path, e)

    def run(self, units):
        units = list(units)
        self.state = STATE_COLLECTING
        done = 0
        try:
            for unit in units:
                LOG.debug("Collecting %s", unit.name)
                done += 1
                self._collect(unit)
        except Exception:
            release(units[done:])
            self._finalize()
            self.state = STATE_ABORTED
            raise
        self._finalize()
        self.state = STATE_DONE
        LOG.info("Collected %d entries, skipped %d",
                 len(self.written), len(self.skipped))
        return Summary(tuple(self.written), tuple(self.skipped))


def run(writer, units, abort_on_command_error=False):
    return Collector(writer, abort_on_command_error).run(units)

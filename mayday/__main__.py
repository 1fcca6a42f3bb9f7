################################################################################
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
from datetime import datetime
import os
import sys

from oslo_log import log as logging

from mayday.archive import ArchiveWriter
from mayday import collector
from mayday.command import CommandRunner
from mayday.common import constants
from mayday import config
from mayday.config import CONF
from mayday import exception
from mayday import journal
from mayday import rkt

logging.register_options(CONF)
LOG = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_OUTPUT = 2
EXIT_ABORTED = 3


def output_path(output_dir, now=None):
    now = now or datetime.now()
    name = constants.OUTPUT_PREFIX + now.strftime("%Y%m%d%H%M%S.%f")
    return os.path.join(output_dir, name + constants.OUTPUT_SUFFIX)


def discover_pods(timeout=None):
    try:
        return rkt.get_pods(CommandRunner(timeout=timeout,
                                          capture_stderr=False))
    except exception.DiscoveryError as e:
        LOG.warning("Could not connect to rkt. Verify mayday has permissions "
                    "to launch the rkt client.")
        LOG.warning("Connection error: %s", e)
        return []


def _discard(path):
    try:
        os.unlink(path)
    except OSError as e:
        LOG.error("Failed to remove partial archive %s: %s", path, e)


def collect(conf):
    """Run one dump with the parsed options and return the exit status."""
    opts = conf.collect
    try:
        configuration = config.load_config(
            config.config_path(conf.mayday_config))
    except exception.MaydayException as e:
        LOG.error(e)
        return EXIT_CONFIG

    runner = CommandRunner(timeout=opts.command_timeout,
                           capture_stderr=opts.capture_stderr)
    try:
        journals = journal.list_journals(runner)
    except exception.DiscoveryError as e:
        LOG.error(e)
        return EXIT_OUTPUT

    pods = discover_pods(opts.command_timeout)

    try:
        units = collector.build_units(configuration, journals, pods,
                                      danger=conf.danger, runner=runner)
    except exception.MaydayException as e:
        LOG.error(e)
        return EXIT_CONFIG

    path = output_path(opts.output_dir)
    try:
        writer = ArchiveWriter.create(path)
    except (IOError, OSError) as e:
        LOG.error("Unable to create %s: %s", path, e)
        collector.release(units)
        return EXIT_OUTPUT

    try:
        collector.run(writer, units, opts.abort_on_command_error)
    except exception.MaydayException as e:
        LOG.error(e)
        _discard(path)
        return EXIT_ABORTED

    LOG.info("Output saved in %s", path)
    LOG.info("All done!")
    return EXIT_OK


def main(argv=None):
    CONF(sys.argv[1:] if argv is None else argv, project="mayday",
         default_config_files=[], default_config_dirs=[])
    logging.setup(CONF, "mayday")
    sys.exit(collect(CONF))


if __name__ == "__main__":
    main()

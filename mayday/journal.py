#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#

from oslo_log import log as logging

from mayday.command import CommandRunner
from mayday.common import constants
from mayday import exception
from mayday.tarable import JournalUnit

LOG = logging.getLogger(__name__)


def parse_units(output):
    """Extract service unit names from "systemctl list-units --plain" output

    Parameters
    ----------
    output : bytes
        Raw command output, one unit per line with the name first.

    Returns
    -------
    list
        Unit names in the order systemctl listed them, without duplicates.
    """
    units = []
    for line in output.decode("utf-8", "replace").splitlines():
        # failed units are flagged with a leading bullet
        fields = line.strip().lstrip("●*").split()
        if not fields:
            continue
        name = fields[0]
        if name and name.endswith(".service") and name not in units:
            units.append(name)
    return units


def list_journals(runner=None):
    """Return one JournalUnit per systemd service unit on the host."""
    runner = runner or CommandRunner()
    try:
        result = runner.run(constants.LIST_UNITS_CMD)
    except exception.CommandSpawnError as e:
        raise exception.DiscoveryError(source="journals", reason=e)
    try:
        if not result.succeeded:
            raise exception.DiscoveryError(
                source="journals",
                reason="%s exited with %s" % (constants.SYSTEMCTL,
                                              result.returncode))
        units = parse_units(result.read())
    finally:
        result.close()
    LOG.debug("Found %d service journals", len(units))
    return [JournalUnit(unit, runner=runner) for unit in units]

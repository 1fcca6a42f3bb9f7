#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#

""" Query the rkt container runtime for its pods"""

import collections
import json

from oslo_log import log as logging

from mayday.command import CommandRunner
from mayday.common import constants
from mayday import exception

LOG = logging.getLogger(__name__)


class Pod(collections.namedtuple('Pod', 'id state record')):

    @property
    def running(self):
        return self.state == constants.POD_STATE_RUNNING


def parse_pods(output):
    """Build Pod records from the JSON printed by "rkt list --format=json"."""
    try:
        entries = json.loads(output.decode("utf-8", "replace") or "[]")
    except ValueError as e:
        raise exception.DiscoveryError(source="pods", reason=e)
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise exception.DiscoveryError(source="pods",
                                       reason="expected a list of pods")
    pods = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("name"):
            LOG.debug("Ignoring pod entry without a name: %r", entry)
            continue
        state = str(entry.get("state") or constants.POD_STATE_UNKNOWN).lower()
        pods.append(Pod(str(entry["name"]), state, entry))
    return pods


def get_pods(runner=None):
    """Return the pods known to rkt.

    Raises DiscoveryError when rkt cannot be run or answers with something
    that is not a pod list.
    """
    runner = runner or CommandRunner(capture_stderr=False)
    try:
        result = runner.run(constants.LIST_PODS_CMD)
    except exception.CommandSpawnError as e:
        raise exception.DiscoveryError(source="pods", reason=e)
    try:
        if not result.succeeded:
            raise exception.DiscoveryError(
                source="pods",
                reason="%s exited with %s" % (constants.RKT,
                                              result.returncode))
        return parse_pods(result.read())
    finally:
        result.close()

################################################################################
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################

MAYDAY_CONFIG_ENV = "MAYDAY_CONFIG_FILE"
MAYDAY_CONFIG_DEFAULT = "/etc/mayday.conf"

OUTPUT_PREFIX = "mayday"
OUTPUT_SUFFIX = ".tar.gz"

COMMANDS_DIR = "/mayday_commands"
JOURNALS_DIR = "/journals"
RKT_DIR = "/rkt"

FILE_MODE = 0o644
LINK_MODE = 0o777

JOURNALCTL = "journalctl"
SYSTEMCTL = "systemctl"
RKT = "rkt"

LIST_UNITS_CMD = [SYSTEMCTL, "list-units", "--type=service", "--all",
                  "--plain", "--no-legend", "--no-pager"]
LIST_PODS_CMD = [RKT, "list", "--format=json"]

# rkt pod states, as reported by "rkt list"
POD_STATE_EMBRYO = "embryo"
POD_STATE_PREPARING = "preparing"
POD_STATE_PREPARED = "prepared"
POD_STATE_RUNNING = "running"
POD_STATE_DELETING = "deleting"
POD_STATE_EXITED = "exited"
POD_STATE_GARBAGE = "garbage"
POD_STATE_ABORTED = "aborted prepare"
POD_STATE_UNKNOWN = "unknown"

# files are copied through memory up to this size, then through a temp file
SPOOL_MAX_SIZE = 1024 * 1024

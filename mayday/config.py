#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#

""" Define configuration info for mayday"""

import collections
import json
import os
import tempfile

from oslo_config import cfg
from oslo_log import log as logging

from mayday.common import constants
from mayday import exception

LOG = logging.getLogger(__name__)

CONF = cfg.CONF

cli_opts = [
    cfg.StrOpt("mayday-config",
               default=constants.MAYDAY_CONFIG_DEFAULT,
               help="JSON file listing the files and commands to collect. "
                    "The %s environment variable takes precedence."
                    % constants.MAYDAY_CONFIG_ENV),
    cfg.BoolOpt("danger",
                default=False,
                help="Collect potentially private information "
                     "(ex, container logs)"),
]

collect_opts = [
    cfg.IntOpt("command_timeout",
               default=300,
               min=0,
               help="Number of seconds a collected command may run before "
                    "it is killed, 0 to wait forever"),
    cfg.BoolOpt("capture_stderr",
                default=True,
                help="Archive the standard error of collected commands "
                     "together with their standard output"),
    cfg.BoolOpt("abort_on_command_error",
                default=False,
                help="Abort the dump when a command cannot be started "
                     "instead of skipping it"),
    cfg.StrOpt("output_dir",
               default=tempfile.gettempdir(),
               help="Directory where the dump archive is written"),
]

CONF.register_cli_opts(cli_opts)
CONF.register_opts(collect_opts, cfg.OptGroup("collect"))


FileSpec = collections.namedtuple('FileSpec', 'name link')
CommandSpec = collections.namedtuple('CommandSpec', 'args link')
Configuration = collections.namedtuple('Configuration', 'files commands')


def config_path(flag_value=None):
    """Resolve the dump configuration location.

    The MAYDAY_CONFIG_FILE environment variable wins over the command line
    flag, which in turn defaults to /etc/mayday.conf.
    """
    path = os.environ.get(constants.MAYDAY_CONFIG_ENV, "").strip()
    if not path:
        path = flag_value or constants.MAYDAY_CONFIG_DEFAULT
    return path


def _lower_keys(path, entry, what):
    if not isinstance(entry, dict):
        raise exception.InvalidConfiguration(
            path=path, reason="%s entry must be an object, got %r" % (what, entry))
    return dict((str(k).lower(), v) for k, v in entry.items())


def _section(path, document, key):
    section = document.get(key)
    if section is None:
        return []
    if not isinstance(section, list):
        raise exception.InvalidConfiguration(
            path=path, reason="'%s' must be a list" % key)
    return section


def _link(path, entry):
    link = entry.get("link") or None
    if link is not None and not isinstance(link, str):
        raise exception.InvalidConfiguration(
            path=path, reason="link must be a string, got %r" % link)
    return link


def parse_config(data, path="<string>"):
    """Parse a JSON dump configuration document.

    Parameters
    ----------
    data : str
        Raw JSON text.
    path : str
        Where the text came from, used in error messages only.

    Returns
    -------
    Configuration
        Ordered file and command specs.
    """
    try:
        document = json.loads(data)
    except ValueError as e:
        raise exception.InvalidConfiguration(path=path, reason=e)
    document = _lower_keys(path, document, "configuration")

    files = []
    for entry in _section(path, document, "files"):
        entry = _lower_keys(path, entry, "file")
        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise exception.InvalidConfiguration(
                path=path, reason="file entry without a name: %r" % entry)
        files.append(FileSpec(name, _link(path, entry)))

    commands = []
    for entry in _section(path, document, "commands"):
        entry = _lower_keys(path, entry, "command")
        args = entry.get("args", entry.get("argv"))
        if (not isinstance(args, list) or not args or
                not all(isinstance(a, str) for a in args)):
            raise exception.InvalidConfiguration(
                path=path, reason="command entry needs a non-empty list of "
                                  "string args: %r" % entry)
        commands.append(CommandSpec(tuple(args), _link(path, entry)))

    return Configuration(tuple(files), tuple(commands))


def load_config(path):
    LOG.info("Reading configuration from %s", path)
    try:
        with open(path, "r") as f:
            data = f.read()
    except (IOError, OSError) as e:
        raise exception.ConfigurationNotFound(path=path, reason=e.strerror or e)
    return parse_config(data, path)

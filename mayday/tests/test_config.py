################################################################################
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import os

import fixtures

from mayday import config
from mayday.config import CONF
from mayday import exception
from mayday.tests.base import BaseTestCase
from mayday.tests.test_data import INVALID_CONFIGS
from mayday.tests.test_data import MAYDAY_CONFIG
from mayday.tests.test_data import MAYDAY_CONFIG_CAPITALIZED


class TestConfig(BaseTestCase):

    def test_parse_config(self):
        conf = config.parse_config(MAYDAY_CONFIG)

        self.assertEqual(
            (config.FileSpec("/etc/hostname", None),
             config.FileSpec("/etc/os-release", "os-release")),
            conf.files)
        self.assertEqual(
            (config.CommandSpec(("echo", "hi"), None),
             config.CommandSpec(("ps", "aux"), "ps")),
            conf.commands)

    def test_parse_config_capitalized_keys(self):
        conf = config.parse_config(MAYDAY_CONFIG_CAPITALIZED)

        self.assertEqual((config.FileSpec("/proc/vmstat", None),), conf.files)
        self.assertEqual((config.CommandSpec(("uptime",), None),),
                         conf.commands)

    def test_parse_config_argv_alias(self):
        conf = config.parse_config('{"commands": [{"argv": ["df", "-h"]}]}')

        self.assertEqual((config.CommandSpec(("df", "-h"), None),),
                         conf.commands)

    def test_parse_config_empty_sections(self):
        conf = config.parse_config('{}')

        self.assertEqual((), conf.files)
        self.assertEqual((), conf.commands)

    def test_parse_config_invalid(self):
        for data in INVALID_CONFIGS:
            self.assertRaises(exception.InvalidConfiguration,
                              config.parse_config, data, "mayday.conf")

    def test_load_config(self):
        path = self.make_file("mayday.conf", MAYDAY_CONFIG.encode())

        conf = config.load_config(path)

        self.assertEqual(2, len(conf.files))
        self.assertEqual(2, len(conf.commands))
        self.assertIn("Reading configuration from %s" % path,
                      self.fake_log.logs['info'])

    def test_load_config_missing(self):
        path = os.path.join(self.tempdir, "missing.conf")

        e = self.assertRaises(exception.ConfigurationNotFound,
                              config.load_config, path)
        self.assertIn(path, str(e))

    def test_config_path_flag(self):
        self.assertEqual("/tmp/flag.conf", config.config_path("/tmp/flag.conf"))

    def test_config_path_default(self):
        self.assertEqual("/etc/mayday.conf", config.config_path(None))

    def test_config_path_environment_wins(self):
        self.useFixture(
            fixtures.EnvironmentVariable('MAYDAY_CONFIG_FILE', '/tmp/env.conf'))

        self.assertEqual("/tmp/env.conf", config.config_path("/tmp/flag.conf"))

    def test_config_path_empty_environment(self):
        self.useFixture(
            fixtures.EnvironmentVariable('MAYDAY_CONFIG_FILE', '  '))

        self.assertEqual("/tmp/flag.conf", config.config_path("/tmp/flag.conf"))

    def test_collect_options(self):
        CONF.set_override("command_timeout", 5, group="collect")
        self.addCleanup(CONF.clear_override, "command_timeout", group="collect")

        self.assertEqual(5, CONF.collect.command_timeout)
        self.assertTrue(CONF.collect.capture_stderr)
        self.assertFalse(CONF.collect.abort_on_command_error)

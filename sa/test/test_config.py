#! /usr/bin/env python3
"""
This module tests reading the groups ini-file and building the settings.
"""
from sa.config import DEFAULT_INIFILE, Group, Settings, load_groups, load_sections
from sa.errors import ConfigLoadError
from sa.hosts import resolve_hosts

import os
import os.path
import tempfile
import unittest


def _get_temp_file(contents):
    """
    Create a temporary file containing contents, return its name.
    """
    file_handle = tempfile.NamedTemporaryFile('w', suffix='.ini', delete=False)
    file_handle.write(contents)
    file_handle.close()
    return file_handle.name


class TestLoadGroups(unittest.TestCase):

    def load(self, contents):
        name = _get_temp_file(contents)
        self.addCleanup(os.remove, name)
        return load_groups(name)


    def test_bare_keys(self):
        """
        Each section is a group, each bare key is a host.
        """
        groups = self.load('[web]\nh1\nh2\n\n[db]\nh3\n')
        self.assertEqual(groups, [
            Group('web', ('h1', 'h2')),
            Group('db', ('h3',)),
            ])


    def test_member_order(self):
        groups = self.load('[web]\nweb03\nweb01\nweb02\n')
        self.assertEqual(groups[0].members, ('web03', 'web01', 'web02'))


    def test_case_insensitive(self):
        """
        Section names and keys are lowercased.
        """
        groups = self.load('[Web]\nH1.Example.com\n')
        self.assertEqual(groups, [Group('web', ('h1.example.com',))])


    def test_keys_with_values(self):
        """
        A key with a value is still a host, the value is ignored.
        """
        groups = self.load('[web]\nh1 = primary\nh2\n')
        self.assertEqual(groups, [Group('web', ('h1', 'h2'))])


    def test_repeated_entries(self):
        """
        Repeated keys and sections do not fail the load.
        """
        groups = self.load('[web]\nh1\nh2\nh1\n[db]\nh3\n[web]\nh4\n')
        self.assertEqual(groups, [
            Group('web', ('h1', 'h2', 'h4')),
            Group('db', ('h3',)),
            ])


    def test_empty_file(self):
        self.assertEqual(self.load(''), [])


    def test_missing_file(self):
        path = os.path.join(tempfile.gettempdir(), 'sa-does-not-exist', 'hosts.ini')
        with self.assertRaises(ConfigLoadError) as cm:
            load_groups(path)
        self.assertEqual(cm.exception.path, path)
        self.assertEqual(str(cm.exception), 'Could not load {}'.format(path))


    def test_malformed(self):
        """
        A key without a name can not be parsed.
        """
        self.assertRaises(ConfigLoadError, self.load, '[web]\nh1\n= orphan\n')


    def test_default_section(self):
        """
        DEFAULT is a group of its own, its hosts are not part of other groups.
        """
        groups = self.load('[DEFAULT]\nbastion\n[web]\nh1\n[db]\nh3\n')
        self.assertEqual(groups, [
            Group('default', ('bastion',)),
            Group('web', ('h1',)),
            Group('db', ('h3',)),
            ])
        self.assertEqual(resolve_hosts(groups, ['web']), ['h1'])
        self.assertEqual(resolve_hosts(groups, ['default']), ['bastion'])


    def test_keys_before_sections(self):
        """
        Keys before the first section are part of the default group.
        """
        groups = self.load('h1\n[web]\nh2\n[default]\nh0\n')
        self.assertEqual(groups, [
            Group('default', ('h1', 'h0')),
            Group('web', ('h2',)),
            ])


    def test_sections_in_any_case(self):
        groups = self.load('[web]\nh1\n[WEB]\nh2\nh1\n')
        self.assertEqual(groups, [Group('web', ('h1', 'h2'))])


    def test_unreadable(self):
        """
        A directory can not be loaded.
        """
        self.assertRaises(ConfigLoadError, load_groups, tempfile.gettempdir())


class TestLoadSections(unittest.TestCase):

    def test_as_written(self):
        name = _get_temp_file('h0\n[Web]\nh1\n[DB]\nh3\n')
        self.addCleanup(os.remove, name)
        self.assertEqual(load_sections(name), ['DEFAULT', 'Web', 'DB'])


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        settings = Settings('uptime', 'root', ['web'])
        self.assertEqual(settings.identifiers, ('web',))
        self.assertEqual(settings.inifile, DEFAULT_INIFILE)
        self.assertFalse(settings.sequential)
        self.assertFalse(settings.prefix)
        self.assertFalse(settings.yes)
        self.assertIsNone(settings.workers)
        self.assertEqual(settings.transport, 'ssh')
        self.assertEqual(settings.extra_arguments, ())


    def test_default_inifile(self):
        self.assertEqual(DEFAULT_INIFILE,
                os.path.join(os.path.expanduser('~'), '.sa', 'hosts.ini'))


    def test_immutable(self):
        settings = Settings('uptime', 'root', ['web'])
        self.assertRaises(AttributeError, setattr, settings, 'command', 'ls')

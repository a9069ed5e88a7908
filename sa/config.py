#! /usr/bin/env python3
"""
Run settings and the groups ini-file.
"""
import configparser
import logging
import os.path
from collections import namedtuple

from sa.errors import ConfigLoadError

__all__ = ['DEFAULT_INIFILE', 'Group', 'Settings', 'load_groups', 'load_sections']
logger = logging.getLogger(__name__)

DEFAULT_INIFILE = os.path.expanduser(os.path.join('~', '.sa', 'hosts.ini'))
DEFAULT_TRANSPORT = 'ssh'


Group = namedtuple('Group', ['name', 'members'])


class Settings(namedtuple('Settings', ['command', 'username', 'identifiers',
        'inifile', 'sequential', 'prefix', 'debug', 'yes', 'workers',
        'transport', 'extra_arguments'])):
    """
    Everything a run needs, built once from the console arguments.

    @param workers: The max amount of concurrent connections in parallel mode.
        None means one connection per host.
    @type workers: int

    @param extra_arguments: Passed to the transport before user@host.
    @type extra_arguments: tuple
    """
    __slots__ = ()

    def __new__(cls, command, username, identifiers=(), inifile=DEFAULT_INIFILE,
            sequential=False, prefix=False, debug=False, yes=False,
            workers=None, transport=DEFAULT_TRANSPORT, extra_arguments=()):
        return super().__new__(cls, command, username, tuple(identifiers),
                inifile, sequential, prefix, debug, yes, workers, transport,
                tuple(extra_arguments))


# Keys before the first section belong to this section, as in go-ini files
DEFAULT_SECTION = 'DEFAULT'
# configparser copies the keys of its default section into every other
# section.  A section name can not contain a newline, so this one is never
# read from a file.
_NO_DEFAULTS = '\n'


def read_ini(path):
    """
    Parse the ini-file at "path".  [DEFAULT] is an ordinary section, it also
    holds any keys that come before the first section header.

    @raises ConfigLoadError: The file can not be read or parsed.

    @rtype: configparser.ConfigParser
    """
    parser = configparser.ConfigParser(allow_no_value=True, strict=False,
            interpolation=None, default_section=_NO_DEFAULTS)
    try:
        with open(path) as file_handle:
            contents = file_handle.read()
        parser.read_string('[{}]\n'.format(DEFAULT_SECTION)+contents, source=path)
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        logger.debug('unable to read %s: %s', path, e)
        raise ConfigLoadError(path) from e
    return parser


def load_sections(path):
    """
    The section names of the ini-file at "path", as written, starting with
    DEFAULT.
    """
    return read_ini(path).sections()


def load_groups(path):
    """
    Read the groups defined in the ini-file at "path".  Each section is a
    group, each key of a section is a host.  Section names and keys are
    lowercased, sections whose names only differ in case are one group.
    The default group is left out when it has no hosts.

        Example:
            bastion
            [Web]
            web01
            web02

        becomes [Group(name='default', members=('bastion',)),
                 Group(name='web', members=('web01', 'web02'))]

    @param path: The ini-file to read.
    @type path: str

    @raises ConfigLoadError: The file can not be read or parsed.

    @returns: A list of Groups, in the order of the file.
    @rtype: list
    """
    parser = read_ini(path)

    members = {}
    for section in parser.sections():
        group = members.setdefault(section.lower(), [])
        for host in parser.options(section):
            if host not in group:
                group.append(host)

    return [Group(name, tuple(hosts)) for name, hosts in members.items()
            if hosts or name != DEFAULT_SECTION.lower()]

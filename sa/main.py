#! /usr/bin/env python3
"""
This module allows the console to use SA's functionality.

This module should only be run by the console!
"""

import argparse
import logging
import shlex
import sys

from sa._info import __version__, __long_description__
from sa.config import DEFAULT_INIFILE, DEFAULT_TRANSPORT, Settings, load_groups
from sa.errors import ArgumentError, OperatorAbort, SAError
from sa.hosts import resolve_hosts
from sa.lib import fan_out, render_result

__all__ = ['main']
logger = logging.getLogger(__name__)


class LevelFormatter(logging.Formatter):
    """
    Show records as "[debug] message", like the rest of sa's messages.
    """

    def format(self, record):
        return '[{}] {}'.format(record.levelname.lower(), record.getMessage())


def setup_logging(debug=False, stream=None):
    """
    Send sa's log records to "stream" (stdout by default).  Debug records are
    only shown when "debug" is True.
    """
    sa_logger = logging.getLogger('sa')
    for handler in list(sa_logger.handlers):
        sa_logger.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(LevelFormatter())
    sa_logger.addHandler(handler)
    sa_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    sa_logger.propagate = False


class ArgumentParser(argparse.ArgumentParser):
    """
    Report bad arguments as an ArgumentError, so they are printed like every
    other error of sa.
    """

    def error(self, message):
        raise ArgumentError(message, usage=self.format_usage())


def get_argparse_args(args=None):
    """
    Get the arguments passed to this script when it was run.

    @param args: A list of arguments passed in the console.
    @type args: list

    @raises ArgumentError: An argument is unknown or invalid, or the command,
        username or hosts are missing.

    @returns: The settings of this run.
    @rtype: sa.config.Settings
    """
    parser = ArgumentParser(
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=__long_description__)
    parser.add_argument('identifiers', nargs='*', metavar='host|group',
            help='Hosts and groups of the ini-file to run the command on.')
    parser.add_argument('-c', '--command',
            help='Command to run')
    parser.add_argument('-u', '--username',
            help='User to connect as')
    parser.add_argument('-f', '--inifile', default=DEFAULT_INIFILE,
            help='Ini-file containing host/group definitions (default: %(default)s)')
    parser.add_argument('-s', '--sequence', action='store_true', default=False,
            help='Run in sequence instead of in parallel')
    parser.add_argument('-p', '--prefix', action='store_true', default=False,
            help='Prefix each line of output with hostname')
    parser.add_argument('-d', '--debug', action='store_true', default=False,
            help='Debugmode')
    parser.add_argument('-y', '--yes', action='store_true', default=False,
            help='Assumes yes on questions')
    parser.add_argument('-w', '--workers', type=int, default=None,
            help='The max amount of concurrent connections when running in parallel.')
    parser.add_argument('--transport', default=DEFAULT_TRANSPORT,
            help='Remote shell used to reach each host (default: %(default)s)')
    parser.add_argument('--transport-args', default='', metavar='ARGS',
            help='Extra arguments for the remote shell, split like a shell would. '
            'Example: --transport-args="-o BatchMode=yes"')
    parser.add_argument('--version', action='version', version='%(prog)s '+__version__)
    args = parser.parse_intermixed_args(args=args)

    if not args.command or not args.username:
        raise ArgumentError('you need to specify command/username/hosts!',
                usage=parser.format_usage())
    if not args.identifiers:
        raise ArgumentError('no hosts specified')
    if args.workers is not None and args.workers < 1:
        raise ArgumentError('workers must be at least 1')

    try:
        extra_arguments = shlex.split(args.transport_args)
    except ValueError as e:
        raise ArgumentError('invalid --transport-args: {}'.format(e)) from e

    return Settings(command=args.command,
            username=args.username,
            identifiers=args.identifiers,
            inifile=args.inifile,
            sequential=args.sequence,
            prefix=args.prefix,
            debug=args.debug,
            yes=args.yes,
            workers=args.workers,
            transport=args.transport,
            extra_arguments=extra_arguments,
            )


def confirm(command, targets, assume_yes=False, stdin=None, file=None):
    """
    Show what will be run where and ask the operator to continue.  Only an
    answer starting with y or Y continues.

    @param stdin: Read the answer from this, anything with readline().
        sys.stdin is used when None.

    @raises OperatorAbort: The operator did not answer yes.
    """
    file = file or sys.stdout
    print('Running command "{}" on {} hosts: [{}]'.format(
        command, len(targets), ' '.join(targets)), file=file)
    file.flush()
    if assume_yes:
        return

    print('Continue? [yes/no] ', end='', file=file)
    file.flush()
    answer = (stdin or sys.stdin).readline()
    if answer[:1] not in ('y', 'Y'):
        raise OperatorAbort()


def run(settings, stdin=None, stdout=None):
    """
    Resolve the hosts of "settings", ask for confirmation and run the command
    on every host, writing each host's output to "stdout" as one block.

    @param stdout: A binary file, sys.stdout.buffer when None.

    @raises SAError: The run was stopped before any host was contacted.
    """
    logger.debug('using configuration %s', settings.inifile)
    logger.debug('remaining args: %s', list(settings.identifiers))
    groups = load_groups(settings.inifile)
    targets = resolve_hosts(groups, settings.identifiers)

    confirm(settings.command, targets, settings.yes, stdin)

    out = stdout or sys.stdout.buffer
    results = fan_out(targets, settings)
    try:
        for result in results:
            out.write(render_result(result, settings.prefix))
            out.flush()
    finally:
        # Waits for the hosts still running when writing failed
        results.close()


def main(args=None, stdin=None, stdout=None):
    """
    Run SA using console provided arguments.

    This should only be run using a console!
    """
    try:
        settings = get_argparse_args(args)
        setup_logging(settings.debug)
        run(settings, stdin, stdout)
    except OperatorAbort as e:
        print(e)
        sys.exit(1)
    except ArgumentError as e:
        if e.usage:
            print(e.usage)
        print('[error] {}'.format(e))
        sys.exit(1)
    except SAError as e:
        print('[error] {}'.format(e))
        sys.exit(1)

    # Failures of single hosts are part of the output, not of the exit code
    sys.exit(0)


if __name__ == '__main__':
    main()

#! /usr/bin/env python3
"""
This module allows the console to use SSHMux's functionality.

This module should only be run by the console!
"""
import argparse
import sys

from sshmux._info import __version__, __long_description__
from sshmux.config import DETACHED, INLINE, LAYOUTS, load_config
from sshmux.errors import InputError, SSHMuxError
from sshmux.guard import check_preconditions
from sshmux.lib import expand_hosts, resolve_hosts
from sshmux.log import logger, setup_logging
from sshmux.orchestrator import Orchestrator
from sshmux.tmux import Multiplexer

__all__ = ['main', 'main_inline', 'run']


class _ArgumentParser(argparse.ArgumentParser):
    """
    Bad arguments exit with 1, like every other failure.
    """

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, '{}: error: {}\n'.format(self.prog, message))


def build_parser(mode=DETACHED, prog=None):
    parser = _ArgumentParser(
            prog=prog,
            usage='%(prog)s [OPTIONS] [HOST ...] [-- COMMAND ...]',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=__long_description__)
    parser.add_argument('hosts', nargs='*', metavar='HOST',
            help='Connect to these hosts. Read from stdin when omitted.')
    parser.add_argument('-v', '--verbose', action='store_true', default=False,
            help='Enable verbose output.')
    parser.add_argument('-s', '--session', metavar='NAME',
            help='Use a specific tmux session name.')
    parser.add_argument('-l', '--layout', metavar='LAYOUT',
            help='Set the tmux layout (default: tiled). One of: {}'.format(
                ', '.join(LAYOUTS)))
    parser.add_argument('-c', '--ssh-cmd', metavar='CMD',
            help='SSH command to use (default: ssh -A).')
    parser.add_argument('-k', '--kill-session', action='store_true',
            default=False,
            help='Kill the existing session if it exists.')
    parser.add_argument('-e', '--expand', action='store_true', default=False,
            help='Expand host ranges such as web[1-3].example.com or '
                '10.0.0.1-5.')
    if mode == DETACHED:
        parser.add_argument('-n', '--no-sync', action='store_true',
                default=False,
                help='Do not synchronize input across panes.')
        parser.add_argument('-i', '--inline', action='store_true',
                default=False,
                help='Add the panes to the current tmux window instead of '
                    'creating a session.')
    parser.add_argument('--version', action='version',
            version='%(prog)s '+__version__)
    return parser


def get_argparse_args(args=None, mode=DETACHED):
    """
    Get the arguments passed to this script when it was run.

    Everything after the first "--" is the command run on each host.

    @param args: A list of arguments passed in the console.
    @type args: list

    @param mode: Which console script is parsing, DETACHED or INLINE.
    @type mode: str

    @returns: A tuple containing (args, mode)
    @rtype: tuple
    """
    if args is None:
        args = sys.argv[1:]
    args = list(args)

    command = []
    if '--' in args:
        split = args.index('--')
        args, command = args[:split], args[split+1:]

    parsed = build_parser(mode).parse_intermixed_args(args)
    parsed.command = ' '.join(command)

    if getattr(parsed, 'inline', False):
        mode = INLINE
    return parsed, mode


def _expand(hosts):
    expanded = []
    for host in hosts:
        try:
            expanded.extend(expand_hosts(host))
        except ValueError as e:
            raise InputError(str(e))
    return expanded


def run(args=None, mode=DETACHED, stdin=None, environ=None, mux=None,
        attach=True):
    """
    Run SSHMux, return the exit code.

    @param attach: Hand the terminal to the new session when done.  Outside
        of tmux this does not return.
    @type attach: bool
    """
    parsed, mode = get_argparse_args(args, mode)
    config = load_config(parsed, environ, mode)
    setup_logging(config.verbose)
    stdin = sys.stdin if stdin is None else stdin
    mux = mux or Multiplexer(environ=environ)

    try:
        check_preconditions(mode, mux)
        if not parsed.hosts:
            logger.info('Reading hosts from stdin...')
        hosts = resolve_hosts(parsed.hosts, stdin)
        if config.expand:
            hosts = _expand(hosts)
        logger.info('Found %d hosts: %s', len(hosts), ' '.join(hosts))

        orchestrator = Orchestrator(mux, config)
        orchestrator.run(hosts)
        if mode == DETACHED and attach:
            orchestrator.attach()
    except InputError as e:
        logger.error(str(e))
        build_parser(mode).print_usage(sys.stderr)
        return e.exit_code
    except SSHMuxError as e:
        logger.error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        logger.error('Interrupted')
        return 130
    return 0


def main():
    """
    Run SSHMux in a new tmux session using console provided arguments.

    This should only be run using a console!
    """
    sys.exit(run())


def main_inline():
    """
    Run SSHMux in the current tmux window using console provided arguments.

    This should only be run using a console!
    """
    sys.exit(run(mode=INLINE))


if __name__ == '__main__':
    main()

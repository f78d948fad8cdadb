#! /usr/bin/env python3
"""
The settings for one sshmux run.  They are gathered once at startup, in the
order: command line flag, environment variable, default.
"""
import os
from collections import namedtuple

__all__ = ['SessionConfig', 'load_config', 'LAYOUTS', 'MODES', 'DETACHED',
        'INLINE', 'WINDOW_TITLE']

LAYOUTS = ('tiled', 'even-horizontal', 'even-vertical', 'main-horizontal',
        'main-vertical')

DETACHED = 'detached'
INLINE = 'inline'
MODES = (DETACHED, INLINE)

WINDOW_TITLE = 'sshmux'

DEFAULT_SSH_CMD = 'ssh -A'
DEFAULT_LAYOUT = 'tiled'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


SessionConfig = namedtuple('SessionConfig', [
    'name',
    'layout',
    'synchronize',
    'kill_existing',
    'mode',
    'ssh_cmd',
    'command',
    'verbose',
    'expand',
    ])


def default_session_name(pid=None):
    return 'sshmux-{}'.format(os.getpid() if pid is None else pid)


def env_flag(value):
    """
    Interpret an environment variable as a boolean.
    """
    return (value or '').strip().lower() in _TRUE_VALUES


def load_config(args, environ=None, mode=DETACHED):
    """
    Build the SessionConfig for this run.

    @param args: Parsed console arguments, flags that were not provided
        must be None (or False for switches).
    @type args: argparse.Namespace

    @param environ: Read defaults from here instead of os.environ.
    @type environ: dict

    @param mode: Either DETACHED or INLINE.
    @type mode: str

    @rtype: SessionConfig
    """
    if environ is None:
        environ = os.environ
    if mode not in MODES:
        raise ValueError('Unknown mode "{}"'.format(mode))

    def pick(flag, variable, default):
        if flag is not None:
            return flag
        return environ.get(variable) or default

    command = getattr(args, 'command', None) or None
    # Inline mode always synchronizes its panes
    synchronize = mode == INLINE or not getattr(args, 'no_sync', False)

    return SessionConfig(
            name=pick(args.session, 'SESSION_NAME', default_session_name()),
            layout=pick(args.layout, 'LAYOUT', DEFAULT_LAYOUT),
            synchronize=synchronize,
            kill_existing=bool(args.kill_session),
            mode=mode,
            ssh_cmd=pick(args.ssh_cmd, 'SSH_CMD', DEFAULT_SSH_CMD),
            command=command,
            verbose=bool(args.verbose) or env_flag(environ.get('VERBOSE')),
            expand=bool(getattr(args, 'expand', False)),
            )

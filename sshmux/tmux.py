#! /usr/bin/env python3
"""
The tmux commands sshmux relies on, one method per command.
"""
import os
import shutil

import libtmux
from libtmux import exc

from sshmux.errors import ServiceCallError
from sshmux.log import logger

__all__ = ['Multiplexer', 'TMUX_BIN']

TMUX_BIN = 'tmux'


def which(program): # pragma: no cover
    """
    Separating the PATH lookup for testing.
    """
    return shutil.which(program)


def execvp(file, args): # pragma: no cover
    """
    Separating the process replacement for testing.
    """
    os.execvp(file, args)


class Multiplexer(object):
    """
    A tmux server.  Any complaint from tmux is raised as a ServiceCallError.

    @param server: Talk to this server instead of the default one.
    @type server: libtmux.Server

    @param environ: Used to find out whether we already run inside tmux.
    @type environ: dict
    """

    def __init__(self, server=None, environ=None):
        self._server = server
        self.environ = os.environ if environ is None else environ

    @property
    def server(self):
        # libtmux.Server only touches tmux once a command is sent
        if self._server is None:
            self._server = libtmux.Server()
        return self._server

    def available(self):
        return which(TMUX_BIN) is not None

    def cmd(self, *args):
        """
        Run a tmux command, return its output lines.
        """
        logger.debug('tmux %s', ' '.join(args))
        try:
            proc = self.server.cmd(*args)
        except exc.LibTmuxException as e:
            raise ServiceCallError(args[0], str(e))
        if proc.stderr:
            raise ServiceCallError(args[0], proc.stderr)
        return proc.stdout

    def start_server(self):
        self.cmd('start-server')

    def server_info(self):
        return self.cmd('server-info')

    def has_session(self, name):
        try:
            return self.server.has_session(name)
        except exc.LibTmuxException as e:
            raise ServiceCallError('has-session', str(e))

    def kill_session(self, name):
        self.cmd('kill-session', '-t', name)

    def new_session(self, name, command):
        """
        Create a detached session whose only pane runs "command".
        """
        logger.debug('tmux new-session -d -s %s %s', name, command)
        try:
            return self.server.new_session(session_name=name, attach=False,
                    window_command=command)
        except exc.LibTmuxException as e:
            raise ServiceCallError('new-session', str(e))

    def split_window(self, target, command):
        args = ['split-window']
        if target:
            args.extend(['-t', target])
        args.append(command)
        self.cmd(*args)

    def select_layout(self, target, layout):
        args = ['select-layout']
        if target:
            args.extend(['-t', target])
        args.append(layout)
        self.cmd(*args)

    def set_synchronize(self, target, on=True):
        args = ['set-window-option']
        if target:
            args.extend(['-t', target])
        args.extend(['synchronize-panes', 'on' if on else 'off'])
        self.cmd(*args)

    def rename_window(self, target, title):
        args = ['rename-window']
        if target:
            args.extend(['-t', target])
        args.append(title)
        self.cmd(*args)

    def send_keys(self, target, keys):
        """
        Type "keys" into a pane and press Enter.
        """
        args = ['send-keys']
        if target:
            args.extend(['-t', target])
        args.extend([keys, 'Enter'])
        self.cmd(*args)

    def inside_session(self):
        return bool(self.environ.get('TMUX'))

    def attach_session(self, name):
        """
        Give the terminal to session "name".  From inside tmux the current
        client switches to it, otherwise this process becomes
        "tmux attach-session" and never returns.
        """
        if self.inside_session():
            self.cmd('switch-client', '-t', name)
            return
        logger.debug('tmux attach-session -t %s', name)
        execvp(TMUX_BIN, [TMUX_BIN, 'attach-session', '-t', name])

#! /usr/bin/env python3
"""
Build the tmux panes for a list of hosts.

There are two ways to do it:
    detached: create a new session holding one pane per host, then attach.
    inline: add the panes to the tmux window we are already running in.

Example:
    from sshmux.orchestrator import Orchestrator

    orchestrator = Orchestrator(Multiplexer(), config)
    orchestrator.run(['web1', 'web2', 'db1'])
    orchestrator.attach()
"""
from sshmux.config import DETACHED, INLINE, WINDOW_TITLE
from sshmux.errors import ServiceCallError, SessionConflictError
from sshmux.guard import SessionGuard, check_preconditions
from sshmux.lib import build_command
from sshmux.log import logger

__all__ = ['Orchestrator']

# Setup progresses through these states, in this order
UNINITIALIZED = 'uninitialized'
SERVER_CHECKED = 'server-checked'
PRECONDITION_CHECKED = 'precondition-checked'
SESSION_RESOLVED = 'session-resolved'
PANES_POPULATED = 'panes-populated'
PANES_INJECTED = 'panes-injected'
LAYOUT_APPLIED = 'layout-applied'
SYNC_APPLIED = 'sync-applied'
ATTACHED = 'attached'


class Orchestrator(object):

    def __init__(self, mux, config):
        self.mux = mux
        self.config = config
        self.state = UNINITIALIZED
        self.conflict = False
        self.panes = 0

    def command_for(self, host):
        return build_command(self.config.ssh_cmd, host, self.config.command)

    def run(self, hosts):
        if self.config.mode == INLINE:
            return self.run_inline(hosts)
        return self.run_detached(hosts)

    def _check_server(self):
        check_preconditions(self.config.mode, self.mux)
        if self.config.mode == DETACHED:
            self.mux.start_server()
        self.state = SERVER_CHECKED

    def run_detached(self, hosts):
        """
        Create a session named after the config with a pane for each host.
        attach() must be called afterwards to hand over the terminal.

        When the session already exists (and kill_existing is not set) it is
        left untouched, attach() will simply attach to it.

        @param hosts: Connect to these hosts, in this order.
        @type hosts: list

        @returns: The session name
        @rtype: str
        """
        name = self.config.name
        self._check_server()

        if self.config.kill_existing and self.mux.has_session(name):
            logger.info('Killing existing session: %s', name)
            self.mux.kill_session(name)

        if self.mux.has_session(name):
            logger.warning(str(SessionConflictError(name)))
            self.conflict = True
            self.state = SESSION_RESOLVED
            return name

        target = name + ':'
        with SessionGuard(self.mux, name) as guard:
            logger.info('Creating tmux session: %s', name)
            self.mux.new_session(name, self.command_for(hosts[0]))
            guard.arm()
            self.panes = 1
            self.state = SESSION_RESOLVED

            for host in hosts[1:]:
                logger.info('Adding pane for %s', host)
                self.mux.split_window(target, self.command_for(host))
                self.panes += 1
            self.state = PANES_POPULATED

            logger.info('Applying layout: %s', self.config.layout)
            self.mux.select_layout(target, self.config.layout)
            self.state = LAYOUT_APPLIED

            if self.config.synchronize:
                logger.info('Enabling pane synchronization')
                self.mux.set_synchronize(target, True)
            self.state = SYNC_APPLIED

            self.mux.rename_window(target, WINDOW_TITLE)

        self._log_server_info()
        logger.info('Session %s ready with %d panes', name, self.panes)
        return name

    def _log_server_info(self):
        # server-info needs an attached client, which a detached session
        # does not have yet
        try:
            info = self.mux.server_info()
        except ServiceCallError as e:
            logger.debug('No server info: %s', e)
            return
        for line in info[:1]:
            logger.debug(line)

    def attach(self):
        """
        Attach to the session.  Outside of tmux this replaces the current
        process and does not return.
        """
        logger.info('Attaching to tmux session: %s', self.config.name)
        self.state = ATTACHED
        self.mux.attach_session(self.config.name)

    def run_inline(self, hosts):
        """
        Add the hosts to the current tmux window.  The first host reuses the
        pane we run in, every other host gets a new pane.

        @param hosts: Connect to these hosts, in this order.
        @type hosts: list

        @returns: The number of panes running a connection
        @rtype: int
        """
        self._check_server()
        self.state = PRECONDITION_CHECKED
        # Without TMUX_PANE tmux falls back to the active pane
        target = self.mux.environ.get('TMUX_PANE')

        logger.info('Adding panes to current tmux window.')
        self.mux.send_keys(target, self.command_for(hosts[0]))
        self.panes = 1
        for host in hosts[1:]:
            logger.info('Adding pane for %s', host)
            self.mux.split_window(target, self.command_for(host))
            self.panes += 1
            self.mux.select_layout(target, self.config.layout)
        self.state = PANES_INJECTED

        logger.info('Enabling pane synchronization')
        self.mux.set_synchronize(target, True)
        self.state = SYNC_APPLIED
        logger.info('All panes added to current tmux window.')
        return self.panes

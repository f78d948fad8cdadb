#! /usr/bin/env python3
"""
Checks that must pass before tmux is touched, and the cleanup of a half
built session when setup dies part way.
"""
import signal
import sys

from sshmux.config import INLINE
from sshmux.errors import DependencyMissingError, NotInsideSessionError, \
        ServiceCallError
from sshmux.log import logger
from sshmux.tmux import TMUX_BIN

__all__ = ['check_preconditions', 'SessionGuard']


def check_preconditions(mode, mux, environ=None):
    """
    Fail before anything is changed if this run cannot succeed.

    @param mode: DETACHED or INLINE
    @type mode: str

    @param mux: The multiplexer that will be used.
    @type mux: sshmux.tmux.Multiplexer

    @param environ: Look for the tmux session marker here.
    @type environ: dict

    @raises DependencyMissingError: tmux is not installed.
    @raises NotInsideSessionError: Inline mode outside of tmux.
    """
    if not mux.available():
        raise DependencyMissingError(TMUX_BIN)
    if mode == INLINE:
        environ = mux.environ if environ is None else environ
        if not environ.get('TMUX'):
            raise NotInsideSessionError()


# Signals that should unwind the setup instead of killing the process outright
CLEANUP_SIGNALS = tuple(getattr(signal, name) for name in ('SIGTERM', 'SIGHUP')
        if hasattr(signal, name))


def _raise_exit(signum, frame):
    sys.exit(128 + signum)


class SessionGuard(object):
    """
    Kill session "name" if the block it protects raises, including
    KeyboardInterrupt and SIGTERM/SIGHUP.  Nothing happens until arm() is
    called, so a session that already existed is never destroyed.

        with SessionGuard(mux, 'demo') as guard:
            mux.new_session('demo', command)
            guard.arm()
            ...
    """

    def __init__(self, mux, name):
        self.mux = mux
        self.name = name
        self.armed = False
        self._previous = {}

    def arm(self):
        self.armed = True

    def __enter__(self):
        for signum in CLEANUP_SIGNALS:
            try:
                self._previous[signum] = signal.signal(signum, _raise_exit)
            except ValueError: # pragma: no cover not in the main thread
                pass
        return self

    def __exit__(self, exc_type, exc_value, tb):
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous = {}

        if exc_type is not None and self.armed:
            self.cleanup()
        # Never suppress the original exception
        return False

    def cleanup(self):
        logger.info('Cleaning up tmux session: %s', self.name)
        try:
            if self.mux.has_session(self.name):
                self.mux.kill_session(self.name)
        except ServiceCallError as e:
            logger.warning('Unable to clean up session "%s": %s', self.name, e)

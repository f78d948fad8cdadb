#! /usr/bin/env python3
"""
Exceptions raised while preparing an sshmux session.

Every error the console reports derives from SSHMuxError.  All of them are
fatal except SessionConflictError, which only produces a warning.
"""

__all__ = [
    'SSHMuxError',
    'InputError',
    'NoHostsError',
    'NoValidHostsError',
    'DependencyMissingError',
    'EnvironmentPreconditionError',
    'NotInsideSessionError',
    'SessionConflictError',
    'ServiceCallError',
    ]


class SSHMuxError(Exception):
    """Base class for every sshmux failure."""
    exit_code = 1


class InputError(SSHMuxError):
    """The user did not provide usable hosts."""


class NoHostsError(InputError):

    def __init__(self, message='No hosts provided and no input from stdin'):
        super(NoHostsError, self).__init__(message)


class NoValidHostsError(InputError):

    def __init__(self, message='No valid hosts found'):
        super(NoValidHostsError, self).__init__(message)


class DependencyMissingError(SSHMuxError):
    """
    A required program is not installed.  Retrying will not help.
    """

    def __init__(self, program):
        self.program = program
        super(DependencyMissingError, self).__init__(
                '{} is required but not installed'.format(program))


class EnvironmentPreconditionError(SSHMuxError):
    """The process is not running where it must run."""


class NotInsideSessionError(EnvironmentPreconditionError):

    def __init__(self, message=None):
        super(NotInsideSessionError, self).__init__(message or (
            'This command must be run inside a tmux session. Please start '
            'tmux first (e.g., run "tmux"), then run it inside a tmux pane.'))


class SessionConflictError(SSHMuxError):
    """
    A session with the requested name already exists.  This never aborts a
    run, the existing session is attached instead.
    """

    def __init__(self, name):
        self.name = name
        super(SessionConflictError, self).__init__(
                'Session "{}" already exists, attaching to it. Use -k to '
                'replace it.'.format(name))


class ServiceCallError(SSHMuxError):
    """
    tmux refused a command.  The message is tmux's own.
    """

    def __init__(self, command, stderr):
        self.command = command
        if isinstance(stderr, (list, tuple)):
            stderr = '\n'.join(stderr)
        self.stderr = stderr
        super(ServiceCallError, self).__init__(
                'tmux {} failed: {}'.format(command, stderr))

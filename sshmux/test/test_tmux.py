#! /usr/bin/env python3
"""
This module tests the tmux commands sent through libtmux, without running
tmux.
"""
from sshmux import tmux
from sshmux.errors import ServiceCallError
from sshmux.tmux import Multiplexer

from libtmux import exc
from mock import MagicMock, patch
import unittest


def fake_server(stdout=None, stderr=None):
    proc = MagicMock()
    proc.stdout = stdout or []
    proc.stderr = stderr or []
    server = MagicMock()
    server.cmd.return_value = proc
    return server


class TestMultiplexer(unittest.TestCase):

    def test_commands(self):
        """
        Each method sends one tmux command.
        """
        server = fake_server()
        mux = Multiplexer(server=server, environ={})
        prov_exp = [
                (lambda: mux.start_server(), ('start-server',)),
                (lambda: mux.kill_session('demo'),
                    ('kill-session', '-t', 'demo')),
                (lambda: mux.split_window('demo:', 'ssh -A web2'),
                    ('split-window', '-t', 'demo:', 'ssh -A web2')),
                (lambda: mux.split_window(None, 'ssh -A web2'),
                    ('split-window', 'ssh -A web2')),
                (lambda: mux.select_layout('demo:', 'tiled'),
                    ('select-layout', '-t', 'demo:', 'tiled')),
                (lambda: mux.set_synchronize('demo:', True),
                    ('set-window-option', '-t', 'demo:', 'synchronize-panes',
                        'on')),
                (lambda: mux.set_synchronize('%1', False),
                    ('set-window-option', '-t', '%1', 'synchronize-panes',
                        'off')),
                (lambda: mux.rename_window('demo:', 'sshmux'),
                    ('rename-window', '-t', 'demo:', 'sshmux')),
                (lambda: mux.send_keys('%1', 'ssh -A web1'),
                    ('send-keys', '-t', '%1', 'ssh -A web1', 'Enter')),
                (lambda: mux.send_keys(None, 'ssh -A web1'),
                    ('send-keys', 'ssh -A web1', 'Enter')),
                ]
        for method, expected in prov_exp:
            server.cmd.reset_mock()
            method()
            server.cmd.assert_called_once_with(*expected)

    def test_server_info(self):
        server = fake_server(stdout=['tmux 3.3a, pid 4242', 'socket path'])
        mux = Multiplexer(server=server, environ={})
        self.assertEqual(mux.server_info()[0], 'tmux 3.3a, pid 4242')
        server.cmd.assert_called_once_with('server-info')

    def test_error_output(self):
        """
        Anything tmux writes to stderr becomes a ServiceCallError.
        """
        server = fake_server(stderr=['unknown layout: bogus'])
        mux = Multiplexer(server=server, environ={})
        with self.assertRaises(ServiceCallError) as cm:
            mux.select_layout('demo:', 'bogus')
        self.assertEqual(cm.exception.command, 'select-layout')
        self.assertEqual(cm.exception.stderr, 'unknown layout: bogus')
        self.assertIn('unknown layout: bogus', str(cm.exception))

    def test_libtmux_exception(self):
        server = fake_server()
        server.cmd.side_effect = exc.LibTmuxException('tmux not found')
        mux = Multiplexer(server=server, environ={})
        self.assertRaises(ServiceCallError, mux.start_server)

    def test_new_session(self):
        server = fake_server()
        mux = Multiplexer(server=server, environ={})
        mux.new_session('demo', 'ssh -A web1')
        server.new_session.assert_called_once_with(session_name='demo',
                attach=False, window_command='ssh -A web1')

        server.new_session.side_effect = exc.LibTmuxException(
                'duplicate session: demo')
        self.assertRaises(ServiceCallError, mux.new_session, 'demo',
                'ssh -A web1')

    def test_has_session(self):
        server = fake_server()
        server.has_session.return_value = True
        mux = Multiplexer(server=server, environ={})
        self.assertTrue(mux.has_session('demo'))
        server.has_session.assert_called_once_with('demo')

        server.has_session.side_effect = exc.LibTmuxException('bad name')
        self.assertRaises(ServiceCallError, mux.has_session, 'de.mo')

    def test_available(self):
        mux = Multiplexer(server=fake_server(), environ={})
        with patch.object(tmux, 'which', return_value='/usr/bin/tmux') as w:
            self.assertTrue(mux.available())
            w.assert_called_once_with('tmux')
        with patch.object(tmux, 'which', return_value=None):
            self.assertFalse(mux.available())

    def test_attach_outside_tmux(self):
        """
        Outside of tmux this process is replaced by tmux attach-session.
        """
        server = fake_server()
        mux = Multiplexer(server=server, environ={})
        with patch.object(tmux, 'execvp') as execvp:
            mux.attach_session('demo')
        execvp.assert_called_once_with('tmux',
                ['tmux', 'attach-session', '-t', 'demo'])
        server.cmd.assert_not_called()

    def test_attach_inside_tmux(self):
        """
        Inside of tmux the client switches to the session instead of nesting.
        """
        server = fake_server()
        mux = Multiplexer(server=server, environ={'TMUX': 'x,1,0'})
        with patch.object(tmux, 'execvp') as execvp:
            mux.attach_session('demo')
        execvp.assert_not_called()
        server.cmd.assert_called_once_with('switch-client', '-t', 'demo')

    def test_lazy_server(self):
        with patch.object(tmux.libtmux, 'Server') as Server:
            mux = Multiplexer(environ={})
            Server.assert_not_called()
            self.assertIs(mux.server, Server.return_value)
            self.assertIs(mux.server, Server.return_value)
            Server.assert_called_once_with()



if __name__ == '__main__':
    unittest.main()

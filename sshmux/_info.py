#! /usr/bin/env python3

# This is the official version of sshmux
__version__ = '1.0.0'

__long_description__ = '''
    SSHMux v%s. Open an SSH session to many hosts at once, one tmux pane per
    host, with keystrokes mirrored to every pane.

    Examples:
        Connect to three servers in a new tmux session:
            sshmux web1 web2 db1

        Read the hosts from a file, blank lines and # comments are ignored:
            cat hosts.txt | sshmux

        Run a command on every host instead of a login shell:
            sshmux web1 web2 -- htop

        Replace an existing session with the same name:
            sshmux -k -s demo web1 web2

        Expand host ranges, the same way for names and IP octets:
            sshmux -e mail[01-03].example.com 10.0.0.5-7

        Add the panes to the current tmux window instead:
            sshmux-inline web1 web2

    Environment variables:
        SSH_CMD         SSH command template (default: ssh -A)
        LAYOUT          tmux layout (default: tiled)
        SESSION_NAME    tmux session name (default: sshmux-<pid>)
        VERBOSE         Enable verbose output (0/1)
    ''' % (__version__)

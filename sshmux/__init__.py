# pragma: no cover
"""
This module can be used to open an SSH session to many hosts at once, each in
its own tmux pane.

Example:
    from sshmux.lib import resolve_hosts
    from sshmux.orchestrator import Orchestrator
    from sshmux.tmux import Multiplexer

    hosts = resolve_hosts(['web1', 'web2', 'db1'])
    orchestrator = Orchestrator(Multiplexer(), config)
    orchestrator.run(hosts)

    # A new tmux session with three panes, running:
    #   ssh -A web1
    #   ssh -A web2
    #   ssh -A db1
    orchestrator.attach()
"""

#! /usr/bin/env python3
"""
Turn what the user typed (or piped in) into hosts, and hosts into the
commands each pane will run.
"""
import re
from itertools import product

from sshmux.errors import NoHostsError, NoValidHostsError

__all__ = ['resolve_hosts', 'iter_host_lines', 'expand_hosts',
        'expand_ranges', 'build_command']


# A line is a comment when its first non-whitespace character is a #
_comment = re.compile(r'^\s*#')

def iter_host_lines(lines):
    """
    Yield every host found in "lines", skipping blank lines and comments.
    Consumes "lines" lazily, one pass.

    @param lines: Any iterable of strings, such as a file.
    @type lines: iterable
    """
    for line in lines:
        line = line.strip()
        if not line or _comment.match(line):
            continue
        yield line


def resolve_hosts(cli_hosts, stdin=None):
    """
    Decide which hosts to connect to.

    Hosts given on the command line are used verbatim, in order, duplicates
    included.  Otherwise they are read from stdin, as long as stdin is not a
    terminal.

    @param cli_hosts: The hosts provided as console arguments.
    @type cli_hosts: list

    @param stdin: Read hosts from this file when there are no cli_hosts.
    @type stdin: file

    @returns: A non-empty list of hosts
    @rtype: list

    @raises NoHostsError: No hosts were given and stdin is a terminal.
    @raises NoValidHostsError: Only blank lines and comments were found.
    """
    if cli_hosts:
        return list(cli_hosts)

    if stdin is None or getattr(stdin, 'closed', False) or stdin.isatty():
        raise NoHostsError()

    hosts = list(iter_host_lines(stdin))
    if not hosts:
        raise NoValidHostsError()
    return hosts


def build_command(template, host, trailing=None):
    """
    Create the command a pane runs to connect to "host".

    Nothing is escaped: the host and trailing command are passed to the
    shell exactly as given, just like typing them after ssh.

        Example: ('ssh -A', 'web1', 'htop') to 'ssh -A web1 htop'

    @type template: str
    @type host: str
    @type trailing: str
    @rtype: str
    """
    command = template + ' ' + host
    if trailing:
        command = command + ' ' + trailing
    return command


# This is used to parse a range string
_match_ranges = re.compile(r'(?:(\d+)(?:,|$))|(?:(\d+-\d+))')

def expand_ranges(to_expand):
    """
    Convert a comma-seperated range of integers into strings. Keep any zero
    padding the numbers may have.  If the provided string is just a -, every
    octet 0-255 is produced.

        Example: "1,4,07-10" to ['1', '4', '07', '08', '09', '10']

    @param to_expand: Expand this string into a list of integers.
    @type to_expand: str
    """
    if to_expand == '-':
        for i in range(0, 256):
            yield str(i)

    for single, range_str in _match_ranges.findall(to_expand):
        if single:
            yield single
        if range_str:
            i, j = range_str.split('-')
            # Pad each number to the width of the start of the range.
            # Example: if i is '03' the format will be '%0.2d'
            padding = '%'+'0.%d' % len(i) +'d'
            for k in range(int(i), int(j)+1):
                yield padding % k


def _with_user(user, host):
    if user:
        return user + '@' + host
    return host


_parse_host = re.compile(r'(?:([\w.-]+)@)?(?:(?:([a-zA-Z][\w.-]*)(?:\[([\d,-]+)\])?([\w.-]+)?)|((?:(?:(?:\d+-\d+)|(?:\d+,\d+)|(?:\d+)|(?:-))+\.){3}(?:(?:\d+-\d+)|(?:\d+,\d+)|(?:\d+)|(?:-)))(?=,|$)),?')

def expand_hosts(input_str):
    """
    Expand a host pattern into individual hosts.  Several patterns may be
    separated by commas.  Zero-padding in ranges is preserved.

        Example: "root@web[01-2].example.com,10.0.0.1-2" to
            ['root@web01.example.com', 'root@web02.example.com',
             '10.0.0.1', '10.0.0.2']

    @param input_str: The host pattern to expand
    @type input_str: str

    @rtype: list

    @raises ValueError: "input_str" is not made only of host patterns, or
        they expand to nothing.
    """
    try:
        matches = list(_parse_host.finditer(input_str))
    except TypeError:
        raise ValueError('Unable to parse provided hosts')

    # The patterns must cover the whole string, nothing may be skipped
    end = 0
    for match in matches:
        if match.start() != end:
            break
        end = match.end()
    if end != len(input_str):
        raise ValueError('Unable to parse "{}" at "{}"'.format(input_str,
            input_str[end:]))

    hosts = []
    for match in matches:
        user, prefix, range_str, suffix, ip_addr = match.groups('')
        if (prefix or suffix) and range_str:
            # Expand the name
            for number in expand_ranges(range_str):
                hosts.append(_with_user(user, prefix + number + suffix))
        elif ip_addr:
            if '-' in ip_addr or ',' in ip_addr:
                # Expand any ranges in the octets, then join every product of
                # them back together with dots.
                octets = [list(expand_ranges(i)) for i in ip_addr.split('.')]
                for address in product(*octets):
                    hosts.append(_with_user(user, '.'.join(address)))
            else:
                # No expansion necessary for IP
                hosts.append(_with_user(user, ip_addr))
        elif prefix or suffix:
            # No expansion necessary for a name
            hosts.append(_with_user(user, prefix + suffix))

    # Some hosts must be specified
    if not hosts:
        raise ValueError('No hosts found in "{}"'.format(input_str))
    return hosts

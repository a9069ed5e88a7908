#! /usr/bin/env python3

# This is the official version of sa
__version__ = '1.0.0'

__long_description__ = '''
    SA v%s. Run a command on many hosts, addressed by name or by group.

    Hosts and groups are read from an ini-file (default ~/.sa/hosts.ini).
    Each section is a group, each bare key in a section is a host:

        [web]
        web01.example.com
        web02.example.com

        [db]
        db01.example.com

    Examples:
        Get the uptime of all web servers:
            sa -u root -c "uptime" web

        Check disk usage on the web servers and one database, one at a time:
            sa -s -u root -c "df -h /" web db01.example.com

        Prefix every line of output with the host it came from:
            sa -p -y -u admin -c "tail -n 5 /var/log/syslog" web db
    ''' % (__version__)


# pragma: no cover
"""
This module runs one command on many hosts, addressed individually or through
the groups of an ini-file.

Example:
    from sa.config import Settings, load_groups
    from sa.hosts import resolve_hosts
    from sa.lib import fan_out

    settings = Settings(command='uptime', username='root',
            identifiers=['web'])
    targets = resolve_hosts(load_groups(settings.inifile), settings.identifiers)
    for result in fan_out(targets, settings):
            print(result)

    {
        'thread_num': 0,
        'target': 'web01.example.com',
        'cmd': ['ssh', 'root@web01.example.com', 'uptime'],
        'return_code': 0,
        'output': b' 10:01:02 up 12 days,  1 user,  load average: 0.00\n',
        }
    {
        'thread_num': 1,
        'target': 'web02.example.com',
        'cmd': ['ssh', 'root@web02.example.com', 'uptime'],
        'return_code': 255,
        'output': b'ssh: connect to host web02.example.com port 22: No route to host\r\n',
        }
"""

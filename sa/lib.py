#! /usr/bin/env python3
import logging
import subprocess
import threading
import zmq
from traceback import format_exc

__all__ = ['fan_out', 'render_output', 'render_result']
logger = logging.getLogger(__name__)


def popen(cmd, stdin, stdout, stderr): # pragma: no cover
    """
    Separating Popen call from ssh command for testing.
    """
    proc = subprocess.Popen(cmd,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,)
    return proc


def build_command(target, settings):
    """
    Create the transport call for "target".

        Example: ['ssh', 'root@example.com', 'uptime']
    """
    cmd = [settings.transport,]
    # Add extra arguments after the transport, but before user@host
    cmd.extend(settings.extra_arguments or [])
    cmd.extend([settings.username+'@'+target, settings.command])
    return cmd


# ZMQ url used to connect fan_out and its threads
SINK_URL = 'inproc://sink'

def ssh(thread_num, context, target, settings):
    """
    Run the command of "settings" on "target" and capture its combined
    stdout and stderr.  Return the results via ZMQ (SINK_URL).

    @param context: Create all ZMQ sockets using this context.
    @type context: zmq.Context

    @param target: example.com
    @type target: str

    @param settings: The command, username and transport to use.
    @type settings: sa.config.Settings

    @returns: None
    """
    # This is the basic result that we send back
    result = {
            'thread_num':thread_num,
            'target':target,
            }

    # Send the results to this sink
    sink = context.socket(zmq.PUSH)
    sink.connect(SINK_URL)

    cmd = build_command(target, settings)
    logger.debug('running %s', cmd)
    try:
        proc = popen(cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,)
        # Wait for the whole output, it is printed as one block
        output, _ = proc.communicate()
        logger.debug('%s exited with %s', target, proc.returncode)

        result.update({'return_code':proc.returncode,
                    'output':output,
                    }
                )
    except Exception:
        # The transport could not be run, get the traceback
        result.update({
                'traceback':format_exc(),
                }
            )

    result.update({'cmd':cmd,})

    # Send the results!
    sink.send_pyobj(result)

    sink.close()


def fan_out(targets, settings):
    """
    Run the command of "settings" on every target.

    This is a generator to facilitate using the results of each target as
    they become available.  In sequential mode a target is only started after
    the results of the one before it were used.  In parallel mode every
    target gets its own thread, unless settings.workers sets a lower limit.
    The generator ends once every thread has reported and has been joined.
    When it is closed early, no more targets are started and the threads
    already running are joined.

    @param targets: The hosts to run on.
    @type targets: list

    @param settings: The command, username, mode and transport to use.
    @type settings: sa.config.Settings

    @returns: A dict per target, see ssh().
    """
    if settings.sequential:
        workers = 1
    else:
        workers = settings.workers or len(targets)

    context = zmq.Context()
    # The results of each ssh call is reported to this sink
    sink = context.socket(zmq.PULL)
    sink.bind(SINK_URL)

    pending = list(enumerate(targets))
    threads = {}
    try:
        while pending or threads:
            # Start a new thread if there are any targets left
            while pending and len(threads) < workers:
                thread_num, target = pending.pop(0)
                thread = threading.Thread(target=ssh, args=(thread_num, context,
                    target, settings))
                thread.start()
                threads[thread_num] = thread

            # A thread has finished, yield the results
            results = sink.recv_pyobj()
            yield results
            threads[results['thread_num']].join()
            del threads[results['thread_num']]
    finally:
        # Stopped early, hosts not yet started are skipped and the running
        # ones are waited for.  Their results stay unread in the sink.
        for thread in threads.values():
            thread.join()
        sink.close(linger=0)
        context.term()


def render_output(target, output, prefix=False):
    """
    Format the captured output of "target" for the terminal.

    Without prefix the output is returned as is.  With prefix every line is
    preceded by "[target] ", and a last line without newline gets one.

        Example: ('h1', b'a\\nb', True) to b'[h1] a\\n[h1] b\\n'

    @type output: bytes
    @rtype: bytes
    """
    if not prefix:
        return output

    header = ('['+target+'] ').encode()
    # Split after each newline only, a \r belongs to the line it is in
    lines = output.split(b'\n')
    segments = [line+b'\n' for line in lines[:-1]] + [lines[-1]]
    logger.debug('output-array contains %d elements', len(segments))
    rendered = []
    for segment in segments:
        if not segment:
            continue
        if not segment.endswith(b'\n'):
            segment += b'\n'
        rendered.append(header+segment)
    return b''.join(rendered)


def render_result(result, prefix=False):
    """
    Format a result of fan_out().  A failure is reported on a line of its own
    before whatever output there was.

    @rtype: bytes
    """
    target = result['target']
    if result.get('traceback'):
        reason = result['traceback'].strip().splitlines()[-1]
        return '{}: {}\n'.format(target, reason).encode()

    rendered = render_output(target, result['output'] or b'', prefix)
    if result['return_code'] != 0:
        status = '{}: exit status {}\n'.format(target, result['return_code'])
        rendered = status.encode()+rendered
    return rendered

""" Optional background heartbeats. A :class:`warren.Client` never sends
    heartbeats on its own; this module runs one daemon thread per client
    that calls :func:`warren.Client.heartbeat` on a fixed cadence.

    The client itself does no locking. If the application uses the client
    from other threads while heartbeats are running, it must pass the same
    lock it uses for its own calls; the heartbeat thread holds that lock for
    the duration of each heartbeat.
"""

import logging
import threading
import time
import weakref

from .errors import WarrenError

logger = logging.getLogger(__name__)

active = dict()


def period(client):
    """ Return the current heartbeat period for the provided *client*.
        Returns None if no heartbeats are scheduled for that client.
    """

    try:
        beater = active[id(client)]
    except KeyError:
        return None

    return beater.interval



def start(client, period, lock=None):
    """ Send a heartbeat on *client* every *period* seconds. If heartbeats
        are already running for this client the period (and lock) are
        updated in place; there is never more than one heartbeat thread per
        client. A *period* of None or zero stops the heartbeats.
    """

    if period is None or period == 0:
        stop(client)
        return

    client_id = id(client)

    try:
        beater = active[client_id]
    except KeyError:
        beater = _Beater(client, lock)
        active[client_id] = beater
    else:
        if lock is not None:
            beater.lock = lock

    beater.period(period)
    return beater



def stop(client):
    """ Discontinue heartbeats for the provided *client*.
    """

    try:
        beater = active.pop(id(client))
    except KeyError:
        return

    beater.stop()



class _Beater:
    """ Background thread to send the heartbeats. If a heartbeat fails the
        thread exits; the exception is retained as *error*.
    """

    def __init__(self, client, lock=None):

        self.client_id = id(client)
        self.reference = weakref.ref(client)
        self.lock = lock
        self.interval = None
        self.error = None
        self.shutdown = False

        self.alarm = threading.Event()
        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def period(self, period):
        """ Update the heartbeat interval to *period* seconds.
        """

        period = float(period)
        self.interval = period
        self.wake()


    def run(self):

        interval = 30
        next = time.time()

        while self.interval is None:
            self.alarm.wait(1)

        while True:
            begin = time.time()

            if self.shutdown == True:
                break

            if self.alarm.is_set() == True:
                self.alarm.clear()

                # A new interval starts an entirely new cadence, with the
                # first heartbeat one full interval from now.

                interval = self.interval
                next = begin + interval
                self.alarm.wait(interval)
                continue

            else:
                next += interval

            client = self.reference()

            if client is None:
                # The client is gone. No further heartbeats are possible.
                break

            try:
                self.beat(client)
            except WarrenError as e:
                logger.warning("heartbeat to %s:%s failed: %s", client.host, client.port, e)
                self.error = e
                break

            del client

            end = time.time()

            delay = next - end
            if delay > 0:
                self.alarm.wait(delay)


        # Loop exited.
        if active.get(self.client_id) is self:
            del active[self.client_id]


    def beat(self, client):

        lock = self.lock

        if lock is None:
            client.heartbeat()
        else:
            with lock:
                client.heartbeat()


    def stop(self):
        self.shutdown = True
        self.wake()


    def wake(self):
        self.alarm.set()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

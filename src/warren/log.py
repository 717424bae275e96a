""" Frame tracing. When logging is enabled on a client every frame sent and
    received is recorded on a logger of its own, a child of 'warren.frames',
    either to a log file or to stdout.
"""

import logging
import sys


name = 'warren.frames'
date_format = '%Y-%m-%d %H:%M:%S'
line_format = '%(asctime)s %(levelname)s %(message)s'


def logger_name(owner):
    return '%s.%x' % (name, id(owner))


def create_logger(owner, logfile=None):
    """ Return the frame logger for *owner*, with a dedicated handler
        writing to *logfile* (or stdout if no file is given). Each owner
        gets its own logger; calling this again for the same owner replaces
        the handler installed by the previous call rather than adding a
        second one.
    """

    logger = logging.getLogger(logger_name(owner))

    for handler in list(logger.handlers):
        if getattr(handler, '_warren_local', False):
            logger.removeHandler(handler)
            handler.close()

    if logfile is None:
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.FileHandler(logfile)

    handler.setFormatter(logging.Formatter(line_format, datefmt=date_format))
    handler.setLevel(logging.INFO)
    setattr(handler, '_warren_local', True)

    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    return logger


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

"""
Utilities (:mod:`~tessera.utils`)
===========================================================================

Provide utilities for logging and monitoring lengthy computations.

.. autosummary::

    Progress
    setup_logger
    batch_compute

|

"""
import logging
import sys
import time

import numpy as np
from tqdm import tqdm

__all__ = [
    'Progress',
    'setup_logger',
    'batch_compute',
]


class Progress:
    """Progress status of a sequence of tasks.

    Parameters
    ----------
    task_length : int
        Total number of tasks.
    num_checkpts : int, optional
        Number of checkpoints for reporting progress (default is 4).
    process_name : str or None, optional
        If not `None` (default), this is the process name to be logged.
    logger : :class:`logging.Logger` *or None, optional*
        Logger.  If `None` (default), a print statement is issued.

    Attributes
    ----------
    process_name : str or None
        Process name to be logged.
    task_length : int
        Total number of tasks.
    progress_checkpts : float :class:`numpy.ndarray`
        Scheduled progress checkpoints, ``0 < progress_checkpts <= 1``.
    last_checkpt : int
        Number of checkpoints passed so far,
        ``0 <= last_checkpt <= num_checkpts``.

    Examples
    --------
    >>> p = Progress(8, process_name='sampling')
    >>> for task_idx in range(8):
    ...     p.report(task_idx)
    Progress for 'sampling': 25% computed.
    Progress for 'sampling': 50% computed.
    Progress for 'sampling': 75% computed.
    Progress for 'sampling': 100% computed.

    """

    def __init__(self, task_length, num_checkpts=4, process_name=None,
                 logger=None):

        self.process_name = process_name
        self.task_length = task_length
        self.logger = logger

        self._proc_name = "the process" if process_name is None \
            else "'{}'".format(process_name)

        self.progress_checkpts = \
            np.linspace(1. / num_checkpts, 1., num=num_checkpts)
        self.last_checkpt = 0

    def report(self, current_position):
        """Report the current position in the tasks, if a checkpoint has
        been passed.

        Parameters
        ----------
        current_position : int
            Index of the current position in the tasks (starting from 0).

        """
        current_progress = (current_position + 1) / self.task_length
        place_in_checkpts = np.searchsorted(
            self.progress_checkpts, current_progress, side='right'
        )

        if place_in_checkpts <= self.last_checkpt:
            return

        if self.logger is None:
            print(
                "Progress for {}: {:.0f}% computed."
                .format(self._proc_name, 100 * current_progress)
            )
        else:
            self.logger.info(
                "Progress for %s: %.0f%% computed.",
                self._proc_name, 100 * current_progress
            )
        self.last_checkpt = place_in_checkpts


class _LoggerFormatter(logging.Formatter):
    """Logging formatter adding the elapsed time since import.

    """

    _start_time = time.time()

    def format(self, record):
        """Add elapsed time in hours, minutes and seconds to the logging
        record.

        Parameters
        ----------
        record : :class:`logging.LogRecord`
            Default logging record object.

        Returns
        -------
        str
            Record message with elapsed time.

        """
        elapsed_time = record.created - self._start_time
        h, remainder_time = divmod(elapsed_time, 3600)
        m, s = divmod(remainder_time, 60)

        record.elapsed = "(+{}:{:02d}:{:02d})".format(int(h), int(m), int(s))

        return logging.Formatter.format(self, record)


def setup_logger(level=logging.INFO):
    """Return the root logger formatted with elapsed time and piped
    to ``stdout``.

    Parameters
    ----------
    level : int, optional
        Logging level of the root logger (default is ``logging.INFO``).

    Returns
    -------
    logger : :class:`logging.Logger`
        Formatted root logger.

    """
    logger = logging.getLogger()
    logger.setLevel(level)

    logging_handler = logging.StreamHandler(sys.stdout)
    logging_handler.setFormatter(
        _LoggerFormatter(
            fmt='[%(asctime)s %(elapsed)s %(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    )
    logger.addHandler(logging_handler)

    return logger


def batch_compute(data_array, mapping, process_name=None, progress=True):
    """Map each entry of a data array, with an optional progress bar.

    Parameters
    ----------
    data_array : array_like
        Data array mapped along its first axis.
    mapping : callable
        Mapping to be applied.
    process_name : str or None, optional
        If not `None` (default), this is the process name shown with the
        progress bar.
    progress : bool, optional
        If `True` (default), show a progress bar on ``stdout``.

    Returns
    -------
    output_array : list
        Mapped outputs in the order of `data_array`.

    """
    if process_name is not None:
        process_name = process_name.capitalize()

    output_array = list(tqdm(
        map(mapping, data_array), total=len(data_array), mininterval=1,
        desc=process_name, file=sys.stdout, disable=not progress
    ))

    return output_array

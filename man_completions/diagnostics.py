"""Buffered diagnostic output with three verbosity levels."""

import threading

# Three diagnostic verbosity levels
VERY_VERBOSE, BRIEF_VERBOSE, NOT_VERBOSE = 2, 1, 0

VERBOSITY = NOT_VERBOSE

diagnostic_output = []

# Worker threads may report at the same time
_lock = threading.Lock()


def set_verbosity(level):
    global VERBOSITY
    VERBOSITY = level


def add_diagnostic(dgn, msg_verbosity=VERY_VERBOSE):
    # Add a diagnostic message, if msg_verbosity <= VERBOSITY
    if msg_verbosity <= VERBOSITY:
        with _lock:
            diagnostic_output.append(dgn)


def flush_diagnostics(where):
    with _lock:
        if diagnostic_output:
            output_str = "\n".join(diagnostic_output)
            print(output_str, file=where)
            diagnostic_output[:] = []

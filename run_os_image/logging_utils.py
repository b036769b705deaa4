#!/usr/bin/env python3
"""
Shared logging utilities for run-os-image.

Provides timestamped debug logging to file for diagnostic purposes.
"""

import time


def open_debug_log(path):
    """
    Open the launcher debug log for writing, or return None when disabled.

    Args:
        path: Destination path, or None/empty to disable logging.

    Returns:
        An open text file handle, or None.
    """
    if not path:
        return None
    return open(path, "w", encoding="utf-8")


def debug_log(debug_file, message):
    """
    Write a timestamped debug message to the debug file if enabled.

    Args:
        debug_file: An open file handle for writing debug messages,
                    or None if debug logging is disabled.
        message: The debug message string to write.

    Returns:
        None
    """
    if debug_file:
        try:
            timestamp = time.time()
            debug_file.write(f"[{timestamp:.6f}] {message}\n")
            debug_file.flush()
        except (ValueError, OSError):
            # File might already be closed during interpreter shutdown
            pass

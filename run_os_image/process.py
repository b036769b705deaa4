import shutil
import signal
import subprocess
import sys

from . import config as app_config
from .logging_utils import debug_log


def find_executable(name):
    """Resolves an executable on PATH, returning its full path or None."""
    return shutil.which(name)


def format_command(args):
    """Renders a command one argument per line, shell-quoted, with line continuations."""
    formatted_command = f"{args[0]}"
    if len(args) > 1:
        formatted_command += " \\\n"
        formatted_command += " \\\n".join([f"    {subprocess.list2cmdline([arg])}" for arg in args[1:]])
    return formatted_command


def exit_status(returncode):
    """Maps a Popen return code to the status a shell would report."""
    if returncode < 0:
        return 128 + -returncode
    return returncode


def run_qemu(args, debug_file=None):
    """Executes the QEMU command with the terminal's stdio and returns its exit status."""
    print("--- Starting QEMU with the following command ---", flush=True)
    print(format_command(args), flush=True)
    print("-" * 50, flush=True)

    try:
        process = subprocess.Popen(args)
    except FileNotFoundError:
        print(f"Error: QEMU executable '{args[0]}' not found.", file=sys.stderr)
        debug_log(debug_file, f"spawn failed: {args[0]} not found")
        return app_config.EXIT_NOT_FOUND
    except OSError as e:
        print(f"Error: Could not start QEMU executable '{args[0]}': {e}", file=sys.stderr)
        debug_log(debug_file, f"spawn failed: {e}")
        return app_config.EXIT_NOT_EXECUTABLE

    debug_log(debug_file, f"spawned pid {process.pid}")
    try:
        returncode = process.wait()
    except KeyboardInterrupt:
        # The child shares our process group and got the same SIGINT; let it finish.
        print("\nInterrupted", flush=True)
        try:
            process.wait()
        except KeyboardInterrupt:
            # A second Ctrl-C stops waiting for QEMU to shut down on its own.
            process.kill()
            process.wait()
        debug_log(debug_file, f"interrupted, child exited with {process.returncode}")
        return app_config.EXIT_INTERRUPTED

    status = exit_status(returncode)
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = str(-returncode)
        print(f"Info: QEMU was terminated by {name}.", file=sys.stderr)
    debug_log(debug_file, f"child exited with returncode {returncode} (status {status})")
    return status

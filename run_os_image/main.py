import argparse
import sys

from . import config as app_config, process
from .launch_config import DEFAULT_CONFIGURATION, LaunchConfiguration
from .logging_utils import debug_log, open_debug_log


def positive_int(value):
    """argparse type for counts that must be at least one."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def split_extra_args(argv):
    """Splits argv at the first '--' into launcher options and pass-through QEMU arguments."""
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1:]
    return argv, []


def build_qemu_args(config):
    """Constructs the list of arguments for the QEMU command."""
    return config.command()


def launch(config=None, dry_run=False, launcher_log=None):
    """
    Boots the OS image and blocks until QEMU exits.

    Returns QEMU's exit status, or the launcher's own failure status when
    QEMU could not be started. Nothing touches the filesystem before the
    executable has been found.
    """
    if config is None:
        config = DEFAULT_CONFIGURATION
    args = build_qemu_args(config)

    if dry_run:
        print(process.format_command(args))
        return 0

    executable = process.find_executable(args[0])
    if not executable:
        print(f"Error: QEMU executable '{args[0]}' not found.", file=sys.stderr)
        print("       Make sure the QEMU system emulator package is installed and on PATH.", file=sys.stderr)
        return app_config.EXIT_NOT_FOUND
    args = [executable] + args[1:]

    try:
        debug_file = open_debug_log(launcher_log)
    except OSError as e:
        print(f"Error: Could not open launcher log '{launcher_log}': {e}", file=sys.stderr)
        return app_config.EXIT_LAUNCHER_ERROR
    try:
        debug_log(debug_file, f"resolved {config.qemu_executable} to {executable}")
        debug_log(debug_file, f"arguments: {args[1:]}")
        return process.run_qemu(args, debug_file)
    finally:
        if debug_file:
            debug_file.close()


def build_parser():
    """Creates the command-line parser; every default comes from config.py."""
    parser = argparse.ArgumentParser(
        description="Boot the OS image in QEMU with the serial console on this terminal.",
        epilog="Arguments after '--' are passed to QEMU unchanged.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--accelerator", default=app_config.ACCELERATOR, help="VM accelerator (e.g., kvm, tcg). Default: %(default)s.")
    parser.add_argument("--machine-type", default=app_config.MACHINE_TYPE, help="QEMU machine type. Default: %(default)s.")
    parser.add_argument("--cpu-model", default=app_config.CPU_MODEL, help="CPU model to emulate. Default: %(default)s.")
    parser.add_argument("--smp-cores", type=positive_int, default=app_config.SMP_CORES, help="Number of CPU cores. Default: %(default)s.")
    parser.add_argument("--memory", default=app_config.MEMORY, help="RAM for the VM. Default: %(default)s.")
    parser.add_argument("--serial", default=app_config.SERIAL, help="Serial port backend. Default: %(default)s.")
    parser.add_argument("--display", default=app_config.DISPLAY, help="QEMU display type. Default: %(default)s.")
    parser.add_argument("--network", default=app_config.NETWORK, help="Legacy '-net' setting. Default: %(default)s.")
    parser.add_argument("--firmware", default=app_config.FIRMWARE_PATH, help="UEFI firmware image. Default: %(default)s.")
    parser.add_argument("--fat-dir", default=app_config.FAT_DIRECTORY, help="Host directory exposed as the FAT boot volume. Default: %(default)s.")
    parser.add_argument("--nvme-image", default=app_config.NVME_IMAGE, help="Raw image backing the NVMe drive. Default: %(default)s.")
    parser.add_argument("--nvme-drive-id", default=app_config.NVME_DRIVE_ID, help="Drive id linking the NVMe image to its controller. Default: %(default)s.")
    parser.add_argument("--nvme-serial", default=app_config.NVME_SERIAL, help="NVMe controller serial number. Default: %(default)s.")
    parser.add_argument("--qemu-log", default=app_config.QEMU_LOG_FILE, help="QEMU debug log ('-D'); empty disables. Default: %(default)s.")
    parser.add_argument("--trace-flags", default=app_config.TRACE_FLAGS, help="QEMU trace categories ('-d'); empty disables. Default: %(default)s.")
    parser.add_argument("--gdb", action="store_true", help="Start the GDB stub on tcp::1234 and halt the CPU until a debugger attaches.")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--dry-run", action="store_true", help="Print the QEMU command without running it.")
    mode.add_argument("--print-args", action="store_true", help="Print the QEMU arguments one per line and exit.")
    parser.add_argument("--launcher-log", metavar="PATH", default=app_config.LAUNCHER_LOG_FILE, help="Write a timestamped launcher trace to PATH.")

    suppressed_args = {
        "qemu_executable": app_config.QEMU_EXECUTABLE,
    }
    for arg, default_val in suppressed_args.items():
        cli_arg = f"--{arg.replace('_', '-')}"
        parser.add_argument(cli_arg, default=default_val, help=argparse.SUPPRESS)
    return parser


def main(argv=None):
    """Parses command-line arguments and launches the VM."""
    if argv is None:
        argv = sys.argv[1:]
    launcher_argv, extra_args = split_extra_args(list(argv))

    parser = build_parser()
    args = parser.parse_args(launcher_argv)
    options = vars(args)
    options["extra_args"] = extra_args
    config = LaunchConfiguration.from_options(options)

    if args.print_args:
        print("\n".join(config.to_args()))
        sys.exit(0)

    sys.exit(launch(config, dry_run=args.dry_run, launcher_log=args.launcher_log))

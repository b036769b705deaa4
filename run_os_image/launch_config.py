"""
The launch configuration for the OS image VM.

A LaunchConfiguration is an immutable description of one QEMU invocation.
Its defaults come from config.py; rendering it always yields the QEMU flags
in the same order, whatever values were overridden.
"""

from dataclasses import dataclass, field, fields, replace

from . import config as app_config


@dataclass(frozen=True)
class LaunchConfiguration:
    qemu_executable: str = app_config.QEMU_EXECUTABLE
    accelerator: str = app_config.ACCELERATOR
    no_reboot: bool = app_config.NO_REBOOT
    machine_type: str = app_config.MACHINE_TYPE
    cpu_model: str = app_config.CPU_MODEL
    smp_cores: int = app_config.SMP_CORES
    memory: str = app_config.MEMORY
    serial: str = app_config.SERIAL
    display: str = app_config.DISPLAY
    network: str = app_config.NETWORK
    firmware: str = app_config.FIRMWARE_PATH
    fat_dir: str = app_config.FAT_DIRECTORY
    nvme_image: str = app_config.NVME_IMAGE
    nvme_drive_id: str = app_config.NVME_DRIVE_ID
    nvme_serial: str = app_config.NVME_SERIAL
    qemu_log: str = app_config.QEMU_LOG_FILE
    trace_flags: str = app_config.TRACE_FLAGS
    gdb: bool = False
    extra_args: tuple = field(default_factory=tuple)

    @classmethod
    def from_options(cls, options):
        """Builds a configuration from a dict, ignoring keys that are not fields and None values."""
        names = {f.name for f in fields(cls)}
        values = {k: v for k, v in options.items() if k in names and v is not None}
        if "extra_args" in values:
            values["extra_args"] = tuple(values["extra_args"])
        return cls(**values)

    def with_overrides(self, **overrides):
        """Returns a copy with the given fields replaced."""
        return replace(self, **overrides)

    def to_args(self):
        """Renders the QEMU arguments, without the executable, in their fixed order."""
        args = ["-accel", self.accelerator]
        if self.no_reboot:
            args.append("-no-reboot")
        args.extend([
            "-machine", self.machine_type,
            "-cpu", self.cpu_model,
            "-smp", str(self.smp_cores),
            "-m", self.memory,
            "-serial", self.serial,
            "-display", self.display,
            "-net", self.network,
            "-bios", self.firmware,
            "-drive", f"format=raw,file=fat:rw:{self.fat_dir}",
            "-drive", f"format=raw,file={self.nvme_image},id={self.nvme_drive_id},if=none",
            "-device", f"nvme,drive={self.nvme_drive_id},serial={self.nvme_serial}",
        ])
        # An empty log path or flag list drops the pair entirely.
        if self.qemu_log:
            args.extend(["-D", self.qemu_log])
        if self.trace_flags:
            args.extend(["-d", self.trace_flags])
        if self.gdb:
            args.extend(app_config.GDB_ARGS)
        args.extend(self.extra_args)
        return args

    def command(self):
        """Returns the executable followed by its arguments."""
        return [self.qemu_executable] + self.to_args()


DEFAULT_CONFIGURATION = LaunchConfiguration()

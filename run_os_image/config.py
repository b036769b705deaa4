# --- Global Configuration & Executable Paths ---

# Path to the launcher's own debug log file, if enabled via command line.
LAUNCHER_LOG_FILE = None

# The QEMU system emulator binary, looked up on PATH.
QEMU_EXECUTABLE = "qemu-system-x86_64"

# --- Machine Configuration ---

# The hardware virtualization framework to use; the guest expects KVM.
ACCELERATOR = "kvm"
# Halt instead of resetting when the guest triple-faults.
NO_REBOOT = True
# The chipset QEMU will emulate; q35 provides PCIe for the NVMe controller.
MACHINE_TYPE = "q35"
# The CPU model to emulate; 'host' passes through the host CPU features.
CPU_MODEL = "host"
# The number of virtual CPU cores for the guest system.
SMP_CORES = 2
# The amount of RAM to allocate to the virtual machine.
MEMORY = "64M"

# --- Console Configuration ---

# Multiplex the QEMU monitor and the guest serial port onto the terminal.
SERIAL = "mon:stdio"
# No graphical output; everything goes through the serial console.
DISPLAY = "none"
# No virtual network interfaces.
NETWORK = "none"

# --- Firmware & Storage Configuration ---

# The UEFI firmware image loaded at boot.
FIRMWARE_PATH = "./ovmf.fd"
# Host directory exposed to the guest as a writable FAT boot volume.
FAT_DIRECTORY = "./.hdd/image/"
# Raw disk image backing the NVMe drive.
NVME_IMAGE = "./.hdd/nvme.img"
# Drive id tying the NVMe backing image to its controller.
NVME_DRIVE_ID = "nvm"
# Serial number reported by the virtual NVMe controller.
NVME_SERIAL = "deadbeef"

# --- QEMU Debug Logging ---

# Destination for QEMU's own trace output; created by QEMU, not the launcher.
QEMU_LOG_FILE = ".debug/qemu_debug.log"
# Trace categories passed to '-d'.
TRACE_FLAGS = "int,guest_errors"

# --- GDB Stub ---

# Arguments enabling the GDB stub on tcp::1234 with the CPU halted at start.
GDB_ARGS = ["-s", "-S"]

# --- Exit Codes ---
EXIT_LAUNCHER_ERROR = 1
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126
EXIT_INTERRUPTED = 130

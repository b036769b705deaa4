import os
import stat

import pytest


FAKE_QEMU_SCRIPT = """#!/bin/sh
echo "=== $$" >> "$FAKE_QEMU_RECORD"
printf '%s\\n' "$@" >> "$FAKE_QEMU_RECORD"
prev=""
for arg in "$@"; do
    if [ "$prev" = "-bios" ] && [ ! -f "$arg" ]; then
        echo "qemu-system-x86_64: could not load PC BIOS '$arg'" >&2
        exit 1
    fi
    prev="$arg"
done
if [ -n "$FAKE_QEMU_SIGNAL" ]; then
    kill -"$FAKE_QEMU_SIGNAL" $$
fi
exit "${FAKE_QEMU_EXIT:-0}"
"""


@pytest.fixture
def fake_qemu(tmp_path, monkeypatch):
    """
    Installs a stand-in qemu-system-x86_64 on an isolated PATH.

    The script records each invocation in a file, fails like QEMU when the
    '-bios' file is missing, and otherwise exits with $FAKE_QEMU_EXIT.
    The working directory is a fresh directory holding ./ovmf.fd.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "qemu-system-x86_64"
    script.write_text(FAKE_QEMU_SCRIPT)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    record = tmp_path / "invocations.txt"
    workdir = tmp_path / "work"
    workdir.mkdir()
    (workdir / "ovmf.fd").write_bytes(b"\0" * 16)

    monkeypatch.setenv("PATH", str(bin_dir))
    monkeypatch.setenv("FAKE_QEMU_RECORD", str(record))
    monkeypatch.delenv("FAKE_QEMU_EXIT", raising=False)
    monkeypatch.delenv("FAKE_QEMU_SIGNAL", raising=False)
    monkeypatch.chdir(workdir)
    return record


@pytest.fixture
def invocations(fake_qemu):
    """Returns a reader for the fake QEMU record as a list of (pid, args) tuples."""
    def read():
        return read_invocations(fake_qemu)
    return read


def read_invocations(record):
    """Parses the fake QEMU record into a list of (pid, args) tuples."""
    invocations = []
    if not os.path.exists(record):
        return invocations
    with open(record) as f:
        for line in f.read().splitlines():
            if line.startswith("=== "):
                invocations.append((line[4:], []))
            else:
                invocations[-1][1].append(line)
    return invocations

#!/usr/bin/env python3
"""
This script serves as the executable entry point for the run-os-image application.

It adds the project's root directory to the Python path so the `run_os_image`
package can be imported without installation, then runs `run_os_image.main`.
"""

import sys
from pathlib import Path

# The script is in `bin/`, so the project root is two levels up.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from run_os_image.main import main

if __name__ == "__main__":
    main()

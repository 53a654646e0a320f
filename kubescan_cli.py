#!/usr/bin/env python3
"""
KubeScan

Main executable entry point for runtime resolution.
This script runs the CLI and exits with appropriate status codes.

Usage:
    ./kubescan_cli.py [options]
    python3 kubescan_cli.py [options]

Exit Codes:
    0 - All components resolved, no warnings
    1 - Fatal error (required component not running, unreadable config path)
    2 - Resolved with warnings (missing config file, unexpected version)

Examples:
    # Resolve the master node components
    sudo ./kubescan_cli.py --target master --pretty

    # Resolve worker components and substitute a check command
    sudo ./kubescan_cli.py -t node -r 'ps -ef | grep $kubeletbin'

    # Only a few components, with debug diagnostics
    ./kubescan_cli.py --components apiserver,etcd -vv
"""

import sys
from kubescan.cli import main

if __name__ == "__main__":
    sys.exit(main())

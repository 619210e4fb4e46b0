"""
Check Site Layout

This script prints the effective routing configuration and checks that the
static root and the fallback file exist. The server itself does not check
them at startup.

Usage:
    python scripts/check_site.py
"""

import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import Config


def check(settings) -> list:
    """
    Collect problems with the site layout.

    Returns:
        List of human readable problems (empty when the layout is usable)
    """
    problems = []
    if not os.path.isdir(settings.static_root):
        problems.append(f"Static root is not a directory: {settings.static_root}")
    if not os.path.isfile(settings.fallback_file):
        problems.append(f"Fallback file does not exist: {settings.fallback_file}")
    return problems


def main():
    """Check the configured site layout."""
    settings = Config.router_settings()

    print("=" * 60)
    print("Site Layout Check")
    print("=" * 60)
    print(f"Variant: {Config.SERVER_VARIANT}")
    print(f"API Prefix: {settings.api_prefix}")
    print(f"Static Root: {settings.static_root}")
    print(f"Fallback File: {settings.fallback_file} ({settings.fallback_status})")
    print("=" * 60)

    problems = check(settings)
    if problems:
        for problem in problems:
            print(f"✗ {problem}")
        sys.exit(1)

    print("✓ Site layout is ready to serve")


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nCancelled by user")
        sys.exit(1)

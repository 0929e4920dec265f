#!/usr/bin/env python3
import sys

try:
    import requests  # noqa: F401
except ImportError:
    print('The "requests" package is required. Install it with "pip install requests".')
    sys.exit(1)

from readme_activity.cli import main

if __name__ == '__main__':
    sys.exit(main())

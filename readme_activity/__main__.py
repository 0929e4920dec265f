import sys

from readme_activity.cli import main

sys.exit(main())

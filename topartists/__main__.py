import sys

from topartists.cli import main

sys.exit(main())

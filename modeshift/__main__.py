import sys

from modeshift.main import main

sys.exit(main())

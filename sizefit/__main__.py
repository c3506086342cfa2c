import sys

from sizefit.cli import main

sys.exit(main())

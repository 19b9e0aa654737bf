import sys

from noisimation.cli import main

sys.exit(main())

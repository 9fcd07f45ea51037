import sys

from raster_tools.cli import main

sys.exit(main())

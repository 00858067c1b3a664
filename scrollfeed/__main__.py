import sys

from scrollfeed.main import main

sys.exit(main())

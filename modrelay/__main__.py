import sys

from modrelay.main import main

sys.exit(main())

import sys

from keikaku.cli import main

sys.exit(main())

import sys

from mrsequential.cli import main

sys.exit(main())

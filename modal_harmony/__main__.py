import sys

from modal_harmony.cli import main

sys.exit(main())

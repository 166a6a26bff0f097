import sys
from notesh.cli import main

sys.exit(main())

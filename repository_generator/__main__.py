import sys

from repository_generator.cli import main

sys.exit(main())

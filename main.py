import sys

from creative_analyzer.handlers.cli import main

if __name__ == "__main__":
    sys.exit(main())

import sys

from src.mathlib.cli import main

sys.exit(main())

"""
This is an interpreter for the SLogo turtle-graphics language.

    py -m slogo program.logo

does the same as the `slogo` console command.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from slogo.cmdline import main

main()

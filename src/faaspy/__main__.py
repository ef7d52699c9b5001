"""``python -m faaspy``."""

from faaspy.cli import main

main()

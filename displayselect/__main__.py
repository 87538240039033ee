"""Allow `python -m displayselect`"""

from displayselect.cli import main

main()

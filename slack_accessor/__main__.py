"""Package entry point for ``python -m slack_accessor``.

WHY: Lets users run the CLI without installing the console script.

HOW: Delegates to the CLI's main() function.
"""

from slack_accessor.cli import main

if __name__ == "__main__":
    main()

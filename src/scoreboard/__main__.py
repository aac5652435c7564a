"""Entry point for running scoreboard as a module.

Usage:
    python -m scoreboard
"""

from scoreboard.app import main

if __name__ == "__main__":
    main()

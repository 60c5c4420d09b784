"""
Entry point for running crossplan as a module.

Usage: python -m crossplan [command] [options]
"""

from crossplan.cli.parser import main

if __name__ == "__main__":
    main()

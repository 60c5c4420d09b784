"""
Entry point for running crossplan CLI as a module.

Usage: python -m crossplan.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()

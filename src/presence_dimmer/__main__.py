"""
Entry point for running the presence dimmer as a module.

Usage:
    python -m presence_dimmer [-c presence.yaml]
"""

from .cli import main

if __name__ == "__main__":
    main()

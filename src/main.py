"""Entry point for the Color Match puzzle.

Builds the session engine and opens the Arcade window.
"""
from colormatch.app import main

if __name__ == "__main__":
    main()

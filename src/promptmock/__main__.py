"""
promptmock package entry point.

Allows running promptmock as a module:
    python -m promptmock
"""

from promptmock.cli import main

if __name__ == "__main__":
    main()

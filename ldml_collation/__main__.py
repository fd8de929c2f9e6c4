"""Package entry point for ``python -m ldml_collation``.

Delegates to the CLI's main() function.
"""

from ldml_collation.cli import main

if __name__ == "__main__":
    main()

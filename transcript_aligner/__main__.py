"""Package entry point for ``python -m transcript_aligner``.

WHY: Users run the aligner as ``python -m transcript_aligner machine.json
corrected.txt``. Python's ``-m`` flag looks for ``__main__.py`` inside the
package and executes it.

HOW: Delegates to the CLI's main() function.
"""

from transcript_aligner.cli import main

if __name__ == "__main__":
    main()

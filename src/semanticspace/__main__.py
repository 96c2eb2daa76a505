"""
Run with: python -m semanticspace [DATASET.json]
"""
import sys

from semanticspace.main import main

if __name__ == "__main__":
    sys.exit(main())

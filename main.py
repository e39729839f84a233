#!/usr/bin/env python3
"""NatDate - Natural Language Date Suggestions

Entry point for the NatDate console.
"""

import sys
from pathlib import Path

# Adding src to path for development
sys.path.insert(0, str(Path(__file__).parent / "src"))


if __name__ == "__main__":
    from natdate.cli import main
    sys.exit(main())

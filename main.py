"""
HSK Study — Entry point
========================
Launch the application.
"""

import logging
import os
import sys

# Ensure project root is on the path so absolute imports work when running
# directly with `python main.py`.
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ui.app import HSKStudyApp


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    app = HSKStudyApp()
    app.mainloop()


if __name__ == "__main__":
    main()

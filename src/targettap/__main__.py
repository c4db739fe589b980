"""Entry point for `python -m targettap`."""

import logging

from targettap import main

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
)

if __name__ == "__main__":
    main()

# boxworld/logger.py
# ---------------------------------------------------------------
# Единый логгер пакета.
# ---------------------------------------------------------------

import logging


def init_logger():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return logging.getLogger("boxworld")


logger = init_logger()

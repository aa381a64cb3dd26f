import logging

import uvicorn

from itemsvc.config import HOST, LOG_LEVEL, PORT
from itemsvc.main import create_app


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # uvicorn exits the process with a non-zero status if it cannot bind.
    uvicorn.run(create_app(), host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()

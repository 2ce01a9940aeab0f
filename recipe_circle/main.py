import logging

import uvicorn

from .config import Env, get_config


def main():
    config = get_config()
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "recipe_circle.app:app",
        host="127.0.0.1",
        port=8000,
        reload=config.env == Env.local,
    )


if __name__ == "__main__":
    main()

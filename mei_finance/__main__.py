"""Run the API with uvicorn: python -m mei_finance"""

import uvicorn

from mei_finance.config import settings


def main() -> None:
    uvicorn.run("mei_finance.api.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()

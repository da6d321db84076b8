"""Run the API with uvicorn: ``python -m tripsplit``."""
import uvicorn

from tripsplit.config import HOST, PORT, LOG_LEVEL


def main():
    uvicorn.run("tripsplit.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()

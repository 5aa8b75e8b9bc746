"""Main entry point for the reference manager."""
import logging
import sys

from .config import Config
from .repository import Repository
from .session import Session
from .storage import CsvStorage
from .utils.logging_setup import setup_logging


def main() -> int:
    """Main program entry point."""
    config = Config.from_env()

    # Set up logging
    setup_logging(config.LOG_DIR, config.LOG_LEVEL)

    storage = CsvStorage(config.REFERENCES_FILE, config.PROJECTS_FILE)
    session = Session(Repository(storage), default_ref_type=config.DEFAULT_REF_TYPE)

    logging.info("Reference manager started")
    try:
        session.start()
        session.run()
    except KeyboardInterrupt:
        print("\nProgram terminated by user.")
    except EOFError:
        print("\nInput closed.")
    except Exception as e:
        logging.exception(f"Unexpected error: {e}")
        print("An unexpected error occurred. Check the logs for details.")
        return 1
    finally:
        logging.info("Reference manager finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())

# main.py
import argparse
import logging
import signal
import sys

from logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _handle_sigterm(signum, frame):
    logger.info("SIGTERM received, shutting down...")
    sys.exit(0)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Scrape RootData fundraising rounds and sync them to Airtable")
    parser.add_argument("--serve", action="store_true", help="run the cron HTTP endpoint instead of a single pass")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    setup_logging()
    signal.signal(signal.SIGTERM, _handle_sigterm)

    if args.serve:
        import uvicorn
        from api import app

        uvicorn.run(app, host=args.host, port=args.port)
        return 0

    from pipeline import run_scrape_pass

    result = run_scrape_pass()
    logger.info("Pass finished: %s", result.model_dump())
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())

from cgroupmon.cli import cli
import os
import logging
import pathlib
from dotenv import load_dotenv
from cgroupmon.internal.settings import Settings


def main():
    os.environ["APP_INSTALLDIR"] = os.path.dirname(os.path.abspath(__file__))
    load_dotenv(
        pathlib.Path(os.getenv("APP_INSTALLDIR")).joinpath(".env"),
        override=True,
    )
    try:
        Settings.read_environments()
    except ValueError as e:
        raise SystemExit(f"Error: invalid configuration: {e}")
    logging.basicConfig(
        level=Settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cli()


if __name__ == "__main__":
    main()

import logging
import sys
from typing import Sequence

from topartists.config import build_parser, load_config
from topartists.errors import TopArtistsError
from topartists.formatter import construct_output
from topartists.lastfm_client import LastFMClient

logger = logging.getLogger(__name__)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def configure_logging(verbosity: int = 0) -> None:
    # stderr only; stdout carries nothing but the sentence.
    logging.basicConfig(
        level=LOG_LEVELS.get(verbosity, logging.DEBUG),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )


def run(argv: Sequence[str] | None = None, client: LastFMClient | None = None) -> str:
    """Resolve config, fetch the user's top artists and return the formatted sentence."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    config = load_config(args=args)
    client = client or LastFMClient()
    response = client.get_top_artists(config)
    return construct_output(config, response)


def main(argv: Sequence[str] | None = None, client: LastFMClient | None = None) -> int:
    # The sentence always carries ♫; don't depend on the console code page.
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")

    try:
        output = run(argv, client)
    except TopArtistsError as exc:
        logger.debug("Aborting after %s.", type(exc).__name__, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

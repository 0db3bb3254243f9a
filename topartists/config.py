import argparse
import logging
import os
from typing import Mapping, Sequence

from dotenv import dotenv_values
from pydantic import ValidationError

from topartists import __version__
from topartists.errors import ConfigValidationError
from topartists.formatter import period_phrase
from topartists.models import DEFAULT_LIMIT, DEFAULT_PERIOD, Config

logger = logging.getLogger(__name__)

DOTFILE_PATH = os.getenv(
    "LASTFM_TOP_ARTISTS_CONFIG",
    os.path.join(os.path.expanduser("~"), ".config", "lastfm-top-artists", ".env"),
)
LOCAL_DOTFILE = ".env"

# setting name -> environment variable
ENV_VARS = {
    "api_key": "API_KEY",
    "username": "USERNAME",
    "limit": "LIMIT",
    "period": "PERIOD",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lastfm-top-artists",
        description="Print a shareable sentence with your most played Last.fm artists.",
    )
    # Defaults stay None so environment and dotfile values can fill the gaps.
    parser.add_argument("-k", "--api-key", help="Your Last.fm API key [env: API_KEY]")
    parser.add_argument("-u", "--username", help="Your Last.fm username [env: USERNAME]")
    parser.add_argument(
        "-l", "--limit", type=int, help=f"Number of artists to list [env: LIMIT] (default: {DEFAULT_LIMIT})"
    )
    parser.add_argument(
        "-p",
        "--period",
        help=(
            "Lookback period: overall, 7day, 1month, 3month, 6month or 12month "
            f"[env: PERIOD] (default: {DEFAULT_PERIOD})"
        ),
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log progress to stderr (-vv for debug output)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def read_dotfiles(*paths: str) -> dict[str, str]:
    """Merge KEY=value files; earlier paths win. Missing files are skipped."""
    merged: dict[str, str] = {}
    for path in reversed(paths):
        if not os.path.isfile(path):
            logger.debug("No config file at %s.", path)
            continue
        try:
            values = {k: v for k, v in dotenv_values(path).items() if v is not None}
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigValidationError("config", f"Could not read config file {path}: {exc}") from exc
        logger.debug("Loaded %d setting(s) from %s.", len(values), path)
        merged.update(values)
    return merged


def resolve(args: argparse.Namespace, environ: Mapping[str, str], dotfile: Mapping[str, str]) -> Config:
    """Combine flag, environment and dotfile values (in that order of precedence) into a Config."""
    values: dict[str, object] = {}
    for field, env_name in ENV_VARS.items():
        flag_value = getattr(args, field)
        if flag_value is not None:
            values[field] = flag_value
            continue
        raw = environ.get(env_name) or dotfile.get(env_name)
        if raw:
            values[field] = raw.strip()

    for required in ("api_key", "username"):
        value = values.get(required)
        if not isinstance(value, str) or not value.strip():
            raise ConfigValidationError(required)

    limit = values.get("limit", DEFAULT_LIMIT)
    if isinstance(limit, str):
        try:
            limit = int(limit)
        except ValueError:
            raise ConfigValidationError("limit", f"LIMIT must be a whole number, got '{limit}'.") from None
    if limit < 1:
        raise ConfigValidationError("limit", f"limit must be at least 1, got {limit}.")
    values["limit"] = limit

    try:
        config = Config(**values)
    except ValidationError as exc:
        field = str(exc.errors()[0]["loc"][0]) if exc.errors() else "config"
        raise ConfigValidationError(field, f"Invalid setting '{field}': {exc.errors()[0]['msg']}") from exc

    # Fail before any request goes out; the formatter checks the same table.
    period_phrase(config.period)
    return config


def load_config(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    dotfile: str | None = None,
    local_dotfile: str | None = None,
    args: argparse.Namespace | None = None,
) -> Config:
    """
    Parse the command line into the run's Config.

    Flags take precedence over the process environment, which takes precedence
    over a .env in the working directory and then the per-user dotfile.
    Pass `args` when the command line has already been parsed.
    """
    if args is None:
        args = build_parser().parse_args(argv)
    if environ is None:
        environ = os.environ
    dotfiles = read_dotfiles(local_dotfile or LOCAL_DOTFILE, dotfile or DOTFILE_PATH)
    config = resolve(args, environ, dotfiles)
    logger.info("Config resolved: %r", config)
    return config

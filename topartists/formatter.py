import logging
from typing import Any

from topartists.errors import InvalidPeriodError, MalformedResponseError, MissingFieldError
from topartists.models import ArtistRecord, Config

logger = logging.getLogger(__name__)

PERIOD_PHRASES = {
    "overall": "",
    "7day": " week",
    "1month": " month",
    "3month": " 3 months",
    "6month": " 6 months",
    "12month": " year",
}

HEADER = "♫ My Top {limit} played artists in the past{phrase}:"
ENTRY = " {name} ({playcount}){punctuation}"
SUFFIX = ". Via #LastFM ♫"


def period_phrase(period: str) -> str:
    """Return the words that follow "in the past" for a Last.fm period code."""
    try:
        return PERIOD_PHRASES[period]
    except KeyError:
        raise InvalidPeriodError(period) from None


def punctuation(index: int, count: int) -> str:
    """
    Token appended after the entry at zero-based `index` of a `count`-long list.

    Produces "A, B, C & D": a comma up to the third-from-last entry, " &"
    after the second-to-last and nothing after the last. Signed arithmetic,
    so for count < 3 the comma rule never matches.
    """
    if index <= count - 3:
        return ","
    if index == count - 2:
        return " &"
    return ""


def parse_artists(response: Any) -> list[ArtistRecord]:
    """Pull topartists.artist out of a decoded response, validating every entry."""
    top = response.get("topartists") if isinstance(response, dict) else None
    artists = top.get("artist") if isinstance(top, dict) else None
    if not isinstance(artists, list):
        raise MalformedResponseError("Error parsing Last.fm response: 'topartists.artist' is missing or not a list.")

    records: list[ArtistRecord] = []
    for i, raw in enumerate(artists):
        if not isinstance(raw, dict):
            raise MissingFieldError("name", i)

        name = raw.get("name")
        if not isinstance(name, str):
            raise MissingFieldError("name", i)

        playcount = raw.get("playcount")
        # bool is an int subclass; true/false is not a playcount.
        if isinstance(playcount, int) and not isinstance(playcount, bool):
            playcount = str(playcount)
        if not isinstance(playcount, str) or not playcount.isdecimal():
            raise MissingFieldError("playcount", i)

        records.append(ArtistRecord(name=name, playcount=playcount))
    return records


def construct_output(config: Config, response: Any) -> str:
    """
    Render the summary sentence for `config` from a decoded user.gettopartists response.

    Raises a FormatError subclass on an unknown period, a response without
    topartists.artist, or an artist entry lacking name/playcount. Nothing is
    returned unless every entry is valid.
    """
    phrase = period_phrase(config.period)
    artists = parse_artists(response)

    # Last.fm returns fewer artists than asked for when the user has few
    # scrobbles in the period; the ampersand goes before the last one shown.
    count = min(config.limit, len(artists))
    if len(artists) != config.limit:
        logger.info("Asked for %d artist(s), Last.fm returned %d.", config.limit, len(artists))

    parts = [HEADER.format(limit=config.limit, phrase=phrase)]
    for i, artist in enumerate(artists):
        parts.append(
            ENTRY.format(
                name=artist.name,
                playcount=artist.playcount,
                punctuation=punctuation(i, count),
            )
        )
    parts.append(SUFFIX)
    return "".join(parts)

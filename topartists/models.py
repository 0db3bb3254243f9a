from pydantic import BaseModel, Field

DEFAULT_LIMIT = 5
DEFAULT_PERIOD = "7day"


class Config(BaseModel):
    """Settings for one run, resolved from flags, environment and dotfile."""

    api_key: str = Field(min_length=1)
    username: str = Field(min_length=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    # Kept as the raw string; the period table in formatter decides validity.
    period: str = DEFAULT_PERIOD

    model_config = {"frozen": True}

    def __repr__(self) -> str:
        return f"<Config username={self.username!r} limit={self.limit} period={self.period!r}>"


class ArtistRecord(BaseModel):
    """One entry of topartists.artist in the Last.fm response."""

    name: str
    playcount: str

    model_config = {"frozen": True}

# cloudflare_bypass/config.py
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env is looked up in the current working directory, like any host application
ENV_FILE_PATH = Path(".env")

DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.5"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36 Edg/127.0.0.0"
)


class Options(BaseModel):
    """
    Header injection options for the bypass adapter.

    Names in `headers` are matched case-insensitively against the
    request headers; a header already on the request is never replaced.
    """
    model_config = ConfigDict(frozen=True)

    add_missing_headers: bool = Field(default=True)
    headers: dict[str, str] = Field(default_factory=dict)


def get_default_options() -> Options:
    """Returns a fresh Options value with the browser-like default headers."""
    return Options(
        add_missing_headers=True,
        headers={
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": DEFAULT_ACCEPT_LANGUAGE,
            "User-Agent": DEFAULT_USER_AGENT,
        },
    )


class BypassSettings(BaseSettings):
    """
    Options loaded from the environment.

    Reads variables with the CF_BYPASS_ prefix, e.g.
    CF_BYPASS_ADD_MISSING_HEADERS=false or
    CF_BYPASS_HEADERS='{"User-Agent": "..."}'.
    Nothing in the package reads this implicitly.
    """
    model_config = SettingsConfigDict(
        env_prefix="CF_BYPASS_",
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    add_missing_headers: bool = Field(default=True)
    # None -> the default browser header set
    headers: dict[str, str] | None = Field(default=None)

    def to_options(self) -> Options:
        headers = self.headers
        if headers is None:
            headers = get_default_options().headers
        return Options(add_missing_headers=self.add_missing_headers, headers=dict(headers))

import re

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_BOT_PATTERN = (
    "bot|crawler|spider|facebook|meta|whatsapp|discord|twitter|slack|"
    "telegram|preview|vkShare|skype|linkedin"
)

ALLOWED_REDIRECT_CODES = frozenset({301, 302, 303, 307, 308})


def _check_regex(value: str) -> str:
    try:
        re.compile(value)
    except re.error as e:
        raise ValueError(f"invalid regular expression {value!r}: {e}") from e
    return value


class LinksRules(BaseModel):
    slug_pattern: str = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
    slug_pattern_ignore_case: bool = True
    reserved_slugs: list[str] = Field(default_factory=lambda: ["dashboard"])
    key_prefix: str = "link:"
    cache_ttl_seconds: int = Field(default=60, ge=0)
    case_sensitive: bool = False
    home_url: str | None = None

    @field_validator("slug_pattern")
    @classmethod
    def check_slug_pattern(cls, value: str) -> str:
        return _check_regex(value)


class RedirectRules(BaseModel):
    status_code: int = 301
    home_status_code: int = 302
    with_query: bool = False
    mode: str = "http"

    @field_validator("status_code", "home_status_code")
    @classmethod
    def check_redirect_code(cls, value: int) -> int:
        if value not in ALLOWED_REDIRECT_CODES:
            raise ValueError(f"redirect status must be one of {sorted(ALLOWED_REDIRECT_CODES)}")
        return value

    @field_validator("mode")
    @classmethod
    def check_mode(cls, value: str) -> str:
        if value not in ("http", "script"):
            raise ValueError("redirect.mode must be 'http' or 'script'")
        return value


class ClientsRules(BaseModel):
    bot_pattern: str = DEFAULT_BOT_PATTERN

    @field_validator("bot_pattern")
    @classmethod
    def check_bot_pattern(cls, value: str) -> str:
        return _check_regex(value)


class TrafficSplitRules(BaseModel):
    enabled: bool = False
    exempt_locale: str = "ID"
    alternate_url: str | None = None
    locale_header: str = "cf-ipcountry"
    treat_missing_locale_as_exempt: bool = True

    @model_validator(mode="after")
    def check_alternate_url(self) -> "TrafficSplitRules":
        if self.enabled and not self.alternate_url:
            raise ValueError("traffic_split.alternate_url is required when enabled")
        return self


class PreviewRules(BaseModel):
    site_name: str = "Linkgate"
    default_title: str = "Linkgate"
    default_description: str = ""
    default_image: str = ""
    fb_app_id: str | None = None
    keywords: str = "article, website, shorturl"
    twitter_card: str = "summary_large_image"


class AccessLogRules(BaseModel):
    enabled: bool = True
    backend: str = "sqlite"

    @field_validator("backend")
    @classmethod
    def check_backend(cls, value: str) -> str:
        if value not in ("sqlite", "log"):
            raise ValueError("access_log.backend must be 'sqlite' or 'log'")
        return value


class Rules(BaseModel):
    links: LinksRules = Field(default_factory=LinksRules)
    redirect: RedirectRules = Field(default_factory=RedirectRules)
    clients: ClientsRules = Field(default_factory=ClientsRules)
    traffic_split: TrafficSplitRules = Field(default_factory=TrafficSplitRules)
    preview: PreviewRules = Field(default_factory=PreviewRules)
    access_log: AccessLogRules = Field(default_factory=AccessLogRules)

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

# --- Links ---


class Link(BaseModel):
    """A stored short link. Read-only to this service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    slug: str
    url: str = ""
    title: str | None = None
    description: str | None = None
    image: str | None = None
    created_at: int | None = Field(default=None, alias="createdAt")

    @property
    def is_redirectable(self) -> bool:
        return bool(self.url and self.url.strip())


# --- Requests ---


@dataclass(frozen=True)
class ResolutionRequest:
    """Everything the engine reads from one inbound request."""

    path: str
    user_agent: str = ""
    locale: str | None = None
    query: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    url: str = ""
    referer: str | None = None

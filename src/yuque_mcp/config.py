"""Process defaults and per-call repository configuration."""

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from yuque_mcp.errors import ConfigMissingError

YUQUE_DOMAIN = "yuque.com"


@dataclass(frozen=True)
class YuqueSettings:
    """Process-wide defaults, built once at startup."""
    space_subdomain: str = ""
    api_token: str = ""
    default_group_login: str = ""
    default_book_slug: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "YuqueSettings":
        """Read defaults from the environment (or the given mapping)."""
        env = os.environ if environ is None else environ
        return cls(
            space_subdomain=env.get("YUQUE_SPACE_SUBDOMAIN", ""),
            api_token=env.get("DEFAULT_API_TOKEN", ""),
            default_group_login=env.get("DEFAULT_GROUP_LOGIN", ""),
            default_book_slug=env.get("DEFAULT_BOOK_SLUG", ""),
        )


@dataclass(frozen=True)
class RepoConfig:
    """Everything one remote call needs to address a knowledge base."""
    space_subdomain: str
    api_token: str
    group_login: str
    book_slug: str

    @property
    def base_url(self) -> str:
        return (
            f"https://{self.space_subdomain}.{YUQUE_DOMAIN}/api/v2/repos/"
            f"{self.group_login}/{self.book_slug}"
        )

    def missing(self) -> List[str]:
        """Names of the fields that are still empty."""
        fields = [
            ("space_subdomain", self.space_subdomain),
            ("api_token", self.api_token),
            ("group_login", self.group_login),
            ("book_slug", self.book_slug),
        ]
        return [name for name, value in fields if not value]

    def require(self) -> "RepoConfig":
        """Return self, or raise ConfigMissingError if any field is empty."""
        missing = self.missing()
        if missing:
            raise ConfigMissingError(missing)
        return self


def resolve_config(
    settings: YuqueSettings,
    group_login: Optional[str] = None,
    book_slug: Optional[str] = None,
    space_subdomain: Optional[str] = None,
) -> RepoConfig:
    """Merge call arguments over process defaults.

    Empty or None arguments fall through to the default; a value absent from
    both ends up as an empty string.
    """
    return RepoConfig(
        space_subdomain=space_subdomain or settings.space_subdomain or "",
        api_token=settings.api_token or "",
        group_login=group_login or settings.default_group_login or "",
        book_slug=book_slug or settings.default_book_slug or "",
    )

"""Shared fixtures for responsive privacy tests."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

from responsive_privacy.core.config import CollectionConfig, PrivacyConfig
from responsive_privacy.core.context import PRIVACY_LEVEL_ENV_VAR, DisclosureContext, create_context


@pytest.fixture
def team_fields() -> dict[str, str]:
    """Field mapping for a "team" collection."""
    return {
        "name": "ID-01",  # threshold 2, replaced with "Staff Member"
        "photo": "ID-02",  # threshold 2, omitted
        "role": "ID-03",  # threshold 1
        "bio": "ID-04",  # threshold 3, omitted
        "email": "CV-01",  # threshold 4, replaced with "Contact the organization"
        "department": "OR-01",  # threshold 1
    }


@pytest.fixture
def posts_fields() -> dict[str, str]:
    """Field mapping for a "posts" collection."""
    return {
        "author": "ID-01",
        "byline": "AD-05",  # threshold 2, replaced with "Organization Staff"
        "publishDate": "AD-03",  # threshold 2
    }


@pytest.fixture
def team_config(team_fields: dict[str, str], posts_fields: dict[str, str]) -> PrivacyConfig:
    """Operator config mapping the team and posts collections."""
    return PrivacyConfig(
        collections={
            "team": CollectionConfig(fields=team_fields),
            "posts": CollectionConfig(fields=posts_fields),
        }
    )


@pytest.fixture
def team_member() -> dict[str, Any]:
    """A team member record; slug is unmapped and always passes through."""
    return {
        "name": "Jane Smith",
        "photo": "/images/jane.jpg",
        "role": "Program Director",
        "bio": "Jane has 15 years of experience in humanitarian response.",
        "email": "jane@example.org",
        "department": "Programs",
        "slug": "jane-smith",
    }


@pytest.fixture
def blog_post() -> dict[str, Any]:
    return {
        "title": "Field notes",
        "author": "Jane Smith",
        "byline": "By Jane Smith",
        "publishDate": "2025-03-01",
    }


@pytest.fixture
def context_at(team_config: PrivacyConfig) -> Callable[[int], DisclosureContext]:
    """Factory building a context for the team config at a given level."""

    def _make(level: int) -> DisclosureContext:
        return create_context(team_config, level)

    return _make


@pytest.fixture
def config_file(tmp_path: Path, team_fields: dict[str, str]) -> Path:
    """A YAML config file on disk."""
    path = tmp_path / "responsive-privacy.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "collections": {"team": {"fields": team_fields}},
                "attributes": {
                    "OR-06": {
                        "name": "Board Seat",
                        "category": "organizational",
                        "risk": "medium",
                        "threshold": 3,
                        "complianceProtected": True,
                    }
                },
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def isolate_privacy_level(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep a PRIVACY_LEVEL from the outer environment out of the tests."""
    monkeypatch.delenv(PRIVACY_LEVEL_ENV_VAR, raising=False)
    yield

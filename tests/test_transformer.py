"""Tests for the content transformer."""

import logging

import pytest

from responsive_privacy.core.attributes import AttributeDefinition
from responsive_privacy.core.config import CollectionConfig, PrivacyConfig
from responsive_privacy.core.context import create_context
from responsive_privacy.core.results import UNMANAGED
from responsive_privacy.core.strategies import RedactionStrategy
from responsive_privacy.core.transformer import (
    compliance_warning,
    transform_collection,
    transform_collections,
    transform_entry,
)


class TestTransformEntry:
    """Test filtering a team member record at each level."""

    def test_level_four_returns_input(self, context_at, team_member):
        result = transform_entry("team", team_member, context_at(4))

        assert result.data == team_member
        assert result.hidden_fields == ()
        assert result.warnings == ()

    def test_level_two(self, context_at, team_member):
        result = transform_entry("team", team_member, context_at(2))

        assert result.data == {
            "name": "Jane Smith",
            "photo": "/images/jane.jpg",
            "role": "Program Director",
            "email": "Contact the organization",
            "department": "Programs",
            "slug": "jane-smith",
        }
        assert set(result.hidden_fields) == {"bio", "email"}
        assert result.omitted_fields == ("bio",)
        assert result.replaced_fields == ("email",)

    def test_level_one(self, context_at, team_member):
        result = transform_entry("team", team_member, context_at(1))

        assert result.data["name"] == "Staff Member"
        assert "photo" not in result.data
        assert "bio" not in result.data
        assert result.data["email"] == "Contact the organization"
        assert result.data["role"] == "Program Director"
        assert result.data["department"] == "Programs"
        assert {"photo", "bio", "email"} <= set(result.hidden_fields)

    def test_level_zero(self, context_at, team_member):
        result = transform_entry("team", team_member, context_at(0))

        assert result.data == {
            "name": "Staff Member",
            "email": "Contact the organization",
            "slug": "jane-smith",
        }
        assert result.hidden_fields == ("name", "photo", "role", "bio", "email", "department")

    def test_output_keeps_input_field_order(self, context_at, team_member):
        result = transform_entry("team", team_member, context_at(1))
        expected = [key for key in team_member if key in result.data]
        assert list(result.data) == expected

    def test_input_not_mutated(self, context_at, team_member):
        snapshot = dict(team_member)
        transform_entry("team", team_member, context_at(0))
        assert team_member == snapshot

    def test_field_results(self, context_at, team_member):
        result = transform_entry("team", team_member, context_at(2))

        assert [f.field for f in result.fields] == list(team_member)

        bio = result.field_result("bio")
        assert bio.visible is False
        assert bio.value is None
        assert bio.redaction_applied == RedactionStrategy.OMIT

        email = result.field_result("email")
        assert email.value == "Contact the organization"
        assert email.redaction_applied == RedactionStrategy.REPLACE

        slug = result.field_result("slug")
        assert slug.attribute_id == UNMANAGED
        assert not slug.is_managed

        assert result.field_result("missing") is None

    def test_only_present_fields_are_considered(self, context_at):
        result = transform_entry("team", {"slug": "x", "bio": "text"}, context_at(0))
        assert result.data == {"slug": "x"}
        assert result.hidden_fields == ("bio",)

    def test_empty_record(self, context_at):
        result = transform_entry("team", {}, context_at(0))
        assert result.data == {}
        assert result.hidden_fields == ()

    def test_values_pass_through_untouched(self, context_at):
        record = {"role": {"title": "Director", "since": 2019}, "tags": ["a", "b"]}
        result = transform_entry("team", record, context_at(4))
        assert result.data["role"] is record["role"]
        assert result.data["tags"] is record["tags"]


class TestUnconfiguredCollections:
    """Test pass-through for collections with no mapping."""

    @pytest.mark.parametrize("level", [0, 1, 2, 3, 4])
    def test_pass_through(self, context_at, team_member, level):
        result = transform_entry("events", team_member, context_at(level))

        assert result.data == team_member
        assert result.data is not team_member
        assert result.hidden_fields == ()
        assert result.warnings == ()
        assert result.configuration_warnings == ()
        assert all(f.visible and not f.is_managed for f in result.fields)


class TestComplianceWarnings:
    """Test warnings for compliance-protected attributes."""

    @pytest.fixture
    def board_context(self):
        def _make(level):
            config = PrivacyConfig(collections={"team": {"board": "OR-02", "name": "ID-01"}})
            return create_context(config, level)

        return _make

    def test_hidden_protected_attribute_warns_once(self, board_context):
        result = transform_entry("team", {"board": "Trustee", "name": "Jane"}, board_context(1))

        assert "board" not in result.data
        assert "board" in result.hidden_fields
        assert result.has_warnings
        assert result.warnings == (
            'Compliance-protected attribute "Board Membership" (OR-02) would be hidden '
            "at Level 1 (threshold: 3). Requires legal review before removal.",
        )

    def test_visible_protected_attribute_does_not_warn(self, board_context):
        result = transform_entry("team", {"board": "Trustee"}, board_context(3))
        assert result.data == {"board": "Trustee"}
        assert result.warnings == ()

    def test_warning_message(self):
        message = compliance_warning("Board Membership", "OR-02", 0, 3)
        assert "Board Membership" in message
        assert "(OR-02)" in message
        assert "Level 0" in message
        assert "threshold: 3" in message


class TestConfigurationWarnings:
    """Test fields mapped to attribute ids missing from the catalog."""

    def test_unknown_attribute_passes_through(self, caplog):
        config = PrivacyConfig(collections={"team": {"pronouns": "XX-99"}})
        context = create_context(config, 0)

        with caplog.at_level(logging.WARNING, logger="responsive_privacy.core.transformer"):
            result = transform_entry("team", {"pronouns": "she/her"}, context)

        assert result.data == {"pronouns": "she/her"}
        assert result.hidden_fields == ()
        assert result.warnings == ()
        assert result.configuration_warnings == (
            'Field "pronouns" mapped to unknown attribute "XX-99". Passing through.',
        )
        assert "XX-99" in caplog.text

    def test_custom_attribute_is_enforced(self):
        custom = AttributeDefinition(
            id="XX-01",
            name="Pronouns",
            category="identity",
            risk="low",
            threshold=3,
            redaction="replace",
        )
        config = PrivacyConfig(
            collections={"team": CollectionConfig(fields={"pronouns": "XX-01"})},
            attributes={"XX-01": custom},
        )
        result = transform_entry("team", {"pronouns": "she/her"}, create_context(config, 2))

        assert result.data == {"pronouns": "[Pronouns hidden]"}
        assert result.configuration_warnings == ()


class TestTransformCollection:
    """Test transforming whole collections."""

    @pytest.fixture
    def members(self):
        return [
            {"name": f"Person {i}", "email": f"p{i}@example.org", "slug": f"person-{i}"}
            for i in range(25)
        ]

    def test_one_result_per_record(self, context_at, members):
        results = transform_collection("team", members, context_at(2))

        assert len(results) == len(members)
        for member, result in zip(members, results):
            assert result.data["slug"] == member["slug"]
            assert result.data["email"] == "Contact the organization"

    def test_thread_pool_preserves_order(self, context_at, members):
        sequential = transform_collection("team", members, context_at(1))
        parallel = transform_collection("team", members, context_at(1), max_workers=4)
        assert parallel == sequential

    def test_accepts_generators(self, context_at, members):
        results = transform_collection("team", (m for m in members), context_at(1), max_workers=2)
        assert len(results) == len(members)

    def test_empty_collection(self, context_at):
        assert transform_collection("team", [], context_at(0)) == []

    def test_invalid_worker_count(self, context_at, members):
        with pytest.raises(ValueError, match="max_workers"):
            transform_collection("team", members, context_at(0), max_workers=0)

    def test_transform_collections(self, context_at, team_member, blog_post):
        results = transform_collections(
            {"team": [team_member], "posts": [blog_post], "pages": [{"title": "About"}]},
            context_at(1),
        )

        assert list(results) == ["team", "posts", "pages"]
        post = results["posts"][0].data
        assert post["author"] == "Staff Member"
        assert post["byline"] == "Organization Staff"
        assert "publishDate" not in post
        assert post["title"] == "Field notes"
        assert results["pages"][0].data == {"title": "About"}

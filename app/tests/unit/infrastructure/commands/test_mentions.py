"""Unit tests for mention resolution and substitution."""

import pytest

from infrastructure.commands.errors import UserNotFoundError
from infrastructure.commands.mentions import (
    MENTION_PLACEHOLDER as P,
    MentionResolver,
    substitute_mentions,
)
from tests.factories import make_mention


@pytest.mark.unit
class TestMentionResolver:
    """Tests for placeholder to mention alignment."""

    def test_placeholders_align_with_mentions_after_self_mention(self):
        mentions = [
            make_mention("second", start=9),
            make_mention("bot", start=0),
            make_mention("first", start=5),
        ]
        resolver = MentionResolver([P, "5", P], mentions)

        assert resolver.mention_at(0).uuid == "first"
        assert resolver.mention_at(1) is None
        assert resolver.mention_at(2).uuid == "second"

    def test_no_mentions_besides_self(self):
        resolver = MentionResolver([P], [make_mention("bot", start=0)])

        assert resolver.mention_at(0) is None

    def test_more_placeholders_than_mentions(self):
        resolver = MentionResolver(
            [P, P], [make_mention("bot", start=0), make_mention("only", start=3)]
        )

        assert resolver.mention_at(0).uuid == "only"
        assert resolver.mention_at(1) is None

    def test_resolve_user_through_mention(self, user_store):
        resolver = MentionResolver(
            [P], [make_mention("bot", start=0), make_mention("bob-uuid", start=3)]
        )

        assert resolver.resolve_user(0, P, user_store).uuid == "bob-uuid"

    def test_mention_and_direct_identifier_resolve_to_same_user(self, user_store):
        by_mention = MentionResolver(
            [P], [make_mention("bot", start=0), make_mention("alice-uuid", start=3)]
        ).resolve_user(0, P, user_store)
        by_uuid = MentionResolver(["alice-uuid"], []).resolve_user(
            0, "alice-uuid", user_store
        )
        by_linked_id = MentionResolver(["42"], []).resolve_user(0, "42", user_store)

        assert by_mention is by_uuid is by_linked_id

    def test_unstored_mention_falls_back_to_raw(self, user_store):
        resolver = MentionResolver(
            ["42"], [make_mention("bot", start=0), make_mention("ghost", start=3)]
        )

        assert resolver.resolve_user(0, "42", user_store).uuid == "alice-uuid"

    def test_unresolvable_raises(self, user_store):
        resolver = MentionResolver(
            [P], [make_mention("bot", start=0), make_mention("ghost", start=3)]
        )

        with pytest.raises(UserNotFoundError) as exc:
            resolver.resolve_user(0, P, user_store)

        assert exc.value.identifier == P

    def test_token_containing_placeholder_is_not_a_mention(self):
        resolver = MentionResolver(
            [f"x{P}", P], [make_mention("bot", start=0), make_mention("alice", start=5)]
        )

        assert resolver.mention_at(0) is None
        assert resolver.mention_at(1).uuid == "alice"


@pytest.mark.unit
class TestSubstituteMentions:
    """Tests for substitute_mentions."""

    def test_self_mention_removed_and_others_replaced(self):
        text = f"{P} ping {P} hi"
        mentions = [make_mention("bot", start=0), make_mention("alice-uuid", start=7)]

        tokens = substitute_mentions(text, mentions, {"alice-uuid": "42"}.get)

        assert tokens == ["ping", "42", "hi"]

    def test_replacement_order_keeps_offsets_valid(self):
        text = f"{P} ping {P} {P}"
        mentions = [
            make_mention("bot", start=0),
            make_mention("first-uuid", start=7),
            make_mention("second-uuid", start=9),
        ]

        tokens = substitute_mentions(text, mentions, lambda uuid: uuid)

        assert tokens == ["ping", "first-uuid", "second-uuid"]

    def test_no_mentions(self):
        assert substitute_mentions("/ping a  b", [], lambda uuid: uuid) == [
            "/ping",
            "a",
            "b",
        ]

    def test_offsets_count_utf16_code_units(self):
        text = f"{P} ping 🎉 {P} done"
        mentions = [make_mention("bot", start=0), make_mention("alice-uuid", start=10)]

        tokens = substitute_mentions(text, mentions, {"alice-uuid": "42"}.get)

        assert tokens == ["ping", "🎉", "42", "done"]

    def test_multi_unit_characters_between_mentions(self):
        text = f"{P} ping 𝄞{P} 👍🏽 {P}"
        mentions = [
            make_mention("bot", start=0),
            make_mention("first-uuid", start=9),
            make_mention("second-uuid", start=16),
        ]

        tokens = substitute_mentions(text, mentions, lambda uuid: uuid)

        assert tokens == ["ping", "𝄞first-uuid", "👍🏽", "second-uuid"]

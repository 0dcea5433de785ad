# tests/unit/test_messages.py
"""Unit tests for prompt merging and message-list assembly."""

from graph_agents.llm.messages import get_merge_value, get_messages, merge_fragments


class TestMergeFragments:
    def test_joins_in_order_with_newlines(self):
        assert merge_fragments("a", ["b", "c"], "d") == "a\nb\nc\nd"

    def test_skips_empty_fragments(self):
        assert merge_fragments(None, "", ["", "x"], []) == "x"

    def test_nothing_left_is_none(self):
        assert merge_fragments(None, "", []) is None
        assert merge_fragments() is None


class TestGetMergeValue:
    def test_inputs_then_params_then_value(self):
        result = get_merge_value(
            {"mergeablePrompts": ["from inputs"]},
            {"mergeablePrompts": "from params"},
            "mergeablePrompts",
            "plain prompt",
        )
        assert result == "from inputs\nfrom params\nplain prompt"

    def test_plain_value_only(self):
        assert get_merge_value({}, {}, "mergeableSystem", "be brief") == "be brief"

    def test_absent_everywhere(self):
        assert get_merge_value({}, {}, "mergeableSystem", None) is None


class TestGetMessages:
    def test_fresh_sequence_seeded_with_system(self):
        assert get_messages("be brief", None) == [{"role": "system", "content": "be brief"}]

    def test_no_system_no_messages(self):
        assert get_messages(None, None) == []

    def test_prior_sequence_is_copied(self):
        prior = [{"role": "user", "content": "hi"}]
        result = get_messages(None, prior)
        result.append({"role": "assistant", "content": "hello"})
        assert prior == [{"role": "user", "content": "hi"}]

    def test_system_prepended_to_prior_without_system(self):
        prior = [{"role": "user", "content": "hi"}]
        assert get_messages("be brief", prior) == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hi"},
        ]

    def test_existing_system_message_not_duplicated(self):
        prior = [{"role": "system", "content": "original"}, {"role": "user", "content": "hi"}]
        assert get_messages("be brief", prior) == prior

    def test_malformed_order_passed_through(self):
        prior = [{"role": "assistant", "content": "x"}, {"role": "tool", "content": "y"}]
        assert get_messages(None, prior) == prior

"""Tests for encoding summaries into comment bodies and decoding them back."""

from prscribe_core import comment_codec
from prscribe_core.models import PlatformComment
from prscribe_core.utils.links import LinkBase

SERVER = "https://github.com"
BASE = LinkBase(SERVER, "octo", "repo")
SHA = "1" * 40
ORIGIN = "2" * 40


class TestEncode:
    def test_commit_comment_format(self):
        assert comment_codec.encode(SHA, "* change") == f"GPT summary of {SHA}:\n\n* change"

    def test_rollup_appended_after_delimiter(self):
        body = comment_codec.encode(SHA, "* head", rollup="* pr")
        assert body == f"GPT summary of {SHA}:\n\n* head\n\nPR summary so far:\n\n* pr"

    def test_label_replaces_key_in_header(self):
        body = comment_codec.encode("k", "* s", label="[k](url)")
        assert body.startswith("GPT summary of [k](url):")


class TestDecode:
    def test_commit_comment(self):
        decoded = comment_codec.decode(comment_codec.encode(SHA, "* a\n* b"), SERVER)
        assert decoded.key == SHA
        assert decoded.summary == "* a\n* b"
        assert decoded.rollup is None

    def test_combined_comment_splits_off_rollup(self):
        decoded = comment_codec.decode(comment_codec.encode(SHA, "* head", rollup="* pr"), SERVER)
        assert decoded.summary == "* head"
        assert decoded.rollup == "* pr"

    def test_file_comment_with_linked_key(self):
        key = comment_codec.file_key(ORIGIN, SHA)
        label = comment_codec.file_key_label(BASE, "src/a.py", ORIGIN, SHA, "b" * 40, "f" * 40)
        decoded = comment_codec.decode(comment_codec.encode(key, "* s", label=label), SERVER)
        assert decoded.key == key
        assert decoded.summary == "* s"

    def test_new_file_key(self):
        key = comment_codec.file_key("None", SHA)
        label = comment_codec.file_key_label(BASE, "src/new.py", "None", SHA, "b" * 40, "f" * 40)
        decoded = comment_codec.decode(comment_codec.encode(key, "* s", label=label), SERVER)
        assert decoded.key == f"None - {SHA}"

    def test_single_newline_after_header(self):
        decoded = comment_codec.decode(f"GPT summary of {SHA}:\n* s", SERVER)
        assert decoded.summary == "* s"

    def test_untagged_body_is_not_a_summary(self):
        assert comment_codec.decode("LGTM!", SERVER) is None
        assert comment_codec.decode("", SERVER) is None
        assert comment_codec.decode(None, SERVER) is None

    def test_tag_must_start_the_body(self):
        assert comment_codec.decode(f"Quoting: GPT summary of {SHA}:\n\n* s", SERVER) is None


class TestDecodeAllAndFind:
    def test_keeps_comment_ids_and_skips_foreign_comments(self):
        comments = [
            PlatformComment(id=1, body="nice work"),
            PlatformComment(id=2, body=comment_codec.encode(SHA, "* s")),
        ]
        decoded = comment_codec.decode_all(comments, SERVER)
        assert len(decoded) == 1
        assert decoded[0].comment_id == 2

    def test_find_summary_exact_key(self):
        decoded = comment_codec.decode_all([PlatformComment(id=2, body=comment_codec.encode(SHA, "* s"))], SERVER)
        assert comment_codec.find_summary(decoded, SHA).comment_id == 2
        assert comment_codec.find_summary(decoded, SHA[:-1] + "0") is None

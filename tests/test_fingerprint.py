"""
Canonical serialization and entity tag tests.
"""

from plan_store.core.fingerprint import compute_etag, deserialize, etag_matches, serialize


class TestSerialization:

    def test_serialize_is_compact_and_keeps_member_order(self):
        document = {"objectId": "abc123", "creationDate": "2023-12-25", "plan": "gold"}
        assert serialize(document) == b'{"objectId":"abc123","creationDate":"2023-12-25","plan":"gold"}'

    def test_serialize_keeps_non_ascii_as_utf8(self):
        """Non-ASCII text is stored as UTF-8 rather than \\u escapes."""
        data = serialize({"objectId": "café"})
        assert data == '{"objectId":"café"}'.encode("utf-8")

    def test_deserialize_accepts_bytes_and_str(self):
        assert deserialize(b'{"a":1}') == {"a": 1}
        assert deserialize('{"a":1}') == {"a": 1}


class TestEtag:

    def test_empty_body_tag(self):
        assert compute_etag(b"") == '"0-2jmj7l5rSw0yVb/vlWAYkK/YBwk"'

    def test_tag_shape(self):
        """Tags are quoted and prefixed with the body length in hex."""
        etag = compute_etag(b"x" * 255)
        assert etag.startswith('"ff-')
        assert etag.endswith('"')
        assert len(etag) == len('"ff-"') + 27

    def test_same_bytes_same_tag(self):
        data = serialize({"objectId": "abc123", "plan": "gold"})
        assert compute_etag(data) == compute_etag(bytes(data))

    def test_different_bytes_different_tag(self):
        assert compute_etag(b'{"plan":"gold"}') != compute_etag(b'{"plan":"gole"}')
        assert compute_etag(b'{"a":1,"b":2}') != compute_etag(b'{"b":2,"a":1}')

    def test_str_input_is_encoded(self):
        assert compute_etag("plan") == compute_etag(b"plan")


class TestEtagMatching:

    def test_exact_match(self):
        etag = compute_etag(b"plan")
        assert etag_matches(etag, etag)

    def test_none_never_matches(self):
        assert not etag_matches(None, compute_etag(b"plan"))

    def test_weak_and_unquoted_forms_do_not_match(self):
        etag = compute_etag(b"plan")
        assert not etag_matches("W/" + etag, etag)
        assert not etag_matches(etag.strip('"'), etag)
        assert not etag_matches("*", etag)

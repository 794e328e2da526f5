from apidesc.domain.collection import Collection


def test_get_set_and_missing():
    c = Collection({"a": 1})
    c.set("b", "x")
    assert c.get("a") == 1
    assert c.get("b") == "x"
    assert c.get("nope") is None
    assert "b" in c
    assert len(c) == 2


def test_inject_replaces_placeholders():
    c = Collection({"host": "api.example.com", "version": 2})
    assert c.inject("https://{{host}}/v{{ version }}/users") == "https://api.example.com/v2/users"


def test_inject_missing_key_renders_empty():
    assert Collection().inject("a-{{missing}}-b") == "a--b"


def test_inject_plain_text_unchanged():
    assert Collection({"a": 1}).inject("no placeholders") == "no placeholders"

from schema_mapper.flattening import SearchEntry, extract_snippet, flatten, search
from schema_mapper.schema_utils import build_schema_tree


def test_flatten_is_preorder_with_root_excluded_paths(person_tree):
    entries = flatten(person_tree)
    assert entries[0].path == ""
    assert entries[0].name == "Person"
    assert entries[1].path == "account"
    assert entries[2].path == "account.password"
    paths = [e.path for e in entries]
    assert paths.index("address") < paths.index("address.city") < paths.index("age")


def test_rules_text_joined_with_spaces(person_tree):
    entry = next(e for e in flatten(person_tree) if e.path == "age")
    assert entry.rules_text == "minimum: 0 maximum: 120"
    state = next(e for e in flatten(person_tree) if e.path == "address.state")
    assert state.rules_text is None


def test_description_snippet_is_preferred(person_tree):
    results = search(flatten(person_tree), "PRIMARY")
    by_path = {r.path: r for r in results}
    assert by_path["address"].snippet == "Primary residential address"
    assert by_path["email"].snippet == "Primary contact email address"


def test_rules_snippet_when_description_misses(person_tree):
    results = search(flatten(person_tree), "maxLength")
    by_path = {r.path: r for r in results}
    assert by_path["account.username"].snippet == "minLength: 3 maxLength: 16"


def test_path_only_match_has_no_snippet(person_tree):
    results = search(flatten(person_tree), "secondary_residence.coordinates")
    assert [r.path for r in results] == [
        "secondary_residence.coordinates",
        "secondary_residence.coordinates.lat",
        "secondary_residence.coordinates.lng",
    ]
    assert all(r.snippet is None for r in results)


def test_empty_query_returns_nothing(person_tree):
    assert search(flatten(person_tree), "   ") == []


def test_snippet_window_and_ellipses():
    text = "a" * 50 + "needle" + "b" * 70
    snippet = extract_snippet(text, 50, 6, 40, 60)
    assert snippet == "…" + "a" * 40 + "needle" + "b" * 60 + "…"
    assert extract_snippet("short needle here", 6, 6, 40, 60) == "short needle here"


def test_snippet_length_bound():
    schema = {
        "type": "object",
        "properties": {
            f"f{i}": {"type": "string", "description": ("lorem ipsum " * 30) + f"target{i} " + ("dolor " * 30)}
            for i in range(5)
        },
    }
    q = "target"
    for r in search(flatten(build_schema_tree(schema)), q):
        assert r.snippet is not None
        assert len(r.snippet) <= 40 + len(q) + 60 + 2


def test_results_capped_at_twenty():
    schema = {"type": "object", "properties": {f"field{i:02d}": {"type": "string"} for i in range(50)}}
    results = search(flatten(build_schema_tree(schema)), "field")
    assert len(results) == 20
    assert [r.name for r in results] == [f"field{i:02d}" for i in range(20)]


def test_limit_follows_settings(monkeypatch):
    from schema_mapper.config import get_settings

    monkeypatch.setenv("SCHEMA_MAPPER_SEARCH_RESULT_LIMIT", "3")
    get_settings.cache_clear()
    schema = {"type": "object", "properties": {f"field{i}": {"type": "string"} for i in range(10)}}
    assert len(search(flatten(build_schema_tree(schema)), "field")) == 3
    assert len(search(flatten(build_schema_tree(schema)), "field", limit=5)) == 5


def test_snippet_centred_when_lowercasing_changes_length():
    desc = "İ" * 50 + "needle" + "y" * 10
    entries = [SearchEntry(id="note:1", path="note", name="note", description=desc)]
    [result] = search(entries, "NEEDLE")
    assert result.snippet == "…" + "İ" * 40 + "needle" + "y" * 10

from randdata.config.schema import deep_merge_dicts


def test_deep_merge_nested_and_scalar_replace() -> None:
    base = {
        "stream": {"type": "binary", "seed": 0, "size": 1024},
        "reader": {"jitter": True, "max_read": None},
    }
    override = {
        "stream": {"seed": 5},
        "reader": {"max_read": 64},
    }
    merged = deep_merge_dicts(base, override)
    assert merged == {
        "stream": {"type": "binary", "seed": 5, "size": 1024},
        "reader": {"jitter": True, "max_read": 64},
    }
    # ensure original not mutated
    assert base["stream"]["seed"] == 0


def test_deep_merge_mapping_replaces_scalar() -> None:
    merged = deep_merge_dicts({"a": 1}, {"a": {"b": 2}})
    assert merged == {"a": {"b": 2}}

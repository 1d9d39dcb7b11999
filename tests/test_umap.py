import pytest

from urest.errors import NotFoundError, ParameterError
from urest.umap import UMap


@pytest.fixture
def sample():
    m = UMap()
    m.put("key1", "value1")
    m.put("key2", "value2")
    m.put("Key3", "Value3")
    return m


def test_put_and_get(sample):
    assert sample.get("key1") == "value1"
    assert sample.get("key2") == "value2"
    assert sample.get("missing") is None
    assert len(sample) == 3


def test_put_replaces_existing(sample):
    sample.put("key1", "new")
    assert sample.get("key1") == "new"
    assert len(sample) == 3
    assert sample.keys() == ["key1", "key2", "Key3"]


def test_put_none_keeps_existing_value(sample):
    sample.put("key1", None)
    assert sample.get("key1") == "value1"


def test_put_none_new_key():
    m = UMap()
    m.put("flag", None)
    assert m.has_key("flag")
    assert m.get("flag") is None
    assert m.get_length("flag") == 0


@pytest.mark.parametrize("key", ["", None])
def test_put_invalid_key(key):
    with pytest.raises(ParameterError):
        UMap().put(key, "value")


def test_case_lookup(sample):
    assert sample.get("key3") is None
    assert sample.get_case("KEY3") == "Value3"
    assert sample.has_key_case("KEY1")
    assert not sample.has_key("KEY1")
    assert "key1" in sample
    assert "KEY1" not in sample


def test_lengths(sample):
    assert sample.get_length("key1") == len("value1")
    assert sample.get_case_length("KEY3") == len("Value3")
    assert sample.get_length("nothing") is None
    assert sample.get_case_length("nothing") is None


def test_put_binary_new_and_extend():
    m = UMap()
    m.put_binary("bin", b"\x00\x01\x02")
    assert m.get_binary("bin") == b"\x00\x01\x02"
    m.put_binary("bin", b"\xff\xfe", 2)
    assert m.get_binary("bin") == b"\x00\x01\xff\xfe"
    assert m.get_length("bin") == 4


def test_put_binary_overwrite_within_does_not_shrink():
    m = UMap()
    m.put_binary("bin", b"abcdef")
    m.put_binary("bin", b"XY", 1)
    assert m.get_binary("bin") == b"aXYdef"


def test_put_binary_offset_on_new_key_zero_fills():
    m = UMap()
    m.put_binary("bin", b"z", 2)
    assert m.get_binary("bin") == b"\x00\x00z"


def test_put_binary_negative_offset():
    with pytest.raises(ParameterError):
        UMap().put_binary("bin", b"a", -1)


def test_has_value(sample):
    assert sample.has_value("value1")
    assert sample.has_value("value")
    assert not sample.has_value("value3")
    assert sample.has_value_case("VALUE3")
    assert not sample.has_value_case("VALUE")
    assert sample.has_value_binary(b"value2")
    assert not sample.has_value(None)


def test_remove_from_key(sample):
    sample.remove_from_key("key1")
    assert not sample.has_key("key1")
    assert len(sample) == 2
    with pytest.raises(NotFoundError):
        sample.remove_from_key("key1")


def test_remove_from_key_case(sample):
    sample.remove_from_key_case("KEY3")
    assert sample.keys() == ["key1", "key2"]
    with pytest.raises(NotFoundError):
        sample.remove_from_key_case("KEY3")


def test_remove_from_value_prefix(sample):
    sample.remove_from_value("value")
    assert sample.keys() == ["Key3"]


def test_remove_from_value_case(sample):
    sample.remove_from_value_case("VALUE2")
    assert sample.keys() == ["key1", "Key3"]
    with pytest.raises(NotFoundError):
        sample.remove_from_value_case("VALUE2")


def test_remove_from_value_binary_missing(sample):
    with pytest.raises(NotFoundError):
        sample.remove_from_value_binary(b"nope")


def test_remove_none_params(sample):
    with pytest.raises(ParameterError):
        sample.remove_from_key(None)
    with pytest.raises(ParameterError):
        sample.remove_from_value(None)


def test_remove_at(sample):
    sample.remove_at(1)
    assert sample.keys() == ["key1", "Key3"]
    with pytest.raises(NotFoundError):
        sample.remove_at(2)
    with pytest.raises(ParameterError):
        sample.remove_at(-1)


def test_copy_is_independent(sample):
    duplicate = sample.copy()
    assert duplicate.items() == sample.items()
    duplicate.put("key1", "changed")
    assert sample.get("key1") == "value1"


def test_merge_overwrites_and_appends(sample):
    other = UMap()
    other.put("key1", "other")
    other.put("key4", "value4")
    sample.merge(other)
    assert sample.get("key1") == "other"
    assert sample.get("key4") == "value4"
    assert sample.keys() == ["key1", "key2", "Key3", "key4"]


def test_merge_none_source(sample):
    with pytest.raises(ParameterError):
        sample.merge(None)


def test_iteration_and_values(sample):
    assert list(sample) == ["key1", "key2", "Key3"]
    assert sample.values() == ["value1", "value2", "Value3"]
    assert dict(sample.items()) == {"key1": "value1", "key2": "value2", "Key3": "Value3"}


def test_clear(sample):
    sample.clear()
    assert len(sample) == 0
    assert sample.keys() == []
    sample.put("again", "yes")
    assert sample.get("again") == "yes"


def test_unicode_round_trip():
    m = UMap()
    m.put("name", "héllo")
    assert m.get("name") == "héllo"
    assert m.get_binary("name") == "héllo".encode("utf-8")
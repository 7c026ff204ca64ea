"""
Tests for channel map loading and lookup.
"""
import pytest

from xmltvguide import channelmap
from xmltvguide.channelmap import ChannelMap
from xmltvguide.errors import ConfigError


class TestChannelMapLoad:
    """Loading channel map files"""

    def test_loads_complete_entries(self, write_json):
        path = write_json("map.json", {
            "channels": [
                {"channel": {"name": "ABC HD", "channelId": "5"}},
                {"channel": {"name": "NBC", "channelId": "200"}},
            ]
        })

        mapping = ChannelMap.load(path)

        assert len(mapping) == 2
        assert mapping.lookup("5") == "ABC HD"
        assert mapping.lookup("200") == "NBC"

    def test_incomplete_entries_are_dropped(self, write_json):
        path = write_json("map.json", {
            "channels": [
                {"channel": {"name": "No Id"}},
                {"channel": {"channelId": "7"}},
                {"channel": {"name": "   ", "channelId": "8"}},
                {"channel": {"name": "Blank Id", "channelId": "  "}},
                {"other": {}},
                None,
                {"channel": {"name": "Good", "channelId": "9"}},
            ]
        })

        mapping = ChannelMap.load(path)

        assert list(mapping) == ["9"]

    def test_first_duplicate_wins(self, write_json):
        path = write_json("map.json", {
            "channels": [
                {"channel": {"name": "First", "channelId": "1"}},
                {"channel": {"name": "Second", "channelId": "1"}},
            ]
        })

        assert ChannelMap.load(path).lookup("1") == "First"

    def test_numeric_id_is_read_as_text(self, write_json):
        path = write_json("map.json", {"channels": [{"channel": {"name": "Five", "channelId": 5}}]})

        assert ChannelMap.load(path).lookup("5") == "Five"

    def test_empty_channels_array(self, write_json):
        assert len(ChannelMap.load(write_json("map.json", {"channels": []}))) == 0

    @pytest.mark.parametrize("path", [None, "", "   "])
    def test_empty_path(self, path):
        with pytest.raises(ConfigError):
            ChannelMap.load(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            ChannelMap.load(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            ChannelMap.load(path)

    def test_not_an_object(self, write_json):
        with pytest.raises(ConfigError):
            ChannelMap.load(write_json("map.json", [{"channel": {"name": "x", "channelId": "1"}}]))

    @pytest.mark.parametrize("root", [{}, {"channels": {}}, {"channels": "abc"}])
    def test_missing_channels_array(self, write_json, root):
        with pytest.raises(ConfigError, match="channels"):
            ChannelMap.load(write_json("map.json", root))


class TestLookup:
    """Exact-match lookup semantics"""

    def test_exact_match_only(self):
        mapping = ChannelMap({"5": "ABC"})

        assert mapping.lookup("5") == "ABC"
        assert mapping.lookup("05") is None
        assert mapping.lookup("5 ") is None
        assert mapping.lookup(None) is None

    def test_module_lookup_without_map(self):
        assert channelmap.lookup(None, "5") is None

    def test_module_lookup_with_map(self):
        assert channelmap.lookup(ChannelMap({"5": "ABC"}), "5") == "ABC"
        assert channelmap.lookup(ChannelMap({"5": "ABC"}), "6") is None

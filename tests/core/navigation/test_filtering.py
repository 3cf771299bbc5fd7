# tests/core/navigation/test_filtering.py
"""
core/navigation/filtering.py 및 Navigator 필터 동작 테스트
"""

from core.navigation import Mode
from core.navigation.filtering import clamp_selection, filter_items


class TestFilterItems:
    """filter_items() 테스트"""

    def test_empty_filter_returns_copy(self, catalog):
        items = [{"name": "a"}, {"name": "b"}]
        result = filter_items(items, "", catalog.get("instances"))
        assert result == items
        assert result is not items

    def test_matches_name_case_insensitive(self, catalog):
        items = [{"name": "Web-1", "id": "1"}, {"name": "db-1", "id": "2"}]
        assert filter_items(items, "WEB", catalog.get("instances")) == [items[0]]

    def test_matches_id_field(self, catalog):
        items = [{"name": "web-1", "id": "101"}, {"name": "db-1", "id": "201"}]
        assert filter_items(items, "20", catalog.get("instances")) == [items[1]]

    def test_ignores_other_fields(self, catalog):
        """name/id 이외 필드는 검색하지 않음"""
        items = [{"name": "web-1", "id": "1", "status": "RUNNING"}]
        assert filter_items(items, "running", catalog.get("instances")) == []

    def test_without_resource_searches_whole_item(self):
        items = [{"name": "web-1", "status": "RUNNING"}, {"name": "db-1", "status": "STOPPED"}]
        assert filter_items(items, "running", None) == [items[0]]

    def test_filter_is_idempotent(self, catalog):
        resource = catalog.get("instances")
        items = [{"name": f"vm-{i}", "id": str(i)} for i in range(20)]
        once = filter_items(items, "1", resource)
        twice = filter_items(once, "1", resource)
        assert once == twice


class TestClampSelection:
    """clamp_selection() 테스트"""

    def test_empty_list(self):
        assert clamp_selection(5, 0) == 0

    def test_in_range(self):
        assert clamp_selection(2, 5) == 2

    def test_clamps_high_and_low(self):
        assert clamp_selection(9, 5) == 4
        assert clamp_selection(-1, 5) == 0


class TestNavigatorFilter:
    """Navigator 필터 상태 테스트"""

    def test_typing_filters(self, make_nav):
        nav = make_nav()
        nav.start_filter()
        for ch in "DB":
            nav.type_filter_char(ch)
        assert nav.filter_active is True
        assert [i["name"] for i in nav.filtered_items] == ["db-1"]

    def test_selection_clamped_after_filter(self, make_nav):
        nav = make_nav()
        nav.go_to_bottom()
        nav.start_filter()
        nav.type_filter_char("w")
        assert nav.selected == 1

    def test_backspace(self, make_nav):
        nav = make_nav()
        nav.start_filter()
        nav.type_filter_char("d")
        nav.type_filter_char("x")
        assert nav.filtered_items == []
        nav.backspace_filter()
        assert len(nav.filtered_items) == 1

    def test_finish_keeps_filter(self, make_nav):
        nav = make_nav()
        nav.start_filter()
        nav.type_filter_char("w")
        nav.finish_filter()
        assert nav.filter_active is False
        assert nav.filter_text == "w"
        assert len(nav.filtered_items) == 2

    def test_clear_filter(self, make_nav):
        nav = make_nav()
        nav.start_filter()
        nav.type_filter_char("w")
        nav.clear_filter()
        assert nav.filter_text == ""
        assert nav.filter_active is False
        assert len(nav.filtered_items) == 3
        assert nav.mode is Mode.NORMAL

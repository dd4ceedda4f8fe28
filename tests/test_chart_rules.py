"""
Unit tests for chart type rules
"""

import pytest

from insight_miner.models import ChartKind
from insight_miner.utils.chart_rules import (
    DEFAULT_TIME_LEVEL,
    clean_title,
    find_time_level,
    resolve_chart_type,
)


class TestResolveChartType:
    """Test cases for resolve_chart_type"""
    
    def test_stacked_bar(self):
        """Test stacked bar"""
        match = resolve_chart_type("stacked bar chart")
        
        assert match.kind == ChartKind.BAR
        assert match.measure_slot == "measure"
        assert match.dimension_slot == "y-axis"
        assert [(option.name, option.value) for option in match.options] == [("mode", "stacked")]
    
    def test_plain_bar(self):
        """Test plain bar"""
        match = resolve_chart_type("bar")
        
        assert match.kind == ChartKind.BAR
        assert match.dimension_slot == "y-axis"
        assert match.options == []
    
    @pytest.mark.parametrize("chart_type", ["pie", "donut", "pie chart", "donut chart"])
    def test_pie_and_donut(self, chart_type):
        """Test pie and donut"""
        match = resolve_chart_type(chart_type)
        
        assert match.kind == ChartKind.DONUT
        assert match.dimension_slot == "category"
    
    def test_line(self):
        """Test line chart keyword"""
        match = resolve_chart_type("line chart")
        
        assert match.kind == ChartKind.LINE
        assert match.dimension_slot == "x-axis"
    
    def test_area(self):
        """Test area chart keyword"""
        assert resolve_chart_type("area").kind == ChartKind.AREA
    
    def test_column(self):
        """Test column chart keyword"""
        match = resolve_chart_type("column chart")
        
        assert match.kind == ChartKind.COLUMN
        assert match.dimension_slot == "category"
    
    def test_scatter_renders_as_bar(self):
        """Test scatter renders as bar"""
        match = resolve_chart_type("scatter plot")
        
        assert match.kind == ChartKind.BAR
        assert match.dimension_slot == "y-axis"
        assert match.options == []
    
    def test_unknown_falls_back_to_bar(self, caplog):
        """Test unknown falls back to bar"""
        match = resolve_chart_type("waffle")
        
        assert match.kind == ChartKind.BAR
        assert match.options == []
        assert "waffle" in caplog.text
    
    def test_empty_falls_back_to_bar(self):
        """Test empty falls back to bar"""
        assert resolve_chart_type("").kind == ChartKind.BAR
    
    def test_matching_is_case_sensitive(self):
        """Test matching is case sensitive"""
        # "Line" does not contain "line"
        assert resolve_chart_type("Line").kind == ChartKind.BAR
    
    def test_returned_match_is_a_copy(self):
        """Test returned match is a copy"""
        first = resolve_chart_type("stacked bar")
        first.options.clear()
        
        assert len(resolve_chart_type("stacked bar").options) == 1


class TestFindTimeLevel:
    """Test cases for find_time_level"""
    
    @pytest.mark.parametrize("title, level", [
        ("Revenue per Year", 1),
        ("Quarterly revenue", 2),
        ("Monthly orders", 3),
        ("Orders by WEEK", 4),
        ("Visits per hour", 6),
        ("Clicks per minute", 7),
        ("Requests per second", 8),
    ])
    def test_keywords(self, title, level):
        """Test time level keywords"""
        assert find_time_level(title) == level
    
    def test_default_is_day(self):
        """Test that the default time level is day"""
        assert find_time_level("Revenue over Time") == DEFAULT_TIME_LEVEL == 5
    
    def test_first_keyword_in_priority_order_wins(self):
        """Test first keyword in priority order wins"""
        # both "month" and "year" appear, year is checked first
        assert find_time_level("Monthly revenue this year") == 1


def test_clean_title_strips_double_quotes():
    """Test clean title strips double quotes"""
    assert clean_title('"Sales" by "Region"') == "Sales by Region"

"""
Tests for the filter registry, textual parsing and descriptions.
"""

import pytest

from pixelchain import (
    Bilateral,
    Blur,
    BlurMode,
    Filter,
    FilterParseError,
    Grayscale,
    Huerotate,
    Invert,
    Lighting,
    Raster,
    Sepia,
    Sharpen,
    SharpenMode,
    Threshold,
    Vignette,
)
from pixelchain.filters import FILTER_ALIASES, FILTER_REGISTRY


class TestRegistry:
    """Test filter registration."""

    @pytest.mark.parametrize("name", [
        "threshold", "invert", "grayscale", "huerotate", "lighting",
        "vignette", "blur", "sharpen", "bilateral", "sepia",
    ])
    def test_all_filters_registered(self, name):
        """Every filter is registered under its lowercase name."""
        assert name in FILTER_REGISTRY

    @pytest.mark.parametrize("alias", [
        "gray", "hue", "brightness", "gblur", "boxblur", "median", "unsharp",
    ])
    def test_aliases_registered(self, alias):
        """Short names resolve through the alias table."""
        assert alias in FILTER_ALIASES


class TestParse:
    """Test Filter.parse for both syntaxes."""

    @pytest.mark.parametrize("text,expected", [
        ("invert", Invert()),
        ("gray", Grayscale()),
        ("Sepia", Sepia()),
        ("threshold 100", Threshold(100)),
        ("threshold(100)", Threshold(100)),
        ("blur 3 box", Blur(3, BlurMode.BOX)),
        ("BLUR 3 BOX", Blur(3, BlurMode.BOX)),
        ("blur(radius=2, mode=median)", Blur(2, BlurMode.MEDIAN)),
        ("median 2", Blur(2, BlurMode.MEDIAN)),
        ("boxblur 4", Blur(4, BlurMode.BOX)),
        ("gblur", Blur(2, BlurMode.GAUSSIAN)),
        ("hue 90", Huerotate(90)),
        ("huerotate -30.5", Huerotate(329.5)),
        ("lighting 20 40", Lighting(20, 40)),
        ("lighting contrast=40", Lighting(0, 40)),
        ("brightness 30", Lighting(brightness=30)),
        ("contrast 40", Lighting(brightness=0, contrast=40)),
        ("vignette 0.5 0.8", Vignette(0.5, 0.8)),
        ("vignette(radius=0.5, opacity=0.8)", Vignette(0.5, 0.8)),
        ("sharpen", Sharpen()),
        ("sharpen box 3", Sharpen(SharpenMode.BOX, 3)),
        ("sharpen bilateral 2 true", Sharpen(SharpenMode.BILATERAL, 2, True)),
        ('sharpen mode="median" 3', Sharpen(SharpenMode.MEDIAN, 3)),
        ("unsharp coarse_radius=4", Sharpen(coarse_radius=4)),
        ("bilateral 3 2.5 0.2", Bilateral(3, 2.5, 0.2)),
    ])
    def test_parse(self, text, expected):
        """Compact and call syntax build the expected filter."""
        assert Filter.parse(text) == expected

    def test_out_of_range_values_are_clamped(self):
        """Finite values outside a range are clamped, not rejected."""
        assert Filter.parse("threshold 999") == Threshold(255)
        assert Filter.parse("blur 80") == Blur(50)

    def test_integer_field_accepts_float(self):
        """Floats given for integer fields are truncated."""
        assert Filter.parse("blur 2.7").radius == 2

    def test_float_field_accepts_integer(self):
        """Integers given for float fields are stored as floats."""
        vignette = Filter.parse("vignette 1 0")
        assert isinstance(vignette.radius, float)

    def test_to_string_parses_back(self):
        """to_string() output parses to an equal filter."""
        original = Sharpen(SharpenMode.MEDIAN, 5, True)
        assert Filter.parse(original.to_string()) == original


class TestParseErrors:
    """Test rejection of malformed filter text."""

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "nosuch",
        "nosuch(3)",
        "blur abc",
        "blur 2 sideways",
        "blur 2 box extra",
        "blur radius=2 foo=1",
        "threshold true",
        "sharpen gaussian 2 yes",
        "invert 1",
    ])
    def test_rejected(self, text):
        """Malformed text raises FilterParseError."""
        with pytest.raises(FilterParseError):
            Filter.parse(text)

    @pytest.mark.parametrize("text", [
        "threshold nan",
        "blur inf",
        "blur 1e999",
        "lighting 0 nan",
        "huerotate inf",
        "hue -inf",
        "vignette nan 0.5",
        "bilateral 2 nan 0.1",
        "unsharp coarse_radius=nan",
    ])
    def test_non_finite_rejected(self, text):
        """NaN and infinite numbers are parse errors, not crashes."""
        with pytest.raises(FilterParseError):
            Filter.parse(text)

    def test_non_finite_message(self):
        """The message names the field and asks for a finite number."""
        with pytest.raises(FilterParseError, match="Lighting.contrast expects a finite number"):
            Filter.parse("lighting 0 nan")

    def test_is_value_error(self):
        """Parse errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Filter.parse("nosuch")

    def test_message_names_filter(self):
        """Unknown names are reported back."""
        with pytest.raises(FilterParseError, match="Unknown filter: nosuch"):
            Filter.parse("nosuch 1")

    def test_message_lists_modes(self):
        """Invalid modes list the valid choices."""
        with pytest.raises(FilterParseError, match="gaussian, box, median"):
            Filter.parse("blur 2 sideways")


class TestDescribe:
    """Test human readable descriptions."""

    def test_parameterless(self):
        """Filters without parameters describe as their label."""
        assert Invert().describe() == "Invert"
        assert Grayscale().describe() == "Grayscale"

    def test_blur(self):
        """Parameters follow the label after an arrow."""
        assert Blur(3, BlurMode.BOX).describe() == "Blur -> radius: 3, mode: box"

    def test_sharpen(self):
        """Underscores become spaces and booleans are lowercase."""
        assert Sharpen().describe() == (
            "Sharpen -> mode: gaussian, coarse radius: 2, render mask only: false"
        )

    def test_floats(self):
        """Whole floats print without a fraction."""
        assert Lighting(10, 20.5).describe() == "Lighting -> brightness: 10, contrast: 20.5"

    def test_clamped_values_shown(self):
        """Descriptions show the clamped value."""
        assert Threshold(300).describe() == "Threshold -> level: 255"


class TestFilterObject:
    """Test the common filter behavior."""

    def test_callable(self, gradient_raster):
        """Calling a filter applies it."""
        assert Invert()(gradient_raster) == Invert().apply(gradient_raster)

    def test_apply_returns_new_raster(self, gradient_raster):
        """apply() returns a new Raster."""
        result = Grayscale().apply(gradient_raster)
        assert isinstance(result, Raster)
        assert result is not gradient_raster

    def test_hashable_and_equal(self):
        """Filters compare and hash by type and parameters."""
        assert hash(Blur(2)) == hash(Blur(2))
        assert Blur(2) != Blur(3)
        assert Blur(2) != Bilateral(2)

    def test_parameters_in_order(self):
        """parameters() follows field declaration order."""
        assert list(Bilateral().parameters()) == ["radius", "spatial_sigma", "intensity_sigma"]

    def test_type_and_label(self):
        """type and label both give the class name."""
        assert Huerotate().type == "Huerotate"
        assert Huerotate().label == "Huerotate"

"""
Unit Tests for AbsoluteRect
"""

from PIL import Image

from cutout.core.models import AbsoluteRect


class TestAbsoluteRect:

    def test_edges(self):
        rect = AbsoluteRect(x=50, y=700, width=100, height=100)
        assert rect.right == 150
        assert rect.bottom == 800

    def test_as_box_is_pil_order(self):
        assert AbsoluteRect(1, 2, 3, 4).as_box() == (1, 2, 4, 6)

    def test_crop_from_returns_region_size(self):
        image = Image.new("RGB", (100, 50), color="white")
        result = AbsoluteRect(10, 5, 30, 20).crop_from(image)
        assert result.size == (30, 20)
        assert result.mode == "RGB"

    def test_repr(self):
        assert repr(AbsoluteRect(1, 2, 3, 4)) == "AbsoluteRect(1, 2, 3x4)"

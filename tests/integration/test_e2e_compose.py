"""Integration tests for end-to-end sheet composition."""

import pytest

from photosheet.compositor import compose
from photosheet.errors import EmptyInputError
from photosheet.geometry import rotate
from photosheet.recipes import (
    COLLAGE_A4,
    ID_DOCUMENT_PAIR,
    LARGE_PASSPORT_8UP,
    RECIPES,
    SMALL_PASSPORT_12UP,
)

WHITE = (255, 255, 255, 255)


def sources_for(recipe, gradient_image, solid_image):
    if recipe is ID_DOCUMENT_PAIR:
        return [gradient_image(1275, 825), solid_image(1275, 825, (10, 90, 200, 255))]
    if recipe is LARGE_PASSPORT_8UP:
        return [gradient_image(414, 530)]
    if recipe is COLLAGE_A4:
        return [gradient_image(300, 200), solid_image(250, 400)]
    return [gradient_image(360, 420)]


class TestSmallPassportSheet:
    """12-up sheet built from a cropped 360x420 photo."""

    def test_twelve_copies_at_grid_cells(self, gradient_image) -> None:
        """
        compose(small-passport-12up, [img]) yields 12 exact copies.

        Margins follow (canvas - cells*cell) / (cells+1):
        horizontal (1181 - 1080) // 4 = 25, vertical (1772 - 1680) // 5 = 18.
        """
        img = gradient_image(360, 420)
        sheet = compose(SMALL_PASSPORT_12UP, [img])

        assert sheet.size == (1181, 1772)

        expected_cells = [
            (25 + col * (360 + 25), 18 + row * (420 + 18)) for row in range(4) for col in range(3)
        ]
        for left, top in expected_cells:
            copy = sheet.crop((left, top, left + 360, top + 420))
            assert copy.tobytes() == img.tobytes(), f"Cell at ({left}, {top}) differs"

        # Gaps between cells stay white
        assert sheet.getpixel((24, 18)) == WHITE
        assert sheet.getpixel((25, 17)) == WHITE
        assert sheet.getpixel((400, 200)) == WHITE
        assert sheet.getpixel((200, 445)) == WHITE

    def test_smaller_source_centered(self, solid_image) -> None:
        """Test a smaller photo is centered at native size, not stretched."""
        sheet = compose(SMALL_PASSPORT_12UP, [solid_image(300, 400)])
        # Cell 0 spans x 25..385, y 18..438 -> image at x 55..355, y 28..428
        assert sheet.getpixel((54, 100)) == WHITE
        assert sheet.getpixel((55, 28)) == (200, 30, 30, 255)
        assert sheet.getpixel((354, 427)) == (200, 30, 30, 255)
        assert sheet.getpixel((355, 100)) == WHITE


class TestIdDocumentSheet:
    """Front/back ID sheet."""

    def test_front_and_back_positions(self, gradient_image, solid_image) -> None:
        """Test front at x=200 and back at x=1675, both at y=400."""
        front = gradient_image(1275, 825)
        back = solid_image(1275, 825, (10, 90, 200, 255))
        sheet = compose(ID_DOCUMENT_PAIR, [front, back])

        assert sheet.size == (3150, 4455)
        assert sheet.crop((200, 400, 1475, 1225)).tobytes() == front.tobytes()
        assert sheet.crop((1675, 400, 2950, 1225)).tobytes() == back.tobytes()
        assert sheet.getpixel((199, 400)) == WHITE
        assert sheet.getpixel((1600, 800)) == WHITE
        assert sheet.getpixel((2000, 1225)) == WHITE

    def test_missing_back_raises(self, gradient_image) -> None:
        """Test that one image for a two-slot recipe raises EmptyInputError."""
        with pytest.raises(EmptyInputError, match="needs 2 source images, got 1"):
            compose(ID_DOCUMENT_PAIR, [gradient_image(1275, 825)])

    def test_extra_image_raises(self, gradient_image) -> None:
        """Test that three images for a two-slot recipe raise ValueError."""
        img = gradient_image(10, 10)
        with pytest.raises(ValueError, match="takes 2 source images, got 3"):
            compose(ID_DOCUMENT_PAIR, [img, img, img])


class TestLargePassportSheet:
    """8-up sheet with rotated photos."""

    def test_rotated_copies(self, gradient_image) -> None:
        """Test each copy is the photo turned 90 degrees and centered in its cell."""
        img = gradient_image(414, 530)
        rotated = rotate(img, 90)
        sheet = compose(LARGE_PASSPORT_8UP, [img])

        assert sheet.size == (1181, 1772)
        for cell in LARGE_PASSPORT_8UP.cell_positions:
            left = int(cell.left + (cell.width - 530) / 2 + 0.5)
            top = int(cell.top + (cell.height - 414) / 2 + 0.5)
            copy = sheet.crop((left, top, left + 530, top + 414))
            assert copy.tobytes() == rotated.tobytes()

    def test_first_cell_offset(self, solid_image) -> None:
        """Test the first copy starts at (50, 38)."""
        sheet = compose(LARGE_PASSPORT_8UP, [solid_image(414, 530)])
        assert sheet.getpixel((49, 100)) == WHITE
        assert sheet.getpixel((50, 38)) == (200, 30, 30, 255)
        assert sheet.getpixel((100, 37)) == WHITE


class TestComposeContract:
    """Behaviour shared by every recipe."""

    @pytest.mark.parametrize("name", list(RECIPES))
    def test_deterministic(self, name: str, gradient_image, solid_image) -> None:
        """Test identical inputs give byte-identical canvases."""
        recipe = RECIPES[name]
        sources = sources_for(recipe, gradient_image, solid_image)
        first = compose(recipe, sources)
        second = compose(recipe, sources)
        assert first.size == (recipe.canvas_width, recipe.canvas_height)
        assert first.tobytes() == second.tobytes()

    @pytest.mark.parametrize("name", list(RECIPES))
    def test_empty_input_raises(self, name: str) -> None:
        """Test that no source images raises EmptyInputError."""
        with pytest.raises(EmptyInputError, match="at least one source image"):
            compose(RECIPES[name], [])

    @pytest.mark.parametrize("name", list(RECIPES))
    def test_inputs_not_modified(self, name: str, gradient_image, solid_image) -> None:
        """Test source images are left untouched."""
        recipe = RECIPES[name]
        sources = sources_for(recipe, gradient_image, solid_image)
        before = [img.tobytes() for img in sources]
        compose(recipe, sources)
        assert [img.tobytes() for img in sources] == before

    def test_transparent_pixels_show_white(self, solid_image) -> None:
        """Test a cut-out photo composites over the white page."""
        img = solid_image(360, 420, (0, 0, 0, 0))
        sheet = compose(SMALL_PASSPORT_12UP, [img])
        assert sheet.getpixel((100, 100)) == WHITE

    def test_collage_recipe_packs_images(self, solid_image) -> None:
        """Test the collage recipe lays images out at scale 1.0."""
        red = (220, 20, 20, 255)
        sheet = compose(COLLAGE_A4, [solid_image(200, 200, red), solid_image(200, 200, red)])
        assert sheet.size == (2480, 3508)
        assert sheet.getpixel((70, 70)) == red
        assert sheet.getpixel((300, 100)) == WHITE
        assert sheet.getpixel((340, 70)) == red

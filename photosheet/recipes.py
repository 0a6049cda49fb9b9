"""Layout recipes: declarative page geometry for every output kind.

All pixel values assume PRINT_DPI (300). Recipes are built once at import
time and never change afterwards.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from photosheet.config import COLLAGE_CANVAS_PX, COLLAGE_MARGIN_PX
from photosheet.errors import InvalidRecipeError
from photosheet.geometry import CropSpec, Rect, calculate_iou, check_rect_within_canvas, crop_rect


class LayoutRecipe(BaseModel):
    """Immutable layout policy for one output kind."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Registry identifier, e.g. small-passport-12up")
    canvas_width: int = Field(gt=0, description="Output canvas width (px)")
    canvas_height: int = Field(gt=0, description="Output canvas height (px)")
    cell_width: int = Field(ge=0, description="Nominal cell width (px)")
    cell_height: int = Field(ge=0, description="Nominal cell height (px)")
    rotation_degrees: float = Field(default=0, description="Clockwise rotation applied to each source")
    cell_positions: tuple[Rect, ...] = Field(default=(), description="Placement cells in draw order")
    image_slots: int = Field(default=1, ge=1, description="Distinct source images the recipe takes")
    crop_specs: tuple[CropSpec, ...] = Field(default=(), description="Cropper constraints per slot")
    auto_layout: bool = Field(default=False, description="Placement computed from the images (collage)")
    margin: int = Field(default=0, ge=0, description="Page margin used by auto layout (px)")

    @model_validator(mode="after")
    def check_cells(self) -> "LayoutRecipe":
        """Validate that every cell lies within the canvas and no two cells overlap."""
        for i, cell in enumerate(self.cell_positions):
            if not check_rect_within_canvas(cell, self.canvas_width, self.canvas_height):
                raise ValueError(
                    f"Cell {i} of {self.name} exceeds the "
                    f"{self.canvas_width}x{self.canvas_height} canvas"
                )
        for i, a in enumerate(self.cell_positions):
            for j in range(i + 1, len(self.cell_positions)):
                if calculate_iou(a, self.cell_positions[j]) > 0:
                    raise ValueError(f"Cells {i} and {j} of {self.name} overlap")
        if not self.auto_layout and not self.cell_positions:
            raise ValueError(f"Recipe {self.name} needs cell positions or auto_layout")
        return self


def _large_passport_cells() -> tuple[Rect, ...]:
    image_width = 500  # 4.5 cm
    image_height = 390  # 3.5 cm
    page_margin = 80
    image_margin = 50
    # Empirical upward nudge per tier of rows
    row_offsets = (0, -15, -30, -45)

    cells: list[Rect] = []
    for row, offset in enumerate(row_offsets):
        top = image_margin + offset + row * (image_height + image_margin)
        bottom = image_margin + (row + 1) * image_height + row * image_margin
        for col in range(2):
            left = page_margin + col * (image_width + image_margin)
            right = image_margin + (col + 1) * image_width + col * image_margin
            cells.append(Rect(left=left, top=top, right=right, bottom=bottom))
    return tuple(cells)


def _grid_cells(
    canvas_width: int, canvas_height: int, cell_width: int, cell_height: int, rows: int, cols: int
) -> tuple[Rect, ...]:
    # Uniform integer spacing, including the outer edges
    horizontal_margin = (canvas_width - cols * cell_width) // (cols + 1)
    vertical_margin = (canvas_height - rows * cell_height) // (rows + 1)

    cells: list[Rect] = []
    for row in range(rows):
        for col in range(cols):
            left = horizontal_margin + col * (cell_width + horizontal_margin)
            top = vertical_margin + row * (cell_height + vertical_margin)
            cells.append(Rect(left=left, top=top, right=left + cell_width, bottom=top + cell_height))
    return tuple(cells)


def _id_pair_cells(canvas_width: int, cell_width: int, cell_height: int) -> tuple[Rect, ...]:
    top_margin = 400
    side_margin = (canvas_width - 2 * cell_width) / 3
    front = Rect(
        left=side_margin,
        top=top_margin,
        right=side_margin + cell_width,
        bottom=top_margin + cell_height,
    )
    back = Rect(
        left=2 * side_margin + cell_width,
        top=top_margin,
        right=2 * side_margin + 2 * cell_width,
        bottom=top_margin + cell_height,
    )
    return front, back


LARGE_PASSPORT_8UP = LayoutRecipe(
    name="large-passport-8up",
    canvas_width=1181,  # 10 cm
    canvas_height=1772,  # 15 cm
    cell_width=500,
    cell_height=390,
    rotation_degrees=90,
    cell_positions=_large_passport_cells(),
    crop_specs=(crop_rect(3.5, 4.5, 414, 530),),
)

SMALL_PASSPORT_12UP = LayoutRecipe(
    name="small-passport-12up",
    canvas_width=1181,
    canvas_height=1772,
    cell_width=360,
    cell_height=420,
    cell_positions=_grid_cells(1181, 1772, 360, 420, rows=4, cols=3),
    crop_specs=(crop_rect(1.21, 1.4, 363, 421),),
)

ID_DOCUMENT_PAIR = LayoutRecipe(
    name="id-document-pair",
    canvas_width=3150,
    canvas_height=4455,
    cell_width=1275,  # 8.5 cm
    cell_height=825,  # 5.5 cm
    cell_positions=_id_pair_cells(3150, 1275, 825),
    image_slots=2,
    crop_specs=(crop_rect(8.5, 5.5, 1275, 825), crop_rect(8.5, 5.5, 1275, 825)),
)

COLLAGE_A4 = LayoutRecipe(
    name="collage-a4",
    canvas_width=COLLAGE_CANVAS_PX[0],
    canvas_height=COLLAGE_CANVAS_PX[1],
    cell_width=0,
    cell_height=0,
    auto_layout=True,
    margin=COLLAGE_MARGIN_PX,
)

RECIPES: dict[str, LayoutRecipe] = {
    recipe.name: recipe
    for recipe in (LARGE_PASSPORT_8UP, SMALL_PASSPORT_12UP, ID_DOCUMENT_PAIR, COLLAGE_A4)
}


def get_recipe(name: str) -> LayoutRecipe:
    """Look up a recipe by identifier.

    Raises:
        InvalidRecipeError: If no recipe is registered under ``name``
    """
    try:
        return RECIPES[name]
    except KeyError:
        raise InvalidRecipeError(f"Unknown layout recipe: {name}") from None

"""Command-line interface for building print-ready photo sheets.

Usage:
    # Passport sheets from an already-cropped photo
    python cli.py passport-small photo.jpg -o sheet.jpg
    python cli.py passport-large photo.jpg --remove-background --border --pdf

    # ID document front/back on one page
    python cli.py id-card front.jpg back.jpg

    # Free-form collage with per-image scale factors
    python cli.py collage a.jpg b.jpg c.jpg --scale 1.0 --scale 0.5 --scale 1.2

    # Cropper constraints and settings
    python cli.py crop-spec small-passport-12up
    python cli.py settings set-language hi
"""

import logging
import sys
from pathlib import Path

import click
from PIL import Image, UnidentifiedImageError

from photosheet.collage import layout_collage
from photosheet.compositor import compose
from photosheet.config import MAX_TOTAL_SCALE, SUPPORTED_LANGUAGES
from photosheet.errors import PhotoSheetError
from photosheet.export import default_filename, render_pdf, save_image
from photosheet.masking import add_border
from photosheet.recipes import RECIPES, get_recipe
from photosheet.scaling import clamp_scale, normalize_scales, scale_range
from photosheet.segmentation import LuminanceSegmenter, remove_background
from photosheet.settings import SettingsStore

# Configure root logger
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".photosheet" / "settings.json"


def _load_image(path: str) -> Image.Image:
    """Decode an image file into RGBA."""
    try:
        with Image.open(path) as img:
            return img.convert("RGBA")
    except UnidentifiedImageError as e:
        raise click.ClickException(f"Not an image file: {path}") from e


def _prepare(
    store: SettingsStore, image: Image.Image, cut_out: bool, with_border: bool
) -> Image.Image:
    """Apply optional background removal and border to a passport source."""
    settings = store.settings
    border = (settings.border_width_px, settings.border_color) if with_border else None
    if cut_out:
        return remove_background(
            image, LuminanceSegmenter(), threshold=settings.mask_threshold, border=border
        )
    if border is not None:
        return add_border(image, *border)
    return image


def _finish(
    store: SettingsStore,
    sheet: Image.Image,
    recipe_name: str,
    output: str | None,
    pdf: bool,
) -> None:
    """Save a finished sheet (and optionally a PDF next to it)."""
    settings = store.settings
    output_path = Path(output) if output else Path(settings.output_dir) / default_filename(recipe_name)

    try:
        saved = save_image(sheet, output_path, quality=settings.jpeg_quality)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✓ Saved {saved}")

    if pdf:
        pdf_path = render_pdf(sheet, saved.with_suffix(".pdf"))
        click.echo(f"✓ Saved {pdf_path}")


def _compose_passport(
    ctx: click.Context,
    recipe_name: str,
    image_path: str,
    output: str | None,
    cut_out: bool,
    with_border: bool,
    pdf: bool,
) -> None:
    store: SettingsStore = ctx.obj
    recipe = get_recipe(recipe_name)

    try:
        source = _prepare(store, _load_image(image_path), cut_out, with_border)
        sheet = compose(recipe, [source])
    except PhotoSheetError as e:
        raise click.ClickException(str(e)) from e

    _finish(store, sheet, recipe.name, output, pdf)


output_option = click.option("-o", "--output", default=None, help="Output file (.jpg or .png)")
pdf_option = click.option("--pdf", is_flag=True, help="Also write a print-ready PDF")
cut_out_option = click.option(
    "--remove-background", "cut_out", is_flag=True, help="Cut the subject out of its background"
)
border_option = click.option("--border", "with_border", is_flag=True, help="Stroke a border around each photo")


@click.group()
@click.option(
    "--settings",
    "settings_path",
    default=str(DEFAULT_SETTINGS_PATH),
    type=click.Path(dir_okay=False),
    help="Settings JSON file",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, settings_path: str, verbose: bool) -> None:
    """Photo Sheet - passport, ID document and collage print layouts."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    ctx.obj = SettingsStore(settings_path)


@cli.command("passport-large")
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
@output_option
@cut_out_option
@border_option
@pdf_option
@click.pass_context
def passport_large(
    ctx: click.Context, image_path: str, output: str | None, cut_out: bool, with_border: bool, pdf: bool
) -> None:
    """Eight rotated passport photos on a 10x15 cm sheet."""
    _compose_passport(ctx, "large-passport-8up", image_path, output, cut_out, with_border, pdf)


@cli.command("passport-small")
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
@output_option
@cut_out_option
@border_option
@pdf_option
@click.pass_context
def passport_small(
    ctx: click.Context, image_path: str, output: str | None, cut_out: bool, with_border: bool, pdf: bool
) -> None:
    """Twelve small passport photos on a 10x15 cm sheet."""
    _compose_passport(ctx, "small-passport-12up", image_path, output, cut_out, with_border, pdf)


@cli.command("id-card")
@click.argument("front_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("back_path", type=click.Path(exists=True, dir_okay=False))
@output_option
@pdf_option
@click.pass_context
def id_card(ctx: click.Context, front_path: str, back_path: str, output: str | None, pdf: bool) -> None:
    """Front and back of an ID card side by side."""
    recipe = get_recipe("id-document-pair")
    try:
        sheet = compose(recipe, [_load_image(front_path), _load_image(back_path)])
    except PhotoSheetError as e:
        raise click.ClickException(str(e)) from e

    _finish(ctx.obj, sheet, recipe.name, output, pdf)


@cli.command()
@click.argument("image_paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--scale", "scales", multiple=True, type=float, help="Scale factor per image (repeatable)")
@output_option
@pdf_option
@click.pass_context
def collage(
    ctx: click.Context, image_paths: tuple[str, ...], scales: tuple[float, ...], output: str | None, pdf: bool
) -> None:
    """Pack several photos onto one A4 page."""
    if scales and len(scales) != len(image_paths):
        raise click.ClickException(f"Got {len(image_paths)} images but {len(scales)} --scale values")

    images = [_load_image(path) for path in image_paths]
    requested = list(scales) if scales else [1.0] * len(images)

    # Clamp into each image's slider range, then enforce the shared total
    clamped = [
        clamp_scale(scale, scale_range(len(images), img.width, img.height))
        for scale, img in zip(requested, images)
    ]
    if sum(clamped) > MAX_TOTAL_SCALE:
        clamped = normalize_scales(clamped, len(clamped) - 1, clamped[-1])
    logger.info(f"Collage scales: {', '.join(f'{s:.2f}' for s in clamped)}")

    try:
        sheet = layout_collage(images, clamped)
    except PhotoSheetError as e:
        raise click.ClickException(str(e)) from e

    _finish(ctx.obj, sheet, "collage-a4", output, pdf)


@cli.command("crop-spec")
@click.argument("recipe_name")
def crop_spec(recipe_name: str) -> None:
    """Show the cropper constraints for a recipe."""
    try:
        recipe = get_recipe(recipe_name)
    except PhotoSheetError as e:
        raise click.ClickException(str(e.args[0])) from e

    if not recipe.crop_specs:
        click.echo(f"{recipe.name}: no crop constraints (any image size)")
        return
    for slot, spec in enumerate(recipe.crop_specs, start=1):
        click.echo(
            f"{recipe.name} slot {slot}: aspect {spec.aspect_width:g}:{spec.aspect_height:g}, "
            f"max {spec.max_width}x{spec.max_height} px"
        )


@cli.command("recipes")
def list_recipes() -> None:
    """List the available layout recipes."""
    for recipe in RECIPES.values():
        click.echo(f"{recipe.name}: {recipe.canvas_width}x{recipe.canvas_height} px")


@cli.group("settings")
def settings_group() -> None:
    """Show or change saved settings."""
    pass


@settings_group.command("show")
@click.pass_context
def settings_show(ctx: click.Context) -> None:
    """Print the current settings."""
    store: SettingsStore = ctx.obj
    click.echo(store.settings.model_dump_json(indent=2))


@settings_group.command("set-language")
@click.argument("language", type=click.Choice(list(SUPPORTED_LANGUAGES)))
@click.pass_context
def settings_set_language(ctx: click.Context, language: str) -> None:
    """Change the preferred language."""
    store: SettingsStore = ctx.obj
    store.update(language=language)
    click.echo(f"✓ Language set to {language}")


if __name__ == "__main__":
    cli()

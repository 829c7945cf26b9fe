from __future__ import annotations

import sys
from typing import Optional

import click

from .config import MAPPINGS, PRESETS, GridConfig, get_preset
from .engine import STRATEGIES
from .palette import BAND_ORDERS


def _build_config(preset: str, width: Optional[int], height: Optional[int], max_iter: Optional[int], mapping: Optional[str]) -> GridConfig:
    base = get_preset(preset)
    return base.with_overrides(
        width=width,
        height=height,
        max_iterations=max_iter,
        mapping=(mapping.lower() if mapping else None),
    )


def grid_options(func):
    options = [
        click.option("--preset", type=click.Choice(sorted(PRESETS), case_sensitive=False), default="centered", show_default=True, help="Mapping + iteration bound preset"),
        click.option("--width", type=int, default=None, help="Grid width in pixels (default: preset)"),
        click.option("--height", type=int, default=None, help="Grid height in pixels (default: preset)"),
        click.option("--max-iter", type=int, default=None, help="Iteration bound, 1..255 (default: preset)"),
        click.option("--mapping", type=click.Choice(list(MAPPINGS), case_sensitive=False), default=None, help="Pixel to complex-plane mapping (default: preset)"),
        click.option("--workers", type=int, default=None, help="Worker count (default: logical CPU count)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
def main() -> None:
    """mandel CLI: parallel Mandelbrot rendering."""


@main.command()
@click.option("--output", "output_path", type=click.Path(dir_okay=False), required=True, help="Output image path (PNG)")
@click.option("--strategy", type=click.Choice(list(STRATEGIES), case_sensitive=False), default="locked", show_default=True, help="Grid compute strategy")
@click.option("--palette", "palette_order", type=click.Choice(sorted(BAND_ORDERS), case_sensitive=False), default=None, help="Palette band order (default: matches mapping)")
@click.option("--output-csv", type=click.Path(dir_okay=False), default=None, help="Optional CSV of (x,y,re,im,iter)")
@grid_options
def render(output_path: str, strategy: str, palette_order: Optional[str], output_csv: Optional[str], preset: str, width: Optional[int], height: Optional[int], max_iter: Optional[int], mapping: Optional[str], workers: Optional[int]) -> None:
    """Compute the escape-time grid and write it as an RGB image."""
    try:
        from . import render as render_mod
        from . import image as image_mod
        cfg = _build_config(preset, width, height, max_iter, mapping)
        result = render_mod.render(
            cfg,
            strategy=strategy.lower(),
            palette_order=(palette_order.lower() if palette_order else None),
            workers=workers,
        )
        click.echo(f"Computed {result.strategy} grid {cfg.width}x{cfg.height} in {result.seconds:.2f}s")
        image_mod.save_image(result.raster, output_path)
        click.echo(f"Wrote image: {output_path}")
        if output_csv:
            df = image_mod.field_to_dataframe(result.field, cfg)
            df.to_csv(output_csv, index=False)
            click.echo(f"Wrote CSV: {output_csv}")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@grid_options
def compare(preset: str, width: Optional[int], height: Optional[int], max_iter: Optional[int], mapping: Optional[str], workers: Optional[int]) -> None:
    """Run both strategies on the same grid and check they agree."""
    try:
        from . import render as render_mod
        cfg = _build_config(preset, width, height, max_iter, mapping)
        report = render_mod.compare(cfg, workers=workers)
        for name, secs in report["seconds"].items():
            click.echo(f"{name:<10} {secs:.2f}s")
        if not report["identical"]:
            click.echo(f"Error: strategies disagree on {report['mismatched_cells']} cells", err=True)
            sys.exit(1)
        click.echo("Fields identical")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option("--order", type=click.Choice(sorted(BAND_ORDERS), case_sensitive=False), default="green", show_default=True, help="Palette band order")
@click.option("--output-csv", type=click.Path(dir_okay=False), default=None, help="Write palette table as CSV instead of printing")
def palette(order: str, output_csv: Optional[str]) -> None:
    """Print or export the 256-entry palette."""
    try:
        from . import palette as palette_mod
        colors = palette_mod.build_palette(order.lower())
        df = palette_mod.palette_dataframe(colors, order=order.lower())
        if output_csv:
            df.to_csv(output_csv, index=False)
            click.echo(f"Wrote CSV: {output_csv}")
        else:
            click.echo(df.to_string(index=False))
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

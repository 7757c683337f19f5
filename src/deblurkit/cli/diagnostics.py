# src/deblurkit/cli/diagnostics.py
"""Command-line diagnostics: run every primitive on a synthetic image.
Usage:
    python -m deblurkit [--size 96] [--seed 0] [--settings taper.json] [--log-level DEBUG]
Nothing is read from or written to image files; results are printed.
"""
from __future__ import annotations

import logging
from pathlib import Path

import click
import numpy as np

from deblurkit import __version__
from deblurkit.cli.settings import load_taper_config, save_settings
from deblurkit.conv2d import convolve, gaussian_blur
from deblurkit.core import (
    from_spectrum,
    log_magnitude,
    normalize_symmetric,
    to_spectrum,
)
from deblurkit.metrics import cross_correlation
from deblurkit.taper import edge_taper


def synthetic_scene(size: int, seed: int = 0) -> tuple[np.ndarray, np.ndarray]:
    """
    Smooth uint8 test image with a zeroed (occluded) frame and a disc mask.
    """
    rng = np.random.default_rng(seed)
    yy, xx = np.mgrid[0:size, 0:size].astype(np.float64)
    base = 128 + 60 * np.sin(xx / 7.0) * np.cos(yy / 11.0)
    img = np.clip(base + rng.normal(0.0, 8.0, (size, size)), 1, 255).astype(np.uint8)

    border = max(1, size // 8)
    img[:border, :] = 0
    img[:, -border:] = 0

    c = size / 2.0
    mask = ((yy - c) ** 2 + (xx - c) ** 2 <= (size / 4.0) ** 2).astype(np.uint8)
    return img, mask


@click.command()
@click.option("--size", default=96, show_default=True, type=click.IntRange(min=16), help="Side of the synthetic image.")
@click.option("--seed", default=0, show_default=True, type=int, help="Random seed for the synthetic image.")
@click.option("--settings", "settings_path", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Load taper settings (json or csv).")
@click.option("--save-settings", "save_path", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Save the effective taper settings.")
@click.option("--log-level", default="WARNING", show_default=True, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def main(size, seed, settings_path, save_path, log_level):
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = load_taper_config(settings_path)
    if save_path is not None:
        save_settings(save_path, config.to_dict(), section="taper")
        click.echo(f"Saved taper settings → {save_path}")

    click.echo(f"deblurkit numeric toolkit v{__version__}\n")
    img, mask = synthetic_scene(size, seed)
    gray = img.astype(np.float64)

    click.echo("Convolution shapes:")
    kernel = np.array([[0.5, 0.0, 0.5]])
    for shape in ("full", "same", "valid"):
        y = convolve(gray, kernel, shape)
        click.echo(f"  {shape:<5}: {gray.shape} * {kernel.shape} -> {y.shape}")

    click.echo("\nCorrelation:")
    blurred = gaussian_blur(gray, 5)
    click.echo(f"  self       : {cross_correlation(gray, gray):+.4f}")
    click.echo(f"  blurred    : {cross_correlation(gray, blurred, mask):+.4f} (inside mask)")

    click.echo("\nSpectrum:")
    F = to_spectrum(gray, optimal_size=True)
    back = from_spectrum(F, shape=gray.shape)
    click.echo(f"  padded size: {gray.shape} -> {F.shape}")
    click.echo(f"  round trip error: {np.max(np.abs(back - gray)):.2e}")
    mag = log_magnitude(F)
    click.echo(f"  log magnitude range: [{mag.min():.2f}, {mag.max():.2f}]")
    centered = normalize_symmetric(back - back.mean())
    click.echo(f"  symmetric range: [{centered.min():+.2f}, {centered.max():+.2f}]")

    click.echo("\nEdge taper:")
    out = edge_taper(img, mask, img, config=config)
    inside = mask != 0
    click.echo(f"  occluded pixels before: {int(np.sum(img == 0))}, after: {int(np.sum(out == 0))}")
    click.echo(f"  mask region preserved: {bool(np.array_equal(out[inside], img[inside]))}")


if __name__ == "__main__":
    main()

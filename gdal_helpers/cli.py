#!/usr/bin/env python3
"""
GDAL helpers CLI tool.

Command-line access to the dataset, geo-transform, spatial reference and
utility-program helpers.
"""

import json
from pathlib import Path

import click

from gdal_helpers.config import Config, config as global_config
from gdal_helpers.core import GDALHelperError, init_gdal
from gdal_helpers.infrastructure.logging import get_logger, setup_logging
from gdal_helpers.raster import (
    apply_geo_transform, compute_raster_min_max, get_geo_transform, get_raster_corners,
    open_dataset, open_raster, set_raster_corners
)
from gdal_helpers.spatial import create_coordinate_transform, transform_coordinate, wkt_from_epsg
from gdal_helpers.utilities import parse_translate_options, translate as run_translate

logger = get_logger(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.pass_context
def cli(ctx, verbose, config_path):
    """GDAL dataset and coordinate helpers."""
    cfg = Config(Path(config_path)) if config_path else global_config
    setup_logging(cfg, log_level='DEBUG' if verbose else None)
    init_gdal(cfg)
    ctx.obj = cfg


@cli.command()
@click.argument('file_path')
@click.option('--band', '-b', type=int, multiple=True, help='Band(s) to report min/max for')
@click.option('--json', 'as_json', is_flag=True, help='Emit JSON')
def info(file_path, band, as_json):
    """Show geo-transform, corners and band ranges of a raster."""
    try:
        with open_dataset(file_path) as ds:
            gt = get_geo_transform(ds)
            corners = get_raster_corners(ds)
            bands = band or range(1, ds.RasterCount + 1)
            ranges = {b: compute_raster_min_max(ds, b) for b in bands}

            report = {
                'path': file_path,
                'size': [ds.RasterXSize, ds.RasterYSize],
                'band_count': ds.RasterCount,
                'geotransform': list(gt.to_gdal()),
                'upper_left': list(corners.upper_left),
                'lower_right': list(corners.lower_right),
                'bands': {str(b): {'min': r.min, 'max': r.max} for b, r in ranges.items()},
            }
    except GDALHelperError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()

    if as_json:
        click.echo(json.dumps(report, indent=2))
        return

    click.echo(f"Raster:      {file_path}")
    click.echo(f"Size:        {report['size'][0]} x {report['size'][1]} ({report['band_count']} bands)")
    click.echo(f"Transform:   {report['geotransform']}")
    click.echo(f"Upper left:  ({corners.upper_left.x:.6f}, {corners.upper_left.y:.6f})")
    click.echo(f"Lower right: ({corners.lower_right.x:.6f}, {corners.lower_right.y:.6f})")
    for b, r in ranges.items():
        click.echo(f"Band {b}:      min={r.min:g} max={r.max:g}")


@cli.command()
@click.argument('file_path')
@click.option('--pixel', nargs=2, type=float, multiple=True,
              help='Also map a pixel/line position to georeferenced coordinates')
def corners(file_path, pixel):
    """Print the upper-left and lower-right corners of a raster."""
    try:
        with open_dataset(file_path) as ds:
            result = get_raster_corners(ds)
            gt = get_geo_transform(ds)
    except GDALHelperError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()

    west, south, east, north = result.bounds
    click.echo(f"{result.upper_left.x:.9f} {result.upper_left.y:.9f} "
               f"{result.lower_right.x:.9f} {result.lower_right.y:.9f}")
    click.echo(f"bounds: {west:.9f} {south:.9f} {east:.9f} {north:.9f}")
    for px, py in pixel:
        geo = apply_geo_transform(gt, (px, py))
        click.echo(f"pixel ({px:g}, {py:g}) -> {geo.x:.9f} {geo.y:.9f}")


@cli.command('set-corners')
@click.argument('file_path', type=click.Path(exists=True))
@click.argument('ulx', type=float)
@click.argument('uly', type=float)
@click.argument('lrx', type=float)
@click.argument('lry', type=float)
def set_corners(file_path, ulx, uly, lrx, lry):
    """Georeference a raster by its upper-left and lower-right corners."""
    try:
        with open_dataset(file_path, read_only=False) as ds:
            gt = set_raster_corners(ds, (ulx, uly), (lrx, lry))
    except GDALHelperError as e:
        click.echo(f"❌ Failed to set corners: {e}", err=True)
        raise click.Abort()

    click.echo(f"✅ Geo-transform set to {list(gt.to_gdal())}")


@cli.command()
@click.argument('epsg', type=int)
@click.option('--pretty/--compact', default=None, help='Pretty-print the WKT')
@click.pass_obj
def wkt(cfg, epsg, pretty):
    """Print the WKT for an EPSG code."""
    if pretty is None:
        pretty = cfg.get('spatial.pretty_wkt', False)
    try:
        click.echo(wkt_from_epsg(epsg, pretty=pretty))
    except GDALHelperError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()


@cli.command()
@click.option('--from', 'source_epsg', type=int, required=True, help='Source EPSG code')
@click.option('--to', 'target_epsg', type=int, required=True, help='Target EPSG code')
@click.option('--gis-order/--authority-order', default=None,
              help='Axis order: x=longitude (gis) or as declared by the EPSG authority')
@click.argument('x', type=float)
@click.argument('y', type=float)
@click.argument('z', type=float, default=0.0, required=False)
@click.pass_obj
def transform(cfg, source_epsg, target_epsg, gis_order, x, y, z):
    """Convert a coordinate between two EPSG systems."""
    if gis_order is None:
        gis_order = cfg.get('spatial.traditional_gis_order', False)
    try:
        ct = create_coordinate_transform(
            wkt_from_epsg(source_epsg), wkt_from_epsg(target_epsg),
            traditional_gis_order=gis_order
        )
        result = transform_coordinate(ct, (x, y, z))
    except GDALHelperError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()

    click.echo(f"{result.x:.9f} {result.y:.9f} {result.z:.6f}")


@cli.command(context_settings={'ignore_unknown_options': True})
@click.argument('source')
@click.argument('destination')
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
def translate(source, destination, args):
    """Run gdal_translate; extra ARGS are passed through unchanged."""
    try:
        options = parse_translate_options(list(args))
        src = open_raster(source)
        out = run_translate(src, destination, options)
        size = (out.RasterXSize, out.RasterYSize)
        out = None
        src = None
    except GDALHelperError as e:
        click.echo(f"❌ gdal_translate failed: {e}", err=True)
        raise click.Abort()

    click.echo(f"✅ Wrote {destination} ({size[0]} x {size[1]})")


def main():
    cli()


if __name__ == '__main__':
    main()

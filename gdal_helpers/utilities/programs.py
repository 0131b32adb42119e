# gdal_helpers/utilities/programs.py
"""Wrappers that run GDAL utility programs in-process."""

from pathlib import Path
from typing import Optional, Sequence, Union

from osgeo import gdal

from gdal_helpers.core.exceptions import GDALHelperError, TranslateError
from gdal_helpers.infrastructure.logging import get_logger, log_operation
from .options import UtilityOptions, parse_info_options, parse_translate_options

logger = get_logger(__name__)

OptionsLike = Union[UtilityOptions, Sequence[str], None]


def _coerce(options: OptionsLike, parser, program: str) -> UtilityOptions:
    if options is None:
        return parser([])
    if isinstance(options, UtilityOptions):
        if options.program.name != program:
            raise GDALHelperError(
                f"Expected {program} options, got {options.program.command} options"
            )
        return options
    return parser(options)


@log_operation("translate")
def translate(source: gdal.Dataset, destination: Union[str, Path],
              options: OptionsLike = None) -> gdal.Dataset:
    """Run gdal_translate on an open dataset.

    Args:
        source: Open source dataset
        destination: Output path; use unique_mem_filename() for an in-memory result
        options: Result of parse_translate_options(), or raw argument list

    Returns:
        The newly created dataset

    Raises:
        TranslateError: if gdal_translate fails
    """
    if source is None:
        raise TranslateError("No source dataset supplied")
    parsed = _coerce(options, parse_translate_options, 'translate')

    try:
        # The bindings take an (options, callback, callback_data) tuple as-is
        result = gdal.Translate(str(destination), source, options=(parsed.handle, None, None))
    except RuntimeError as e:
        raise TranslateError(f"gdal_translate to {destination} failed: {e}", e) from e

    if result is None:
        raise TranslateError(f"gdal_translate to {destination} failed")

    logger.info(
        f"Translated {source.GetDescription()} -> {destination}",
        extra={'context': {'args': list(parsed.args)}}
    )
    return result


def info(dataset: gdal.Dataset, options: OptionsLike = None) -> Union[str, dict]:
    """Run gdalinfo on an open dataset.

    Returns the report text, or a dict when ``-json`` is among the options.
    """
    if dataset is None:
        raise GDALHelperError("No dataset supplied")
    parsed = _coerce(options, parse_info_options, 'info')

    try:
        # (options, format, deserialize): JSON reports come back as a dict
        output_format = 'json' if '-json' in parsed.args else 'text'
        report = gdal.Info(dataset, options=(parsed.handle, output_format, True))
    except RuntimeError as e:
        raise GDALHelperError(f"gdalinfo failed: {e}", e) from e

    if report is None:
        raise GDALHelperError("gdalinfo failed")
    return report

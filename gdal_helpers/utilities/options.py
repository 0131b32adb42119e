# gdal_helpers/utilities/options.py
"""Option parsing for GDAL's utility programs.

Each parser takes the argv-style arguments of a GDAL command-line program
(without the program name) and returns them parsed by GDAL's own option
parser, so argument errors surface before the program is run::

    options = parse_translate_options(['-of', 'PNG', '-outsize', '50%', '0'])
    translate(source, '/tmp/out.png', options)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Sequence, Tuple

from osgeo import gdal

from gdal_helpers.core.environment import gdal_compute_version, gdal_version_num
from gdal_helpers.core.exceptions import UtilityOptionsError
from gdal_helpers.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UtilityProgram:
    """A GDAL utility program and the bindings class that parses its options."""
    name: str
    command: str
    options_class: str
    min_version: Tuple[int, int, int] = (2, 1, 0)


@dataclass(frozen=True)
class UtilityOptions:
    """Parsed options for one GDAL utility program.

    ``args`` keeps the original arguments; ``handle`` is the GDAL-native
    parsed options object (e.g. ``gdal.GDALTranslateOptions``).
    """
    program: UtilityProgram
    args: Tuple[str, ...]
    handle: Any = field(compare=False, repr=False)

    def to_list(self):
        return list(self.args)


UTILITY_PROGRAMS: Dict[str, UtilityProgram] = {
    'info': UtilityProgram('info', 'gdalinfo', 'GDALInfoOptions'),
    'translate': UtilityProgram('translate', 'gdal_translate', 'GDALTranslateOptions'),
    'warp': UtilityProgram('warp', 'gdalwarp', 'GDALWarpAppOptions'),
    'vector_translate': UtilityProgram('vector_translate', 'ogr2ogr', 'GDALVectorTranslateOptions'),
    'dem_processing': UtilityProgram('dem_processing', 'gdaldem', 'GDALDEMProcessingOptions'),
    'nearblack': UtilityProgram('nearblack', 'nearblack', 'GDALNearblackOptions'),
    'grid': UtilityProgram('grid', 'gdal_grid', 'GDALGridOptions'),
    'rasterize': UtilityProgram('rasterize', 'gdal_rasterize', 'GDALRasterizeOptions'),
    'build_vrt': UtilityProgram('build_vrt', 'gdalbuildvrt', 'GDALBuildVRTOptions'),
    'multi_dim_info': UtilityProgram(
        'multi_dim_info', 'gdalmdiminfo', 'GDALMultiDimInfoOptions', (3, 1, 0)
    ),
    'multi_dim_translate': UtilityProgram(
        'multi_dim_translate', 'gdalmdimtranslate', 'GDALMultiDimTranslateOptions', (3, 1, 0)
    ),
}


def is_program_supported(program: str) -> bool:
    """Whether the running GDAL provides an options parser for the program."""
    utility = UTILITY_PROGRAMS[program]
    return (gdal_version_num() >= gdal_compute_version(*utility.min_version)
            and hasattr(gdal, utility.options_class))


def parse_options(program: str, args: Sequence[str]) -> UtilityOptions:
    """Parse arguments for the named utility program.

    Args:
        program: Key of UTILITY_PROGRAMS, e.g. 'translate'
        args: argv-style arguments, without the program name

    Raises:
        UtilityOptionsError: for an unknown program, a program the running
            GDAL does not provide, or arguments GDAL rejects
    """
    if program not in UTILITY_PROGRAMS:
        raise UtilityOptionsError(
            f"Unknown GDAL utility {program!r}; expected one of {sorted(UTILITY_PROGRAMS)}"
        )
    utility = UTILITY_PROGRAMS[program]

    if not is_program_supported(program):
        required = '.'.join(str(v) for v in utility.min_version)
        raise UtilityOptionsError(
            f"{utility.command} options require GDAL >= {required}, "
            f"running {gdal.VersionInfo('RELEASE_NAME')}"
        )

    if isinstance(args, (str, bytes)):
        raise UtilityOptionsError(
            f"{utility.command} arguments must be a list of strings, not a single string"
        )
    argv = tuple(str(arg) for arg in args)

    try:
        handle = getattr(gdal, utility.options_class)(list(argv))
    except RuntimeError as e:
        raise UtilityOptionsError(f"Invalid {utility.command} arguments {list(argv)}: {e}", e) from e

    if handle is None:
        raise UtilityOptionsError(f"Invalid {utility.command} arguments {list(argv)}")

    logger.debug(f"Parsed {utility.command} options: {' '.join(argv)}")
    return UtilityOptions(program=utility, args=argv, handle=handle)


def _options_parser(program: str) -> Callable[[Sequence[str]], UtilityOptions]:
    command = UTILITY_PROGRAMS[program].command

    def parser(args: Sequence[str]) -> UtilityOptions:
        return parse_options(program, args)

    parser.__name__ = f"parse_{program}_options"
    parser.__doc__ = f"Parse argv-style arguments for {command}."
    return parser


parse_info_options = _options_parser('info')
parse_translate_options = _options_parser('translate')
parse_warp_app_options = _options_parser('warp')
parse_vector_translate_options = _options_parser('vector_translate')
parse_dem_processing_options = _options_parser('dem_processing')
parse_nearblack_options = _options_parser('nearblack')
parse_grid_options = _options_parser('grid')
parse_rasterize_options = _options_parser('rasterize')
parse_build_vrt_options = _options_parser('build_vrt')

# GDAL >= 3.1
parse_multi_dim_info_options = _options_parser('multi_dim_info')
parse_multi_dim_translate_options = _options_parser('multi_dim_translate')

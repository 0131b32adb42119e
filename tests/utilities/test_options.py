"""Tests for GDAL utility option parsers."""
import pytest
from osgeo import gdal

from gdal_helpers.core.environment import gdal_compute_version, gdal_version_num
from gdal_helpers.core.exceptions import UtilityOptionsError
from gdal_helpers.utilities import options as options_module
from gdal_helpers.utilities import (
    UTILITY_PROGRAMS, UtilityOptions, parse_build_vrt_options, parse_dem_processing_options,
    parse_grid_options, parse_info_options, parse_multi_dim_info_options,
    parse_multi_dim_translate_options, parse_nearblack_options, parse_options,
    parse_rasterize_options, parse_translate_options, parse_vector_translate_options,
    parse_warp_app_options
)

HAS_MULTIDIM = gdal_version_num() >= gdal_compute_version(3, 1)

PARSER_CASES = [
    (parse_info_options, 'info', ['-json', '-nomd']),
    (parse_translate_options, 'translate', ['-of', 'MEM', '-outsize', '50%', '50%']),
    (parse_warp_app_options, 'warp', ['-of', 'MEM', '-r', 'bilinear']),
    (parse_vector_translate_options, 'vector_translate', ['-f', 'GeoJSON']),
    (parse_dem_processing_options, 'dem_processing', ['-compute_edges']),
    (parse_nearblack_options, 'nearblack', ['-near', '5']),
    (parse_grid_options, 'grid', ['-a', 'nearest']),
    (parse_rasterize_options, 'rasterize', ['-burn', '1']),
    (parse_build_vrt_options, 'build_vrt', ['-separate']),
]


class TestParsers:

    @pytest.mark.parametrize('parser, program, args', PARSER_CASES)
    def test_valid_arguments(self, parser, program, args):
        parsed = parser(args)

        assert isinstance(parsed, UtilityOptions)
        assert parsed.program is UTILITY_PROGRAMS[program]
        assert parsed.to_list() == args
        assert isinstance(parsed.handle, getattr(gdal, UTILITY_PROGRAMS[program].options_class))

    @pytest.mark.parametrize('parser, program, args', PARSER_CASES)
    def test_empty_arguments(self, parser, program, args):
        assert parser([]).args == ()

    @pytest.mark.parametrize('parser, program, args', PARSER_CASES)
    def test_parser_names(self, parser, program, args):
        assert parser.__name__ == f'parse_{program}_options'
        assert UTILITY_PROGRAMS[program].command in parser.__doc__

    @pytest.mark.parametrize('args', [
        ['-not-a-real-flag'],
        ['-of'],
        ['-outsize', '10'],
    ])
    def test_translate_rejects(self, args):
        with pytest.raises(UtilityOptionsError, match='gdal_translate') as exc:
            parse_translate_options(args)
        assert isinstance(exc.value.original_exception, RuntimeError)

    def test_info_rejects_unknown_flag(self):
        with pytest.raises(UtilityOptionsError, match='gdalinfo'):
            parse_info_options(['-definitely-not-an-option'])

    def test_string_arguments_rejected(self):
        with pytest.raises(UtilityOptionsError, match='list of strings'):
            parse_translate_options('-of MEM')

    def test_non_string_arguments_coerced(self):
        parsed = parse_nearblack_options(['-near', 5])
        assert parsed.args == ('-near', '5')

    def test_tuple_arguments(self):
        assert parse_warp_app_options(('-of', 'MEM')).to_list() == ['-of', 'MEM']

    def test_options_equality_ignores_handle(self):
        assert parse_translate_options(['-of', 'MEM']) == parse_translate_options(['-of', 'MEM'])


class TestParseOptions:

    def test_by_name(self):
        assert parse_options('translate', ['-b', '1']).program.command == 'gdal_translate'

    def test_unknown_program(self):
        with pytest.raises(UtilityOptionsError, match='Unknown GDAL utility'):
            parse_options('gdal_magic', [])

    def test_programs_table(self):
        assert set(UTILITY_PROGRAMS) == {
            'info', 'translate', 'warp', 'vector_translate', 'dem_processing', 'nearblack',
            'grid', 'rasterize', 'build_vrt', 'multi_dim_info', 'multi_dim_translate'
        }
        assert UTILITY_PROGRAMS['multi_dim_info'].min_version == (3, 1, 0)


class TestVersionGating:

    @pytest.mark.skipif(not HAS_MULTIDIM, reason="multidimensional utilities need GDAL >= 3.1")
    def test_multidim_supported(self):
        assert parse_multi_dim_info_options(['-detailed']).program.command == 'gdalmdiminfo'
        assert parse_multi_dim_translate_options([]).program.command == 'gdalmdimtranslate'

    def test_old_gdal_rejects_multidim(self, monkeypatch):
        monkeypatch.setattr(options_module, 'gdal_version_num', lambda: gdal_compute_version(3, 0, 4))

        assert not options_module.is_program_supported('multi_dim_info')
        with pytest.raises(UtilityOptionsError, match='GDAL >= 3.1.0'):
            parse_multi_dim_info_options([])
        with pytest.raises(UtilityOptionsError, match='gdalmdimtranslate'):
            parse_multi_dim_translate_options([])

        # Older programs are unaffected
        assert parse_translate_options(['-of', 'MEM']).args == ('-of', 'MEM')

    def test_missing_bindings_class(self, monkeypatch):
        monkeypatch.delattr(gdal, 'GDALNearblackOptions')
        assert not options_module.is_program_supported('nearblack')
        with pytest.raises(UtilityOptionsError):
            parse_nearblack_options([])

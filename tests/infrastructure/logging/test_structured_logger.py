"""Tests for structured logging."""
import json
import logging

import pytest

from gdal_helpers.infrastructure.logging import (
    StructuredLogger, dataset_context, dataset_scope, get_logger, log_operation,
    operation_context, operation_scope
)
from gdal_helpers.infrastructure.logging.formatters import HumanFormatter, JsonFormatter


class TestStructuredLogger:
    """Test structured logger functionality."""

    def setup_method(self):
        dataset_context.set(None)
        operation_context.set(None)
        self.logger = get_logger('gdal_helpers.tests.structured')
        self.logger.clear_context()

    def test_get_logger_cached(self):
        assert isinstance(self.logger, StructuredLogger)
        assert get_logger('gdal_helpers.tests.structured') is self.logger

    def test_context_injection(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=self.logger.name):
            with dataset_scope('/data/dem.tif'):
                operation_context.set('open_raster')
                self.logger.info('opened')

        record = caplog.records[-1]
        assert record.context['dataset'] == '/data/dem.tif'
        assert record.context['operation'] == 'open_raster'
        assert record.context['logger_name'] == self.logger.name
        assert 'timestamp' in record.context

    def test_empty_context_fields_dropped(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=self.logger.name):
            self.logger.info('plain')

        context = caplog.records[-1].context
        assert 'dataset' not in context
        assert 'operation' not in context

    def test_persistent_context(self, caplog):
        self.logger.add_context(driver='GTiff', band=1)
        self.logger.remove_context('band')

        with caplog.at_level(logging.DEBUG, logger=self.logger.name):
            self.logger.info('with driver')

        context = caplog.records[-1].context
        assert context['driver'] == 'GTiff'
        assert 'band' not in context

    def test_extra_context_merged_and_not_mutated(self, caplog):
        extra = {'context': {'epsg': 4326}}
        with caplog.at_level(logging.DEBUG, logger=self.logger.name):
            self.logger.info('srs', extra=extra)

        assert caplog.records[-1].context['epsg'] == 4326
        assert extra == {'context': {'epsg': 4326}}

    def test_log_performance(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=self.logger.name):
            self.logger.log_performance('compute_raster_min_max', 2.0, pixels_processed=1000)

        perf = caplog.records[-1].performance
        assert perf['operation'] == 'compute_raster_min_max'
        assert perf['duration_seconds'] == 2.0
        assert perf['pixels_per_second'] == 500.0

    def test_operation_timing(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=self.logger.name):
            self.logger.start_operation('warp')
            self.logger.end_operation('warp', bands=3)

        perf = caplog.records[-1].performance
        assert perf['operation'] == 'warp'
        assert perf['bands'] == 3

    def test_end_unknown_operation_warns(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=self.logger.name):
            self.logger.end_operation('never_started')
        assert caplog.records[-1].levelno == logging.WARNING

    def test_error_with_context(self, caplog):
        try:
            raise ValueError('bad band')
        except ValueError as e:
            with caplog.at_level(logging.DEBUG, logger=self.logger.name):
                self.logger.log_error_with_context(e, operation='read', band=5)

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.context['error_type'] == 'ValueError'
        assert record.context['band'] == 5
        assert 'ValueError: bad band' in record.traceback


class TestScopes:

    def setup_method(self):
        dataset_context.set(None)
        operation_context.set(None)

    def test_dataset_scope_resets(self):
        with dataset_scope('a.tif'):
            assert dataset_context.get() == 'a.tif'
            with dataset_scope('b.tif'):
                assert dataset_context.get() == 'b.tif'
            assert dataset_context.get() == 'a.tif'
        assert dataset_context.get() is None

    def test_operation_scope_nesting(self):
        with operation_scope('translate') as outer:
            assert outer == 'translate'
            with operation_scope('parse') as inner:
                assert inner == 'translate/parse'
                assert operation_context.get() == 'translate/parse'
            assert operation_context.get() == 'translate'
        assert operation_context.get() is None

    def test_operation_scope_reports_failure(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='gdal_helpers.infrastructure.logging.context'):
            with pytest.raises(RuntimeError):
                with operation_scope('warp', bands=2):
                    raise RuntimeError('no')

        perf = caplog.records[-1].performance
        assert perf['operation'] == 'warp'
        assert perf['status'] == 'failed'
        assert perf['bands'] == 2
        assert operation_context.get() is None


class TestLogOperation:

    def setup_method(self):
        operation_context.set(None)

    def test_success(self, caplog):
        @log_operation('scale', log_args=True, log_result=True)
        def scale(value, factor=2):
            assert operation_context.get() == 'scale'
            return value * factor

        with caplog.at_level(logging.DEBUG, logger=__name__):
            assert scale(3) == 6

        assert operation_context.get() is None
        started = caplog.records[0]
        assert started.context['arguments'] == {'value': 3, 'factor': 2}
        assert any(r.performance and r.performance.get('status') == 'success'
                   for r in caplog.records)
        assert caplog.records[-1].context['result'] == 6

    def test_failure_logged_and_reraised(self, caplog):
        @log_operation()
        def explode():
            raise KeyError('missing')

        with caplog.at_level(logging.DEBUG, logger=__name__):
            with pytest.raises(KeyError):
                explode()

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.performance['status'] == 'failed'
        assert record.performance['error_type'] == 'KeyError'
        assert 'KeyError' in record.traceback
        assert operation_context.get() is None


class TestFormatters:

    def make_record(self, context=None, performance=None):
        record = logging.LogRecord(
            'gdal_helpers.raster.access', logging.WARNING, __file__, 10,
            'Opened %s', ('dem.tif',), None
        )
        record.context = context or {}
        record.performance = performance
        record.traceback = None
        return record

    def test_json_formatter(self):
        record = self.make_record(
            context={'dataset': '/data/dem.tif', 'gdal_error_num': 4},
            performance={'duration_seconds': 0.5}
        )
        data = json.loads(JsonFormatter().format(record))

        assert data['level'] == 'WARNING'
        assert data['message'] == 'Opened dem.tif'
        assert data['context']['gdal_error_num'] == 4
        assert data['performance']['duration_seconds'] == 0.5
        assert 'traceback' not in data

    def test_human_formatter_context(self):
        record = self.make_record(context={
            'dataset': '/data/rasters/dem.tif',
            'operation': 'open_raster',
            'gdal_error_num': 4,
        })
        output = HumanFormatter(use_colors=False).format(record)

        assert '[ds:dem.tif | op:open_raster | cpl:4]' in output
        assert 'Opened dem.tif' in output
        assert '\033[' not in output

    def test_human_formatter_performance(self):
        record = self.make_record(performance={
            'duration_seconds': 1.25, 'pixels_per_second': 800.0, 'status': 'success'
        })
        output = HumanFormatter(use_colors=False, show_context=False).format(record)
        assert 'Performance: 1.250s | 800.0 px/s | success' in output

    def test_human_formatter_colors(self):
        output = HumanFormatter(use_colors=True).format(self.make_record())
        assert HumanFormatter.COLORS['WARNING'] in output

"""Human-readable formatter for console output."""

import logging
from datetime import datetime
from typing import Dict


class HumanFormatter(logging.Formatter):
    """Format log records for human readability with colors and structure.

    Features:
    - Color coding by log level
    - Dataset / operation context display
    - GDAL error numbers for records forwarded from GDAL
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[0m',        # Default
        'WARNING': '\033[93m',    # Yellow
        'ERROR': '\033[91m',      # Red
        'CRITICAL': '\033[95m',   # Magenta
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    def __init__(self, use_colors: bool = True, show_context: bool = True):
        """Initialize formatter.

        Args:
            use_colors: Whether to use ANSI colors
            show_context: Whether to show context information
        """
        super().__init__()
        self.use_colors = use_colors
        self.show_context = show_context

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        if self.use_colors:
            level_color = self.COLORS.get(record.levelname, '')
            reset = self.RESET
            bold = self.BOLD
            dim = self.DIM
        else:
            level_color = reset = bold = dim = ''

        level = f"{level_color}{record.levelname:8}{reset}"
        context_str = self._format_context(record) if self.show_context else ''
        logger_name = self._shorten_logger_name(record.name)

        parts = [
            f"{dim}{timestamp}{reset}",
            level,
            f"{dim}[{logger_name}]{reset}",
        ]
        if context_str:
            parts.append(f"{bold}{context_str}{reset}")
        parts.append(record.getMessage())

        output = ' '.join(parts)

        perf = getattr(record, 'performance', None)
        if perf:
            perf_str = self._format_performance(perf)
            if perf_str:
                output += f"\n  {dim}Performance: {perf_str}{reset}"

        tb = getattr(record, 'traceback', None)
        if tb:
            if self.use_colors:
                tb_lines = tb.strip().split('\n')
                output += '\n' + '\n'.join(f"  {level_color}{line}{reset}" for line in tb_lines)
            else:
                output += f"\n{tb}"
        elif record.exc_info:
            output += '\n' + self.formatException(record.exc_info)

        return output

    def _format_context(self, record: logging.LogRecord) -> str:
        context = getattr(record, 'context', None)
        if not context:
            return ''

        parts = []
        if context.get('dataset'):
            # Only the file name, full paths drown the message
            parts.append(f"ds:{str(context['dataset']).rstrip('/').split('/')[-1]}")
        if context.get('operation'):
            parts.append(f"op:{context['operation']}")
        if context.get('gdal_error_num') is not None:
            parts.append(f"cpl:{context['gdal_error_num']}")

        return f"[{' | '.join(parts)}]" if parts else ''

    def _shorten_logger_name(self, name: str, max_length: int = 24) -> str:
        if len(name) <= max_length:
            return name

        parts = name.split('.')
        if len(parts) > 1:
            last = parts[-1]
            if len(last) <= max_length - 3:
                return f"...{last}"

        return f"{name[:max_length-3]}..."

    def _format_performance(self, perf: Dict) -> str:
        parts = []

        if 'duration_seconds' in perf:
            parts.append(f"{perf['duration_seconds']:.3f}s")
        if 'pixels_per_second' in perf:
            parts.append(f"{perf['pixels_per_second']:.1f} px/s")
        if perf.get('status'):
            parts.append(str(perf['status']))

        return ' | '.join(parts)

import os
import re
import sys
VERBOSE = False
_OUTPUT_FILE = None
_OUTPUT_STATS = {'lines': 0, 'bytes': 0}
_WRITE_ERROR_SHOWN = False
_ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
def supports_color():
    if os.environ.get("NO_COLOR"):
        return False
    is_a_tty = hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()
    if sys.platform == 'win32':
        return is_a_tty
    return is_a_tty and 'TERM' in os.environ
COLOR_ENABLED = supports_color()
def colorize(text, color_code):
    if COLOR_ENABLED:
        return f"\033[{color_code}m{text}\033[0m"
    return text
def _strip_ansi(text):
    return _ANSI_ESCAPE.sub('', text)
def set_output_file(filepath):
    """Mirror all printed output (without colours) into ``filepath``."""
    global _OUTPUT_FILE, _OUTPUT_STATS, _WRITE_ERROR_SHOWN
    from pr_triage.i18n import t
    from pr_triage.logging_utils import log
    if not filepath:
        _OUTPUT_FILE = None
        return
    try:
        _OUTPUT_FILE = open(filepath, 'w', encoding='utf-8')
        _OUTPUT_STATS = {'lines': 0, 'bytes': 0}
        _WRITE_ERROR_SHOWN = False
    except OSError as e:
        Print.warn(t("output.open_failed", filepath=filepath, error=str(e)))
        log(f"Output file error: {filepath}: {e}", level="WARN")
        _OUTPUT_FILE = None
def close_output_file():
    global _OUTPUT_FILE
    from pr_triage.i18n import t
    if not _OUTPUT_FILE:
        return
    handle = _OUTPUT_FILE
    _OUTPUT_FILE = None
    try:
        handle.close()
    except OSError as e:
        from pr_triage.logging_utils import log
        log(f"Output file close failed: {e}", level="WARN")
        return
    Print.success(t("output.file_closed", filepath=handle.name, lines=_OUTPUT_STATS['lines']))
def _write_output(text):
    """Write to the mirror file without colours."""
    global _WRITE_ERROR_SHOWN
    if not _OUTPUT_FILE:
        return
    try:
        clean_text = _strip_ansi(str(text))
        _OUTPUT_FILE.write(clean_text + '\n')
        _OUTPUT_FILE.flush()
        _OUTPUT_STATS['lines'] += 1
        _OUTPUT_STATS['bytes'] += len(clean_text) + 1
    except OSError as e:
        if not _WRITE_ERROR_SHOWN:
            _WRITE_ERROR_SHOWN = True
            from pr_triage.i18n import t
            _console(colorize(t("output.write_failed", error=str(e)), '93'))
def _console(text, **kwargs):
    try:
        print(text, **kwargs)
    except UnicodeEncodeError:
        print(str(text).encode('ascii', errors='replace').decode('ascii'), **kwargs)
def safe_print(text='', **kwargs):
    """Print text with Unicode encoding error handling and mirror it to the output file."""
    _console(text, **kwargs)
    _write_output(text)
class Print:
    LEVEL_COLORS = {
        'success': '92',
        'error': '91',
        'warn': '93',
        'info': '96',
        'action': '90',
        'critical_error': '1;91',
        'cancelled': '90',
    }
    @staticmethod
    def _emit(level, msg, **kwargs):
        from pr_triage.i18n import t
        line = f"[{t('log_levels.' + level)}] {msg}"
        _console(colorize(line, Print.LEVEL_COLORS[level]), **kwargs)
        _write_output(line)
    @staticmethod
    def success(msg, **kwargs):
        Print._emit('success', msg, **kwargs)
    @staticmethod
    def error(msg, **kwargs):
        Print._emit('error', msg, **kwargs)
    @staticmethod
    def warn(msg, **kwargs):
        Print._emit('warn', msg, **kwargs)
    @staticmethod
    def info(msg, **kwargs):
        Print._emit('info', msg, **kwargs)
    @staticmethod
    def action(msg, **kwargs):
        Print._emit('action', msg, **kwargs)
    @staticmethod
    def critical_error(msg, **kwargs):
        Print._emit('critical_error', msg, **kwargs)
    @staticmethod
    def cancelled(msg, **kwargs):
        Print._emit('cancelled', msg, **kwargs)
def print_error(msg): Print.error(msg)
def print_cancelled(msg): Print.cancelled(msg)
def set_verbose(v: bool):
    """Set verbose flag for printing/logging."""
    global VERBOSE
    VERBOSE = bool(v)

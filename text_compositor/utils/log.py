import logging
import colorama

from .general import replace_prefix

ROOT_TAG = 'text-compositor'

class Formatter(logging.Formatter):
    def formatMessage(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.ERROR:
            self._style._fmt = f'{colorama.Fore.RED}%(levelname)s:{colorama.Fore.RESET} [%(name)s] %(message)s'
        elif record.levelno >= logging.WARN:
            self._style._fmt = f'{colorama.Fore.YELLOW}%(levelname)s:{colorama.Fore.RESET} [%(name)s] %(message)s'
        else:
            self._style._fmt = '[%(name)s] %(message)s'
        return super().formatMessage(record)

class Filter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # Records are shared between handlers, shorten the name once
        if not hasattr(record, 'full_name'):
            # Only keep our own records
            if not record.name.startswith(ROOT_TAG):
                return False
            record.full_name = record.name
            record.name = replace_prefix(record.name, ROOT_TAG + '.', '')
        return super().filter(record)

root = logging.getLogger(ROOT_TAG)
root.addHandler(logging.NullHandler())

_handler = None

def init_logging(level = logging.INFO):
    """Attach the colored stream handler. Safe to call more than once."""
    global _handler
    if _handler is None:
        colorama.init(autoreset=True)
        _handler = logging.StreamHandler()
        _handler.setFormatter(Formatter())
        _handler.addFilter(Filter())
        root.addHandler(_handler)
    set_log_level(level)

def set_log_level(level):
    if isinstance(level, str):
        # level names, including str enums
        level = str(level).upper()
    root.setLevel(level)

def get_logger(name: str):
    return root.getChild(name)

file_handlers = {}

def add_file_logger(path: str):
    if path in file_handlers:
        return
    handler = logging.FileHandler(path, encoding='utf8')
    handler.setFormatter(Formatter())
    handler.addFilter(Filter())
    file_handlers[path] = handler
    root.addHandler(handler)

def remove_file_logger(path: str):
    if path in file_handlers:
        root.removeHandler(file_handlers[path])
        file_handlers[path].close()
        del file_handlers[path]

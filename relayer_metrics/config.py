import logging
from pathlib import Path
from typing import Optional

import toml

DEFAULT_ADDRESS = 'localhost'
DEFAULT_PORT = 5183
DEFAULT_LOG_LEVEL = 'INFO'


class Config:
    def __init__(self, path: Optional[Path] = None):
        data = toml.load(path) if path is not None else {}
        section = data.get('metrics', {})
        self.address = section.get('address', DEFAULT_ADDRESS)
        self.port = int(section.get('port', DEFAULT_PORT))
        if not 0 <= self.port <= 65535:
            raise ValueError(f'Invalid metrics port {self.port}')
        self.log_level = str(section.get('log_level', DEFAULT_LOG_LEVEL)).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f'Unknown log level {self.log_level}')
        self.disable_created = section.get('disable_created', True)
        if not isinstance(self.disable_created, bool):
            raise ValueError(f'disable_created must be true or false, got {self.disable_created!r}')

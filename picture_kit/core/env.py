"""Environment and settings loading for picture-tool.

Lookup order for each variable (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path, if given.
  3. Nearest .env walking up from cwd, stopping at a .git dir or file.

A .env line is `KEY=value`, optionally prefixed with `export `. One pair of
matching quotes around the value is removed.

Recognised variables:
  PICTURE_IMAGES_DIR   directory images are loaded from and saved to (default: images)
"""

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

IMAGES_DIR_VAR = 'PICTURE_IMAGES_DIR'
DEFAULT_IMAGES_DIR = 'images'


def _search_dirs(start: Path) -> Iterator[Path]:
    """Yield start and its ancestors, ending with the first that holds .git."""
    for directory in (start, *start.parents):
        yield directory
        if (directory / '.git').exists():
            return


def _find_dotenv(start: Path) -> Path | None:
    candidates = (d / '.env' for d in _search_dirs(start.resolve()))
    return next((c for c in candidates if c.is_file()), None)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
        return value[1:-1]
    return value


def _parse_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if line.startswith('#'):
        return None
    key, sep, value = line.removeprefix('export ').partition('=')
    key = key.strip()
    if not sep or not key:
        return None
    return key, _unquote(value.strip())


def _parse_dotenv(path: Path) -> dict[str, str]:
    lines = path.read_text(encoding='utf-8').splitlines()
    return dict(entry for entry in map(_parse_line, lines) if entry is not None)


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env entries into os.environ for keys not already set.

    Returns the file that was read, or None.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None
    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


@dataclass
class Settings:
    images_dir: Path

    @classmethod
    def from_env(cls) -> 'Settings':
        return cls(images_dir=Path(os.environ.get(IMAGES_DIR_VAR) or DEFAULT_IMAGES_DIR))

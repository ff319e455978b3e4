# docker-volume-backup v1.0
import os
import tarfile
from datetime import datetime
from pathlib import Path

from volume_backup.config import ARCHIVE_EXT
from volume_backup.errors import ArchiveError

BACKUP_MARKER = '_backup_'


def default_backup_name(volume_name, now=None):
    '''<volume>_backup_<YYYYMMDD_HHMMSS>.tar.gz from the local clock'''
    timestamp = (now or datetime.now()).strftime('%Y%m%d_%H%M%S')
    return f"{volume_name}{BACKUP_MARKER}{timestamp}{ARCHIVE_EXT}"


def volume_from_backup_name(filename):
    '''Guess the source volume of a default-named backup, or None'''
    name = Path(filename).name
    if not name.endswith(ARCHIVE_EXT) or BACKUP_MARKER not in name:
        return None
    return name.rsplit(BACKUP_MARKER, 1)[0] or None


def get_file_size(filepath):
    '''Get human-readable file size'''
    size = Path(filepath).stat().st_size
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"


def list_archive(archive_path, display_name=None):
    '''Return member names of a gzip tar archive.
    Raises ArchiveError if the file cannot be read as one.
    '''
    try:
        with tarfile.open(archive_path, 'r:gz') as tar:
            return tar.getnames()
    except (tarfile.TarError, OSError, EOFError) as e:
        raise ArchiveError(
            f"Input file '{display_name or archive_path}' is not a valid tar.gz archive",
            detail=str(e)
        ) from e


def check_input_archive(archive_path, display_name=None):
    '''Ensure a restore input exists, is readable and is a valid archive.
    Returns the member list so callers can preview it.
    '''
    path = Path(archive_path)
    name = display_name or str(archive_path)

    if not path.is_file():
        raise ArchiveError(f"Input file '{name}' not found")

    if not os.access(path, os.R_OK):
        raise ArchiveError(f"Input file '{name}' is not readable")

    return list_archive(path, name)

# docker-volume-backup v1.0 - Input validation
import re

from volume_backup.errors import ValidationError

VOLUME_NAME_RE = re.compile(r'^[a-zA-Z0-9][a-zA-Z0-9_.-]*$')

# Characters a shell would treat specially
DANGEROUS_CHARS = ('|', ';', '&', '$', '`', '\\')


def validate_volume_name(name):
    '''Validate a volume name.
    Docker volume names must match: [a-zA-Z0-9][a-zA-Z0-9_.-]*
    Returns the name or raises ValidationError.
    '''
    if not isinstance(name, str) or not VOLUME_NAME_RE.fullmatch(name):
        raise ValidationError(
            f"Invalid volume name: '{name}'. Volume names must start with alphanumeric "
            "character and contain only letters, numbers, underscores, periods, and hyphens."
        )
    return name


def validate_filename(filename):
    '''Validate an archive path relative to the working directory.
    Rejects path traversal, absolute paths and shell metacharacters.
    Returns the filename or raises ValidationError.
    '''
    invalid = (
        not isinstance(filename, str)
        or not filename
        or '..' in filename
        or filename.startswith('/')
        or '\x00' in filename
        or any(c in filename for c in DANGEROUS_CHARS)
    )
    if invalid:
        raise ValidationError(
            f"Invalid filename: '{filename}'. Filename contains potentially dangerous characters."
        )
    return filename

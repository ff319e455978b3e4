# docker-volume-backup v1.0
import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_IMAGE = 'busybox'
DEFAULT_DOCKER_BIN = 'docker'

# Mount points inside the helper container
VOLUME_MOUNT = '/volume'
BACKUP_MOUNT = '/backup'

ARCHIVE_EXT = '.tar.gz'
PREVIEW_LIMIT = 10
VERIFY_LIMIT = 5

_TRUTHY = ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class BackupConfig:
    '''Settings for one invocation, built once at start-up'''

    image: str = DEFAULT_IMAGE
    docker_bin: str = DEFAULT_DOCKER_BIN
    workdir: Path = field(default_factory=Path.cwd)
    verbose: bool = False
    debug: bool = False
    preview_limit: int = PREVIEW_LIMIT

    @classmethod
    def from_env(cls, verbose=False, environ=None):
        '''Build config from VOLUME_BACKUP_* environment variables'''
        env = os.environ if environ is None else environ
        return cls(
            image=env.get('VOLUME_BACKUP_IMAGE', '').strip() or DEFAULT_IMAGE,
            docker_bin=env.get('VOLUME_BACKUP_DOCKER', '').strip() or DEFAULT_DOCKER_BIN,
            workdir=Path.cwd(),
            verbose=verbose,
            debug=env.get('VOLUME_BACKUP_DEBUG', '').strip().lower() in _TRUTHY,
        )

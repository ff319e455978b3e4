# docker-volume-backup v1.0
import logging
from pathlib import Path

from volume_backup.cli.ui import (
    show_info, show_warning, show_error, show_detail, show_listing, show_volume_table
)
from volume_backup.config import BACKUP_MOUNT, VOLUME_MOUNT, VERIFY_LIMIT
from volume_backup.errors import VolumeBackupError, VolumeNotFoundError, OperationError
from volume_backup.utils.archive import (
    default_backup_name, get_file_size, list_archive, check_input_archive
)
from volume_backup.utils.docker_utils import (
    ensure_docker, volume_exists, create_volume, list_volumes,
    mount_arg, run_helper, helper_error_detail
)
from volume_backup.utils.validation import validate_volume_name, validate_filename

_log = logging.getLogger(__name__)


def backup_volume(config, volume_name: str, output_file: str = None) -> Path:
    '''Archive the contents of `volume_name` into the working directory.

    Returns the path of the written archive. Raises a VolumeBackupError
    subclass at the first failed check.
    '''
    ensure_docker(config)
    validate_volume_name(volume_name)

    output_file = output_file or default_backup_name(volume_name)
    validate_filename(output_file)

    if not volume_exists(config, volume_name):
        raise VolumeNotFoundError(
            f"Volume '{volume_name}' does not exist",
            available=list_volumes(config)
        )

    output_path = config.workdir / output_file
    if output_path.is_file():
        show_warning(f"Output file '{output_file}' already exists and will be overwritten")
        # The post-run check must only ever see this run's archive
        try:
            output_path.unlink()
        except OSError as e:
            raise OperationError(f"Cannot replace output file '{output_file}'", detail=str(e)) from e

    show_info(f"Backing up volume '{volume_name}' to '{output_file}'...")

    if config.verbose:
        show_info(f"Using Docker image: {config.image}")
        show_info(f"Volume mount: {volume_name}:{VOLUME_MOUNT}")
        show_info(f"Backup directory: {config.workdir}:{BACKUP_MOUNT}")

    result = run_helper(
        config,
        [
            mount_arg(volume_name, VOLUME_MOUNT, read_only=True),
            mount_arg(config.workdir, BACKUP_MOUNT),
        ],
        ['tar', 'czf', f'{BACKUP_MOUNT}/{output_file}', '-C', VOLUME_MOUNT, '.'],
        f"Archiving {volume_name}..."
    )

    if result.returncode != 0:
        raise OperationError("Backup operation failed", detail=helper_error_detail(result))

    # A zero exit with no file means tar failed silently inside the container
    if not output_path.is_file() or output_path.stat().st_size == 0:
        raise OperationError("Backup file was not created or is empty")

    show_info(f"Backup complete: {output_file} ({get_file_size(output_path)})")

    if config.verbose:
        show_info("Backup contents:")
        show_listing(list_archive(output_path, output_file), config.preview_limit)

    return output_path


def restore_volume(config, volume_name: str, input_file: str):
    '''Extract `input_file` from the working directory into `volume_name`.

    The volume is created when missing. Existing files that are not in the
    archive are left untouched: the archive is extracted on top.
    '''
    ensure_docker(config)
    validate_volume_name(volume_name)
    validate_filename(input_file)

    entries = check_input_archive(config.workdir / input_file, input_file)

    if volume_exists(config, volume_name):
        show_warning(
            f"Volume '{volume_name}' already exists. "
            "Files from the archive will overwrite existing ones; other files are kept."
        )
    else:
        show_info(f"Creating new volume '{volume_name}'...")
        create_volume(config, volume_name)

    show_info(f"Restoring '{input_file}' into volume '{volume_name}'...")

    if config.verbose:
        show_info("Archive contents preview:")
        show_listing(entries, config.preview_limit)

    result = run_helper(
        config,
        [
            mount_arg(volume_name, VOLUME_MOUNT),
            mount_arg(config.workdir, BACKUP_MOUNT, read_only=True),
        ],
        ['tar', 'xzf', f'{BACKUP_MOUNT}/{input_file}', '-C', VOLUME_MOUNT],
        f"Extracting into {volume_name}..."
    )

    if result.returncode != 0:
        raise OperationError("Restore operation failed", detail=helper_error_detail(result))

    show_info(f"Restore complete: {volume_name}")

    if config.verbose:
        _show_volume_files(config, volume_name)


def _show_volume_files(config, volume_name):
    '''List files now present in the volume (verbose restore)'''
    show_info("Verifying restored volume...")
    result = run_helper(
        config,
        [mount_arg(volume_name, VOLUME_MOUNT, read_only=True)],
        ['find', VOLUME_MOUNT, '-type', 'f'],
        f"Listing {volume_name}..."
    )

    if result.returncode != 0:
        show_warning(f"Could not list files in volume '{volume_name}'")
        return

    files = [line for line in result.stdout.splitlines() if line.strip()]
    show_info("Files in volume:")
    for path in files[:VERIFY_LIMIT]:
        show_detail(path)
    show_info(f"Total files: {len(files)}")


def run_command(config, invocation) -> int:
    '''Dispatch a parsed invocation and map errors to an exit status'''
    try:
        if invocation.interactive:
            from volume_backup.cli.interactive import run_interactive
            run_interactive(config)
        elif invocation.command == 'backup':
            backup_volume(config, invocation.volume, invocation.path)
        else:
            restore_volume(config, invocation.volume, invocation.path)
    except VolumeBackupError as e:
        report_error(e)
        return 1

    return 0


def report_error(error):
    show_error(error)
    if error.detail:
        _log.debug("Error detail: %s", error.detail)
    if isinstance(error, VolumeNotFoundError):
        show_info("Available volumes:")
        show_volume_table(error.available)

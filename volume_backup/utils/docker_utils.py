import logging
import subprocess
from pathlib import Path

from volume_backup.errors import DockerUnavailableError, OperationError
from volume_backup.utils.docker_progress import run_docker_with_progress, filter_docker_errors

_log = logging.getLogger(__name__)


def safe_docker_run(config, args, **kwargs):
    """Run a docker CLI command - returns None if the binary is not installed."""
    command = [config.docker_bin, *args]
    _log.debug("Running: %s", " ".join(command))
    kwargs.setdefault('capture_output', True)
    kwargs.setdefault('text', True)
    try:
        return subprocess.run(command, **kwargs)
    except FileNotFoundError:
        return None


def check_docker_status(config):
    """Check Docker availability and return detailed status."""
    try:
        result = subprocess.run(
            [config.docker_bin, 'info'],
            capture_output=True,
            text=True,
            timeout=10
        )
        if result.returncode == 0:
            return {'installed': True, 'running': True, 'message': 'Docker is running'}
        else:
            stderr = result.stderr.lower()
            if 'cannot connect' in stderr or 'is the docker daemon running' in stderr:
                return {'installed': True, 'running': False, 'message': 'Docker is not running or not accessible'}
            return {'installed': True, 'running': False, 'message': f'Docker error: {result.stderr.strip()[:100]}'}
    except FileNotFoundError:
        return {'installed': False, 'running': False, 'message': 'Docker is not installed or not in PATH'}
    except subprocess.TimeoutExpired:
        return {'installed': True, 'running': False, 'message': 'Docker is not responding (timeout)'}


def ensure_docker(config):
    '''Raise DockerUnavailableError unless the runtime answers `info`'''
    status = check_docker_status(config)
    _log.debug("Docker status: %s", status)
    if not status['running']:
        raise DockerUnavailableError(status['message'])


def volume_exists(config, volume_name) -> bool:
    result = safe_docker_run(config, ['volume', 'inspect', volume_name])
    return result is not None and result.returncode == 0


def create_volume(config, volume_name):
    result = safe_docker_run(config, ['volume', 'create', volume_name])
    if result is None or result.returncode != 0:
        detail = result.stderr.strip() if result is not None else ''
        raise OperationError(f"Failed to create volume '{volume_name}'", detail=detail)


def list_volumes(config):
    '''Return [{'name', 'driver', 'scope'}] for every volume the runtime knows'''
    result = safe_docker_run(
        config, ['volume', 'ls', '--format', '{{.Name}}\t{{.Driver}}\t{{.Scope}}']
    )
    if result is None or result.returncode != 0:
        return []

    volumes = []
    for line in result.stdout.splitlines():
        if not line.strip():
            continue
        parts = line.split('\t')
        parts += [''] * (3 - len(parts))
        volumes.append({'name': parts[0], 'driver': parts[1], 'scope': parts[2]})
    return volumes


def _mount_field(field):
    # --mount values are parsed as CSV
    if ',' in field or '"' in field:
        return '"' + field.replace('"', '""') + '"'
    return field


def mount_arg(source, target, read_only=False):
    '''Build a --mount value: bind mount for host paths, volume mount for names.
    Unlike -v, colons in the source path are not ambiguous.
    '''
    source = str(source)
    kind = 'bind' if Path(source).is_absolute() else 'volume'
    fields = [f'type={kind}', f'source={source}', f'target={target}']
    if read_only:
        fields.append('readonly')
    return ','.join(_mount_field(f) for f in fields)


def run_helper(config, mounts, command, message):
    '''Run `command` in a throwaway helper container.

    mounts is a list of mount_arg() values; command is an argv list
    handed to the image as-is, never through a shell.
    '''
    args = [config.docker_bin, 'run', '--rm']
    for mount in mounts:
        args += ['--mount', mount]
    args += [config.image, *command]

    _log.debug("Running: %s", " ".join(args))
    try:
        return run_docker_with_progress(args, message)
    except FileNotFoundError as e:
        raise DockerUnavailableError('Docker is not installed or not in PATH') from e


def helper_error_detail(result):
    return filter_docker_errors(result.stderr or '')[:200]

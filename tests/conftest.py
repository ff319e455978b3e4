"""
Test fixtures for volume_backup tests.

Provides a fake container runtime that keeps volumes as directories under
tmp_path and does the tar work with tarfile.
"""

import csv
import subprocess
import tarfile
from pathlib import Path

import pytest

from volume_backup.config import BackupConfig


def _completed(command, returncode=0, stdout='', stderr=''):
    return subprocess.CompletedProcess(command, returncode, stdout=stdout, stderr=stderr)


class FakeDocker:
    """Stand-in for the docker CLI, installed over subprocess.run."""

    def __init__(self, volumes_root: Path):
        self.volumes_root = volumes_root
        self.installed = True
        self.running = True
        self.fail_create = False
        self.fail_run = False
        self.skip_archive_write = False
        self.calls = []
        self.runs = []

    # -- helpers for tests -------------------------------------------------

    def add_volume(self, name, files=None):
        root = self.volumes_root / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {}).items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        return root

    def volume_files(self, name):
        root = self.volumes_root / name
        return {
            p.relative_to(root).as_posix(): p.read_bytes()
            for p in sorted(root.rglob('*')) if p.is_file()
        }

    def has_volume(self, name):
        return (self.volumes_root / name).is_dir()

    # -- subprocess.run replacement ----------------------------------------

    def __call__(self, command, **kwargs):
        command = list(command)
        self.calls.append(command)
        if not self.installed:
            raise FileNotFoundError(command[0])

        args = command[1:]
        if args[0] == 'info':
            if self.running:
                return _completed(command)
            return _completed(command, 1, stderr='Cannot connect to the Docker daemon. Is the docker daemon running?')

        if args[:2] == ['volume', 'inspect']:
            return _completed(command, 0 if self.has_volume(args[2]) else 1)

        if args[:2] == ['volume', 'create']:
            if self.fail_create:
                return _completed(command, 1, stderr='create failed')
            self.add_volume(args[2])
            return _completed(command, stdout=args[2] + '\n')

        if args[:2] == ['volume', 'ls']:
            names = sorted(p.name for p in self.volumes_root.iterdir() if p.is_dir())
            return _completed(command, stdout=''.join(f'{n}\tlocal\tlocal\n' for n in names))

        if args[0] == 'run':
            return self._run(command, args[1:])

        raise AssertionError(f'unexpected docker command: {command}')

    def _run(self, command, args):
        assert args[0] == '--rm'
        args = args[1:]
        mounts = {}
        while args and args[0] == '--mount':
            fields = next(csv.reader([args[1]]))
            opts = dict(f.split('=', 1) if '=' in f else (f, '') for f in fields)
            source, target = opts['source'], opts['target']
            read_only = 'readonly' in opts
            host = Path(source) if opts['type'] == 'bind' else self.add_volume(source)
            mounts[target] = (host, read_only)
            args = args[2:]

        image, argv = args[0], args[1:]
        self.runs.append({'mounts': mounts, 'image': image, 'argv': argv})

        if self.fail_run:
            return _completed(command, 1, stderr='Unable to find image locally\nboom')

        def host_path(container_path):
            for target, (host, read_only) in mounts.items():
                if container_path == target or container_path.startswith(target + '/'):
                    return host / container_path[len(target):].lstrip('/'), read_only
            raise AssertionError(f'{container_path} is not mounted')

        if argv[:2] == ['tar', 'czf']:
            out, out_ro = host_path(argv[2])
            src, _ = host_path(argv[4])
            if out_ro or not out.parent.is_dir():
                return _completed(command, 1, stderr='tar: cannot open')
            if self.skip_archive_write:
                return _completed(command)
            with tarfile.open(out, 'w:gz') as tar:
                tar.add(src, arcname=argv[5])
            return _completed(command)

        if argv[:2] == ['tar', 'xzf']:
            archive, _ = host_path(argv[2])
            dest, dest_ro = host_path(argv[4])
            if dest_ro:
                return _completed(command, 1, stderr='tar: read-only file system')
            with tarfile.open(archive, 'r:gz') as tar:
                tar.extractall(dest)
            return _completed(command)

        if argv[0] == 'find':
            root, _ = host_path(argv[1])
            files = sorted(
                f"{argv[1]}/{p.relative_to(root).as_posix()}" for p in root.rglob('*') if p.is_file()
            )
            return _completed(command, stdout=''.join(f + '\n' for f in files))

        raise AssertionError(f'unexpected helper command: {argv}')


@pytest.fixture
def workdir(tmp_path) -> Path:
    path = tmp_path / 'work'
    path.mkdir()
    return path


@pytest.fixture
def config(workdir) -> BackupConfig:
    return BackupConfig(workdir=workdir)


@pytest.fixture
def verbose_config(workdir) -> BackupConfig:
    return BackupConfig(workdir=workdir, verbose=True)


@pytest.fixture
def fake_docker(tmp_path, monkeypatch) -> FakeDocker:
    root = tmp_path / 'volumes'
    root.mkdir()
    fake = FakeDocker(root)
    monkeypatch.setattr(subprocess, 'run', fake)
    return fake


@pytest.fixture
def make_archive(workdir):
    """Write a tar.gz into the working directory from a {path: bytes} dict."""

    def _make(name, files):
        staging = workdir.parent / f'staging_{name}'
        for rel, content in files.items():
            path = staging / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        archive = workdir / name
        with tarfile.open(archive, 'w:gz') as tar:
            tar.add(staging, arcname='.')
        return archive

    return _make

# docker-volume-backup v1.0
import logging
import os
import sys

from rich.logging import RichHandler

from volume_backup.cli.args import parse_args
from volume_backup.cli.commands import run_command
from volume_backup.cli.ui import err_console, show_error, show_usage
from volume_backup.config import BackupConfig
from volume_backup.errors import UsageError


def configure_logging(debug=False):
    '''Route diagnostic logging through Rich on stderr'''
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def main(argv=None):
    '''Entry point; returns the process exit status'''
    argv = sys.argv[1:] if argv is None else argv
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else 'docker-volume-backup'
    if prog == '__main__.py':
        prog = 'python -m volume_backup'

    try:
        invocation = parse_args(argv)
    except UsageError as e:
        show_error(e)
        show_usage(prog, to_stderr=True)
        return 1

    if invocation.show_help:
        show_usage(prog)
        return 0

    config = BackupConfig.from_env(verbose=invocation.verbose)
    configure_logging(config.debug)

    return run_command(config, invocation)


if __name__ == "__main__":
    sys.exit(main())

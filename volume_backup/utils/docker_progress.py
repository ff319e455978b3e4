import platform
import subprocess
from typing import List

from rich.live import Live
from rich.spinner import Spinner

from volume_backup.cli.ui import console

# ASCII-compatible spinner for Windows cmd.exe, Unicode for Linux/Mac
SPINNER_STYLE = 'line' if platform.system().lower() == 'windows' else 'dots'


class DockerProgressMonitor:
    """Context manager showing a spinner while a Docker command runs."""

    def __init__(self, message: str = "Docker operation in progress"):
        self.message = message
        self.spinner = Spinner(SPINNER_STYLE, text=message)
        self.live = None

    def __enter__(self):
        """Start the spinner display."""
        self.live = Live(self.spinner, console=console, refresh_per_second=10, transient=True)
        self.live.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop the spinner; the caller reports the outcome."""
        if self.live:
            self.live.stop()


def run_docker_with_progress(
    command: List[str],
    message: str,
    encoding: str = 'utf-8',
    errors: str = 'ignore'
) -> subprocess.CompletedProcess:
    """Run a Docker command with progress spinner. No timeout is applied."""
    with DockerProgressMonitor(message):
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding=encoding,
            errors=errors
        )

    return result


def filter_docker_errors(stderr: str) -> str:
    """Filter Docker stderr to show only real errors, not image pull progress."""
    if not stderr:
        return ""

    progress_keywords = [
        'Pulling', 'Download', 'Extracting', 'Pull complete',
        'Waiting', 'Verifying', 'Already exists', 'Digest:',
        'Status:', 'Image is up to date', 'Downloaded newer image',
        'Unable to find image'
    ]

    error_lines = []
    for line in stderr.split('\n'):
        if any(keyword in line for keyword in progress_keywords):
            continue

        if line.strip():
            error_lines.append(line)

    return '\n'.join(error_lines)

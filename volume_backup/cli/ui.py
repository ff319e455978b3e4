from rich.console import Console
from rich.table import Table
from rich.text import Text
import inquirer

# soft_wrap keeps every log line on one physical line when piped
console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

USAGE = """\
Docker Volume Backup & Restore Utility

Usage:
    {prog} backup <volume_name> [output_file]
    {prog} restore <volume_name> <input_file>
    {prog} -i|--interactive
    {prog} -h|--help

Commands:
    backup      Create a compressed backup of a Docker volume
    restore     Restore a Docker volume from a backup file

Options:
    -h, --help          Show this help message
    -v, --verbose       Verbose output
    -i, --interactive   Choose volumes and backups from a menu

Environment:
    VOLUME_BACKUP_IMAGE   Helper image providing sh and tar (default: busybox)
    VOLUME_BACKUP_DOCKER  Container runtime CLI (default: docker)
    VOLUME_BACKUP_DEBUG   Log every runtime command

Examples:
    {prog} backup my_volume
    {prog} backup my_volume custom_backup.tar.gz
    {prog} restore my_volume my_volume_backup_20241007_143022.tar.gz
"""


def _tagged(tag, style, message):
    # Text objects are never parsed as markup, so user input prints verbatim
    return Text.assemble((tag, style), " ", str(message))


def show_info(message):
    '''Show info message on stdout'''
    console.print(_tagged("[INFO]", "bold green", message))

def show_warning(message):
    '''Show warning message on stderr'''
    err_console.print(_tagged("[WARN]", "bold yellow", message))

def show_error(message):
    '''Show error message on stderr'''
    err_console.print(_tagged("[ERROR]", "bold red", message))

def show_detail(message):
    '''Show an untagged detail line (archive entries, file lists)'''
    console.print(Text(str(message)))

def show_usage(prog, to_stderr=False):
    target = err_console if to_stderr else console
    target.print(Text(USAGE.format(prog=prog)))

def show_listing(entries, limit, remainder_label="files"):
    '''Print the first `limit` entries and a count of the rest'''
    for entry in entries[:limit]:
        show_detail(entry)
    if len(entries) > limit:
        show_info(f"... and {len(entries) - limit} more {remainder_label}")

def show_volume_table(volumes):
    '''Show available volumes as a table'''
    if not volumes:
        show_info("No volumes found")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Driver", style="white")
    table.add_column("Scope", style="dim")

    for volume in volumes:
        table.add_row(volume['name'], volume['driver'], volume['scope'])

    console.print(table)

def select_from_list(message, choices):
    '''Interactive list selection; None when the prompt is aborted'''
    questions = [
        inquirer.List(
            'selection',
            message=message,
            choices=choices
        )
    ]

    answer = inquirer.prompt(questions)
    return answer['selection'] if answer else None

def text_input(message, default=None):
    '''Interactive free-text prompt; None when the prompt is aborted'''
    answer = inquirer.prompt([inquirer.Text('value', message=message, default=default)])
    return answer['value'].strip() if answer else None

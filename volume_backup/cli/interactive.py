from volume_backup.cli.commands import backup_volume, restore_volume
from volume_backup.cli.ui import select_from_list, text_input, show_info, show_warning
from volume_backup.config import ARCHIVE_EXT
from volume_backup.utils.archive import volume_from_backup_name
from volume_backup.utils.docker_utils import ensure_docker, list_volumes, volume_exists

CANCEL = "⬅️  Cancel"


def run_interactive(config):
    '''Menu-driven backup/restore; errors propagate to run_command'''
    ensure_docker(config)

    choice = select_from_list(
        "Select action",
        ["💾 Back up a volume", "♻️  Restore a volume", CANCEL]
    )

    if choice is None or choice == CANCEL:
        show_info("Cancelled")
    elif "Back up" in choice:
        backup_menu(config)
    else:
        restore_menu(config)


def backup_menu(config):
    volumes = list_volumes(config)

    if not volumes:
        show_warning("No volumes found!")
        return

    names = [v['name'] for v in volumes]
    selection = select_from_list("Select volume to back up", names + [CANCEL])

    if selection is None or selection == CANCEL:
        show_info("Backup cancelled")
        return

    backup_volume(config, selection)


def restore_menu(config):
    backups = sorted(
        (p.name for p in config.workdir.glob(f"*{ARCHIVE_EXT}") if p.is_file()),
        reverse=True
    )

    if not backups:
        show_warning(f"No {ARCHIVE_EXT} backups found in {config.workdir}")
        return

    backup_name = select_from_list("Select backup to restore", backups + [CANCEL])

    if backup_name is None or backup_name == CANCEL:
        show_info("Restore cancelled")
        return

    volume_name = text_input("Restore into volume", default=volume_from_backup_name(backup_name))

    if not volume_name:
        show_info("Restore cancelled")
        return

    if volume_exists(config, volume_name):
        show_warning(f"This will write into existing volume '{volume_name}'!")
        confirm = select_from_list(
            "Are you sure?",
            ["✅ Yes, restore backup", CANCEL]
        )
        if confirm is None or confirm == CANCEL:
            show_info("Restore cancelled")
            return

    restore_volume(config, volume_name, backup_name)

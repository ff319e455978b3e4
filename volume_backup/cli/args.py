from dataclasses import dataclass
from typing import List, Optional

from volume_backup.errors import UsageError

COMMANDS = ('backup', 'restore')


@dataclass
class Invocation:
    '''Parsed command line'''

    command: Optional[str] = None
    volume: Optional[str] = None
    path: Optional[str] = None
    verbose: bool = False
    interactive: bool = False
    show_help: bool = False


def parse_args(argv: List[str]) -> Invocation:
    '''Parse argv (without the program name) into an Invocation.

    Flags may appear anywhere. Raises UsageError for unknown options, a
    missing command and wrong argument counts.
    '''
    invocation = Invocation()
    positionals = []

    for arg in argv:
        if arg in ('-h', '--help'):
            invocation.show_help = True
            return invocation
        elif arg in ('-v', '--verbose'):
            invocation.verbose = True
        elif arg in ('-i', '--interactive'):
            invocation.interactive = True
        elif invocation.command is None and arg in COMMANDS:
            invocation.command = arg
        elif invocation.command is None or arg.startswith('-'):
            raise UsageError(f"Unknown option: {arg}")
        else:
            positionals.append(arg)

    if invocation.interactive:
        if invocation.command or positionals:
            raise UsageError("Interactive mode takes no command or arguments")
        return invocation

    if invocation.command is None:
        raise UsageError("No command specified")

    if not positionals:
        raise UsageError("Volume name is required")

    if invocation.command == 'restore' and len(positionals) < 2:
        raise UsageError("Input file is required for restore operation")

    if len(positionals) > 2:
        raise UsageError(f"Too many arguments for {invocation.command}")

    invocation.volume = positionals[0]
    invocation.path = positionals[1] if len(positionals) > 1 else None
    return invocation

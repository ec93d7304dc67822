"""nglibs command handlers. Each ``cmd_*`` takes parsed args and returns an exit code."""

# Names accepted on the command line, in the order they are listed to the user
AVAILABLE_COMMANDS: tuple[str, ...] = (
    "build",
    "build_watch",
    "pack",
    "publish",
    "pack_publish",
    "add",
    "remove",
    "configs",
    "serve",
)

__all__ = ["AVAILABLE_COMMANDS"]

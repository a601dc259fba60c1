"""
Shell Built-in Commands

Implements the chat/console command surface. Every command maps onto
one environment operation and returns a CommandResult instead of
printing, so the same table serves the console and a chat transport.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Callable, Hashable, List, Optional

from kurios.core.config_loader import get_config
from kurios.exceptions import COMMAND_ERRORS, PermissionDeniedError
from kurios.filesystem.renderer import TreeRenderer
from .result import CommandResult


HELP_TEXT = """\
KuriOS - Commands

Navigation:
  pwd                      Print the current directory
  ls [path]                List the current (or given) directory
  cd <path>                Change directory (.., ~, . and / supported)
  cat <path>               Display file contents

Variables:
  get <variable>           Display a variable
  set <variable> <value>   Set a variable, creating it if needed
  delete <variable>        Delete a variable
  (set time <YYYY-MM-DD HH:MM:SS | now> shifts the displayed clock)

Locks:
  lock <path> <key>        Lock a file or directory
  unlock <path> <key>      Unlock a file or directory

Environment:
  save <file>              Save the environment to a file
  load <file>              Load the environment from a file

Roles:
  su subscribe <role>      Subscribe to a lower-ranked role
  su unsubscribe <role>    Unsubscribe from a role

Shell:
  echo <text>              Print text
  help                     Display this help
  exit                     Exit the console
"""


@dataclass
class CommandContext:
    """Who is running a command, and from where."""
    channel: str
    member: Optional[Hashable] = None


class BuiltinCommands:
    """
    Built-in shell commands.

    Each handler takes the caller context and the argument list and
    returns a CommandResult. Errors raised by the environment are
    converted into error results by :meth:`execute`.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._commands: dict[str, Callable[[CommandContext, List[str]], CommandResult]] = {
            'help': self.cmd_help,
            'echo': self.cmd_echo,
            'pwd': self.cmd_pwd,
            'ls': self.cmd_ls,
            'cd': self.cmd_cd,
            'cat': self.cmd_cat,
            'get': self.cmd_get,
            'set': self.cmd_set,
            'delete': self.cmd_delete,
            'lock': self.cmd_lock,
            'unlock': self.cmd_unlock,
            'save': self.cmd_save,
            'load': self.cmd_load,
            'su': self.cmd_su,
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
        }

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: List[str], context: CommandContext) -> CommandResult:
        """
        Execute a built-in command.

        Args:
            name: Command name
            args: Command arguments
            context: Caller context

        Returns:
            The command's result
        """
        if not self.is_builtin(name):
            return CommandResult.error("Unknown command. Use \"help\" for more information.")

        try:
            if context.member is not None:
                self._check_permission(name, context.member)
            return self._commands[name](context, args)
        except COMMAND_ERRORS as e:
            self._shell.logger.debug(
                f"{name} failed: {e}",
                channel=context.channel,
                context={'error_code': e.error_code}
            )
            return CommandResult.error(e.message)

    def _check_permission(self, name: str, member: Hashable) -> None:
        roles = self._shell.role_manager.directory.roles_of(member)
        if not self._shell.environment.permissions.has_permission(roles, name):
            raise PermissionDeniedError(name)

    @property
    def _env(self):
        return self._shell.environment

    # Command implementations

    def cmd_help(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Display help information."""
        return CommandResult.plain(HELP_TEXT)

    def cmd_echo(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Echo arguments."""
        return CommandResult.plain(' '.join(args))

    def cmd_pwd(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Print working directory."""
        return CommandResult.plain(self._env.current_path(context.channel))

    def cmd_ls(self, context: CommandContext, args: List[str]) -> CommandResult:
        """List directory contents as a tree."""
        if args:
            folder = self._env.get_directory(context.channel, args[0])
        else:
            folder = self._env.current_folder(context.channel)
        depth = get_config().shell.tree_depth
        return CommandResult.plain(TreeRenderer.render(folder, depth))

    def cmd_cd(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Change directory."""
        if not args:
            return CommandResult.error("No directory was specified. Expecting \"cd <directory>\".")

        folder = self._env.change_directory(context.channel, args[0])
        return CommandResult.success(f"Changed directory to {folder.absolute_path}")

    def cmd_cat(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Display file contents."""
        if not args:
            return CommandResult.error("No file was specified. Expecting \"cat <file>\".")

        return CommandResult.plain(self._env.read_file(context.channel, args[0]))

    def cmd_get(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Display a variable."""
        if not args:
            return CommandResult.error("No variable was specified. Expecting \"get <variable>\".")

        return CommandResult.plain(self._env.variables.get(args[0]))

    def cmd_set(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Set a variable, creating it when missing."""
        if len(args) < 2:
            return CommandResult.error(
                "No variable name or value was specified. Expecting \"set <variable> <value>\"."
            )

        name, value = args[0], ' '.join(args[1:])
        variables = self._env.variables

        if not variables.exists(name):
            variables.create(name, value)
            return CommandResult.notice(
                "Could not already find the variable. Creating a new variable.\n"
                f"Created variable \"{name}\" with value \"{value}\"."
            )

        variables.set(name, value)
        return CommandResult.success(f"Updated variable \"{name}\" with value \"{value}\".")

    def cmd_delete(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Delete a variable."""
        if not args:
            return CommandResult.error("No variable was specified. Expecting \"delete <variable>\".")

        self._env.variables.delete(args[0])
        return CommandResult.success(f"Deleted variable \"{args[0]}\".")

    def cmd_lock(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Lock a file or folder."""
        if len(args) < 2:
            return CommandResult.error("Incomplete command. Expecting \"lock <path> <key>\".")

        self._env.lock(context.channel, args[0], args[1])
        return CommandResult.success(f"Locked \"{args[0]}\" and redirected to root.")

    def cmd_unlock(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Unlock a file or folder."""
        if len(args) < 2:
            return CommandResult.error("Incomplete command. Expecting \"unlock <path> <key>\".")

        self._env.unlock(context.channel, args[0], args[1])
        return CommandResult.success(f"Unlocked \"{args[0]}\".")

    def cmd_save(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Save the environment."""
        if not args:
            return CommandResult.error("No file name was specified. Expecting \"save <file>\".")

        self._env.save_file(args[0])
        return CommandResult.success(f"Saved environment to file \"{args[0]}\".")

    def cmd_load(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Load an environment, replacing the current one."""
        if not args:
            return CommandResult.error("No file name was specified. Expecting \"load <file>\".")

        self._env.load_file(args[0])
        return CommandResult.success(f"Loaded environment from file \"{args[0]}\".")

    def cmd_su(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Subscribe to or unsubscribe from a role."""
        usage = "Expecting \"su <subscribe | unsubscribe> <role>\"."
        if len(args) < 2:
            return CommandResult.error(f"Incomplete command. {usage}")

        action, role = args[0], args[1]
        member = context.member if context.member is not None else self._shell.console_member
        manager = self._shell.role_manager

        if action == 'subscribe':
            manager.subscribe(self._env.permissions, member, role)
            return CommandResult.success(f"Subscribed to role \"{role}\".")
        if action == 'unsubscribe':
            manager.unsubscribe(member, role)
            return CommandResult.success(f"Unsubscribed from role \"{role}\".")

        return CommandResult.error(f"Invalid command. {usage}")

    def cmd_exit(self, context: CommandContext, args: List[str]) -> CommandResult:
        """Exit the console."""
        self._shell.request_exit()
        return CommandResult.plain("Exiting...")

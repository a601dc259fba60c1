"""
KuriOS Shell Module

Routes command lines from the local console or a chat transport to the
built-in commands.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Hashable, Optional

from kurios.core.config_loader import get_config
from kurios.environment.environment import Environment
from kurios.logger import get_logger
from kurios.users.role_manager import RoleManager, InMemoryRoleDirectory
from .builtins import BuiltinCommands, CommandContext
from .parser import CommandParser
from .result import CommandResult


# Chat messages with this prefix belong to other bots
IGNORED_PREFIX = '!'

CONSOLE_MEMBER = 'console'


class Shell:
    """
    KuriOS command shell.

    Provides:
    - Command parsing
    - Built-in commands
    - Per-channel current directories
    - Permission checks for chat members

    Example:
        >>> shell = Shell(environment)
        >>> shell.dispatch('cd docs', channel='general', member='alice').render()
        'Changed directory to /docs'
    """

    def __init__(
        self,
        environment: Environment,
        role_manager: Optional[RoleManager] = None
    ):
        self._environment = environment
        self._role_manager = role_manager or RoleManager(InMemoryRoleDirectory())
        self._logger = get_logger('shell')
        self._parser = CommandParser()
        self._builtins = BuiltinCommands(self)
        self._running = False
        self._exiting = False

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def role_manager(self) -> RoleManager:
        return self._role_manager

    @property
    def logger(self):
        return self._logger

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def console_member(self) -> Hashable:
        """Identity used for role commands typed at the local console."""
        return CONSOLE_MEMBER

    def dispatch(
        self,
        line: str,
        channel: Optional[str] = None,
        member: Optional[Hashable] = None
    ) -> Optional[CommandResult]:
        """
        Execute one command line.

        Args:
            line: The raw line
            channel: Caller context; defaults to the configured console channel
            member: Chat member issuing the command, or None at the console

        Returns:
            The command's result, or None when there is nothing to answer
        """
        if channel is None:
            channel = get_config().shell.default_channel

        if member is not None and line.lstrip().startswith(IGNORED_PREFIX):
            return None

        try:
            cmd = self._parser.parse(line)
        except ValueError as e:
            self._logger.debug(f"Rejected input: {e}", channel=channel)
            return CommandResult.error("Invalid input format.")

        if cmd is None:
            return None

        self._logger.debug(
            f"Executing {cmd.command}",
            channel=channel,
            context={'member': member, 'args': len(cmd.args)}
        )
        return self._builtins.execute(cmd.command, cmd.args, CommandContext(channel, member))

    def run(self) -> None:
        """
        Run the interactive console.

        This is the main REPL loop.
        """
        self._running = True

        config = get_config()
        channel = config.shell.default_channel

        # Welcome message
        print(f"\n{config.kernel.boot_message}")
        print("Type 'help' for a list of commands.\n")

        while self._running and not self._exiting:
            try:
                try:
                    line = input(self._get_prompt(channel))
                except EOFError:
                    print()
                    break
                except KeyboardInterrupt:
                    print("^C")
                    continue

                result = self.dispatch(line, channel=channel)
                if result is not None:
                    print(result.render())

            except Exception as e:
                self._logger.exception(f"Shell error: {e}", channel=channel)
                print(f"shell: error: {e}")

        self._running = False

    def _get_prompt(self, channel: str) -> str:
        """Generate the shell prompt."""
        cwd = self._environment.current_path(channel)
        return f"{cwd}{get_config().shell.prompt}"

    def request_exit(self) -> None:
        """Request the shell to exit."""
        self._exiting = True

    def run_script(self, script: str, channel: Optional[str] = None) -> list[CommandResult]:
        """
        Run several command lines.

        Args:
            script: Script content
            channel: Caller context for every line

        Returns:
            The results of the lines that produced one
        """
        results = []

        for line in script.split('\n'):
            result = self.dispatch(line, channel=channel)
            if result is not None:
                results.append(result)

        return results


def create_shell(environment: Optional[Environment] = None) -> Shell:
    """Create a shell over a fresh (or the given) environment."""
    return Shell(environment or Environment())

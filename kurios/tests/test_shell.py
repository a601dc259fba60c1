"""
Shell tests: parsing, the command surface and chat permission checks.
"""

import os
import tempfile
import unittest

from kurios.core.config_loader import ConfigLoader
from kurios.environment.environment import Environment
from kurios.filesystem.node import File
from kurios.shell.parser import CommandParser
from kurios.shell.result import ResultStatus
from kurios.shell.shell import Shell, create_shell
from kurios.users.role_manager import InMemoryRoleDirectory, RoleManager
from kurios.tests.support import SAMPLE_ENVIRONMENT


class TestParser(unittest.TestCase):
    """Test command line tokenizing."""

    def setUp(self):
        self.parser = CommandParser()

    def test_simple_command(self):
        cmd = self.parser.parse('cd docs')
        self.assertEqual(cmd.command, 'cd')
        self.assertEqual(cmd.args, ['docs'])

    def test_quoted_arguments(self):
        cmd = self.parser.parse('set motd "hello   world" \'x y\'')
        self.assertEqual(cmd.args, ['motd', 'hello   world', 'x y'])

    def test_escapes_and_empty_quotes(self):
        cmd = self.parser.parse('echo a\\ b ""')
        self.assertEqual(cmd.args, ['a b', ''])

    def test_blank_and_comment_lines(self):
        self.assertIsNone(self.parser.parse('   '))
        self.assertIsNone(self.parser.parse('# note'))

    def test_unterminated_quote(self):
        with self.assertRaises(ValueError):
            self.parser.parse('echo "oops')

    def test_history(self):
        self.parser.parse('pwd')
        self.parser.parse('ls')
        self.assertEqual(self.parser.get_history(), ['pwd', 'ls'])
        self.parser.clear_history()
        self.assertEqual(self.parser.get_history(), [])


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.env = Environment()
        self.env.load_text(SAMPLE_ENVIRONMENT)
        self.directory = InMemoryRoleDirectory()
        self.shell = Shell(self.env, RoleManager(self.directory))

    def tearDown(self):
        ConfigLoader().reset()

    def run_line(self, line, channel='test', member=None):
        return self.shell.dispatch(line, channel=channel, member=member)


class TestConsoleCommands(ShellTestCase):
    """Test the command surface at the console."""

    def test_readme_scenario(self):
        self.assertTrue(self.run_line('cd docs').ok)
        self.assertEqual(self.run_line('cat readme').message, 'hello')

        self.assertTrue(self.run_line('lock /docs key1').ok)
        self.assertEqual(self.run_line('pwd').message, '/')

        result = self.run_line('cat /docs/readme')
        self.assertEqual(result.status, ResultStatus.ERROR)
        self.assertIn('locked', result.message)

        self.assertFalse(self.run_line('unlock docs wrong').ok)
        self.assertTrue(self.run_line('unlock docs key1').ok)
        self.assertEqual(self.run_line('cat /docs/readme').message, 'hello')

    def test_cd_errors(self):
        result = self.run_line('cd ..')
        self.assertFalse(result.ok)
        self.assertTrue(result.render().startswith('Error: '))

        self.assertFalse(self.run_line('cd vault').ok)
        self.assertFalse(self.run_line('cd event').ok)
        self.assertFalse(self.run_line('cd nowhere').ok)
        self.assertEqual(self.run_line('pwd').message, '/')

    def test_ls(self):
        listing = self.run_line('ls').message
        self.assertTrue(listing.startswith('/\n'))
        self.assertIn('vault/ [locked]', listing)

        listing = self.run_line('ls docs').message
        self.assertTrue(listing.startswith('/docs\n'))

    def test_variables(self):
        result = self.run_line('set greeting hello world')
        self.assertEqual(result.status, ResultStatus.NOTICE)
        self.assertIn('Creating a new variable', result.message)
        self.assertEqual(self.run_line('get greeting').message, 'hello world')

        result = self.run_line('set greeting bye')
        self.assertEqual(result.status, ResultStatus.SUCCESS)
        self.assertIn('Updated', result.message)
        self.assertTrue(self.run_line('delete greeting').ok)
        self.assertFalse(self.run_line('get greeting').ok)

        self.assertFalse(self.run_line('set version 2').ok)
        self.assertFalse(self.run_line('delete time').ok)
        self.assertFalse(self.run_line('set time never').ok)

    def test_set_time(self):
        self.assertTrue(self.run_line('set time "2020-01-01 00:00:00"').ok)
        self.assertTrue(self.run_line('get time').message.startswith('2020-01-01 00:00:0'))
        self.assertTrue(self.run_line('set time now').ok)
        self.assertEqual(self.env.variables.clock.offset, 0)

    def test_usage_errors(self):
        for line in ('cd', 'cat', 'get', 'set motd', 'delete', 'lock docs', 'unlock', 'save', 'load', 'su subscribe'):
            result = self.run_line(line)
            self.assertFalse(result.ok, line)
            self.assertIn('Expecting', result.message)

    def test_unknown_command(self):
        result = self.run_line('frobnicate')
        self.assertEqual(result.message, 'Unknown command. Use "help" for more information.')

    def test_invalid_input(self):
        self.assertEqual(self.run_line('echo "open').message, 'Invalid input format.')

    def test_empty_line(self):
        self.assertIsNone(self.run_line(''))

    def test_echo_and_help(self):
        self.assertEqual(self.run_line('echo a "b c"').message, 'a b c')
        self.assertIn('lock <path> <key>', self.run_line('help').message)

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'world.json')
            self.run_line('set greeting hi')
            self.assertTrue(self.run_line(f'save "{path}"').ok)

            self.run_line('delete greeting')
            self.run_line('cd docs')
            self.assertTrue(self.run_line(f'load "{path}"').ok)

            self.assertEqual(self.run_line('get greeting').message, 'hi')
            self.assertEqual(self.run_line('pwd').message, '/')

            result = self.run_line(f'load "{os.path.join(tmp, "missing.json")}"')
            self.assertFalse(result.ok)
            self.assertEqual(self.run_line('get greeting').message, 'hi')

    def test_cat_cached_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with open(os.path.join(tmp, 'story.txt'), 'w', encoding='utf-8') as f:
                f.write('once upon a time')
            ConfigLoader().set('environment.cache_dir', tmp)
            self.env.root.add(File(name='story', cache='story.txt'))

            self.assertEqual(self.run_line('cat story').message, 'once upon a time')

    def test_exit(self):
        self.assertEqual(self.run_line('exit').message, 'Exiting...')

    def test_run_script(self):
        results = self.shell.run_script('# setup\ncd docs\n\ncat readme\ncat nothing', channel='script')
        self.assertEqual(len(results), 3)
        self.assertEqual(results[1].message, 'hello')
        self.assertFalse(results[2].ok)

    def test_create_shell(self):
        shell = create_shell()
        self.assertEqual(shell.dispatch('pwd').message, '/')
        self.assertIs(create_shell(self.env).environment, self.env)


class TestChatCommands(ShellTestCase):
    """Test permission checks for chat members."""

    def test_bang_messages_ignored(self):
        self.assertIsNone(self.run_line('!play music', member='alice'))

    def test_everyone_permissions(self):
        self.assertTrue(self.run_line('cd docs', member='alice').ok)

        result = self.run_line('save out.json', member='alice')
        self.assertFalse(result.ok)
        self.assertEqual(result.message, 'You do not have permission to use this command')

    def test_role_permissions(self):
        self.directory.add_role('bob', 'moderator')
        self.assertTrue(self.run_line('lock docs k', member='bob').ok)
        self.assertFalse(self.run_line('set motd x', member='bob').ok)

        self.directory.add_role('root', 'admin')
        self.assertTrue(self.run_line('set motd x', member='root').ok)

    def test_unknown_command_before_permission(self):
        result = self.run_line('frobnicate', member='alice')
        self.assertIn('Unknown command', result.message)

    def test_subscribe(self):
        self.directory.add_role('bob', 'admin')
        self.assertTrue(self.run_line('su subscribe moderator', member='bob').ok)
        self.assertIn('moderator', self.directory.roles_of('bob'))

        self.assertFalse(self.run_line('su subscribe admin', member='alice').ok)
        self.assertFalse(self.run_line('su subscribe ghost', member='bob').ok)
        self.assertFalse(self.run_line('su join moderator', member='bob').ok)

        self.assertTrue(self.run_line('su unsubscribe moderator', member='bob').ok)
        self.assertNotIn('moderator', self.directory.roles_of('bob'))

    def test_channels_have_separate_folders(self):
        self.run_line('cd docs', channel='one', member='alice')
        self.assertEqual(self.run_line('pwd', channel='two').message, '/')
        self.assertEqual(self.run_line('pwd', channel='one').message, '/docs')


if __name__ == '__main__':
    unittest.main()

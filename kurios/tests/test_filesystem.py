"""
Filesystem tests: path resolution, lookup, access gating and locks.
"""

import unittest
from datetime import datetime, timedelta

from kurios.core import clock
from kurios.exceptions import (
    InvalidPathError,
    NodeNotFoundError,
    NodeUnavailableError,
    NodeLockedError,
    AlreadyLockedError,
    NotLockedError,
    WrongKeyError,
    InvalidFormatError,
)
from kurios.filesystem.access import AccessGate
from kurios.filesystem.node import Folder, File, new_root
from kurios.filesystem.path_resolver import PathResolver
from kurios.filesystem.renderer import TreeRenderer
from kurios.tests.support import sample_vfs


class TestPathResolver(unittest.TestCase):
    """Test raw path resolution."""

    def setUp(self):
        self.vfs = sample_vfs()

    def test_relative_name(self):
        self.assertEqual(self.vfs.resolve('docs', '/'), '/docs')
        self.assertEqual(self.vfs.resolve('readme', '/docs'), '/docs/readme')

    def test_current_marker(self):
        self.assertEqual(self.vfs.resolve('./readme', '/docs'), '/docs/readme')
        self.assertEqual(self.vfs.resolve('.', '/docs'), '/docs')

    def test_home_marker_ignores_cwd(self):
        self.assertEqual(self.vfs.resolve('~docs', '/docs/notes'), '/docs')
        self.assertEqual(self.vfs.resolve('~docs', '/'), '/docs')
        self.assertEqual(self.vfs.resolve('~/docs/readme', '/docs/notes'), '/docs/readme')

    def test_absolute_path(self):
        self.assertEqual(self.vfs.resolve('/docs/readme', '/docs/notes'), '/docs/readme')

    def test_parent_from_nested_folder(self):
        folder = self.vfs.get_directory('..', '/docs/notes')
        self.assertEqual(folder.absolute_path, '/docs')

        folder = self.vfs.get_directory('..', '/docs')
        self.assertTrue(folder.is_root)

    def test_parent_then_name(self):
        file = self.vfs.get_file('../readme', '/docs/notes')
        self.assertEqual(file.data, 'hello')

        file = self.vfs.get_file('~docs/notes/../readme', '/')
        self.assertEqual(file.absolute_path, '/docs/readme')

    def test_parent_lookup_failures_propagate(self):
        with self.assertRaises(NodeNotFoundError):
            self.vfs.resolve('missing/..', '/')
        with self.assertRaises(NodeLockedError):
            self.vfs.resolve('vault/..', '/')
        with self.assertRaises(NodeLockedError):
            self.vfs.resolve('vault/secret/..', '/')

    def test_parent_from_root_fails(self):
        with self.assertRaises(InvalidPathError):
            self.vfs.resolve('..', '/')
        with self.assertRaises(InvalidPathError):
            self.vfs.resolve('../..', '/docs')

    def test_empty_path_fails(self):
        with self.assertRaises(InvalidPathError):
            self.vfs.resolve('', '/docs')
        with self.assertRaises(InvalidPathError):
            self.vfs.resolve('   ', '/docs')

    def test_parse_drops_empty_segments(self):
        self.assertEqual(PathResolver.parse('//docs///notes/').components, ['docs', 'notes'])
        self.assertEqual(str(PathResolver.parse('/docs//notes')), '/docs/notes')

    def test_join(self):
        self.assertEqual(PathResolver.join('/docs/', 'readme'), '/docs/readme')
        self.assertEqual(PathResolver.join('/', '/docs'), '/docs')
        self.assertEqual(PathResolver.join('/docs', ''), '/docs')


class TestLookup(unittest.TestCase):
    """Test tree lookup with access checks."""

    def setUp(self):
        self.vfs = sample_vfs()

    def test_root(self):
        self.assertIs(self.vfs.get_directory('/', '/docs'), self.vfs.root)
        self.assertIs(self.vfs.get_directory('~', '/docs'), self.vfs.root)

    def test_root_is_not_a_file(self):
        with self.assertRaises(NodeNotFoundError):
            self.vfs.lookup('/', want_file=True)

    def test_kinds_are_separate(self):
        with self.assertRaises(NodeNotFoundError):
            self.vfs.get_file('docs', '/')
        with self.assertRaises(NodeNotFoundError):
            self.vfs.get_directory('readme', '/docs')

    def test_missing_segment(self):
        with self.assertRaises(NodeNotFoundError) as ctx:
            self.vfs.get_file('/nowhere/readme')
        self.assertEqual(ctx.exception.error_code, 4001)

    def test_locked_ancestor_blocks_descendants(self):
        with self.assertRaises(NodeLockedError):
            self.vfs.get_file('/vault/secret')
        with self.assertRaises(NodeLockedError):
            self.vfs.get_directory('vault', '/')

    def test_unavailable_folder(self):
        with self.assertRaises(NodeUnavailableError):
            self.vfs.get_directory('/event')
        with self.assertRaises(NodeUnavailableError):
            self.vfs.get_file('/event/ticket')

    def test_unavailable_checked_before_locked(self):
        event = self.vfs.root.get_folder('event')
        event.lock('k2')
        with self.assertRaises(NodeUnavailableError):
            self.vfs.get_directory('/event')

    def test_lock_target_skips_own_check(self):
        vault = self.vfs.get_lock_target('vault', '/')
        self.assertIs(vault, self.vfs.root.get_folder('vault'))

        with self.assertRaises(NodeLockedError):
            self.vfs.get_lock_target('/vault/secret')

    def test_lock_target_prefers_files(self):
        self.assertIsInstance(self.vfs.get_lock_target('/docs/readme'), File)
        self.assertIsInstance(self.vfs.get_lock_target('/docs/notes'), Folder)


class TestAccessGate(unittest.TestCase):
    """Test availability windows."""

    def setUp(self):
        self.moment = datetime(2024, 6, 1, 12, 0, 0)

    def test_wildcards_always_open(self):
        self.assertTrue(AccessGate.is_available('*', '*'))
        self.assertTrue(AccessGate.is_available('*', '*', self.moment))

    def test_inclusive_endpoints(self):
        self.assertTrue(AccessGate.is_available('2024-06-01 12:00:00', '2024-06-01 12:00:00', self.moment))
        self.assertTrue(AccessGate.is_available('2024-06-01 11:00:00', '2024-06-01 12:00:00', self.moment))
        self.assertFalse(AccessGate.is_available('2024-06-01 12:00:01', '*', self.moment))
        self.assertFalse(AccessGate.is_available('*', '2024-06-01 11:59:59', self.moment))

    def test_wildcard_with_literal(self):
        self.assertTrue(AccessGate.is_available('2024-01-01 00:00:00', '*', self.moment))
        self.assertTrue(AccessGate.is_available('*', '2025-01-01 00:00:00', self.moment))

    def test_malformed_literal_is_closed(self):
        self.assertFalse(AccessGate.is_available('tomorrow', '*', self.moment))
        self.assertFalse(AccessGate.is_available('*', '2024-13-01 00:00:00', self.moment))

    def test_current_time_default(self):
        start = clock.format_timestamp(clock.now() - timedelta(minutes=1))
        end = clock.format_timestamp(clock.now() + timedelta(minutes=1))
        self.assertTrue(AccessGate.is_available(start, end))


class TestLocks(unittest.TestCase):
    """Test the lock protocol on nodes."""

    def setUp(self):
        self.node = File(name='readme', path='/docs/', data='hello')

    def test_lock_and_unlock(self):
        self.node.lock('key1')
        self.assertTrue(self.node.locked)
        self.assertEqual(self.node.key, 'key1')

        self.node.unlock('key1')
        self.assertFalse(self.node.locked)
        self.assertEqual(self.node.key, '')

    def test_wrong_key_never_unlocks(self):
        self.node.lock('key1')
        with self.assertRaises(WrongKeyError):
            self.node.unlock('KEY1')
        self.assertTrue(self.node.locked)

    def test_second_unlock_fails(self):
        self.node.lock('key1')
        self.node.unlock('key1')
        with self.assertRaises(NotLockedError):
            self.node.unlock('key1')

    def test_double_lock_fails(self):
        self.node.lock('key1')
        with self.assertRaises(AlreadyLockedError):
            self.node.lock('key2')
        self.assertEqual(self.node.key, 'key1')

    def test_empty_key_rejected(self):
        with self.assertRaises(InvalidFormatError):
            self.node.lock('')
        self.assertFalse(self.node.locked)


class TestNodes(unittest.TestCase):
    """Test folder structure helpers."""

    def test_add_sets_paths(self):
        root = new_root()
        docs = Folder(name='docs')
        docs.add(File(name='readme'))
        root.add(docs)

        self.assertEqual(docs.absolute_path, '/docs')
        self.assertEqual(docs.get_file('readme').absolute_path, '/docs/readme')

    def test_add_rejects_shared_names(self):
        root = new_root()
        root.add(Folder(name='docs'))
        with self.assertRaises(ValueError):
            root.add(File(name='docs'))

    def test_sorted_children(self):
        root = new_root()
        root.add(File(name='b'))
        root.add(Folder(name='z'))
        root.add(File(name='a'))
        root.add(Folder(name='m'))
        self.assertEqual([c.name for c in root.sorted_children()], ['m', 'z', 'a', 'b'])


class TestRenderer(unittest.TestCase):
    """Test tree rendering."""

    def setUp(self):
        self.vfs = sample_vfs()

    def test_full_tree(self):
        expected = '\n'.join([
            '/',
            '├── docs/',
            '│   ├── notes/',
            '│   │   └── todo',
            '│   └── readme',
            '├── event/ [unavailable]',
            '└── vault/ [locked]',
        ])
        self.assertEqual(TreeRenderer.render(self.vfs.root, 4), expected)

    def test_depth_cutoff(self):
        expected = '\n'.join([
            '/',
            '├── docs/',
            '│   └── ...',
            '├── event/ [unavailable]',
            '└── vault/ [locked]',
        ])
        self.assertEqual(TreeRenderer.render(self.vfs.root, 1), expected)

    def test_subfolder_header(self):
        docs = self.vfs.get_directory('docs')
        lines = TreeRenderer.render(docs, 4).split('\n')
        self.assertEqual(lines[0], '/docs')
        self.assertEqual(lines[-1], '└── readme')

    def test_empty_folder(self):
        self.assertEqual(TreeRenderer.render(new_root(), 3), '/')


if __name__ == '__main__':
    unittest.main()

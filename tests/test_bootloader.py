"""
Configuration, Logging and Boot Tests

Author: YSNRFD
Version: 1.0.0
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from weavefs.core.config_loader import (
    Config,
    ConfigLoader,
    get_config,
    PersistenceConfig,
    FilesystemConfig,
)
from weavefs.core.bootloader import Bootloader, BootStage, boot_system
from weavefs.filesystem import DEFAULT_FOLDERS
from weavefs.exceptions import (
    BootFailureError,
    ConfigValidationError,
    NodeNotFoundError,
    ShellCommandError,
    RemoteStorageError,
)
from weavefs.logger import Logger, LogLevel, get_logger
from weavefs.main import main


class TestExceptions(unittest.TestCase):
    """Test the exception hierarchy."""

    def test_filesystem_exception(self):
        """Test codes, paths and string form."""
        exc = NodeNotFoundError('/missing')

        self.assertEqual(exc.error_code, 4001)
        self.assertEqual(exc.path, '/missing')
        self.assertEqual(exc.message, 'no such file or directory: /missing')
        self.assertIn('4001', str(exc))

    def test_shell_error_format(self):
        """Test shell errors read like Unix messages."""
        self.assertEqual(str(ShellCommandError('mkdir', 'missing operand')), 'mkdir: missing operand')

    def test_remote_error(self):
        """Test remote errors keep the HTTP status."""
        exc = RemoteStorageError('File not found', status_code=404)

        self.assertEqual(exc.status_code, 404)
        self.assertEqual(exc.backend, 'remote')


class TestLogger(unittest.TestCase):
    """Test the logging system."""

    def test_logger_creation(self):
        """Test logger creation and singleton."""
        log1 = Logger('test1')
        log2 = Logger('test1')

        self.assertIs(log1, log2)
        self.assertIsNot(log1, Logger('test2'))
        self.assertIs(get_logger('test1'), log1)

    def test_event_buffer(self):
        """Test captured records keep subsystem and context."""
        handler = Logger.capture_events(LogLevel.DEBUG)
        handler.clear()

        get_logger('audit').info("Audit message", context={'key': 'value'})

        logs = Logger.get_event_logs(subsystem='audit')
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0]['message'], 'Audit message')
        self.assertEqual(logs[0]['context'], {'key': 'value'})

    def test_log_levels(self):
        """Test log level ordering."""
        self.assertTrue(LogLevel.DEBUG < LogLevel.INFO < LogLevel.NOTICE < LogLevel.WARNING)


class TestConfig(unittest.TestCase):
    """Test the configuration system."""

    def test_default_config(self):
        """Test default configuration values."""
        config = Config()

        self.assertEqual(config.system.name, "Weave OS")
        self.assertEqual(config.persistence.backend, "memory")
        self.assertEqual(config.persistence.storage_key, "weave-vfs")
        self.assertEqual(config.shell.home, "/")
        self.assertEqual(config.sync.max_history, 1000)

    def test_parse_partial(self):
        """Test missing sections keep their defaults."""
        config = ConfigLoader.parse({'shell': {'user': 'ada'}})

        self.assertEqual(config.shell.user, 'ada')
        self.assertEqual(config.shell.hostname, 'weave')
        self.assertEqual(config.persistence.backend, 'memory')

    def test_validation(self):
        """Test out-of-range values are rejected."""
        with self.assertRaises(ConfigValidationError):
            ConfigLoader.parse({'persistence': {'backend': 'ftp'}})
        with self.assertRaises(ConfigValidationError):
            ConfigLoader.parse({'shell': {'history_size': 0}})
        with self.assertRaises(ConfigValidationError):
            ConfigLoader.parse({'shell': {'home': 'relative'}})

    def test_missing_file(self):
        """Test a missing file is a boot failure."""
        with self.assertRaises(BootFailureError):
            ConfigLoader().load('/definitely/not/here.json')

    def test_load_file(self):
        """Test loading JSON from disk."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump({'sync': {'max_history': 5}}, f)

            loader = ConfigLoader()
            try:
                config = loader.load(path)
                self.assertEqual(config.sync.max_history, 5)
                self.assertEqual(loader.get('sync.max_history'), 5)
            finally:
                loader.reset()

    def test_reload_and_global_access(self):
        """Test reload picks up file edits and get_config follows the loader."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump({'sync': {'max_history': 5}}, f)

            loader = ConfigLoader()
            try:
                loader.load(path)
                self.assertEqual(get_config().sync.max_history, 5)

                with open(path, 'w', encoding='utf-8') as f:
                    json.dump({'sync': {'max_history': 7}}, f)

                self.assertEqual(loader.reload(path).sync.max_history, 7)
                self.assertEqual(get_config().sync.max_history, 7)
            finally:
                loader.reset()

        self.assertEqual(get_config().sync.max_history, 1000)

    def test_runtime_set(self):
        """Test dotted updates and unknown keys."""
        loader = ConfigLoader()
        try:
            loader.set('shell.user', 'ada')
            self.assertEqual(get_config().shell.user, 'ada')
            self.assertEqual(loader.to_dict()['shell']['user'], 'ada')
            with self.assertRaises(ConfigValidationError):
                loader.set('shell.nope', 1)
        finally:
            loader.reset()


class TestBootloader(unittest.TestCase):
    """Test the boot sequence."""

    def test_boot_seeds_fresh_tree(self):
        """Test an empty store is seeded with the default structure."""
        bootloader = Bootloader(config=Config())
        result = bootloader.boot()

        self.assertTrue(result.success)
        self.assertEqual(result.stage, BootStage.COMPLETE)
        self.assertFalse(result.restored)
        self.assertGreater(result.seeded, 0)

        vfs = bootloader.get_filesystem()
        for path in DEFAULT_FOLDERS:
            self.assertTrue(vfs.is_folder(path))
        self.assertIs(bootloader.get_sync_service().vfs, vfs)

    def test_boot_restores_saved_tree(self):
        """Test a saved tree is loaded instead of seeding."""
        with tempfile.TemporaryDirectory() as tmp:
            config = Config(persistence=PersistenceConfig(
                backend='local',
                storage_path=os.path.join(tmp, 'storage.json')
            ))

            first = Bootloader(config=config)
            first.boot()
            first.create_shell().execute('mkdir /Projects')
            first.shutdown()

            second = Bootloader(config=config)
            result = second.boot()

            self.assertTrue(result.restored)
            self.assertEqual(result.seeded, 0)
            self.assertTrue(second.get_filesystem().is_folder('/Projects'))

    def test_corrupt_store_falls_back(self):
        """Test unreadable saved state does not stop the boot."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'storage.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump({'weave-vfs': '{not a tree'}, f)

            config = Config(persistence=PersistenceConfig(backend='local', storage_path=path))
            bootloader = Bootloader(config=config)

            with self.assertLogs('weavefs.bootloader', level='WARNING'):
                result = bootloader.boot()

            self.assertTrue(result.success)
            self.assertFalse(result.restored)
            self.assertTrue(bootloader.get_filesystem().is_folder('/Desktop'))

    def test_no_seeding(self):
        """Test seeding can be switched off."""
        config = Config(filesystem=FilesystemConfig(seed_defaults=False, required_folders=[]))
        bootloader = Bootloader(config=config)
        bootloader.boot()

        self.assertEqual(bootloader.get_filesystem().list_children('/'), [])

    def test_invalid_config_fails_boot(self):
        """Test a bad configuration fails at the config stage."""
        config = Config(persistence=PersistenceConfig(backend='ftp'))
        result = Bootloader(config=config).boot()

        self.assertFalse(result.success)
        self.assertEqual(result.stage, BootStage.CONFIG_LOAD)
        self.assertIsInstance(result.error, ConfigValidationError)

    def test_missing_config_file_uses_defaults(self):
        """Test a missing config file boots with defaults."""
        result, bootloader = boot_system('/definitely/not/here.json')

        self.assertTrue(result.success)
        self.assertEqual(bootloader.config.persistence.backend, 'memory')

    def test_shell_requires_boot(self):
        """Test a shell needs a booted file system."""
        with self.assertRaises(BootFailureError):
            Bootloader(config=Config()).create_shell()

    def test_shell_prompt_from_config(self):
        """Test the shell picks up the configured identity."""
        config = ConfigLoader.parse({'shell': {'user': 'ada', 'hostname': 'loom'}})
        bootloader = Bootloader(config=config)
        bootloader.boot()

        self.assertEqual(bootloader.create_shell().get_prompt(), 'ada@loom:~$ ')


class TestMain(unittest.TestCase):
    """Test the command-line entry point."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = os.path.join(self._tmp.name, 'config.json')
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump({'persistence': {'backend': 'memory'}}, f)

    def tearDown(self):
        ConfigLoader().reset()
        self._tmp.cleanup()

    def test_single_command(self):
        """Test -c runs one line and prints its output."""
        output = io.StringIO()
        with redirect_stdout(output):
            code = main(['--config', self.config_path, '-c', 'ls /Desktop'])

        self.assertEqual(code, 0)
        self.assertIn('Welcome.txt', output.getvalue())

    def test_headless(self):
        """Test headless boot reports statistics."""
        output = io.StringIO()
        with redirect_stdout(output):
            code = main(['--config', self.config_path, '--headless'])

        self.assertEqual(code, 0)
        self.assertIn('Folders:', output.getvalue())

    def test_bad_argument(self):
        """Test unknown arguments are refused."""
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main(['--bogus']), 2)


if __name__ == '__main__':
    unittest.main()

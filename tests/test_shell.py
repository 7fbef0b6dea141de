"""
Shell Tests

Author: YSNRFD
Version: 1.0.0
"""

import io
import unittest
from contextlib import redirect_stdout
from unittest import mock

from weavefs.core.config_loader import ShellConfig
from weavefs.filesystem import VirtualFileSystem, seed_default_structure
from weavefs.sync import VFSSyncService, Source
from weavefs.shell import (
    Shell,
    CommandParser,
    CommandHistory,
    CLEAR_SCREEN,
    format_size,
)
from weavefs.exceptions import ShellCommandError


def make_shell(**config) -> Shell:
    vfs = VirtualFileSystem()
    return Shell(vfs, VFSSyncService(vfs), ShellConfig(**config))


class TestParser(unittest.TestCase):
    """Test command parsing."""

    def setUp(self):
        self.parser = CommandParser()

    def test_parser(self):
        """Test command and arguments."""
        cmd = self.parser.parse('ls -la /home')

        self.assertEqual(cmd.command, 'ls')
        self.assertEqual(cmd.args, ['-la', '/home'])

    def test_parser_with_pipe(self):
        """Test pipe parsing."""
        cmd = self.parser.parse('ls | grep test')

        self.assertEqual(cmd.command, 'ls')
        self.assertIsNotNone(cmd.pipe_to)
        self.assertEqual(cmd.pipe_to.command, 'grep')
        self.assertEqual([c.command for c in cmd.pipeline()], ['ls', 'grep'])

    def test_parser_with_redirection(self):
        """Test redirection parsing."""
        cmd = self.parser.parse('echo hello >> output.txt')

        self.assertEqual(len(cmd.redirections), 1)
        self.assertEqual(cmd.redirections[0].type, 'append')
        self.assertEqual(cmd.redirections[0].path, 'output.txt')

    def test_quotes_are_stripped(self):
        """Test quoted words keep their spaces."""
        self.assertEqual(self.parser.parse('echo "hello world"').args, ['hello world'])
        self.assertEqual(self.parser.parse("echo 'a  b' c").args, ['a  b', 'c'])
        self.assertEqual(self.parser.parse('echo ""').args, [''])

    def test_variable_expansion(self):
        """Test $VAR and ${VAR} outside single quotes."""
        env = {'HOME': '/', 'USER': 'ada'}

        self.assertEqual(self.parser.parse('echo $HOME ${USER}', env).args, ['/', 'ada'])
        self.assertEqual(self.parser.parse('echo "$USER!"', env).args, ['ada!'])
        self.assertEqual(self.parser.parse("echo '$USER'", env).args, ['$USER'])
        self.assertEqual(self.parser.parse('echo $NOPE x', env).args, ['x'])

    def test_empty_and_comment(self):
        """Test blank lines and comments parse to nothing."""
        self.assertIsNone(self.parser.parse('   '))
        self.assertIsNone(self.parser.parse('# note'))

    def test_syntax_errors(self):
        """Test dangling pipes and redirections."""
        with self.assertRaises(ShellCommandError):
            self.parser.parse('ls |')
        with self.assertRaises(ShellCommandError):
            self.parser.parse('echo hi >')


class TestHistory(unittest.TestCase):
    """Test command history."""

    def test_navigation(self):
        """Test stepping up and down."""
        history = CommandHistory()
        for line in ['ls', 'pwd', 'pwd', 'whoami']:
            history.add(line)

        self.assertEqual(history.entries(), ['ls', 'pwd', 'whoami'])
        self.assertEqual(history.navigate('up'), 'whoami')
        self.assertEqual(history.navigate('up'), 'pwd')
        self.assertEqual(history.navigate('down'), 'whoami')
        self.assertEqual(history.navigate('down'), '')

    def test_bounded(self):
        """Test the oldest entries are dropped."""
        history = CommandHistory(max_size=2)
        for line in ['a', 'b', 'c']:
            history.add(line)

        self.assertEqual(history.entries(), ['b', 'c'])


class TestScenarios(unittest.TestCase):
    """Test end-to-end command sequences."""

    def setUp(self):
        self.shell = make_shell()
        seed_default_structure(self.shell.vfs)

    def test_create_list_remove(self):
        """Test mkdir, touch, ls and rm together."""
        self.assertEqual(self.shell.execute('mkdir /demo'), '')
        self.assertEqual(self.shell.execute('touch /demo/a.txt'), '')
        self.assertIn('a.txt', self.shell.execute('ls /demo'))

        self.assertEqual(self.shell.execute('rm /demo/a.txt'), '')
        self.assertEqual(self.shell.execute('ls /demo'), '')

    def test_echo_redirect(self):
        """Test > writes and >> appends, each ending with a newline."""
        self.shell.execute('mkdir /demo')

        self.assertEqual(self.shell.execute('echo "hi" > /demo/out.txt'), '')
        self.assertEqual(self.shell.execute('cat /demo/out.txt'), 'hi\n')

        self.shell.execute('echo there >> /demo/out.txt')
        self.assertEqual(self.shell.execute('cat /demo/out.txt'), 'hi\nthere\n')

        self.shell.execute('echo reset > /demo/out.txt')
        self.assertEqual(self.shell.vfs.get_file_content('/demo/out.txt'), 'reset\n')

    def test_failed_command_does_not_redirect(self):
        """Test an error is shown and nothing is written."""
        output = self.shell.execute('cat /missing > /out.txt')

        self.assertEqual(output, 'cat: /missing: no such file or directory')
        self.assertFalse(self.shell.vfs.exists('/out.txt'))

    def test_terminal_changes_are_attributed(self):
        """Test shell mutations go through the sync layer as terminal."""
        self.shell.execute('mkdir /demo')

        last = self.shell.sync.get_operation_history()[-1]
        self.assertEqual(last.path, '/demo')
        self.assertEqual(last.source, Source.TERMINAL)

    def test_run_script(self):
        """Test a script runs line by line."""
        outputs = self.shell.run_script('mkdir /s\n# comment\ntouch /s/a\nls /s')

        self.assertEqual(outputs, ['', '', 'a'])


class TestNavigation(unittest.TestCase):
    """Test pwd, cd, ls, tree, find and du."""

    def setUp(self):
        self.shell = make_shell()
        vfs = self.shell.vfs
        vfs.create_folder('/Documents')
        vfs.create_file('/notes.txt', 'x')

    def test_cd_and_pwd(self):
        """Test changing directory."""
        self.assertEqual(self.shell.execute('pwd'), '/')

        self.shell.execute('cd Documents')
        self.assertEqual(self.shell.execute('pwd'), '/Documents')
        self.assertEqual(self.shell.environ['PWD'], '/Documents')

        self.shell.execute('cd ..')
        self.assertEqual(self.shell.cwd, '/')

        self.shell.execute('cd -')
        self.assertEqual(self.shell.cwd, '/Documents')

        self.shell.execute('cd')
        self.assertEqual(self.shell.cwd, '/')

    def test_cd_errors(self):
        """Test cd refuses missing paths and files."""
        self.assertEqual(self.shell.execute('cd nope'), 'cd: no such file or directory: nope')
        self.assertEqual(self.shell.execute('cd notes.txt'), 'cd: not a directory: notes.txt')
        self.assertEqual(self.shell.cwd, '/')
        self.assertEqual(self.shell.last_status, 1)

    def test_prompt(self):
        """Test the home folder shows as ~."""
        self.assertEqual(self.shell.get_prompt(), 'user@weave:~$ ')

        self.shell.execute('cd /Documents')
        self.assertEqual(self.shell.get_prompt(), 'user@weave:/Documents$ ')

    def test_prompt_below_home(self):
        """Test paths under a non-root home are shortened."""
        vfs = VirtualFileSystem()
        vfs.create_folder('/home')
        vfs.create_folder('/home/user')
        vfs.create_folder('/home/user/src')
        shell = Shell(vfs, config=ShellConfig(home='/home/user'))

        self.assertEqual(shell.cwd, '/home/user')
        shell.execute('cd src')
        self.assertEqual(shell.get_prompt(), 'user@weave:~/src$ ')
        self.assertEqual(shell.resolve_path('~/x'), '/home/user/x')

    def test_ls_order(self):
        """Test folders come first, then case-insensitive names."""
        vfs = self.shell.vfs
        vfs.create_folder('/Zeta')
        vfs.create_folder('/alpha')
        vfs.create_file('/B.txt')
        vfs.create_file('/.hidden')

        self.assertEqual(
            self.shell.execute('ls').split(),
            ['alpha/', 'Documents/', 'Zeta/', 'B.txt', 'notes.txt']
        )
        self.assertIn('.hidden', self.shell.execute('ls -a').split())

    def test_ls_long(self):
        """Test the long format."""
        lines = self.shell.execute('ls -l').split('\n')

        self.assertEqual(lines[0], 'total 2')
        self.assertTrue(lines[1].startswith('drwxr-xr-x 1 user user      DIR '))
        self.assertTrue(lines[1].endswith('Documents/'))
        self.assertTrue(lines[2].startswith('-rw-r--r-- 1 user user        1 '))
        self.assertTrue(lines[2].endswith('notes.txt'))

    def test_ls_errors(self):
        """Test bad flags and missing paths."""
        self.assertEqual(self.shell.execute('ls -z'), "ls: invalid option -- 'z'")
        self.assertEqual(
            self.shell.execute('ls /nope'),
            "ls: cannot access '/nope': no such file or directory"
        )

    def test_tree(self):
        """Test the tree drawing in store order."""
        self.shell.execute('mkdir /t')
        self.shell.execute('mkdir /t/sub')
        self.shell.execute('touch /t/sub/x')
        self.shell.execute('touch /t/y')

        self.assertEqual(
            self.shell.execute('tree /t'),
            '/t\n'
            '├── sub\n'
            '│   └── x\n'
            '└── y\n'
            '\n'
            '1 directory, 2 files'
        )

    def test_find(self):
        """Test finding by pattern, both argument orders."""
        self.shell.execute('touch /Documents/a.txt')

        self.assertEqual(self.shell.execute('find *.txt'), '/notes.txt\n/Documents/a.txt')
        self.assertEqual(self.shell.execute('find *.txt /Documents'), '/Documents/a.txt')
        self.assertEqual(self.shell.execute('find /Documents -name "A.*"'), '/Documents/a.txt')

    def test_du(self):
        """Test the shallow size total."""
        self.shell.vfs.create_file('/Documents/a', 'abc')
        self.shell.vfs.create_file('/Documents/b', '12345')

        self.assertEqual(self.shell.execute('du /Documents'), '8 B\t/Documents')

    def test_format_size(self):
        """Test human readable sizes."""
        self.assertEqual(format_size(512), '512 B')
        self.assertEqual(format_size(1536), '1.5 KB')
        self.assertEqual(format_size(1024 * 1024), '1.0 MB')


class TestFileCommands(unittest.TestCase):
    """Test mkdir, rmdir, touch, rm, cp and mv."""

    def setUp(self):
        self.shell = make_shell()
        self.vfs = self.shell.vfs
        self.vfs.create_folder('/docs')
        self.vfs.create_file('/a.txt', 'A')

    def test_mkdir_parents(self):
        """Test -p creates every missing level."""
        self.assertEqual(self.shell.execute('mkdir -p /x/y/z'), '')
        self.assertTrue(self.vfs.is_folder('/x/y/z'))
        self.assertEqual(self.shell.execute('mkdir -p /x/y'), '')

    def test_mkdir_errors(self):
        """Test missing operands and existing names."""
        self.assertEqual(self.shell.execute('mkdir'), 'mkdir: missing operand')
        self.assertEqual(self.shell.execute('mkdir /docs'), 'mkdir: file already exists: /docs')

    def test_rmdir(self):
        """Test rmdir only removes empty folders."""
        self.shell.execute('touch /docs/f')

        self.assertEqual(self.shell.execute('rmdir /docs'), 'rmdir: directory not empty: /docs')
        self.shell.execute('rm /docs/f')
        self.assertEqual(self.shell.execute('rmdir /docs'), '')
        self.assertFalse(self.vfs.exists('/docs'))

    def test_touch_existing_is_noop(self):
        """Test touch leaves existing content alone."""
        self.shell.execute('touch /a.txt')

        self.assertEqual(self.vfs.get_file_content('/a.txt'), 'A')

    def test_rm(self):
        """Test rm removes folders and honours -f."""
        self.shell.execute('touch /docs/f')

        self.assertEqual(self.shell.execute('rm /docs'), '')
        self.assertFalse(self.vfs.exists('/docs'))
        self.assertEqual(self.shell.execute('rm -f /ghost'), '')
        self.assertEqual(
            self.shell.execute('rm /ghost'),
            "rm: cannot remove '/ghost': no such file or directory"
        )
        self.assertEqual(self.shell.execute('rm /'), 'rm: cannot delete root directory')

    def test_cp(self):
        """Test copying files and folders."""
        self.assertEqual(self.shell.execute('cp /a.txt /docs'), '')
        self.assertEqual(self.vfs.get_file_content('/docs/a.txt'), 'A')

        self.assertEqual(
            self.shell.execute('cp /docs /docs2'),
            "cp: -r not specified; omitting directory '/docs'"
        )
        self.assertEqual(self.shell.execute('cp -r /docs /docs2'), '')
        self.assertTrue(self.vfs.is_file('/docs2/a.txt'))

    def test_cp_overwrites_file(self):
        """Test copying onto a file replaces its content."""
        self.vfs.create_file('/b.txt', 'B')

        self.shell.execute('cp /a.txt /b.txt')

        self.assertEqual(self.vfs.get_file_content('/b.txt'), 'A')

    def test_mv(self):
        """Test renaming and moving into a folder."""
        self.shell.execute('mv /a.txt /b.txt')
        self.assertTrue(self.vfs.is_file('/b.txt'))

        self.shell.execute('mv /b.txt /docs')
        self.assertTrue(self.vfs.is_file('/docs/b.txt'))

        self.assertEqual(self.shell.execute('mv /docs'), "mv: missing destination file operand after '/docs'")


class TestTextCommands(unittest.TestCase):
    """Test cat, grep, head, tail, wc, sort and uniq."""

    def setUp(self):
        self.shell = make_shell()
        self.vfs = self.shell.vfs
        self.vfs.create_file('/words.txt', 'b\na\nb\nb\nc\n')
        self.vfs.create_file('/count.txt', '\n'.join(str(n) for n in range(1, 16)))

    def test_cat_reports_every_missing_operand(self):
        """Test each bad operand gets its own line and no data is printed."""
        self.vfs.create_file('/x', 'X\n')
        self.vfs.create_folder('/dir')

        self.assertEqual(
            self.shell.execute('cat /x /missing /dir'),
            'cat: /missing: no such file or directory\ncat: /dir: is a directory'
        )
        self.assertEqual(self.shell.last_status, 1)

    def test_cat_error_never_reaches_redirect(self):
        """Test a partly failing cat leaves the target file untouched."""
        self.vfs.create_file('/a.txt', 'A')

        output = self.shell.execute('cat /a.txt /missing > /out.txt')

        self.assertEqual(output, 'cat: /missing: no such file or directory')
        self.assertEqual(self.shell.last_status, 1)
        self.assertFalse(self.vfs.exists('/out.txt'))

    def test_cat_error_never_reaches_pipe(self):
        """Test a partly failing cat stops the pipeline."""
        self.vfs.create_file('/a.txt', 'A')

        output = self.shell.execute('cat /a.txt /missing | wc')

        self.assertEqual(output, 'cat: /missing: no such file or directory')
        self.assertEqual(self.shell.last_status, 1)

    def test_pipes(self):
        """Test output flows through a pipeline."""
        self.assertEqual(self.shell.execute('cat /words.txt | sort'), 'a\nb\nb\nb\nc')
        self.assertEqual(self.shell.execute('sort /words.txt | uniq'), 'a\nb\nc')
        self.assertEqual(self.shell.execute('sort -r /words.txt | head'), 'c\nb\nb\nb\na')
        self.assertEqual(
            self.shell.execute('cat /words.txt | uniq -c'),
            '      1 b\n      1 a\n      2 b\n      1 c'
        )

    def test_input_redirect(self):
        """Test < feeds a file as input."""
        self.assertEqual(self.shell.execute('sort < /words.txt'), 'a\nb\nb\nb\nc')

    def test_grep(self):
        """Test line-numbered matches."""
        self.assertEqual(self.shell.execute('grep b /words.txt'), '1:b\n3:b\n4:b')
        self.assertEqual(self.shell.execute('grep -i A /words.txt'), '2:a')
        self.assertEqual(
            self.shell.execute('grep c /words.txt /count.txt'),
            '/words.txt:5:c'
        )
        self.assertEqual(self.shell.execute('grep ( /words.txt'), 'grep: invalid pattern: (')

    def test_head_and_tail(self):
        """Test the fixed ten line window."""
        self.assertEqual(self.shell.execute('head /count.txt'), '\n'.join(str(n) for n in range(1, 11)))
        self.assertEqual(self.shell.execute('tail /count.txt'), '\n'.join(str(n) for n in range(6, 16)))

    def test_wc(self):
        """Test line, word and character counts."""
        self.assertEqual(self.shell.execute('wc /words.txt'), '      5       5      10 /words.txt')
        self.assertEqual(self.shell.execute('cat /words.txt | wc'), '      5       5      10')


class TestEnvironment(unittest.TestCase):
    """Test environment and informational commands."""

    def setUp(self):
        self.shell = make_shell()

    def test_export_and_expand(self):
        """Test exported variables expand in later lines."""
        self.assertEqual(self.shell.execute('export GREETING=hello'), '')
        self.assertEqual(self.shell.execute('echo $GREETING world'), 'hello world')
        self.assertIn('GREETING=hello', self.shell.execute('env').split('\n'))
        self.assertEqual(
            self.shell.execute('export 1X=2'),
            "export: '1X=2': not a valid identifier"
        )

    def test_whoami(self):
        """Test the configured user."""
        self.assertEqual(self.shell.execute('whoami'), 'user')

    def test_which(self):
        """Test locating built-ins."""
        self.assertEqual(self.shell.execute('which ls'), '/bin/ls')
        self.assertEqual(self.shell.execute('which nope'), 'which: no nope in (/bin:/usr/bin)')

    def test_man_and_help(self):
        """Test manual pages and the command list."""
        page = self.shell.execute('man ls')
        self.assertIn('NAME', page)
        self.assertIn('ls - list directory contents', page)
        self.assertEqual(self.shell.execute('man nope'), 'man: no manual entry for nope')
        self.assertIn('File Operations:', self.shell.execute('help'))

    def test_history_command(self):
        """Test numbered history with duplicates collapsed."""
        self.shell.execute('pwd')
        self.shell.execute('pwd')
        self.shell.execute('whoami')

        self.assertEqual(self.shell.execute('history'), '    1  pwd\n    2  whoami\n    3  history')
        self.assertEqual(self.shell.navigate_history('up'), 'history')

    def test_unknown_command(self):
        """Test unknown commands never raise."""
        self.assertEqual(self.shell.execute('frobnicate now'), 'frobnicate: command not found')
        self.assertEqual(self.shell.last_status, 127)

    def test_syntax_error(self):
        """Test parse errors become output."""
        self.assertEqual(self.shell.execute('ls |'), "shell: syntax error near unexpected token '|'")

    def test_clear_and_exit(self):
        """Test the clear sentinel and exit request."""
        self.assertEqual(self.shell.execute('clear'), CLEAR_SCREEN)
        self.assertEqual(self.shell.execute('exit'), '')
        self.assertTrue(self.shell.exiting)

    def test_text_cannot_pose_as_clear(self):
        """Test printed text never equals the clear sentinel."""
        self.assertEqual(self.shell.execute('echo CLEAR_SCREEN'), 'CLEAR_SCREEN')
        self.assertNotEqual(self.shell.execute('echo CLEAR_SCREEN'), CLEAR_SCREEN)
        self.assertEqual(self.shell.execute('pwd'), '/')

    def test_redirected_clear(self):
        """Test a redirected clear writes nothing and does not clear."""
        self.assertEqual(self.shell.execute('clear > /screen.txt'), '')
        self.assertEqual(self.shell.vfs.get_file_content('/screen.txt'), '')
        self.assertEqual(self.shell.execute('pwd'), '/')


class TestCompletion(unittest.TestCase):
    """Test tab completion."""

    def setUp(self):
        self.shell = make_shell()
        self.shell.vfs.create_folder('/Documents')
        self.shell.vfs.create_folder('/Downloads')
        self.shell.vfs.create_file('/notes.txt')

    def test_command_completion(self):
        """Test commands complete in first position."""
        self.assertEqual(self.shell.complete('hist'), 'ory ')
        self.assertIsNone(self.shell.complete('zzz'))

    def test_path_completion(self):
        """Test paths complete against the tree."""
        self.assertEqual(self.shell.complete('cd /Docu'), 'ments/')
        self.assertEqual(self.shell.complete('cat no'), 'tes.txt ')
        self.assertEqual(self.shell.completion_candidates('ls /Do'), ['Documents/', 'Downloads/'])
        self.assertIsNone(self.shell.complete('ls /Do'))


class TestRepl(unittest.TestCase):
    """Test the interactive loop."""

    def test_run_until_exit(self):
        """Test lines are executed until exit."""
        shell = make_shell()
        output = io.StringIO()

        with mock.patch('builtins.input', side_effect=['mkdir /r', 'ls', 'exit', 'mkdir /never']):
            with redirect_stdout(output):
                shell.run()

        self.assertTrue(shell.vfs.is_folder('/r'))
        self.assertFalse(shell.vfs.exists('/never'))
        self.assertIn('r/', output.getvalue())

    def test_run_clears_display(self):
        """Test clear writes the erase sequence and echo does not."""
        shell = make_shell()
        output = io.StringIO()

        with mock.patch('builtins.input', side_effect=['echo CLEAR_SCREEN', 'clear', 'exit']):
            with redirect_stdout(output):
                shell.run()

        self.assertIn('CLEAR_SCREEN\n', output.getvalue())
        self.assertEqual(output.getvalue().count(CLEAR_SCREEN), 1)

    def test_run_stops_at_eof(self):
        """Test end of input ends the loop."""
        shell = make_shell()

        with mock.patch('builtins.input', side_effect=EOFError):
            with redirect_stdout(io.StringIO()):
                shell.run()

        self.assertFalse(shell.exiting)


if __name__ == '__main__':
    unittest.main()

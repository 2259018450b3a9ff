"""端到端流程测试（假 tmux + 假选择器）"""

from conftest import FakeBackend, FakePicker, make_repo

from tmux_sessionizer.app import run
from tmux_sessionizer.config import SessionizerConfig
from tmux_sessionizer.selection import decode


def pick_by_query(lines, query):
    """模拟 --select-1：查询只匹配一行时直接返回"""
    matches = [line for line in lines if query in line.split('\t')[0]]
    return matches[0] if len(matches) == 1 else None


class TestScenarios:

    def test_new_project_without_session(self, config, projects_dir):
        make_repo(projects_dir, 'alpha')
        backend = FakeBackend()
        picker = FakePicker(pick_by_query)

        assert run('alpha', config, backend, picker, environ={}) == 0

        assert picker.seen_query == 'alpha'
        assert backend.sessions['alpha'] == ['nvim', 'lazygit', 'shell1', 'shell2']
        assert backend.selected['alpha'] == 'nvim'
        assert backend.calls[-1] == ('attach', 'alpha')
        create = [c for c in backend.calls if c[0] == 'create']
        assert create == [('create', 'alpha', str(projects_dir / 'alpha'))]

    def test_name_collision_shows_single_active_entry(self, config, projects_dir):
        make_repo(projects_dir, 'alpha')
        backend = FakeBackend(['alpha'])
        picker = FakePicker(lambda lines, q: lines[0])

        assert run('', config, backend, picker, environ={}) == 0

        alpha_lines = [l for l in picker.seen_lines if l.split('\t')[0] == 'alpha']
        assert alpha_lines == ['alpha\t[Active]\t']
        assert backend.calls == [('attach', 'alpha')]

    def test_empty_environment(self, config, capsys):
        backend = FakeBackend()
        picker = FakePicker('unused')

        assert run('', config, backend, picker, environ={}) == 0

        assert picker.seen_lines is None
        assert '没有找到' in capsys.readouterr().out

    def test_stale_session(self, config, projects_dir, capsys):
        make_repo(projects_dir, 'beta')
        backend = FakeBackend(['beta'])

        def kill_then_pick(lines, query):
            line = next(l for l in lines if l.startswith('beta\t[Active]'))
            backend.kill('beta')
            return line

        assert run('', config, backend, FakePicker(kill_then_pick), environ={}) == 1

        assert decode('beta\t[Active]\t').is_project is False
        assert 'beta' not in backend.sessions
        assert not [c for c in backend.calls if c[0] == 'create']
        assert '错误' in capsys.readouterr().err

    def test_project_removed_before_materialize(self, config, projects_dir):
        project = make_repo(projects_dir, 'gamma')

        def remove_then_pick(lines, query):
            (project / '.git').rmdir()
            project.rmdir()
            return lines[0]

        backend = FakeBackend()
        assert run('', config, backend, FakePicker(remove_then_pick), environ={}) == 1
        assert backend.sessions == {}


class TestFlow:

    def test_cancel_exits_zero(self, config, projects_dir):
        make_repo(projects_dir, 'alpha')
        backend = FakeBackend()
        assert run('', config, backend, FakePicker(None), environ={}) == 0
        assert backend.calls == []

    def test_switch_inside_tmux(self, config):
        backend = FakeBackend(['work'])
        picker = FakePicker(lambda lines, q: lines[0])
        assert run('', config, backend, picker, environ={'TMUX': '/tmp/tmux,1,0'}) == 0
        assert backend.calls == [('switch', 'work')]

    def test_picker_order(self, config, projects_dir):
        make_repo(projects_dir, 'zeta')
        make_repo(projects_dir, 'alpha')
        backend = FakeBackend(['web', 'api'])
        picker = FakePicker(None)
        run('', config, backend, picker, environ={})
        assert picker.seen_lines == [
            'api\t[Active]\t',
            'web\t[Active]\t',
            f'alpha\t[Project]\t{projects_dir / "alpha"}',
            f'zeta\t[Project]\t{projects_dir / "zeta"}',
        ]

    def test_malformed_selection(self, config, capsys):
        backend = FakeBackend(['alpha'])
        assert run('', config, backend, FakePicker('\t[Active]\t'), environ={}) == 1
        assert backend.calls == []
        assert '错误' in capsys.readouterr().err

    def test_missing_tmux(self, config, capsys):
        picker = FakePicker('alpha\t[Active]\t')
        assert run('', config, FakeBackend(available=False), picker, environ={}) == 1
        assert picker.seen_lines is None
        assert 'tmux' in capsys.readouterr().err

    def test_missing_projects_dir(self, tmp_path, capsys):
        cfg = SessionizerConfig(projects_dir=tmp_path / 'nope')
        picker = FakePicker(None)
        assert run('', cfg, FakeBackend(['alpha']), picker, environ={}) == 1
        assert picker.seen_lines is None
        assert 'nope' in capsys.readouterr().err

    def test_sessions_only(self, config):
        backend = FakeBackend(['solo'])
        picker = FakePicker(lambda lines, q: lines[0])
        assert run('', config, backend, picker, environ={}) == 0
        assert picker.seen_lines == ['solo\t[Active]\t']

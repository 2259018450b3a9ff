"""项目发现测试"""

from dataclasses import replace

from conftest import make_repo

from tmux_sessionizer.discovery import discover_projects, walk_for_vcs_roots


class TestWalkForVcsRoots:

    def test_finds_markers_within_depth(self, projects_dir):
        make_repo(projects_dir, 'alpha')
        make_repo(projects_dir, 'group', 'beta')
        make_repo(projects_dir, 'a', 'b', 'c', 'too-deep')

        found = sorted(walk_for_vcs_roots(projects_dir, 3))
        assert found == [
            str(projects_dir / 'alpha' / '.git'),
            str(projects_dir / 'group' / 'beta' / '.git'),
        ]

    def test_depth_limit_counts_marker(self, projects_dir):
        # group/beta/.git 深度为 3
        make_repo(projects_dir, 'group', 'beta')
        assert list(walk_for_vcs_roots(projects_dir, 2)) == []
        assert len(list(walk_for_vcs_roots(projects_dir, 3))) == 1

    def test_base_dir_itself_is_repo(self, projects_dir):
        (projects_dir / '.git').mkdir()
        assert list(walk_for_vcs_roots(projects_dir, 1)) == [str(projects_dir / '.git')]

    def test_nested_repo_found(self, projects_dir):
        make_repo(projects_dir, 'outer')
        make_repo(projects_dir, 'outer', 'inner')
        found = sorted(walk_for_vcs_roots(projects_dir, 3))
        assert str(projects_dir / 'outer' / 'inner' / '.git') in found

    def test_marker_file_ignored(self, projects_dir):
        worktree = projects_dir / 'worktree'
        worktree.mkdir()
        (worktree / '.git').write_text('gitdir: /elsewhere\n')
        assert list(walk_for_vcs_roots(projects_dir, 3)) == []

    def test_does_not_descend_into_marker(self, projects_dir):
        project = make_repo(projects_dir, 'alpha')
        (project / '.git' / 'modules' / 'sub' / '.git').mkdir(parents=True)
        found = list(walk_for_vcs_roots(projects_dir, 5))
        assert found == [str(project / '.git')]


class TestDiscoverProjects:

    def test_emits_sanitized_project_candidates(self, config, projects_dir):
        make_repo(projects_dir, 'my.app')
        candidates = discover_projects(config)
        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.logical_name == 'my_app'
        assert candidate.kind == 'project'
        assert candidate.path == str(projects_dir / 'my.app')

    def test_empty_tree(self, config):
        assert discover_projects(config) == []

    def test_keeps_duplicate_names(self, config, projects_dir):
        make_repo(projects_dir, 'work', 'api')
        make_repo(projects_dir, 'personal', 'api')
        names = [c.logical_name for c in discover_projects(config)]
        assert names == ['api', 'api']

    def test_skips_paths_with_reserved_chars(self, config, projects_dir):
        make_repo(projects_dir, 'bad\tname')
        make_repo(projects_dir, 'good')
        names = [c.logical_name for c in discover_projects(config)]
        assert names == ['good']

    def test_custom_marker_and_depth(self, config, projects_dir):
        (projects_dir / 'hg-project' / '.hg').mkdir(parents=True)
        make_repo(projects_dir, 'git-project')
        cfg = replace(config, vcs_marker='.hg', scan_depth=2)
        names = [c.logical_name for c in discover_projects(cfg)]
        assert names == ['hg-project']

    def test_paths_are_absolute(self, config, projects_dir):
        make_repo(projects_dir, 'alpha')
        assert discover_projects(config)[0].path.startswith('/')

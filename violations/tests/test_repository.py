"""Tests for builds, the file system repository and the build action trend."""

from violations.core.build import Build, InMemoryBuildRepository, ViolationsBuildAction
from violations.core.cache import ModelCache
from violations.core.config import ViolationsConfig
from violations.core.graph import render_trend_svg
from violations.core.report import ViolationsReport
from violations.core.repository import FileSystemBuildRepository


def _repository(builds_root, cache=None) -> FileSystemBuildRepository:
    return FileSystemBuildRepository(builds_root, ViolationsConfig.default(), cache=cache)


class TestBuild:
    def test_get_action_by_type(self):
        build = Build(4, "/tmp/4")
        assert build.get_action(ViolationsBuildAction) is None
        action = ViolationsBuildAction(build, ViolationsReport(build, ViolationsConfig.default()))
        build.add_action("something else")
        build.add_action(action)
        assert build.get_action(ViolationsBuildAction) is action
        assert build.id == "4"

    def test_in_memory_repository(self):
        repo = InMemoryBuildRepository([Build(1, "/b/1"), Build(3, "/b/3"), Build(2, "/b/2")])
        assert [b.number for b in repo.get_builds()] == [3, 2, 1]
        assert repo.get_previous_build(repo.get_build(3)).number == 2
        assert repo.get_previous_build(repo.get_build(1)) is None
        assert repo.delete_build(2)
        assert repo.get_build(2) is None


class TestFileSystemBuildRepository:
    def test_loads_counts(self, builds_root, make_build_dir):
        make_build_dir(7, {"pmd": 3, "checkstyle": 1})
        build = _repository(builds_root).get_build(7)

        action = build.get_action(ViolationsBuildAction)
        assert action is not None
        assert dict(action.get_report().get_violations()) == {"checkstyle": 1, "pmd": 3}

    def test_unknown_build(self, builds_root):
        assert _repository(builds_root).get_build(1) is None

    def test_build_without_report(self, builds_root):
        (builds_root / "2").mkdir()
        build = _repository(builds_root).get_build(2)
        assert build is not None
        assert build.get_action(ViolationsBuildAction) is None

    def test_unreadable_report(self, builds_root):
        (builds_root / "2" / "violations").mkdir(parents=True)
        (builds_root / "2" / "violations" / "violations.xml").write_text("not xml")
        build = _repository(builds_root).get_build(2)
        assert build.get_action(ViolationsBuildAction) is None

    def test_builds_newest_first(self, builds_root, make_build_dir):
        for n in (1, 10, 2):
            make_build_dir(n, {"pmd": n})
        (builds_root / "not-a-build").mkdir()
        assert [b.number for b in _repository(builds_root).get_builds()] == [10, 2, 1]

    def test_same_build_instance(self, builds_root, make_build_dir):
        make_build_dir(1, {"pmd": 1})
        repo = _repository(builds_root)
        assert repo.get_build(1) is repo.get_build(1)

    def test_load_does_not_cache_model(self, builds_root, make_build_dir):
        make_build_dir(1, {"pmd": 1})
        cache = ModelCache()
        build = _repository(builds_root, cache=cache).get_build(1)
        assert "1" not in cache

        report = build.get_action(ViolationsBuildAction).get_report()
        assert report.get_model() is cache.get("1")
        assert cache.generation("1") == 1

    def test_walking_history_keeps_cached_models(self, builds_root, make_build_dir):
        for n in range(1, 6):
            make_build_dir(n, {"pmd": n})
        cache = ModelCache(max_entries=2)
        repo = _repository(builds_root, cache=cache)
        current = repo.get_build(5).get_action(ViolationsBuildAction).get_report()
        model = current.get_model()

        repo.get_build(5).get_action(ViolationsBuildAction).render_graph()

        assert len(repo.get_build(5).get_action(ViolationsBuildAction).trend()) == 5
        assert cache.get_stats()["builds"] == ["5"]
        assert current.get_model() is model

    def test_delete_invalidates_cache(self, builds_root, make_build_dir):
        make_build_dir(1, {"pmd": 1})
        cache = ModelCache()
        repo = _repository(builds_root, cache=cache)
        repo.get_build(1).get_action(ViolationsBuildAction).get_report().get_model()
        assert cache.generation("1") == 1

        assert repo.delete_build(1)
        assert "1" not in cache
        assert cache.generation("1") == 0
        assert repo.get_build(1) is None
        assert not (builds_root / "1").exists()
        assert not repo.delete_build(1)


class TestTrend:
    def test_history_skips_builds_without_action(self, builds_root, make_build_dir):
        make_build_dir(1, {"pmd": 5})
        (builds_root / "2").mkdir()
        make_build_dir(3, {"pmd": 2, "cpd": -1})
        repo = _repository(builds_root)

        action = repo.get_build(3).get_action(ViolationsBuildAction)
        assert action.get_previous().build.number == 1
        assert action.trend() == [(3, {"cpd": -1, "pmd": 2}), (1, {"pmd": 5})]
        assert action.trend(max_builds=1) == [(3, {"cpd": -1, "pmd": 2})]

    def test_render_graph(self, builds_root, make_build_dir):
        make_build_dir(1, {"pmd": 5})
        make_build_dir(2, {"pmd": 2})
        image = _repository(builds_root).get_build(2).get_action(ViolationsBuildAction).render_graph()
        svg = image.content.decode("utf-8")
        assert svg.startswith("<svg")
        assert 'data-category="pmd"' in svg
        assert svg.index(">#1<") < svg.index(">#2<")


class TestRenderTrendSvg:
    def test_no_data(self):
        assert "No data" in render_trend_svg([])

    def test_one_line_per_category(self):
        svg = render_trend_svg([(1, {"pmd": 1, "cpd": 4}), (2, {"pmd": 3})])
        assert svg.count("<polyline") == 2
        assert 'data-category="cpd"' in svg

    def test_category_filter_and_size(self):
        svg = render_trend_svg([(1, {"pmd": 1, "cpd": 4})], categories=["pmd"], width=300, height=120)
        assert svg.count("<polyline") == 1
        assert 'width="300"' in svg
        assert 'height="120"' in svg

    def test_labels_escaped(self):
        svg = render_trend_svg([(1, {"a<b": 1})])
        assert "a&lt;b" in svg

"""Unit tests for the LibraryInstaller service."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from libvault.adapters.cache import VerifiedCache
from libvault.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter
from libvault.core.exceptions import (
    ClassifierNotFoundError,
    CoordinateParseError,
    RemoteStatusError,
)
from libvault.core.models import (
    ArtifactDownload,
    DerivedUrl,
    ExplicitDownloads,
    LibraryDescriptor,
    PlatformRule,
    PlatformScope,
    RuleAction,
)
from libvault.core.services import LibraryInstaller


REPO = "https://repo.example/"


def sha1_of(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def derived(name: str, **kwargs: object) -> LibraryDescriptor:
    return LibraryDescriptor(name=name, strategy=DerivedUrl(url=REPO, **kwargs))  # type: ignore[arg-type]


class RecordingReporter:
    """ProgressReporter that records task lifecycle calls."""

    def __init__(self) -> None:
        self.started: list[tuple[str, int]] = []
        self.finished: list[str] = []

    def start_task(self, name: str, total: int):
        self.started.append((name, total))
        return lambda _done, _total: None

    def finish_task(self, name: str) -> None:
        self.finished.append(name)


@pytest.fixture
def installer(tmp_path: Path, fake_transport) -> LibraryInstaller:
    return LibraryInstaller(
        cache=VerifiedCache(fake_transport),
        base_dir=tmp_path / "libraries",
        platform="linux",
    )


@pytest.mark.core
@pytest.mark.tra("Service.Installer.Plan")
@pytest.mark.tier(1)
class TestPlan:
    """Tests for LibraryInstaller.plan."""

    def test_plan_keeps_manifest_order(self, installer: LibraryInstaller) -> None:
        """Instructions follow descriptor order."""
        plan = installer.plan([derived("g:b:1"), derived("g:a:1")])

        assert [i.local_path.name for i in plan] == ["b-1.jar", "a-1.jar"]

    def test_plan_drops_duplicate_paths(self, installer: LibraryInstaller) -> None:
        """The first instruction for a path wins."""
        first = derived("org.ow2.asm:asm:9.2")
        second = LibraryDescriptor(
            name="org.ow2.asm:asm:9.2",
            strategy=DerivedUrl(url="https://other.example/"),
        )

        plan = installer.plan([first, second])

        assert len(plan) == 1
        assert plan[0].source_url.startswith(REPO)

    def test_plan_skips_excluded_libraries(self, installer: LibraryInstaller) -> None:
        """Libraries disallowed on the platform are absent from the plan."""
        osx_only = LibraryDescriptor(
            name="ca.weblite:java-objc-bridge:1.1",
            rules=(PlatformRule(RuleAction.ALLOW, PlatformScope("osx")),),
        )

        assert installer.plan([osx_only]) == []

    def test_plan_uses_base_dir(self, installer: LibraryInstaller, tmp_path: Path) -> None:
        """Local paths live under the installer's base directory."""
        [instruction] = installer.plan([derived("org.ow2.asm:asm:9.2")])

        assert instruction.local_path == (
            tmp_path / "libraries" / "org/ow2/asm/asm/9.2/asm-9.2.jar"
        )

    def test_platform_property(self, installer: LibraryInstaller) -> None:
        """The platform override is exposed."""
        assert installer.platform == "linux"


@pytest.mark.core
@pytest.mark.tra("Service.Installer.Install")
@pytest.mark.tier(1)
class TestInstall:
    """Tests for LibraryInstaller.install."""

    def test_install_writes_artifacts(self, installer: LibraryInstaller, fake_transport) -> None:
        """Each planned artifact is fetched and written."""
        url = REPO + "org/ow2/asm/asm/9.2/asm-9.2.jar"
        fake_transport.serve(url, b"asm")

        [path] = installer.install([derived("org.ow2.asm:asm:9.2")])

        assert path.read_bytes() == b"asm"
        assert fake_transport.requests == [url]

    def test_install_reuses_verified_copy(
        self, installer: LibraryInstaller, fake_transport
    ) -> None:
        """A second install with matching hashes makes no requests."""
        url = "https://l.example/asm.jar"
        fake_transport.serve(url, b"asm")
        descriptor = LibraryDescriptor(
            name="org.ow2.asm:asm:9.2",
            strategy=ExplicitDownloads(
                artifact=ArtifactDownload(sha1=sha1_of(b"asm"), size=3, url=url)
            ),
        )

        installer.install([descriptor])
        installer.install([descriptor])

        assert fake_transport.requests == [url]

    def test_install_always_stale_refetches(
        self, installer: LibraryInstaller, fake_transport
    ) -> None:
        """always-stale libraries are fetched on every install."""
        url = REPO + "com/example/snap/1.0/snap-1.0.jar"
        fake_transport.serve(url, b"v1")
        descriptor = derived("com.example:snap:1.0", always_stale=True)

        installer.install([descriptor])
        fake_transport.serve(url, b"v2")
        [path] = installer.install([descriptor])

        assert path.read_bytes() == b"v2"
        assert fake_transport.requests == [url, url]

    def test_dry_run_fetches_nothing(self, installer: LibraryInstaller, fake_transport) -> None:
        """dry_run returns planned paths without any request."""
        paths = installer.install([derived("org.ow2.asm:asm:9.2")], dry_run=True)

        assert [p.name for p in paths] == ["asm-9.2.jar"]
        assert fake_transport.requests == []
        assert not paths[0].exists()

    def test_descriptor_error_aborts_before_fetching(
        self, installer: LibraryInstaller, fake_transport
    ) -> None:
        """An unresolvable descriptor fails the whole plan."""
        with pytest.raises(CoordinateParseError):
            installer.install([derived("g:a:1"), LibraryDescriptor(name="bad")])

        assert fake_transport.requests == []

    def test_missing_classifier_aborts(self, installer: LibraryInstaller) -> None:
        """Inconsistent natives metadata surfaces as ClassifierNotFoundError."""
        descriptor = LibraryDescriptor(
            name="org.lwjgl:lwjgl:3.3.1",
            strategy=ExplicitDownloads(natives={"linux": "natives-linux"}),
        )

        with pytest.raises(ClassifierNotFoundError):
            installer.install([descriptor])

    def test_remote_error_propagates(self, installer: LibraryInstaller) -> None:
        """A 404 from the repository raises RemoteStatusError."""
        with pytest.raises(RemoteStatusError) as exc_info:
            installer.install([derived("g:a:1")])

        assert exc_info.value.status == 404

    def test_progress_reported_per_artifact(
        self, installer: LibraryInstaller, fake_transport, tmp_path: Path
    ) -> None:
        """start_task and finish_task bracket each fetch with the declared size."""
        url = "https://l.example/asm.jar"
        fake_transport.serve(url, b"asm")
        descriptor = LibraryDescriptor(
            name="org.ow2.asm:asm:9.2",
            strategy=ExplicitDownloads(
                artifact=ArtifactDownload(sha1=sha1_of(b"asm"), size=3, url=url)
            ),
        )
        reporter = RecordingReporter()

        installer.install([descriptor], progress=reporter)

        target = str(tmp_path / "libraries" / "org/ow2/asm/asm/9.2/asm-9.2.jar")
        assert reporter.started == [(target, 3)]
        assert reporter.finished == [target]

    def test_progress_finished_on_failure(
        self, installer: LibraryInstaller, tmp_path: Path
    ) -> None:
        """finish_task runs even when the fetch fails."""
        reporter = RecordingReporter()

        with pytest.raises(RemoteStatusError):
            installer.install([derived("g:a:1")], progress=reporter)

        assert reporter.finished == [str(tmp_path / "libraries" / "g/a/1/a-1.jar")]

    def test_empty_input(self, installer: LibraryInstaller) -> None:
        """Nothing to install returns an empty list."""
        assert installer.install([]) == []


@pytest.mark.core
@pytest.mark.tra("Service.Installer.Parallel")
@pytest.mark.tier(1)
class TestParallelInstall:
    """Tests for install with an injected executor."""

    def test_thread_pool_preserves_plan_order(self, tmp_path: Path, fake_transport) -> None:
        """Results come back in plan order regardless of completion order."""
        names = [f"com.example:lib{i}:1.0" for i in range(8)]
        for i in range(8):
            fake_transport.serve(
                REPO + f"com/example/lib{i}/1.0/lib{i}-1.0.jar", f"lib{i}".encode()
            )
        installer = LibraryInstaller(
            cache=VerifiedCache(fake_transport),
            base_dir=tmp_path,
            executor=ThreadPoolExecutorAdapter(max_workers=4),
            platform="linux",
        )

        paths = installer.install([derived(name) for name in names])

        assert [p.name for p in paths] == [f"lib{i}-1.0.jar" for i in range(8)]
        assert all(p.read_bytes() == f"lib{i}".encode() for i, p in enumerate(paths))

    def test_same_file_name_in_different_groups(self, tmp_path: Path, fake_transport) -> None:
        """Artifacts sharing a file name keep separate progress bars."""
        from io import StringIO

        from rich.console import Console

        from libvault.progress import RichProgressReporter

        fake_transport.serve(REPO + "a/b/core/1.0/core-1.0.jar", b"ab")
        fake_transport.serve(REPO + "c/d/core/1.0/core-1.0.jar", b"cd")
        installer = LibraryInstaller(
            cache=VerifiedCache(fake_transport),
            base_dir=tmp_path,
            executor=ThreadPoolExecutorAdapter(max_workers=2),
            platform="linux",
        )

        with RichProgressReporter(console=Console(file=StringIO())) as reporter:
            paths = installer.install(
                [derived("a.b:core:1.0"), derived("c.d:core:1.0")], progress=reporter
            )

        assert [p.read_bytes() for p in paths] == [b"ab", b"cd"]

    def test_executor_error_propagates(self, tmp_path: Path, fake_transport) -> None:
        """A failed fetch in a worker is re-raised to the caller."""
        installer = LibraryInstaller(
            cache=VerifiedCache(fake_transport),
            base_dir=tmp_path,
            executor=ThreadPoolExecutorAdapter(max_workers=2),
            platform="linux",
        )

        with pytest.raises(RemoteStatusError):
            installer.install([derived("g:missing:1")])

    def test_max_workers_one_bypasses_executor(self, tmp_path: Path, fake_transport) -> None:
        """max_workers=1 runs sequentially without entering the executor."""

        class ExplodingExecutor(SynchronousExecutor):
            def __enter__(self):
                raise AssertionError("executor should not be used")

        fake_transport.serve(REPO + "g/a/1/a-1.jar", b"a")
        installer = LibraryInstaller(
            cache=VerifiedCache(fake_transport),
            base_dir=tmp_path,
            executor=ExplodingExecutor(),
            platform="linux",
        )

        [path] = installer.install([derived("g:a:1")], max_workers=1)

        assert path.read_bytes() == b"a"


@pytest.mark.core
@pytest.mark.tra("Service.Installer.Missing")
@pytest.mark.tier(1)
class TestMissing:
    """Tests for LibraryInstaller.missing."""

    def test_reports_absent_and_stale(
        self, installer: LibraryInstaller, tmp_path: Path
    ) -> None:
        """Absent files and always-stale entries are missing; valid ones are not."""
        present = tmp_path / "libraries" / "g" / "present" / "1" / "present-1.jar"
        present.parent.mkdir(parents=True)
        present.write_bytes(b"x")
        stale_path = tmp_path / "libraries" / "g" / "stale" / "1" / "stale-1.jar"
        stale_path.parent.mkdir(parents=True)
        stale_path.write_bytes(b"y")

        missing = installer.missing(
            [
                derived("g:present:1"),
                derived("g:absent:1"),
                derived("g:stale:1", always_stale=True),
            ]
        )

        assert [i.local_path.name for i in missing] == ["absent-1.jar", "stale-1.jar"]


@pytest.mark.core
@pytest.mark.tra("Service.Installer.FromDirectory")
@pytest.mark.tier(1)
def test_from_directory_resolves_libraries_dir(
    tmp_path: Path, fake_transport, monkeypatch: pytest.MonkeyPatch
) -> None:
    """from_directory roots the libraries directory at the project."""
    monkeypatch.delenv("LIBVAULT_LIBRARIES_DIR", raising=False)
    (tmp_path / ".libvault").mkdir()
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    installer = LibraryInstaller.from_directory(
        nested, transport=fake_transport, platform="osx"
    )

    assert installer.base_dir == tmp_path.resolve() / "libraries"
    assert installer.platform == "osx"

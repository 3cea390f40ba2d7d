"""Core domain services for libvault."""

import logging
from collections.abc import Iterable
from pathlib import Path

from libvault.core.locator import locate
from libvault.core.models import FetchInstruction, LibraryDescriptor
from libvault.core.platform import platform_identifier
from libvault.core.ports import (
    CachePort,
    ExecutorPort,
    NullProgressReporter,
    ProgressReporter,
    TransportPort,
)


logger = logging.getLogger(__name__)


class LibraryInstaller:
    """Resolves library descriptors and materializes their artifacts.

    The installer sits above the artifact locator and the verified cache:
    it locates every descriptor, drops duplicate target paths so a shared
    library is fetched once, and runs one fetch per instruction, in
    parallel when an executor is injected.
    """

    def __init__(
        self,
        cache: CachePort,
        base_dir: Path,
        executor: ExecutorPort | None = None,
        platform: str | None = None,
    ) -> None:
        self._cache = cache
        self._base_dir = base_dir
        self._executor = executor
        self._platform = platform if platform is not None else platform_identifier()

    @classmethod
    def from_directory(
        cls,
        directory: Path | None = None,
        libraries_dir: Path | str | None = None,
        transport: TransportPort | None = None,
        executor: ExecutorPort | None = None,
        platform: str | None = None,
    ) -> "LibraryInstaller":
        """Create an installer with auto-discovered paths and default adapters.

        Args:
            directory: Start directory for root discovery (defaults to cwd).
            libraries_dir: Libraries directory relative to the project root
                or absolute. Defaults to LIBVAULT_LIBRARIES_DIR or "libraries".
            transport: Transport to fetch with. Defaults to create_router().
            executor: Optional executor for parallel fetches.
            platform: Platform identifier override.

        Returns:
            LibraryInstaller with a VerifiedCache over the chosen transport.
        """
        from libvault.adapters.cache import VerifiedCache
        from libvault.adapters.transport import create_router
        from libvault.config import find_project_root, resolve_libraries_dir

        root = find_project_root(directory)
        base_dir = resolve_libraries_dir(root, libraries_dir)

        return cls(
            cache=VerifiedCache(transport if transport is not None else create_router()),
            base_dir=base_dir,
            executor=executor,
            platform=platform,
        )

    @property
    def base_dir(self) -> Path:
        """Directory artifacts are stored under."""
        return self._base_dir

    @property
    def platform(self) -> str:
        """Platform identifier used for rule and natives matching."""
        return self._platform

    def plan(self, descriptors: Iterable[LibraryDescriptor]) -> list[FetchInstruction]:
        """Locate all descriptors and de-duplicate by target path.

        Args:
            descriptors: Libraries to resolve, in manifest order.

        Returns:
            Instructions in first-seen order. When two instructions target
            the same local path, the first one wins.

        Raises:
            CoordinateParseError: If a descriptor name is not a valid coordinate.
            ClassifierNotFoundError: If a natives entry has no download.
        """
        planned: dict[Path, FetchInstruction] = {}
        for descriptor in descriptors:
            for instruction in locate(self._base_dir, descriptor, self._platform):
                if instruction.local_path in planned:
                    logger.debug(
                        "Skipping duplicate target %s from %s",
                        instruction.local_path,
                        descriptor.name,
                    )
                    continue
                planned[instruction.local_path] = instruction
        return list(planned.values())

    def install(
        self,
        descriptors: Iterable[LibraryDescriptor],
        progress: ProgressReporter | None = None,
        max_workers: int | None = None,
        *,
        dry_run: bool = False,
    ) -> list[Path]:
        """Fetch every artifact the descriptors need on this platform.

        Fetches run in parallel when an executor is injected and
        max_workers is not 1. Otherwise they run sequentially.

        Args:
            descriptors: Libraries to install.
            progress: Optional progress reporter for download feedback.
            max_workers: Use 1 to force sequential fetches.
            dry_run: If True, return the planned paths without fetching.

        Returns:
            Local paths of all artifacts, in plan order.

        Raises:
            DescriptorError: If a descriptor cannot be resolved. Nothing is
                fetched in that case.
            FetchError: If any artifact fails to download.
        """
        if progress is None:
            progress = NullProgressReporter()

        instructions = self.plan(descriptors)
        if dry_run or not instructions:
            return [instruction.local_path for instruction in instructions]

        # Sequential execution for max_workers=1 or when no executor provided
        if max_workers == 1 or self._executor is None:
            return [self._fetch_one(instruction, progress) for instruction in instructions]

        executor = self._executor
        with executor:
            futures = [
                executor.submit(self._fetch_one, instruction, progress)
                for instruction in instructions
            ]
            paths: list[Path] = []
            for future in futures:
                result = future.result()
                assert isinstance(result, Path)
                paths.append(result)
        return paths

    def missing(self, descriptors: Iterable[LibraryDescriptor]) -> list[FetchInstruction]:
        """Return the planned instructions without a valid local copy."""
        return [
            instruction
            for instruction in self.plan(descriptors)
            if instruction.force_refresh
            or not self._cache.is_cached(instruction.local_path, instruction.expected_sha1)
        ]

    def _fetch_one(
        self, instruction: FetchInstruction, progress: ProgressReporter
    ) -> Path:
        task_name = str(instruction.local_path)
        callback = progress.start_task(task_name, instruction.size or 0)
        try:
            self._cache.fetch_instruction(instruction, callback)
        finally:
            progress.finish_task(task_name)
        return instruction.local_path

"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from pathlib import Path

from libvault import (
    ClassifierNotFoundError,
    CoordinateParseError,
    DescriptorError,
    DerivedUrl,
    ExplicitDownloads,
    FetchError,
    LibraryDescriptor,
    LibraryInstaller,
    # Exceptions
    LibvaultError,
    RemoteStatusError,
    TransportError,
)


installer = LibraryInstaller.from_directory(libraries_dir="libraries")


# Pattern 1: Handle malformed descriptors
def install_or_report(descriptors: list[LibraryDescriptor]) -> list[Path]:
    """Install libraries, explaining descriptor problems."""
    try:
        return installer.install(descriptors)
    except CoordinateParseError as e:
        # recovery_hint shows the expected coordinate shape
        print(f"Bad library name '{e.coordinate}'.")
        print(f"Hint: {e.recovery_hint}")
        raise
    except ClassifierNotFoundError as e:
        print(f"{e.name} has no download for {e.classifier} on {e.platform}.")
        raise


# Pattern 2: Handle missing remote files
def install_optional(descriptor: LibraryDescriptor) -> list[Path]:
    """Install a library, returning no paths if the repository lacks it."""
    try:
        return installer.install([descriptor])
    except RemoteStatusError as e:
        if e.status == 404:
            print(f"Not published at {e.url}")
            return []
        raise


# Pattern 3: Handle network failures
def install_with_retry(descriptors: list[LibraryDescriptor], attempts: int = 3) -> list[Path]:
    """Retry when the repository is unreachable.

    Files fetched before the failure are verified copies on disk, so each
    retry only downloads what is still missing.
    """
    for attempt in range(1, attempts + 1):
        try:
            return installer.install(descriptors)
        except TransportError as e:
            print(f"Attempt {attempt} failed: {e}")
            if attempt == attempts:
                print(f"Hint: {e.recovery_hint}")
                raise
    return []


# Pattern 4: Catch all library errors by level
def install_safely(descriptors: list[LibraryDescriptor]) -> list[Path] | None:
    """Install, distinguishing descriptor and fetch failures."""
    try:
        return installer.install(descriptors)
    except DescriptorError as e:
        print(f"Metadata problem in {e.name}: {e}")
        error: LibvaultError = e
    except FetchError as e:
        print(f"Download of {e.url} failed: {e}")
        error = e
    except LibvaultError as e:
        print(f"Error: {e}")
        error = e
    if error.recovery_hint:
        print(f"Hint: {error.recovery_hint}")
    return None


if __name__ == "__main__":
    install_safely(
        [
            LibraryDescriptor(name="not-a-coordinate"),
            LibraryDescriptor(
                name="org.lwjgl:lwjgl:3.3.1",
                strategy=ExplicitDownloads(natives={"linux": "natives-linux"}),
            ),
            LibraryDescriptor(
                name="com.example:absent:1.0",
                strategy=DerivedUrl(url="https://repo.example/"),
            ),
        ]
    )

"""Basic library install example.

This example shows the simplest usage pattern: describe a few libraries,
create an installer, and install them. Files already on disk with a
matching SHA-1 are reused without any network traffic.
"""

from pathlib import Path

from libvault import (
    ArtifactDownload,
    ExplicitDownloads,
    LibraryDescriptor,
    LibraryInstaller,
    VerifiedCache,
    create_router,
)


# A library with an explicit download entry (URL and SHA-1 known up front)
asm = LibraryDescriptor(
    name="org.ow2.asm:asm:9.6",
    strategy=ExplicitDownloads(
        artifact=ArtifactDownload(
            sha1="aa205cf0a06dbd8e04ece91c0b37c3f5d567546a",
            size=124193,
            url="https://libraries.minecraft.net/org/ow2/asm/asm/9.6/asm-9.6.jar",
        )
    ),
)

# A library whose URL is derived from its coordinate and the default repository
jopt = LibraryDescriptor(name="net.sf.jopt-simple:jopt-simple:5.0.4")

# Option 1: Manual wiring (full control over adapters)
# Use this when you need a custom transport or libraries directory
installer = LibraryInstaller(
    cache=VerifiedCache(create_router()),
    base_dir=Path("./libraries").resolve(),
)

# Option 2: Factory method (recommended for most cases)
# Auto-discovers project root, wires up default adapters (RouterTransport, VerifiedCache)
# installer = LibraryInstaller.from_directory(libraries_dir="libraries")

# Install downloads anything missing or corrupt, returns local paths
for path in installer.install([asm, jopt]):
    print(f"Library available at: {path}")

# A second install finds verified copies and makes no requests for asm.
# jopt has no declared hash, so any existing file is accepted.
installer.install([asm, jopt])

"""Parallel install with progress bars.

This example installs a set of libraries using a thread pool and shows
a Rich progress bar per artifact. Native libraries are selected for the
current platform automatically.
"""

from libvault import (
    ArtifactDownload,
    ExplicitDownloads,
    LibraryDescriptor,
    LibraryInstaller,
    PlatformRule,
    PlatformScope,
    RichProgressReporter,
    RuleAction,
    ThreadPoolExecutorAdapter,
    platform_identifier,
)


lwjgl_natives = {
    "linux": "natives-linux",
    "osx": "natives-macos",
    "windows": "natives-windows",
}

lwjgl = LibraryDescriptor(
    name="org.lwjgl:lwjgl:3.3.1",
    strategy=ExplicitDownloads(
        artifact=ArtifactDownload(
            sha1="ae58664f88e18a9bb2c77b063833ca7aaec484cb",
            size=724243,
            url="https://libraries.minecraft.net/org/lwjgl/lwjgl/3.3.1/lwjgl-3.3.1.jar",
        ),
        classifiers={
            classifier: ArtifactDownload(
                # Placeholder hashes: a mismatch simply triggers a re-download
                sha1="0" * 40,
                size=0,
                url=(
                    "https://libraries.minecraft.net/org/lwjgl/lwjgl/3.3.1/"
                    f"lwjgl-3.3.1-{classifier}.jar"
                ),
            )
            for classifier in lwjgl_natives.values()
        },
        natives=lwjgl_natives,
    ),
)

# Only needed on macOS: allowed there, excluded everywhere else
objc_bridge = LibraryDescriptor(
    name="ca.weblite:java-objc-bridge:1.1",
    rules=(PlatformRule(RuleAction.ALLOW, PlatformScope("osx")),),
)

libraries = [
    lwjgl,
    objc_bridge,
    LibraryDescriptor(name="com.mojang:brigadier:1.1.8"),
    LibraryDescriptor(name="com.mojang:datafixerupper:6.0.8"),
]

installer = LibraryInstaller.from_directory(
    libraries_dir="libraries",
    executor=ThreadPoolExecutorAdapter(max_workers=4),
)
print(f"Installing for platform: {platform_identifier()}")

# Preview which files are needed on this platform without fetching
for instruction in installer.plan(libraries):
    print(f"  {instruction.local_path.name} <- {instruction.source_url}")

with RichProgressReporter() as progress:
    paths = installer.install(libraries, progress=progress)

print(f"Installed {len(paths)} artifacts")

# Force sequential fetches, e.g. to keep transport calls in order
installer.install(libraries, max_workers=1)

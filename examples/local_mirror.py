"""Installing from a local or S3 repository mirror.

This example shows how DerivedUrl base URLs route to different
transports: https:// goes through requests, s3:// through boto3, and
plain paths or file:// URLs read straight from disk. A local mirror is
handy for offline development and tests.
"""

from pathlib import Path

from libvault import (
    DerivedUrl,
    LibraryDescriptor,
    LibraryInstaller,
    VerifiedCache,
    create_router,
    load_manifest,
)


mirror = Path("./mirror").resolve()

# Lay out the mirror like a Maven repository
artifact = mirror / "com" / "example" / "tools" / "1.0" / "tools-1.0.jar"
artifact.parent.mkdir(parents=True, exist_ok=True)
artifact.write_bytes(b"jar contents")

installer = LibraryInstaller(
    cache=VerifiedCache(create_router()),
    base_dir=Path("./libraries").resolve(),
)

# A trailing "/" marks a repository root; the coordinate path is appended
from_disk = LibraryDescriptor(
    name="com.example:tools:1.0",
    strategy=DerivedUrl(url=f"file://{mirror}/"),
)

# Same layout in a bucket (requires AWS credentials)
from_bucket = LibraryDescriptor(
    name="com.example:tools:1.0",
    strategy=DerivedUrl(url="s3://my-artifact-mirror/maven/"),
)

# Planning needs no credentials, only fetching does
print(installer.plan([from_bucket])[0].source_url)

[path] = installer.install([from_disk])
print(f"Installed from mirror: {path}")

# Manifests can point at the mirror too
manifest = Path("./mirror-libraries.json")
manifest.write_text(f'[{{"name": "com.example:tools:1.0", "url": "{mirror.as_uri()}/"}}]')
print(installer.install(load_manifest(manifest), dry_run=True))

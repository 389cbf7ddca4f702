"""Project identity for single-file targets, derived from SBOM metadata.

CycloneDX (JSON and XML) and SPDX JSON documents carry a name and often a
version for the described software. Any other file is identified by its
file name and a digest of its contents.
"""

import hashlib
import json
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from depreport.models import ProjectIdentity, ProjectOverride
from depreport.precedence import first_present

logger = logging.getLogger(__name__)

SBOM_SUFFIXES = {".json", ".xml", ".spdx", ".cdx", ".bom"}

REVISION_DIGEST_LENGTH = 12


@dataclass(frozen=True)
class ArtifactMetadata:
    """Name and version declared inside an SBOM document."""

    name: str | None = None
    version: str | None = None


def read_sbom_metadata(path: Path) -> ArtifactMetadata:
    """Read the described component's name and version from an SBOM.

    Unreadable or unrecognised documents yield empty metadata.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s: %s", path, e)
        return ArtifactMetadata()

    stripped = content.lstrip()
    if stripped.startswith("{"):
        return _read_json_metadata(path, stripped)
    if stripped.startswith("<"):
        return _read_cyclonedx_xml_metadata(path, stripped)
    return ArtifactMetadata()


def _read_json_metadata(path: Path, content: str) -> ArtifactMetadata:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug("Could not parse %s as JSON: %s", path, e)
        return ArtifactMetadata()

    if not isinstance(data, dict):
        return ArtifactMetadata()

    # CycloneDX
    if data.get("bomFormat") == "CycloneDX":
        metadata = data.get("metadata")
        component = metadata.get("component") if isinstance(metadata, dict) else None
        if isinstance(component, dict):
            return ArtifactMetadata(
                name=_text(component.get("name")),
                version=_text(component.get("version")),
            )
        return ArtifactMetadata()

    # SPDX
    if "spdxVersion" in data:
        return ArtifactMetadata(name=_text(data.get("name")))

    return ArtifactMetadata()


def _read_cyclonedx_xml_metadata(path: Path, content: str) -> ArtifactMetadata:
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        logger.debug("Could not parse %s as XML: %s", path, e)
        return ArtifactMetadata()

    # Tags are namespaced, e.g. {http://cyclonedx.org/schema/bom/1.4}bom
    namespace = root.tag[: root.tag.index("}") + 1] if root.tag.startswith("{") else ""
    if root.tag != f"{namespace}bom":
        return ArtifactMetadata()

    component = root.find(f"{namespace}metadata/{namespace}component")
    if component is None:
        return ArtifactMetadata()

    return ArtifactMetadata(
        name=_text(component.findtext(f"{namespace}name")),
        version=_text(component.findtext(f"{namespace}version")),
    )


def _text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def artifact_name(path: Path) -> str:
    """Return the file name with any SBOM extensions removed.

    ``app.cdx.json`` becomes ``app``.
    """
    name = path.name
    while True:
        stem, dot, suffix = name.rpartition(".")
        if not dot or not stem or f".{suffix.lower()}" not in SBOM_SUFFIXES:
            return name
        name = stem


def content_digest(path: Path) -> str:
    """Return a short SHA-256 digest of the file contents."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()[:REVISION_DIGEST_LENGTH]


def derive_file_identity(path: Path, override: ProjectOverride) -> ProjectIdentity:
    """Derive the identity of an artifact file.

    Each field is taken from the CLI override, then the SBOM metadata, then
    the file name (for the name) or a content digest (for the revision).
    """
    metadata = read_sbom_metadata(path)

    name = first_present(override.name, metadata.name, artifact_name(path))
    revision = first_present(override.revision, metadata.version)
    if revision is None:
        revision = content_digest(path)

    return ProjectIdentity(name=name, revision=revision, branch=override.branch)

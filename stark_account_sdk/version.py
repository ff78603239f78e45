"""
Version information for the Stark Account SDK.

Installed builds report the distribution metadata. A source checkout that
was never installed reads the version from the repository's pyproject.toml.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION_NAME = "stark-account-sdk"
DEFAULT_VERSION = "0.1.0"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _version_from_pyproject(path: pathlib.Path) -> str:
    with path.open("rb") as f:
        data = tomli.load(f)
    project = data["project"]
    if project.get("name") != DISTRIBUTION_NAME:
        raise KeyError(f"{path} does not describe {DISTRIBUTION_NAME}")
    return project["version"]


def resolve_version() -> str:
    """Return the installed version, the checkout's version, or DEFAULT_VERSION."""
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        pass
    try:
        return _version_from_pyproject(PYPROJECT_PATH)
    except (OSError, KeyError, tomli.TOMLDecodeError):
        return DEFAULT_VERSION


__version__ = resolve_version()

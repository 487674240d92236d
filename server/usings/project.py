"""
Project-readiness checks.

Unused-directive diagnostics are only trustworthy once the analyzer can
resolve the project's references, which needs a restored .NET project (or
a Unity project that Unity has compiled). These helpers look at the
build artifacts on disk to decide that.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .types import ValidationResult

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

PROJECT_NOT_FOUND_MESSAGE = "Could not find the parent project for the file that's open in the current editor."


def _is_filesystem_root(path: Path) -> bool:
    return path.parent == path


def find_project_file(source_path: PathLike) -> Optional[Path]:
    """
    Find the nearest .csproj, walking up from the file's directory.

    Returns:
        Path to the project file, or None if no directory up to the root has one
    """
    current = Path(source_path).resolve().parent
    while True:
        candidates = sorted(current.glob("*.csproj"))
        if candidates:
            return candidates[0]
        if _is_filesystem_root(current):
            return None
        current = current.parent


def is_unity_project(project_dir: PathLike) -> bool:
    """
    True if an ancestor directory holds both Assets/ and ProjectSettings/.

    The search stops at the first directory containing a .sln file.
    """
    current = Path(project_dir).resolve()
    while not _is_filesystem_root(current):
        if (current / "Assets").is_dir() and (current / "ProjectSettings").is_dir():
            return True
        if any(current.glob("*.sln")):
            break
        current = current.parent
    return False


def is_unity_project_compiled(project_file: PathLike) -> bool:
    """True if Unity has built ``Library/ScriptAssemblies/<ProjectName>.dll``."""
    project_file = Path(project_file)
    project_name = project_file.stem

    current = project_file.resolve().parent
    while not _is_filesystem_root(current):
        if (current / "Library").is_dir() and (current / "Assets").is_dir():
            return (current / "Library" / "ScriptAssemblies" / f"{project_name}.dll").exists()
        current = current.parent
    return False


def is_project_restored(project_file: PathLike) -> bool:
    """
    Check whether the project's build artifacts are in place.

    Unity projects need compiled script assemblies; other projects need a
    ``*.csproj.nuget.g.props`` file in ``obj/``.
    """
    project_file = Path(project_file)
    if not project_file.is_file():
        return False

    project_dir = project_file.parent
    if is_unity_project(project_dir):
        return is_unity_project_compiled(project_file)

    obj_dir = project_dir / "obj"
    if not obj_dir.is_dir():
        return False
    return any(obj_dir.glob("*.csproj.nuget.g.props"))


class ProjectValidator:
    """Validates that a C# file's project is ready for unused-directive removal."""

    def validate(self, file_path: PathLike) -> ValidationResult:
        project_file = find_project_file(file_path)
        if project_file is None:
            logger.info(f"No project file found for {file_path}")
            return ValidationResult.invalid(PROJECT_NOT_FOUND_MESSAGE)

        if not is_project_restored(project_file):
            project_name = project_file.name
            if is_unity_project(project_file.parent):
                message = (
                    f"No action was taken because the project, {project_name}, has not been compiled by Unity. "
                    "Please open the project in Unity and let it compile, then try again."
                )
            else:
                message = (
                    f"No action was taken because the project, {project_name}, has not been restored. "
                    'Please run "dotnet restore" or build the project and try again.'
                )
            logger.info(f"Project {project_file} is not ready")
            return ValidationResult.invalid(message)

        return ValidationResult.valid()

"""get_project_info tool implementation."""

import re
from pathlib import Path

from dotnet_build_mcp.log import get_logger
from dotnet_build_mcp.tools.definitions.path_utils import translate_path

logger = get_logger(__name__)

_PROPERTY_LABELS = (
    ("TargetFramework", "Target Framework"),
    ("TargetFrameworks", "Target Frameworks"),
    ("OutputType", "Output Type"),
)

_UI_MARKERS = (
    ("<UseWPF>true</UseWPF>", "WPF Application"),
    ("<UseWindowsForms>true</UseWindowsForms>", "Windows Forms Application"),
)

COMMON_CONFIGURATIONS = ("Debug", "Release")


def _property_value(content: str, name: str) -> str | None:
    match = re.search(rf"<{name}>(.+?)</{name}>", content)
    return match.group(1) if match else None


def describe_project(project_file: Path, content: str) -> str:
    """Summarize the project file text.

    Args:
        project_file: Path of the project file, used for the header.
        content: Project file text.

    Returns:
        Multi-line description with the target framework(s), output type and UI
        toolkit, where present.

    """
    lines = [f"Project: {project_file.name}", f"Location: {project_file}", ""]

    for name, label in _PROPERTY_LABELS:
        value = _property_value(content, name)
        if value:
            lines.append(f"{label}: {value}")

    lines.extend(
        f"Project Type: {kind}" for marker, kind in _UI_MARKERS if marker in content
    )

    lines.extend(["", "Common configurations:"])
    lines.extend(f"  - {configuration}" for configuration in COMMON_CONFIGURATIONS)
    return "\n".join(lines) + "\n"


def get_project_info(project_path: str) -> str:
    """Read project metadata from a .csproj file.

    Args:
        project_path (str): Project file path, WSL or Windows form.

    Returns:
        str: The project description, or an error message when the file does not
            exist or cannot be read.

    """
    translated = translate_path(project_path) or ""
    project_file = Path(translated)
    if not project_file.is_file():
        logger.info(
            "Project file not found",
            extra={"project_path": project_path, "translated_path": translated},
        )
        return (
            f"Error: Project file not found at '{project_path}' "
            f"(converted to '{translated}')"
        )

    content = project_file.read_text(encoding="utf-8-sig", errors="replace")
    return describe_project(project_file, content)

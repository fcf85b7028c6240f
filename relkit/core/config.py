"""Typed loading of the optional ``relkit.toml`` project file.

Every value has a default matching the VS Code extension flow the tool was
first written for (npm build, vsce packaging, ``.vsix`` artifact), so a
project without ``relkit.toml`` releases with no configuration at all.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "CommandConfig",
    "ConfigError",
    "ProjectConfig",
    "ReleaseSettings",
    "load_settings",
]

CONFIG_FILENAME = "relkit.toml"

DEFAULT_METADATA_FILE = "package.json"
DEFAULT_ARTIFACT_TEMPLATE = "{name}-{version}.vsix"
DEFAULT_BUILD_COMMAND = ("npm", "run", "vscode:prepublish")
DEFAULT_PACKAGE_COMMAND = ("npx", "vsce", "package")
DEFAULT_PACKAGE_CONFIRM = "y"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """relkit.toml exists but cannot be used."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Where the version comes from and what the artifact is called."""

    metadata: str = DEFAULT_METADATA_FILE
    artifact: str = DEFAULT_ARTIFACT_TEMPLATE


@dataclass(frozen=True, slots=True)
class CommandConfig:
    """An external command run during build or packaging.

    Attributes:
        command: argv, never a shell string
        confirm: answer fed on stdin to interactive prompts (None: no stdin)
        timeout: seconds before the command is killed (None: wait forever)
    """

    command: tuple[str, ...]
    confirm: str | None = None
    timeout: float | None = None


@dataclass(frozen=True, slots=True)
class ReleaseSettings:
    """Resolved relkit.toml contents."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    build: CommandConfig = field(default_factory=lambda: CommandConfig(DEFAULT_BUILD_COMMAND))
    package: CommandConfig = field(
        default_factory=lambda: CommandConfig(
            DEFAULT_PACKAGE_COMMAND, confirm=DEFAULT_PACKAGE_CONFIRM
        )
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseSettings:
        """Build settings from parsed TOML.

        Raises:
            ValueError: a value has the wrong shape.
        """
        project: StrDict = get_table(data, "project") or {}
        build: StrDict = get_table(data, "build") or {}
        package: StrDict = get_table(data, "package") or {}

        artifact = _str_setting(project, "project", "artifact", DEFAULT_ARTIFACT_TEMPLATE)
        _check_artifact_template(artifact)

        return cls(
            project=ProjectConfig(
                metadata=_str_setting(project, "project", "metadata", DEFAULT_METADATA_FILE),
                artifact=artifact,
            ),
            build=_command_from_table(build, "build", default=DEFAULT_BUILD_COMMAND),
            package=_command_from_table(
                package,
                "package",
                default=DEFAULT_PACKAGE_COMMAND,
                default_confirm=DEFAULT_PACKAGE_CONFIRM,
            ),
        )


def _str_setting(table: StrDict, section: str, key: str, default: str) -> str:
    if key not in table:
        return default
    value = get_str(table, key)
    if value is None:
        raise ValueError(f"[{section}].{key} must be a non-empty string")
    return value


def _check_artifact_template(template: str) -> None:
    if "{version}" not in template:
        raise ValueError(f"[project].artifact must contain {{version}}: {template!r}")
    try:
        template.format(name="name", version="0.0.0")
    except (KeyError, IndexError) as e:
        raise ValueError(f"[project].artifact has an unknown placeholder: {e}") from e


def _command_from_table(
    table: StrDict,
    section: str,
    *,
    default: tuple[str, ...],
    default_confirm: str | None = None,
) -> CommandConfig:
    command = default
    if "command" in table:
        argv = get_str_list(table, "command")
        if not argv:
            raise ValueError(f"[{section}].command must be a non-empty list of strings")
        command = tuple(argv)

    timeout = None
    if "timeout" in table:
        timeout = get_number(table, "timeout")
        if timeout is None or timeout <= 0:
            raise ValueError(f"[{section}].timeout must be a positive number of seconds")

    confirm = default_confirm
    if "confirm" in table:
        value = table.get("confirm")
        if not isinstance(value, str):
            raise ValueError(f"[{section}].confirm must be a string")
        # Empty string disables stdin feeding.
        confirm = value or None

    return CommandConfig(command=command, confirm=confirm, timeout=timeout)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_settings(root: Path) -> Result[ReleaseSettings, ConfigError]:
    """Load ``relkit.toml`` from the project root.

    A missing file is not an error: defaults are returned.

    Returns:
        Ok(ReleaseSettings) on success, Err(ConfigError) when the file is unusable
    """
    path = root / CONFIG_FILENAME
    if not path.is_file():
        return Ok(ReleaseSettings())

    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    try:
        return Ok(ReleaseSettings.from_dict(parsed.value))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))

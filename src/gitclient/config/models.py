"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GITCLIENT__SECTION__KEY)
3. Global YAML (~/.config/gitclient/config.yaml)
4. Built-in defaults (this file)

Examples:
    GITCLIENT__LOGGING__LEVEL=DEBUG
    GITCLIENT__GIT__EXECUTABLE=/usr/local/bin/git
    GITCLIENT__MATRIX__TEST_ALL=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GITCLIENT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG includes every git command line.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class GitConfig(BaseModel):
    """Native git backend configuration.

    Env vars:
        GITCLIENT__GIT__EXECUTABLE: git executable name or path
        GITCLIENT__GIT__TIMEOUT_SEC: Per-command timeout
        GITCLIENT__GIT__MIN_CREDENTIALS_VERSION: Oldest git trusted with credentials
    """

    executable: str = Field(
        default="git",
        description="git executable, looked up on PATH when not absolute.",
    )
    timeout_sec: float = Field(
        default=300.0,
        description="Timeout for a single git command. Clones of large repositories "
        "may need more.",
    )
    min_credentials_version: str = Field(
        default="1.7.9.0",
        description="Oldest git version whose prompt suppression can be trusted. "
        "Older executables are reported as not supporting credentials.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("min_credentials_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        parts = v.split(".")
        if not 1 <= len(parts) <= 4 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Version must be up to four dotted integers, got {v!r}")
        return v


class MatrixConfig(BaseModel):
    """Credential test matrix configuration.

    Env vars:
        GITCLIENT__MATRIX__TEST_ALL: Run every generated case instead of a sample
        GITCLIENT__MATRIX__MAX_CASES: Sample size when TEST_ALL is off
        GITCLIENT__MATRIX__SSH_DIR: Directory holding the default key and auth data
    """

    test_all: bool = Field(
        default=False,
        description="Exercise every generated credential case. Slow with many repos.",
    )
    max_cases: int = Field(
        default=3,
        description="Number of randomly sampled cases when test_all is off.",
    )
    fallback_repo_url: str = Field(
        default="https://github.com/jenkinsci/git-client-plugin.git",
        description="Repository used with the default private key.",
    )
    ssh_dir: Path = Field(
        default_factory=lambda: Path.home() / ".ssh",
        description="Directory containing the default key and the auth data directory.",
    )
    default_key_name: str = "id_rsa"
    auth_data_dir_name: str = "auth-data"
    definitions_file: str = "repos.csv"

    @field_validator("max_cases")
    @classmethod
    def validate_max_cases(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_cases must be >= 0, got {v}")
        return v

    @field_validator("ssh_dir")
    @classmethod
    def expand_ssh_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @property
    def default_private_key(self) -> Path:
        return self.ssh_dir / self.default_key_name

    @property
    def auth_data_dir(self) -> Path:
        return self.ssh_dir / self.auth_data_dir_name

    @property
    def definitions_path(self) -> Path:
        return self.auth_data_dir / self.definitions_file


class GitClientConfig(BaseModel):
    """Root configuration for gitclient.

    All settings can be configured via:
    1. Environment variables: GITCLIENT__SECTION__KEY
    2. YAML config file (~/.config/gitclient/config.yaml)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    matrix: MatrixConfig = Field(default_factory=MatrixConfig)

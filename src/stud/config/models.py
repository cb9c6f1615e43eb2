"""Configuration models."""

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from stud.config.exceptions import InvalidConfigurationError

DEFAULT_PROTECTED_BRANCHES = ["develop", "main", "master"]


class StudConfig(BaseSettings):
    """Configuration for stud."""

    # GitHub settings
    github_token: str | None = Field(
        default=None,
        description="GitHub token used for pull request lookups (PR checks are skipped without it)",
    )
    github_owner: str | None = Field(
        default=None,
        description="Repository owner (derived from the remote URL when not set)",
    )
    github_repo: str | None = Field(
        default=None,
        description="Repository name (derived from the remote URL when not set)",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    github_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for GitHub API requests",
    )

    # Branch settings
    base_branch: str = Field(
        default="origin/develop",
        description="Reference that branches must be merged into before cleanup",
    )
    remote_name: str = Field(
        default="origin",
        description="Name of the remote holding the shared branches",
    )
    protected_branches: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_PROTECTED_BRANCHES),
        description="Branches that are never deleted",
    )

    model_config = SettingsConfigDict(
        env_file=[".env.stud", ".env"],
        env_file_encoding="utf-8",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(
        self,
        _env_file: str | Path | None = None,
        _settings_customise_sources_was_called: bool = False,
        **kwargs: Any,
    ) -> None:
        """Initialize configuration.

        Args:
            _env_file: Optional path to custom env file (use env_file for public API)
            _settings_customise_sources_was_called: Internal flag
            **kwargs: Additional configuration values

        Raises:
            InvalidConfigurationError: If env_file is specified but does not exist
        """
        env_file = kwargs.pop("env_file", _env_file)

        if env_file is not None:
            env_path = Path(env_file)
            if not env_path.exists():
                raise InvalidConfigurationError(f"Environment file not found: {env_file}")
            kwargs["_custom_env_file"] = env_path

        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to support a custom env file.

        Args:
            settings_cls: The settings class being instantiated
            init_settings: Settings from __init__ arguments
            env_settings: Settings from environment variables
            dotenv_settings: Settings from .env files
            file_secret_settings: Settings from secret files

        Returns:
            Tuple of settings sources in priority order
        """
        # Note: init_kwargs exists at runtime but may not be in type stubs
        init_kwargs = init_settings.init_kwargs  # type: ignore[attr-defined]
        custom_env_path = init_kwargs.get("_custom_env_file")

        if custom_env_path is not None:
            custom_dotenv = DotEnvSettingsSource(
                settings_cls,
                env_file=custom_env_path,
                env_file_encoding="utf-8",
            )
            return (init_settings, custom_dotenv, env_settings, file_secret_settings)

        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    @field_validator("github_api_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure URL doesn't have trailing slash.

        Args:
            v: URL value

        Returns:
            Normalized URL without trailing slash
        """
        return v.rstrip("/")

    @field_validator("base_branch")
    @classmethod
    def validate_base_branch(cls, v: str) -> str:
        """Reject an empty base branch."""
        v = v.strip()
        if not v:
            raise InvalidConfigurationError("BASE_BRANCH must not be empty")
        return v

    @field_validator("remote_name")
    @classmethod
    def validate_remote_name(cls, v: str) -> str:
        """Reject remote names that git would not accept."""
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            raise InvalidConfigurationError(f"Invalid remote name: {v!r}")
        return v

    @field_validator("protected_branches", mode="before")
    @classmethod
    def parse_protected_branches(cls, v: str | list[str]) -> list[str]:
        """Parse protected branches from a comma-separated string or a list.

        Args:
            v: Raw value from the environment or keyword arguments

        Returns:
            List of branch names

        Raises:
            InvalidConfigurationError: If no branch name remains after parsing
        """
        items = v.split(",") if isinstance(v, str) else list(v)
        branches = [item.strip() for item in items if item and item.strip()]
        if not branches:
            raise InvalidConfigurationError("PROTECTED_BRANCHES must contain at least one branch")
        return branches

    @property
    def has_github_token(self) -> bool:
        """Check if a GitHub token is configured.

        Returns:
            True if pull request lookups can authenticate
        """
        return bool(self.github_token)

    @staticmethod
    def find_env_file() -> Path | None:
        """Find the environment file being used.

        Checks for .env.stud and .env in current directory in that order.

        Returns:
            Path to the env file if found, None otherwise
        """
        for env_file in [".env.stud", ".env"]:
            path = Path(env_file)
            if path.exists():
                return path.absolute()
        return None

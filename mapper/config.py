import os
from dataclasses import dataclass

DEFAULT_MAP_FILE = "keep.map"
DEFAULT_LOG_FILE = os.path.join("instance", "mapper.log")

_TRUTHY = ("1", "true", "TRUE", "yes", "on")


@dataclass
class EditorConfig:
    filename: str = DEFAULT_MAP_FILE
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = "info"
    open_existing: bool = False

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """Build a config from ``MAPPER_*`` environment variables.

        Call after ``load_dotenv`` so values from a ``.env`` file are seen.
        """
        return cls(
            filename=os.getenv("MAPPER_FILE", DEFAULT_MAP_FILE),
            log_file=os.getenv("MAPPER_LOG_FILE", DEFAULT_LOG_FILE),
            log_level=os.getenv("MAPPER_LOG_LEVEL", "info"),
            open_existing=os.getenv("MAPPER_OPEN", "0") in _TRUTHY,
        )


__all__ = ["EditorConfig", "DEFAULT_MAP_FILE", "DEFAULT_LOG_FILE"]

"""
Game configuration

Top-level settings for a play session and logging setup.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import sys

from crashcourse.simulation.simulator import SimulatorConfig


@dataclass
class GameConfig:
    """Configuration for a game session."""

    # Simulation tuning
    simulator: SimulatorConfig = field(default_factory=SimulatorConfig)

    # Session seed: None draws fresh roads every run
    seed: Optional[int] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Validate and normalize configuration."""
        if self.log_file and isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)
        self.log_level = self.log_level.upper()
        if not isinstance(getattr(logging, self.log_level, None), int):
            raise ValueError(f"Unknown log level: {self.log_level}")


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure logging for an application entry point.

    Args:
        level: Logging level name
        log_file: Optional file to log to in addition to stdout
    """
    log_format = "%(asctime)s [%(levelname)s] %(message)s"
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=handlers,
    )

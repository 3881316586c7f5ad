"""
Configuration models for the simulator.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .outcome import DEFAULT_LINE_SEPARATOR

# Simulated latency per pacing key, in milliseconds, one entry per step.
DEFAULT_LATENCIES: Dict[str, Tuple[int, ...]] = {
    "init": (1000,),
    "status": (500,),
    "log": (300,),
    "add.all": (800, 400),
    "add.path": (600,),
    "commit": (1000, 500),
    "branch.list": (300,),
    "branch.create": (500,),
    "branch.delete": (600,),
    "checkout": (600,),
    "checkout.create": (800, 400),
    "reset": (800,),
    "revert": (800,),
    "stash.save": (500,),
    "stash.list": (300,),
    "stash.pop": (500,),
    "remote.add": (500,),
    "remote.show": (),
    "push": (1000, 500, 800, 600),
    "fetch": (800, 600),
    "pull": (800, 600, 500),
    "clone": (1000, 800, 600, 800),
    "playground.reset": (800,),
}

DEFAULT_SAMPLE_FILES = ["index.html", "styles.css", "app.js"]


@dataclass
class SimulatorConfig:
    """Runtime configuration of the simulator and its session."""

    latencies: Dict[str, Tuple[int, ...]] = field(
        default_factory=lambda: dict(DEFAULT_LATENCIES)
    )
    time_scale: float = 1.0  # 0 disables waiting entirely
    sample_files: List[str] = field(default_factory=lambda: list(DEFAULT_SAMPLE_FILES))
    line_separator: str = DEFAULT_LINE_SEPARATOR
    default_remote: str = "origin"
    author: str = "User"
    email: str = "user@example.com"
    remote_author: str = "Remote User"
    remote_email: str = "remote@example.com"
    date_format: str = "%a %b %d %H:%M:%S %Y"
    log_level: str = "WARNING"
    log_dir: str = ""

    def latency_for(self, key: str) -> Tuple[int, ...]:
        return tuple(self.latencies.get(key, ()))

    def validate(self) -> bool:
        """Validate configuration values."""
        if self.time_scale < 0:
            raise ValueError("time_scale cannot be negative")

        for key, delays in self.latencies.items():
            for delay in delays:
                if not isinstance(delay, int) or delay < 0:
                    raise ValueError(
                        f"latency '{key}' must be a list of non-negative integers"
                    )

        if len(set(self.sample_files)) != len(self.sample_files):
            raise ValueError("sample_files must not contain duplicates")

        if not self.line_separator:
            raise ValueError("line_separator cannot be empty")

        if not self.default_remote or not self.default_remote.strip():
            raise ValueError("default_remote cannot be empty")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {valid_levels}")

        return True

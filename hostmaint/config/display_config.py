"""Display configuration data structure."""
from dataclasses import dataclass


@dataclass
class DisplayConfig:
    """Display preferences configuration."""
    show_colors: bool = True
    top_processes: int = 10
    process_sample_interval: float = 0.1

    def __post_init__(self):
        """Fix invalid values."""
        if self.top_processes <= 0:
            self.top_processes = 10
        if self.process_sample_interval < 0:
            self.process_sample_interval = 0.1

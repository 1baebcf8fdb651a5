"""Synchronization budget."""

from dataclasses import dataclass

from staybot.core.exceptions import ValidationError


@dataclass(frozen=True)
class WaitSpec:
    """Timeout and poll interval, both in seconds."""

    timeout: float
    poll_interval: float

    def __post_init__(self) -> None:
        if self.timeout <= 0 or self.poll_interval <= 0:
            raise ValidationError(
                "timeout and poll_interval must be positive",
                "wait_spec",
                f"{self.timeout}/{self.poll_interval}",
            )
        if self.poll_interval >= self.timeout:
            raise ValidationError(
                "poll_interval must be shorter than timeout",
                "wait_spec",
                f"{self.timeout}/{self.poll_interval}",
            )

"""Formality configuration.

FormalityConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from formality.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class FormalityConfig:
    """Binding configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormalityConfig(event_function="app.fieldEvent", max_handlers=256)
    """

    # Attributes written onto bound elements
    routing_attribute: str = "name"
    display_attribute: str = "value"
    event_attribute_prefix: str = "on"

    # Client call emitted into on<event> attributes: fn('<token>', this.value)
    event_function: str = "formality.sendEvent"

    # Tokens
    token_prefix: str = "F"
    token_bytes: int = 16
    max_handlers: int = 1024  # Oldest registrations are evicted beyond this

    # Generic messages for converters that decline without detail
    unrecognized_message: str = "Unrecognized response."
    unconvertible_message: str = "Failed to convert value."

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any setting is unusable."""
        for name in ("routing_attribute", "display_attribute", "event_function"):
            if not getattr(self, name):
                msg = f"FormalityConfig.{name} must not be empty."
                raise ConfigurationError(msg)
        if self.token_bytes <= 0:
            msg = "FormalityConfig.token_bytes must be positive."
            raise ConfigurationError(msg)
        if self.max_handlers <= 0:
            msg = "FormalityConfig.max_handlers must be positive."
            raise ConfigurationError(msg)

"""Factory for creating content producers."""

from typing import Any

from ..model import ModelManager
from ..settings import ModelSettings
from .base import ContentProducer


def create_content_producer(kind: str, **config: Any) -> ContentProducer:
    """Create a content producer.

    This factory function hides the instantiation logic for different producers.

    Args:
        kind: Producer type ('simulated' or 'local')
        **config: Producer-specific configuration
            For simulated:
                - responses: Sequence[str] (default: built-in replies)
                - delay: float (default: 0.02)
                - rng: random.Random | None
            For local:
                - model_manager: ModelManager | None
                - auto_load: bool (default: False)

    Returns:
        Initialized content producer

    Raises:
        ValueError: If producer type is not supported

    Examples:
        >>> producer = create_content_producer("simulated", delay=0.0)
        >>> producer.producer_type
        'simulated'
    """
    kind_lower = kind.lower()

    if kind_lower == "simulated":
        from .simulated import SimulatedProducer
        return SimulatedProducer(**config)

    if kind_lower in ("local", "model"):
        from .local_model import LocalModelProducer
        return LocalModelProducer(**config)

    raise ValueError(
        f"Unsupported producer: {kind}. "
        f"Supported producers: 'simulated', 'local'"
    )


def producer_for_settings(
    settings: ModelSettings,
    model_manager: ModelManager | None = None,
) -> ContentProducer:
    """Pick the producer selected by the settings' backend flag."""
    if settings.use_simulated_responses:
        return create_content_producer("simulated")
    return create_content_producer("local", model_manager=model_manager)

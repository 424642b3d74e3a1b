"""Dependency injection container.

A small explicit container without external frameworks. It only wires
defaults: every stage still receives its language model as a constructor
argument, and there is no process-wide container instance.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, LLMConfig, get_config
from .domain.errors import ConfigurationError


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        planner = container.resolve(TripPlannerService)

        # Testing
        container = Container.create_default()
        container.register(LanguageModelPort, lambda: ScriptedModel([...]))
        planner = container.resolve(TripPlannerService)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Registering again replaces the factory and drops any instance
        already built for that type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons."""
        with self._lock:
            self._singletons.clear()

    def close(self) -> None:
        """Close every cached singleton that has a ``close`` method."""
        with self._lock:
            instances = list(self._singletons.values())
            self._singletons.clear()
        for instance in instances:
            close = getattr(instance, "close", None)
            if callable(close):
                close()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The language model adapter is chosen by ``config.llm.provider`` and
        wrapped in a hard per-call timeout. Stages, assembler and planner
        are built per resolve, so each picks up the current model binding.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .ports.llm import LanguageModelPort
        from .services import ResponseAssembler, TripPlannerService
        from .stages import (
            BudgetEstimationStage,
            ItineraryPlanningStage,
            RecommendationExtractionStage,
        )

        config = config or get_config()
        container = cls(config=config)
        timeout = config.llm.request_timeout_seconds

        container.register(LanguageModelPort, lambda: create_language_model(config.llm))

        container.register(
            BudgetEstimationStage,
            lambda: BudgetEstimationStage(
                container.resolve(LanguageModelPort), timeout
            ),
            singleton=False,
        )
        container.register(
            ItineraryPlanningStage,
            lambda: ItineraryPlanningStage(
                container.resolve(LanguageModelPort), timeout
            ),
            singleton=False,
        )
        container.register(
            RecommendationExtractionStage,
            lambda: RecommendationExtractionStage(
                container.resolve(LanguageModelPort), timeout
            ),
            singleton=False,
        )
        container.register(
            ResponseAssembler,
            lambda: ResponseAssembler(
                expose_extended_recommendations=(
                    config.pipeline.expose_extended_recommendations
                )
            ),
        )

        def create_trip_planner() -> TripPlannerService:
            return TripPlannerService(
                budget_stage=container.resolve(BudgetEstimationStage),
                itinerary_stage=container.resolve(ItineraryPlanningStage),
                recommendation_stage=container.resolve(RecommendationExtractionStage),
                assembler=container.resolve(ResponseAssembler),
                deadline_seconds=config.pipeline.deadline_seconds,
            )

        container.register(TripPlannerService, create_trip_planner, singleton=False)

        return container


def create_language_model(config: LLMConfig) -> Any:
    """Build the adapter selected by ``config.provider``.

    Raises:
        ConfigurationError: If a network provider has no API key (an
            OpenAI-compatible ``base_url`` may go without one).
    """
    from .adapters.llm import (
        AnthropicMessagesAdapter,
        OfflineLanguageModel,
        OpenAIChatAdapter,
        TimeoutBoundedLanguageModel,
    )

    if config.provider == "offline":
        return OfflineLanguageModel()

    if not config.api_key and not (config.provider == "openai" and config.base_url):
        raise ConfigurationError(
            f"No API key configured for provider {config.provider!r}",
            setting_name="TRIP_LLM_API_KEY",
            expected_type="str",
        )

    if config.provider == "anthropic":
        adapter: Any = AnthropicMessagesAdapter(config)
    else:
        adapter = OpenAIChatAdapter(config)
    return TimeoutBoundedLanguageModel(
        adapter, default_timeout_seconds=config.request_timeout_seconds
    )

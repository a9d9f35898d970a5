"""Configuration management for parcel-router."""

from dataclasses import dataclass, field

from parcel_router.exceptions import ConfigurationError


@dataclass
class RoutingConfig:
    """Routing workflow configuration."""

    # Workflow validates status changes against the lifecycle graph
    strict_transitions: bool = True


@dataclass
class GeneratorConfig:
    """Synthetic manifest generation configuration."""

    locale: str = "nl_NL"
    seed: int | None = None
    parcels_per_container: int = 10
    num_containers: int = 3

    def __post_init__(self) -> None:
        if self.parcels_per_container < 1:
            raise ConfigurationError("parcels_per_container must be at least 1")
        if self.num_containers < 1:
            raise ConfigurationError("num_containers must be at least 1")


@dataclass
class OutputConfig:
    """Console output configuration."""

    pretty: bool = True
    max_records: int | None = None


@dataclass
class ParcelRouterConfig:
    """Main configuration for parcel-router."""

    routing: RoutingConfig = field(default_factory=RoutingConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "ParcelRouterConfig":
        """Create config from environment variables."""
        import os

        routing = RoutingConfig(
            strict_transitions=os.getenv("STRICT_TRANSITIONS", "true").lower() == "true",
        )

        seed = os.getenv("SEED")
        generator = GeneratorConfig(
            locale=os.getenv("FAKER_LOCALE", "nl_NL"),
            seed=_parse_int("SEED", seed) if seed else None,
            parcels_per_container=_parse_int(
                "PARCELS_PER_CONTAINER", os.getenv("PARCELS_PER_CONTAINER", "10")
            ),
            num_containers=_parse_int("NUM_CONTAINERS", os.getenv("NUM_CONTAINERS", "3")),
        )

        max_records = os.getenv("MAX_RECORDS")
        output = OutputConfig(
            pretty=os.getenv("PRETTY_OUTPUT", "true").lower() == "true",
            max_records=_parse_int("MAX_RECORDS", max_records) if max_records else None,
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            routing=routing,
            generator=generator,
            output=output,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc

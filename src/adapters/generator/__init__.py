from adapters.generator.service_generator import (
    GenerationError,
    ServiceSpec,
    output_filename,
    render_service,
    write_service,
)

__all__ = [
    "GenerationError",
    "ServiceSpec",
    "output_filename",
    "render_service",
    "write_service",
]

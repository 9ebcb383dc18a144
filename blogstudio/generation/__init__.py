"""Generation module — AI article drafting with templated fallback."""

from blogstudio.generation.routes import router as generation_router
from blogstudio.generation.gateway import GenerationGateway, build_gateway

__all__ = ["generation_router", "GenerationGateway", "build_gateway"]

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from omni_console.const import HTTP_BAD_REQUEST, HTTP_NOT_FOUND
from omni_console.providers.exceptions import ProviderError
from omni_console.shared.catalog import SUGGESTED_MODELS, CatalogError
from omni_console.shared.logging import LoggingManager
from omni_console.shared.models import Provider, dump_models
from omni_console.slices.errors import provider_http_error


class ManualModelRequest(BaseModel):
    """Body of a manual model entry."""
    id: str
    provider: Provider
    name: Optional[str] = None


def provider_from_key(provider_key: str) -> Provider:
    try:
        return Provider.from_settings_key(provider_key)
    except ValueError as e:
        raise HTTPException(status_code=HTTP_NOT_FOUND, detail=str(e))


class ModelsRouter:
    """Router for the model catalog: listing, manual entries and discovery refresh."""

    def __init__(self, state):
        self.state = state
        self.logger = LoggingManager.get_logger(__name__)
        self.router = APIRouter(prefix="/api/models", tags=["models"])
        self.router.get("")(self.list_models)
        self.router.get("/templates")(self.list_templates)
        self.router.post("")(self.add_model)
        self.router.post("/{provider_key}/refresh")(self.refresh_models)
        self.router.delete("/{provider_key}/{model_id:path}")(self.remove_model)

    @classmethod
    def get_router(cls, state) -> APIRouter:
        """Get the router instance."""
        return cls(state).router

    async def list_models(self) -> List[Dict[str, Any]]:
        return dump_models(self.state.catalog.models)

    async def list_templates(self) -> List[Dict[str, Any]]:
        """Suggested model ids to prefill a manual entry."""
        return dump_models(SUGGESTED_MODELS)

    async def add_model(self, request: ManualModelRequest) -> Dict[str, Any]:
        try:
            model = self.state.catalog.add_manual(request.id, request.provider, request.name)
        except CatalogError as e:
            raise HTTPException(status_code=HTTP_BAD_REQUEST, detail=str(e))
        return dump_models([model])[0]

    async def remove_model(self, provider_key: str, model_id: str) -> Dict[str, Any]:
        provider = provider_from_key(provider_key)
        if not self.state.catalog.remove(model_id, provider):
            raise HTTPException(status_code=HTTP_NOT_FOUND, detail=f"Model {model_id} not found")
        return {"removed": model_id, "provider": provider.value}

    async def refresh_models(self, provider_key: str) -> Dict[str, Any]:
        """Replace the provider's discovered models with a fresh listing."""
        provider = provider_from_key(provider_key)
        try:
            discovered = await self.state.registry.list_models(provider, self.state.settings)
        except ProviderError as e:
            self.logger.warning(f"Model discovery failed for {provider.value}: {e}")
            raise provider_http_error(e)

        count = self.state.catalog.replace_discovered(provider, discovered)
        return {"provider": provider.value, "discovered": count, "models": dump_models(self.state.catalog.models)}

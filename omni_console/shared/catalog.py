"""In-memory model catalog with manual entries and per-provider discovery refresh."""
import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .models import ModelOption, Provider


logger = logging.getLogger(__name__)

SUGGESTED_MODELS: List[ModelOption] = [
    ModelOption(id="gemini-2.0-flash", name="Gemini 2.0 Flash", provider=Provider.GOOGLE),
    ModelOption(id="gemini-1.5-pro", name="Gemini 1.5 Pro", provider=Provider.GOOGLE),
    ModelOption(id="gpt-4o", name="GPT-4o", provider=Provider.OPENAI),
    ModelOption(id="gpt-3.5-turbo", name="GPT-3.5 Turbo", provider=Provider.OPENAI),
    ModelOption(id="claude-3-5-sonnet-20240620", name="Claude 3.5 Sonnet", provider=Provider.ANTHROPIC),
    ModelOption(id="claude-3-opus-20240229", name="Claude 3 Opus", provider=Provider.ANTHROPIC),
]


class CatalogError(ValueError):
    """Exception raised for invalid catalog edits."""
    pass


class ModelCatalog:
    """Ordered collection of ModelOption keyed by (id, provider).

    Every mutation is handed to ``on_change`` so the caller can persist it.
    """

    def __init__(self, models: Optional[Iterable[ModelOption]] = None,
                 on_change: Optional[Callable[[List[ModelOption]], None]] = None):
        self._models: List[ModelOption] = []
        self._on_change = on_change
        for model in models or []:
            self._put(model)

    @property
    def models(self) -> List[ModelOption]:
        return list(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def _put(self, model: ModelOption) -> None:
        # A later entry with the same identity replaces the earlier one and moves to the end
        self._models = [m for m in self._models if m.key != model.key]
        self._models.append(model)

    def _commit(self) -> None:
        if self._on_change is not None:
            self._on_change(self.models)

    def find(self, model_id: str, provider: Optional[Provider] = None) -> Optional[ModelOption]:
        for model in self._models:
            if model.id == model_id and (provider is None or model.provider == provider):
                return model
        return None

    def for_providers(self, providers: Iterable[Provider]) -> List[ModelOption]:
        wanted = set(providers)
        return [m for m in self._models if m.provider in wanted]

    def add_manual(self, model_id: str, provider: Provider, name: Optional[str] = None) -> ModelOption:
        """
        Add or replace a hand-entered model.

        Raises:
            CatalogError: If the model id is empty.
        """
        model_id = (model_id or "").strip()
        if not model_id:
            raise CatalogError("Model ID is required")
        model = ModelOption(id=model_id, name=(name or "").strip() or model_id, provider=provider, is_manual=True)
        self._put(model)
        self._commit()
        logger.info(f"Added manual model {provider.value}/{model_id}")
        return model

    def remove(self, model_id: str, provider: Provider) -> bool:
        before = len(self._models)
        self._models = [m for m in self._models if m.key != (model_id, provider)]
        removed = len(self._models) != before
        if removed:
            self._commit()
            logger.info(f"Removed model {provider.value}/{model_id}")
        return removed

    def replace_discovered(self, provider: Provider, discovered: List[ModelOption]) -> int:
        """
        Swap the provider's previously discovered models for a fresh discovery result.

        Manual entries and other providers' entries are kept untouched. A discovered
        model whose identity matches a manual entry is dropped in favour of the manual
        one. An empty result leaves the catalog unchanged.

        Returns:
            Number of discovered models now in the catalog.
        """
        if not discovered:
            logger.info(f"Discovery for {provider.value} returned no models, catalog unchanged")
            return 0

        kept = [m for m in self._models if m.is_manual or m.provider != provider]
        manual_keys = {m.key for m in kept if m.is_manual}
        fresh: Dict[Tuple[str, Provider], ModelOption] = {}
        for model in discovered:
            model = model.model_copy(update={"provider": provider, "is_manual": False})
            if model.key not in manual_keys:
                fresh[model.key] = model

        self._models = kept + list(fresh.values())
        self._commit()
        logger.info(f"Catalog refreshed for {provider.value}: {len(fresh)} discovered models")
        return len(fresh)
